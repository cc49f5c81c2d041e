"""
Consensus from Trust simulation harness.

This module drives a population of nodes through the protocol:
1. Builds a random trust graph and marks a fraction of nodes as malicious
2. Hands each node a random share of the valid transactions
3. Runs num_rounds broadcast/receive rounds, then one terminal broadcast
4. Summarises the final consensus sets
"""

from collections import Counter
from typing import Dict, FrozenSet, List, Optional, Set
import logging
import numpy as np
import pandas as pd
from .base_node import Node
from .compliant_node import create_node
from .config import SimulationConfig
from .malicious_node import create_malicious_node
from .message_types import Candidate, Transaction

def build_trust_graph(num_nodes: int, graph_edge_prob: float,
                      rng: np.random.Generator) -> np.ndarray:
    """graph[i, j] is True when node i follows node j. Nobody follows themselves."""
    graph = rng.random((num_nodes, num_nodes)) < graph_edge_prob
    np.fill_diagonal(graph, False)
    return graph

class TrustSimulation:
    def __init__(self, config: SimulationConfig):
        config.validate()
        self.config = config
        self.rng = np.random.default_rng(config.seed)

        # Environment
        self.trust_graph = build_trust_graph(config.num_nodes, config.graph_edge_prob, self.rng)
        self.malicious = self.rng.random(config.num_nodes) < config.malicious_prob
        self.valid_transactions = [Transaction(i) for i in range(config.num_transactions)]
        self.initial_assignment = (
            self.rng.random((config.num_nodes, config.num_transactions))
            < config.tx_distribution_prob
        )

        # Results collection
        self.round_volumes: List[int] = []
        self.final_sets: Optional[Dict[int, Set[Transaction]]] = None

        # Setup logging
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(logging.INFO)

        self.nodes: List[Node] = [self._create_node(i) for i in range(config.num_nodes)]

    def _create_node(self, node_id: int) -> Node:
        node_config = self.config.node_config()
        # Drawn for every node so the environment does not depend on behaviour choices
        node_rng = np.random.default_rng(self.rng.integers(2**32))
        if self.malicious[node_id]:
            node = create_malicious_node(self.config.malicious_behaviour, node_config, rng=node_rng)
        else:
            node = create_node(self.config.strategy, node_config)
        node.set_followees(self.trust_graph[node_id])
        node.set_pending_transaction(self.initial_transactions(node_id))
        return node

    def initial_transactions(self, node_id: int) -> Set[Transaction]:
        return {self.valid_transactions[t]
                for t in np.flatnonzero(self.initial_assignment[node_id])}

    def run(self) -> Dict[int, Set[Transaction]]:
        """Run every round plus the terminal broadcast; returns final sets by node."""
        if self.final_sets is not None:
            raise RuntimeError("simulation has already been run")

        self.logger.info(f"Starting simulation: {self.config.num_nodes} nodes "
                         f"({int(self.malicious.sum())} malicious, {self.config.malicious_behaviour}), "
                         f"strategy {self.config.strategy}, {self.config.num_rounds} rounds")

        for round_num in range(1, self.config.num_rounds + 1):
            # Every node broadcasts before anyone receives
            proposals = [node.propose_broadcast() for node in self.nodes]
            self.round_volumes.append(sum(len(p) for p in proposals))

            candidates: List[Set[Candidate]] = [set() for _ in self.nodes]
            for sender, proposal in enumerate(proposals):
                if not proposal:
                    continue
                for follower in np.flatnonzero(self.trust_graph[:, sender]):
                    candidates[follower].update(Candidate(tx, sender) for tx in proposal)

            for node, received in zip(self.nodes, candidates):
                node.receive_from_followees(received)

            self.logger.debug(f"Round {round_num}: broadcast volume {self.round_volumes[-1]}")

        self.final_sets = {i: node.propose_broadcast() for i, node in enumerate(self.nodes)}
        self.logger.info("Simulation completed")
        return self.final_sets

    def _require_results(self) -> Dict[int, Set[Transaction]]:
        if self.final_sets is None:
            raise RuntimeError("simulation has not been run yet")
        return self.final_sets

    def consensus_set(self) -> FrozenSet[Transaction]:
        """The final set reported by the most honest nodes."""
        final_sets = self._require_results()
        honest = [frozenset(final_sets[i]) for i in range(len(self.nodes)) if not self.malicious[i]]
        if not honest:
            return frozenset()
        return Counter(honest).most_common(1)[0][0]

    def results_frame(self) -> pd.DataFrame:
        final_sets = self._require_results()
        reference = self.consensus_set()
        rows = []
        for node_id, final in final_sets.items():
            rows.append({
                'node_id': node_id,
                'malicious': bool(self.malicious[node_id]),
                'followees': int(self.trust_graph[node_id].sum()),
                'initial': int(self.initial_assignment[node_id].sum()),
                'final': len(final),
                'agrees': frozenset(final) == reference,
            })
        return pd.DataFrame(rows).set_index('node_id')

    def honest_agreement(self) -> float:
        """Fraction of honest nodes whose final set matches the consensus set."""
        df = self.results_frame()
        honest = df[~df['malicious']]
        if honest.empty:
            return 0.0
        return float(honest['agrees'].mean())

    def broadcast_volume(self) -> pd.Series:
        """Total transactions proposed by all nodes, per simulation round."""
        return pd.Series(
            self.round_volumes,
            index=pd.RangeIndex(1, len(self.round_volumes) + 1, name='round'),
            name='broadcast_volume',
        )
