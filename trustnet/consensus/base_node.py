"""
Base node interface.

Every participant in the trust graph, compliant or not, is driven by the
simulation harness through the same five calls:

1. configure(...)              - environment description (from the constructor)
2. set_followees(follows)      - once, before any per-round call
3. set_pending_transaction(s)  - once, seeds the node's knowledge
4. propose_broadcast()         - once per round, then once more for the verdict
5. receive_from_followees(c)   - once per round, after every node has broadcast
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Set
from .message_types import Candidate, Transaction

@dataclass(frozen=True)
class NodeConfig:
    graph_edge_prob: float = 0.1
    malicious_prob: float = 0.15
    tx_distribution_prob: float = 0.01
    num_rounds: int = 10

class Node(ABC):
    def __init__(self, graph_edge_prob: float, malicious_prob: float,
                 tx_distribution_prob: float, num_rounds: int):
        self.config = NodeConfig()
        self.configure(graph_edge_prob, malicious_prob, tx_distribution_prob, num_rounds)

    @classmethod
    def from_config(cls, config: NodeConfig) -> 'Node':
        return cls(config.graph_edge_prob, config.malicious_prob,
                   config.tx_distribution_prob, config.num_rounds)

    def configure(self, graph_edge_prob: float, malicious_prob: float,
                  tx_distribution_prob: float, num_rounds: int) -> None:
        """Record the environment the node runs in.

        Compliant strategies only read num_rounds; the probabilities are
        kept for node variants that shape their behaviour around them.
        """
        self.config = NodeConfig(graph_edge_prob, malicious_prob,
                                 tx_distribution_prob, num_rounds)

    @property
    def num_rounds(self) -> int:
        return self.config.num_rounds

    @abstractmethod
    def set_followees(self, follows: Sequence[bool]) -> None:
        """follows[i] is True if this node accepts candidates from node i."""
        pass

    @abstractmethod
    def set_pending_transaction(self, pending: Iterable[Transaction]) -> None:
        """Seed the node with its initial transactions."""
        pass

    @abstractmethod
    def propose_broadcast(self, round_number: Optional[int] = None) -> Set[Transaction]:
        """Transactions to hand to followers this round.

        The call after the last round is the node's final consensus set.
        """
        pass

    @abstractmethod
    def receive_from_followees(self, candidates: Iterable[Candidate]) -> None:
        """Candidates broadcast this round by nodes that this node may follow."""
        pass
