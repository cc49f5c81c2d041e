"""
Compliant node strategies.

Both strategies honour the same contract and differ only in what they
hand to followers during the simulation rounds:

- NeverForgetNode resends everything it knows, every round.
- GossipWhatsNewNode resends only what it admitted since its previous
  broadcast, and flushes the full set on the terminal call.
"""

import logging
from abc import abstractmethod
from typing import Dict, Iterable, Optional, Sequence, Set, Type
from .base_node import Node, NodeConfig
from .exceptions import NodeStateError
from .knowledge_store import KnowledgeStore
from .message_types import Candidate, Transaction
from .trust_filter import TrustFilter

logger = logging.getLogger(__name__)

class CompliantNode(Node):
    """Trust-filtered receive path shared by every compliant strategy."""

    def __init__(self, graph_edge_prob: float, malicious_prob: float,
                 tx_distribution_prob: float, num_rounds: int):
        self.trust_filter = TrustFilter()
        self.knowledge = KnowledgeStore()
        self.round_counter = 0
        super().__init__(graph_edge_prob, malicious_prob, tx_distribution_prob, num_rounds)

    def configure(self, graph_edge_prob: float, malicious_prob: float,
                  tx_distribution_prob: float, num_rounds: int) -> None:
        if self.trust_filter.installed:
            raise NodeStateError("cannot reconfigure a node once followees are set")
        super().configure(graph_edge_prob, malicious_prob, tx_distribution_prob, num_rounds)

    @property
    def known_transactions(self) -> Set[Transaction]:
        return self.knowledge.snapshot()

    @property
    def is_terminal(self) -> bool:
        """True once the final consensus broadcast has been made."""
        return self.round_counter > self.num_rounds

    def set_followees(self, follows: Sequence[bool]) -> None:
        self.trust_filter.install(follows)

    def set_pending_transaction(self, pending: Iterable[Transaction]) -> None:
        pending = set(pending)
        self.knowledge.seed(pending)
        self._on_seeded(pending)

    def _require_ready(self, operation: str) -> None:
        if not self.trust_filter.installed:
            raise NodeStateError(f"{operation} called before set_followees")
        if not self.knowledge.seeded:
            raise NodeStateError(f"{operation} called before set_pending_transaction")

    def propose_broadcast(self, round_number: Optional[int] = None) -> Set[Transaction]:
        """Broadcast for the current round.

        Without an explicit round_number the phase is inferred from how many
        times this has been called, so the harness must call it exactly
        num_rounds + 1 times, in order.
        """
        self._require_ready("propose_broadcast")
        self.round_counter += 1
        current = self.round_counter if round_number is None else round_number

        if current > self.num_rounds:
            if current > self.num_rounds + 1:
                logger.warning(f"broadcast requested for round {current} after the "
                               f"terminal round {self.num_rounds + 1}")
            return self.knowledge.snapshot()

        proposal = self._broadcast_round(current)
        logger.debug(f"round {current}: proposing {len(proposal)} of "
                     f"{len(self.knowledge)} known transactions")
        return proposal

    def receive_from_followees(self, candidates: Iterable[Candidate]) -> None:
        self._require_ready("receive_from_followees")
        admitted = 0
        for candidate in candidates:
            # Anything from a node we do not follow is dropped, whatever it says
            if not self.trust_filter.accepts(candidate.sender):
                continue
            if self.knowledge.admit(candidate.tx):
                admitted += 1
                self._on_admitted(candidate.tx)
        if admitted:
            logger.debug(f"round {self.round_counter}: admitted {admitted} new transactions")

    @abstractmethod
    def _broadcast_round(self, round_number: int) -> Set[Transaction]:
        """Proposal for a simulation (non-terminal) round."""
        pass

    def _on_seeded(self, initial: Set[Transaction]) -> None:
        pass

    def _on_admitted(self, tx: Transaction) -> None:
        pass

class NeverForgetNode(CompliantNode):
    """Resend the entire knowledge store every round."""

    def _broadcast_round(self, round_number: int) -> Set[Transaction]:
        return self.knowledge.snapshot()

class GossipWhatsNewNode(CompliantNode):
    """Resend only what was learned since the previous broadcast."""

    def __init__(self, graph_edge_prob: float, malicious_prob: float,
                 tx_distribution_prob: float, num_rounds: int):
        self._pending: Set[Transaction] = set()
        super().__init__(graph_edge_prob, malicious_prob, tx_distribution_prob, num_rounds)

    @property
    def pending_delta(self) -> Set[Transaction]:
        return set(self._pending)

    def _on_seeded(self, initial: Set[Transaction]) -> None:
        # the seed is news to followers in round 1
        self._pending.update(initial)

    def _on_admitted(self, tx: Transaction) -> None:
        self._pending.add(tx)

    def _broadcast_round(self, round_number: int) -> Set[Transaction]:
        to_send, self._pending = self._pending, set()
        return to_send

STRATEGIES: Dict[str, Type[CompliantNode]] = {
    'never_forget': NeverForgetNode,
    'gossip_whats_new': GossipWhatsNewNode,
}

def create_node(strategy: str, config: NodeConfig) -> CompliantNode:
    """Build a compliant node for the named strategy."""
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown strategy {strategy!r}, expected one of {sorted(STRATEGIES)}")
    return STRATEGIES[strategy].from_config(config)
