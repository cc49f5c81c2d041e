"""
Faulty and adversarial node variants.

These sit in the same trust graph as compliant nodes and are driven by the
same harness calls. Compliant nodes defend against them only by not
following them.
"""

from typing import Dict, Iterable, Optional, Sequence, Set, Type
import numpy as np
from .base_node import Node, NodeConfig
from .compliant_node import NeverForgetNode
from .message_types import Candidate, Transaction

class SilentNode(Node):
    """Drops out: never forwards anything."""

    def set_followees(self, follows: Sequence[bool]) -> None:
        pass

    def set_pending_transaction(self, pending: Iterable[Transaction]) -> None:
        pass

    def propose_broadcast(self, round_number: Optional[int] = None) -> Set[Transaction]:
        return set()

    def receive_from_followees(self, candidates: Iterable[Candidate]) -> None:
        pass

class FloodingNode(Node):
    """Broadcasts fresh fabricated transactions every round.

    Fabricated ids are negative so they can never collide with the
    harness's valid (non-negative) transaction ids.
    """

    def __init__(self, graph_edge_prob: float, malicious_prob: float,
                 tx_distribution_prob: float, num_rounds: int,
                 flood_size: int = 20, rng: Optional[np.random.Generator] = None):
        super().__init__(graph_edge_prob, malicious_prob, tx_distribution_prob, num_rounds)
        self.flood_size = flood_size
        self.rng = rng if rng is not None else np.random.default_rng()
        self.fabricated: Set[Transaction] = set()

    def set_followees(self, follows: Sequence[bool]) -> None:
        pass

    def set_pending_transaction(self, pending: Iterable[Transaction]) -> None:
        pass

    def propose_broadcast(self, round_number: Optional[int] = None) -> Set[Transaction]:
        ids = self.rng.integers(1, 2**31, size=self.flood_size)
        batch = {Transaction(-int(i)) for i in ids}
        self.fabricated.update(batch)
        return batch

    def receive_from_followees(self, candidates: Iterable[Candidate]) -> None:
        pass

class TurncoatNode(NeverForgetNode):
    """Relays honestly until its defection round, then goes quiet."""

    def __init__(self, graph_edge_prob: float, malicious_prob: float,
                 tx_distribution_prob: float, num_rounds: int,
                 defect_round: Optional[int] = None):
        super().__init__(graph_edge_prob, malicious_prob, tx_distribution_prob, num_rounds)
        self.defect_round = defect_round if defect_round is not None else max(1, num_rounds // 2)

    def _broadcast_round(self, round_number: int) -> Set[Transaction]:
        if round_number >= self.defect_round:
            return set()
        return super()._broadcast_round(round_number)

MALICIOUS_BEHAVIOURS: Dict[str, Type[Node]] = {
    'silent': SilentNode,
    'flooding': FloodingNode,
    'turncoat': TurncoatNode,
}

def create_malicious_node(behaviour: str, config: NodeConfig,
                          rng: Optional[np.random.Generator] = None) -> Node:
    if behaviour not in MALICIOUS_BEHAVIOURS:
        raise ValueError(f"Unknown malicious behaviour {behaviour!r}, "
                         f"expected one of {sorted(MALICIOUS_BEHAVIOURS)}")
    if behaviour == 'flooding':
        return FloodingNode(config.graph_edge_prob, config.malicious_prob,
                            config.tx_distribution_prob, config.num_rounds, rng=rng)
    return MALICIOUS_BEHAVIOURS[behaviour].from_config(config)
