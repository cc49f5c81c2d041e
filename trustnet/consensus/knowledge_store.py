from typing import Iterable, Set
from .exceptions import NodeStateError
from .message_types import Transaction

class KnowledgeStore:
    """Every transaction a node has ever accepted. Grows, never shrinks."""

    def __init__(self):
        self._transactions: Set[Transaction] = set()
        self._seeded = False

    @property
    def seeded(self) -> bool:
        return self._seeded

    def seed(self, initial: Iterable[Transaction]) -> None:
        """Union the node's initial pending transactions into the store."""
        if self._seeded:
            raise NodeStateError("pending transactions already set")
        self._transactions.update(initial)
        self._seeded = True

    def admit(self, tx: Transaction) -> bool:
        """Add a transaction; returns True only the first time it is seen."""
        if tx in self._transactions:
            return False
        self._transactions.add(tx)
        return True

    def snapshot(self) -> Set[Transaction]:
        return set(self._transactions)

    def __contains__(self, tx: Transaction) -> bool:
        return tx in self._transactions

    def __len__(self) -> int:
        return len(self._transactions)
