from dataclasses import dataclass

PeerId = int  # index into the trust graph, [0, N)

@dataclass(frozen=True, order=True)
class Transaction:
    id: int

    def __repr__(self) -> str:
        return f"Transaction({self.id})"

@dataclass(frozen=True)
class Candidate:
    """A transaction together with the peer that broadcast it this round."""
    tx: Transaction
    sender: PeerId
