from typing import Optional, Sequence
import numpy as np
from .exceptions import NodeStateError
from .message_types import PeerId

class TrustFilter:
    """Static "do I follow this sender" predicate, installed once per node."""

    def __init__(self):
        self._follows: Optional[np.ndarray] = None

    @property
    def installed(self) -> bool:
        return self._follows is not None

    def install(self, follows: Sequence[bool]) -> None:
        """Take a private, read-only copy of the follow row."""
        if self.installed:
            raise NodeStateError("followees already set")
        follows = np.array(follows, dtype=bool).ravel()
        follows.setflags(write=False)
        self._follows = follows

    def accepts(self, sender: PeerId) -> bool:
        if not self.installed:
            raise NodeStateError("followees not set")
        # out-of-range senders come from a broken harness; reject them
        if sender < 0 or sender >= len(self._follows):
            return False
        return bool(self._follows[sender])

    def followee_ids(self) -> np.ndarray:
        if not self.installed:
            return np.empty(0, dtype=int)
        return np.flatnonzero(self._follows)

    def __len__(self) -> int:
        return 0 if self._follows is None else len(self._follows)
