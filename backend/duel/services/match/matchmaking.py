"""FIFO pairing queue for participants waiting for an opponent."""

from collections import deque
from typing import Deque, Hashable, Optional, Tuple


class MatchQueue:
    """Oldest-wait-first queue. Participants are opaque connection ids."""

    def __init__(self):
        self._waiting: Deque[Hashable] = deque()

    def __len__(self) -> int:
        return len(self._waiting)

    def __contains__(self, participant) -> bool:
        return participant in self._waiting

    def enqueue(self, participant) -> bool:
        if participant in self._waiting:
            return False
        self._waiting.append(participant)
        return True

    def try_pair(self) -> Optional[Tuple[Hashable, Hashable]]:
        if len(self._waiting) < 2:
            return None
        first = self._waiting.popleft()
        second = self._waiting.popleft()
        return first, second

    def remove(self, participant) -> bool:
        try:
            self._waiting.remove(participant)
        except ValueError:
            return False
        return True
