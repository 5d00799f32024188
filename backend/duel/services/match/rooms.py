"""Registry of live matches keyed by room id."""

import itertools
import random
import string
from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Tuple

from .catalog import Catalog
from .state import GameState, deal

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


@dataclass
class MatchSession:
    room_id: str
    players: Tuple[Hashable, Hashable]  # seat 1, seat 2
    state: GameState

    def seat_of(self, participant) -> Optional[int]:
        if participant == self.players[0]:
            return 1
        if participant == self.players[1]:
            return 2
        return None

    def participant_at(self, seat: int):
        return self.players[seat - 1]


class RoomRegistry:
    """Single owner of every in-progress MatchSession.

    Room ids carry a per-registry counter, so they are never handed out twice
    and a stale client message can't land in a newer match.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._sessions: Dict[str, MatchSession] = {}
        self._counter = itertools.count(1)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, room_id) -> bool:
        return room_id in self._sessions

    def _generate_room_id(self) -> str:
        suffix = ''.join(self._rng.choices(_SUFFIX_ALPHABET, k=6))
        return f"room_{next(self._counter)}_{suffix}"

    def create(self, participant_a, participant_b, catalog: Catalog) -> str:
        room_id = self._generate_room_id()
        self._sessions[room_id] = MatchSession(
            room_id=room_id,
            players=(participant_a, participant_b),
            state=deal(catalog, self._rng),
        )
        return room_id

    def get(self, room_id) -> Optional[MatchSession]:
        return self._sessions.get(room_id)

    def remove(self, room_id) -> Optional[MatchSession]:
        return self._sessions.pop(room_id, None)

    def for_each_containing(self, participant) -> List[str]:
        return [
            room_id for room_id, session in self._sessions.items()
            if participant in session.players
        ]
