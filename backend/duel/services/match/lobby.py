"""Process-wide matchmaking and session state.

A Lobby is built empty by the app factory and handed to the Socket.IO
handlers; it is the only way to reach the queue, the room registry and the
round sequencer. One lock serialises every operation and every timer
callback, so handlers running on different threads never interleave inside
a match.
"""

import logging
import random
import threading
from typing import Any, Callable, Dict, Hashable, List, Optional

from . import engine
from .catalog import Catalog
from .matchmaking import MatchQueue
from .resolution import RESOLVE_DELAY_MS, REVEAL_DELAY_MS, RoundSequencer
from .rooms import MatchSession, RoomRegistry
from .state import GAME_OVER, serialize_state

MATCH_FOUND = 'match:found'
GAME_STATE = 'game:state'

Sender = Callable[[Hashable, str, Dict[str, Any]], None]


class Lobby:

    def __init__(self, catalog: Catalog, scheduler, send: Sender,
                 rng: Optional[random.Random] = None,
                 reveal_delay_ms: int = REVEAL_DELAY_MS,
                 resolve_delay_ms: int = RESOLVE_DELAY_MS,
                 logger=None):
        self.catalog = catalog
        self.scheduler = scheduler
        self.logger = logger or logging.getLogger(__name__)
        self._send = send
        self._lock = threading.RLock()
        self.queue = MatchQueue()
        self.rooms = RoomRegistry(rng=rng or random.Random())
        self.sequencer = RoundSequencer(
            self.rooms,
            scheduler,
            publish=self._publish,
            finish=self._close,
            lock=self._lock,
            reveal_delay_ms=reveal_delay_ms,
            resolve_delay_ms=resolve_delay_ms,
            logger=self.logger,
        )

    def _publish(self, session: MatchSession) -> None:
        payload = serialize_state(session.state)
        for participant in session.players:
            self._send(participant, GAME_STATE, payload)

    def _close(self, session: MatchSession) -> None:
        self.rooms.remove(session.room_id)
        self.logger.info(f"[room-closed] room={session.room_id} live_rooms={len(self.rooms)}")

    def join_queue(self, participant) -> Optional[MatchSession]:
        """Queue ``participant`` and start a match if an opponent is waiting."""
        with self._lock:
            if not self.queue.enqueue(participant):
                self.logger.debug(f"[queue-dup] sid={participant}")
                return None
            self.logger.info(f"[queue-join] sid={participant} waiting={len(self.queue)}")
            pair = self.queue.try_pair()
            if pair is None:
                return None
            room_id = self.rooms.create(pair[0], pair[1], self.catalog)
            session = self.rooms.get(room_id)
            self.logger.info(
                f"[match-found] room={room_id} p1={pair[0]} p2={pair[1]} "
                f"first={session.state.current_seat}"
            )
            for seat, player in enumerate(session.players, start=1):
                self._send(player, MATCH_FOUND, {'roomId': room_id, 'youAre': seat})
            self._publish(session)
            return session

    def choose_attribute(self, room_id, participant, attribute) -> bool:
        """Apply a turn. Returns False when the message was stale or invalid."""
        with self._lock:
            session = self.rooms.get(room_id)
            if session is None:
                self.logger.debug(f"[move-ignored] sid={participant} room={room_id} unknown room")
                return False
            comparison = engine.choose_attribute(session, participant, attribute, self.catalog)
            if comparison is None:
                self.logger.debug(
                    f"[move-ignored] sid={participant} room={room_id} attribute={attribute} "
                    f"phase={session.state.phase} turn={session.state.current_seat}"
                )
                return False
            self.logger.info(
                f"[compare] room={room_id} round={session.state.round_no} attribute={attribute} "
                f"values={comparison.value1}/{comparison.value2} winner={comparison.winning_seat}"
            )
            self.sequencer.begin(session)
            return True

    def disconnect(self, participant) -> List[str]:
        """Drop ``participant`` from the queue and forfeit their live matches."""
        with self._lock:
            if self.queue.remove(participant):
                self.logger.info(f"[queue-leave] sid={participant}")
            closed = []
            for room_id in self.rooms.for_each_containing(participant):
                session = self.rooms.get(room_id)
                if session.state.phase == GAME_OVER:
                    self._close(session)
                    continue
                engine.forfeit(session.state, session.seat_of(participant))
                self.logger.info(f"[forfeit] room={room_id} leaver={participant} winner={session.state.winner}")
                self._publish(session)
                self._close(session)
                closed.append(room_id)
            return closed

    def snapshot(self, room_id) -> Optional[Dict[str, Any]]:
        with self._lock:
            session = self.rooms.get(room_id)
            return serialize_state(session.state) if session else None
