"""Timed round resolution.

After a comparison opens, a round moves through three sub-states, each one
published to both players before the next is scheduled:

- awaiting_reveal (t=0): comparison visible, ``showResults`` false
- revealed (t=reveal_delay): ``showResults`` true
- resolved (t=reveal_delay+resolve_delay): cards move, turn/phase update

Every deferred step is keyed by ``(room_id, round_no)`` and re-reads the
registry when it fires, so a removed session or a different round makes it
stand down without touching anything.
"""

import logging
import threading
from typing import Callable

from . import engine
from .rooms import MatchSession, RoomRegistry
from .state import AWAITING_REVEAL, COMPARING, GAME_OVER, RESOLVED, REVEALED

REVEAL_DELAY_MS = 1500
RESOLVE_DELAY_MS = 2000


class RoundSequencer:

    def __init__(self, registry: RoomRegistry, scheduler,
                 publish: Callable[[MatchSession], None],
                 finish: Callable[[MatchSession], None],
                 lock=None,
                 reveal_delay_ms: int = REVEAL_DELAY_MS,
                 resolve_delay_ms: int = RESOLVE_DELAY_MS,
                 logger=None):
        self._registry = registry
        self._scheduler = scheduler
        self._publish = publish
        self._finish = finish
        self._lock = lock or threading.RLock()
        self.reveal_delay_ms = reveal_delay_ms
        self.resolve_delay_ms = resolve_delay_ms
        self._logger = logger or logging.getLogger(__name__)

    def begin(self, session: MatchSession) -> None:
        """Publish the freshly opened comparison and schedule the reveal."""
        state = session.state
        self._publish(session)
        self._schedule(session.room_id, state.round_no, REVEALED, self.reveal_delay_ms, self._on_reveal)

    def _schedule(self, room_id: str, round_no: int, stage: str, delay_ms: int, callback) -> None:
        self._logger.info(f"[stage-set] room={room_id} round={round_no} stage={stage} delay={delay_ms}ms")
        self._scheduler.call_later(delay_ms, callback, room_id, round_no)

    def _current(self, room_id: str, round_no: int, expected_stage: str):
        session = self._registry.get(room_id)
        if session is None:
            self._logger.info(f"[stage-abort] room={room_id} round={round_no} session gone")
            return None
        state = session.state
        if state.phase != COMPARING or state.round_no != round_no or state.round_stage != expected_stage:
            self._logger.info(
                f"[stage-abort] room={room_id} round={round_no} phase={state.phase} "
                f"actual_round={state.round_no} stage={state.round_stage}"
            )
            return None
        return session

    def _on_reveal(self, room_id: str, round_no: int) -> None:
        with self._lock:
            session = self._current(room_id, round_no, AWAITING_REVEAL)
            if session is None:
                return
            engine.reveal(session.state)
            self._publish(session)
            self._schedule(room_id, round_no, RESOLVED, self.resolve_delay_ms, self._on_resolve)

    def _on_resolve(self, room_id: str, round_no: int) -> None:
        with self._lock:
            session = self._current(room_id, round_no, REVEALED)
            if session is None:
                return
            state = session.state
            winning_seat = engine.resolve_round(state)
            self._logger.info(
                f"[round-resolved] room={room_id} round={round_no} winner={winning_seat} "
                f"stocks={len(state.stocks[1])}/{len(state.stocks[2])} pot={len(state.pot)}"
            )
            self._publish(session)
            if state.phase == GAME_OVER:
                self._logger.info(f"[game-over] room={room_id} winner={state.winner}")
                self._finish(session)
