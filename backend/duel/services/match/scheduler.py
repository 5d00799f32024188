import heapq
import itertools
import logging
from typing import Any, Callable, List, Tuple

logger = logging.getLogger(__name__)


class SocketIOScheduler:
    """Run callbacks after a delay on Socket.IO background tasks.

    The waiting happens inside the background task (``socketio.sleep`` picks
    the right primitive for threading, eventlet or gevent), never in the
    caller.
    """

    def __init__(self, socketio):
        self._socketio = socketio

    def call_later(self, delay_ms: int, callback: Callable[..., Any], *args) -> None:
        def _worker():
            self._socketio.sleep(max(0, delay_ms) / 1000.0)
            try:
                callback(*args)
            except Exception:
                logger.exception(f"[timer-error] callback={getattr(callback, '__name__', callback)}")

        self._socketio.start_background_task(_worker)


class ManualScheduler:
    """Virtual clock for tests: callbacks run only when time is advanced."""

    def __init__(self):
        self.now_ms = 0
        self._pending: List[Tuple[int, int, Callable[..., Any], tuple]] = []
        self._seq = itertools.count()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def call_later(self, delay_ms: int, callback: Callable[..., Any], *args) -> None:
        heapq.heappush(self._pending, (self.now_ms + max(0, delay_ms), next(self._seq), callback, args))

    def advance(self, ms: int) -> int:
        """Move the clock forward by ``ms`` and run everything that came due.

        Callbacks scheduled while advancing run too if they fall inside the
        window. Returns the number of callbacks run.
        """
        target = self.now_ms + ms
        ran = 0
        while self._pending and self._pending[0][0] <= target:
            due, _, callback, args = heapq.heappop(self._pending)
            self.now_ms = due
            callback(*args)
            ran += 1
        self.now_ms = target
        return ran

    def run_all(self) -> int:
        ran = 0
        while self._pending:
            ran += self.advance(self._pending[0][0] - self.now_ms)
        return ran
