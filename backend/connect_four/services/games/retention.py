import logging
import threading
import time
from typing import Callable, Optional, Set, Tuple

from .errors import GameNotFound
from .registry import SessionRegistry

logger = logging.getLogger(__name__)


class RetentionScheduler:
    """Evict finished games a fixed time after they end.

    - No-ops when ``ttl_sec`` is 0 (games then live until the process exits)
    - Ensures a single pending eviction per finished game
    - Runs each wait on ``start_task``, normally ``socketio.start_background_task``
    - Calls ``on_evicted(name)`` after each eviction
    """

    def __init__(
        self,
        registry: SessionRegistry,
        ttl_sec: float,
        start_task: Callable,
        on_evicted: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.registry = registry
        self.ttl_sec = ttl_sec
        self.on_evicted = on_evicted
        self._start_task = start_task
        # (game name, finished_at) so a re-created game with the same name gets its own timer
        self._scheduled: Set[Tuple[str, float]] = set()
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.ttl_sec > 0

    def schedule(self, name: str) -> bool:
        if not self.enabled:
            return False
        try:
            session = self.registry.get(name)
        except GameNotFound:
            return False
        if not session.is_finished:
            return False
        key = (name, session.finished_at)
        with self._lock:
            if key in self._scheduled:
                logger.info(f"[retention-skip] game={name!r} already scheduled")
                return False
            self._scheduled.add(key)
        logger.info(f"[retention-set] game={name!r} ttl={self.ttl_sec}s")
        self._start_task(self._worker, name, session.finished_at, self.ttl_sec)
        return True

    def _worker(self, name: str, finished_at: float, delay: float) -> None:
        time.sleep(delay)
        with self._lock:
            self._scheduled.discard((name, finished_at))
        try:
            session = self.registry.get(name)
        except GameNotFound:
            return
        if session.finished_at != finished_at:
            logger.info(f"[retention-abort] game={name!r} is not the game this timer was set for")
            return
        self.registry.evict(name)
        if self.on_evicted is not None:
            self.on_evicted(name)
