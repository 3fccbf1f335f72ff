import logging
import threading
from typing import Callable, Optional


logger = logging.getLogger(__name__)


class MatchTimer:
    """Repeating tick that drives the live match clock.

    - start() replaces any running tick loop
    - stop() is idempotent and safe to call from teardown and from the
      end-of-match path alike
    - when disabled (TESTING), start/stop only track state and ticks are
      driven by the caller
    - usable as a context manager; leaving the block stops the timer
    """

    def __init__(self, spawn: Optional[Callable] = None, sleep: Optional[Callable] = None,
                 enabled: bool = True, heartbeat_sec: int = 0):
        if spawn is None or sleep is None:
            from padel_tracker import socketio
            spawn = spawn or socketio.start_background_task
            sleep = sleep or socketio.sleep
        self._spawn = spawn
        self._sleep = sleep
        self.enabled = enabled
        self.heartbeat_sec = heartbeat_sec
        self._lock = threading.Lock()
        self._generation = 0
        self._running = False
        self.interval: Optional[float] = None

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self, interval: float, callback: Callable[[], None]) -> None:
        with self._lock:
            if self._running:
                logger.info(f"[timer-restart] generation={self._generation}")
            self._generation += 1
            self._running = True
            self.interval = interval
            generation = self._generation
        logger.info(f"[timer-set] interval={interval}s generation={generation}")
        if self.enabled:
            self._spawn(self._worker, generation, interval, callback)

    def stop(self) -> bool:
        """Stop the tick loop. Returns False when nothing was running."""
        with self._lock:
            if not self._running:
                return False
            self._running = False
            self._generation += 1
        logger.info("[timer-stop]")
        return True

    def _alive(self, generation: int) -> bool:
        with self._lock:
            return self._running and self._generation == generation

    def _worker(self, generation: int, interval: float, callback: Callable[[], None]) -> None:
        ticks = 0
        while True:
            self._sleep(interval)
            if not self._alive(generation):
                return
            try:
                callback()
            except Exception:
                logger.exception(f"[timer-tick-failed] generation={generation}")
            ticks += 1
            if self.heartbeat_sec and (ticks * interval) % self.heartbeat_sec == 0:
                logger.info(f"[timer-heartbeat] generation={generation} ticks={ticks}")

    def __enter__(self) -> 'MatchTimer':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
