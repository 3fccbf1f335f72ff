import logging
import threading
from typing import Callable, Optional

from .lifecycle import MatchLifecycleManager, MatchRecord, format_clock
from .scheduler import MatchTimer
from .scoring import GameScoreTracker, Team
from .stats import MatchStatistics, StatisticsAggregator
from .workouts import DisabledWorkoutSync, WorkoutSync, sync_completed_match


logger = logging.getLogger(__name__)


def _run_inline(fn, *args):
    return fn(*args)


class ScoreboardSession:
    """Live scoreboard: point events, the match clock and match history.

    Point events and clock ticks are serialized through one lock, so the
    tracker and the active record only ever see one writer at a time.
    ``notify`` receives the fresh state after every change; ``run_async``
    runs side effects (workout sync) off the caller's path.
    """

    def __init__(self, lifecycle: MatchLifecycleManager, timer: MatchTimer,
                 workout_sync: Optional[WorkoutSync] = None, tick_interval: float = 1,
                 notify: Optional[Callable[[dict], None]] = None,
                 run_async: Callable = _run_inline):
        self.lifecycle = lifecycle
        self.timer = timer
        self.workout_sync = workout_sync or DisabledWorkoutSync()
        self.tick_interval = tick_interval
        self.notify = notify
        self.run_async = run_async
        self.tracker = GameScoreTracker()
        self.elapsed = 0.0
        self._lock = threading.RLock()

    # ---- live match ----

    def start_match(self) -> MatchRecord:
        with self._lock:
            self.timer.stop()
            record = self.lifecycle.start_new_match()
            self.tracker.reset_match()
            self.elapsed = 0.0
            self.timer.start(self.tick_interval, lambda match_id=record.id: self.tick(match_id))
        self._emit()
        return record

    def tick(self, match_id: Optional[str] = None) -> None:
        """Advance the clock. A tick bound to another match is dropped."""
        with self._lock:
            active = self.lifecycle.active
            if active is None:
                return
            if match_id is not None and active.id != match_id:
                logger.info(f"[timer-stale] tick for match={match_id} dropped")
                return
            self.elapsed += self.tick_interval
            self._push_progress()
        self._emit()

    def point_won_by(self, team: Team) -> bool:
        with self._lock:
            game_won = self.tracker.point_won_by(team)
            if game_won:
                logger.info(
                    f"[game] team={team.value} games={self.tracker.games_a}-{self.tracker.games_b}"
                )
        self._emit()
        return game_won

    def undo_last_point(self) -> bool:
        with self._lock:
            undone = self.tracker.undo_last_point()
        self._emit()
        return undone

    def reset_scores(self) -> None:
        with self._lock:
            self.tracker.reset_match()
            self._push_progress()
        self._emit()

    def end_match(self) -> Optional[MatchRecord]:
        with self._lock:
            self.timer.stop()
            self._push_progress()
            record = self.lifecycle.complete_active_match()
            if record is None:
                return None
            self.tracker.reset_match()
            self.elapsed = 0.0
        self.run_async(sync_completed_match, self.workout_sync, record)
        self._emit()
        return record

    def discard_match(self) -> Optional[MatchRecord]:
        """Abandon the live match without adding it to history."""
        with self._lock:
            self.timer.stop()
            record = self.lifecycle.discard_active_match()
            self.tracker.reset_match()
            self.elapsed = 0.0
        if record is not None:
            self._emit()
        return record

    def close(self) -> None:
        """Teardown hook; stops the clock and releases the tracker client."""
        self.timer.stop()
        self.workout_sync.close()

    def _push_progress(self) -> None:
        self.lifecycle.update_active(self.tracker.games_a, self.tracker.games_b, self.elapsed)

    # ---- history / statistics ----

    def delete_match(self, index: int) -> Optional[MatchRecord]:
        removed = self.lifecycle.delete_from_history(index)
        if removed is not None:
            self._emit()
        return removed

    def statistics(self) -> MatchStatistics:
        return StatisticsAggregator(self.lifecycle.history).summary()

    def authorize_workouts(self) -> bool:
        try:
            return bool(self.workout_sync.request_authorization())
        except Exception as exc:
            logger.warning(f"[workout-auth-failed] {exc}")
            return False

    # ---- state ----

    def state(self) -> dict:
        with self._lock:
            active = self.lifecycle.active_snapshot()
            payload = self.tracker.to_dict()
            payload.update({
                'is_match_active': active is not None,
                'elapsed': self.elapsed,
                'elapsed_formatted': format_clock(self.elapsed),
                'match': active.to_summary() if active else None,
                'health_sync': bool(self.workout_sync.is_authorized),
            })
            return payload

    def _emit(self) -> None:
        if self.notify is None:
            return
        try:
            self.notify(self.state())
        except Exception as exc:
            logger.warning(f"[notify-failed] {exc}")
