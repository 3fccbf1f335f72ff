import logging
import threading
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Callable, List, Optional


logger = logging.getLogger(__name__)

# Padel burns roughly 400-600 kcal per hour; the midpoint is used.
CALORIES_PER_HOUR = 500


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def estimated_energy(duration_seconds: float, rate_per_hour: float = CALORIES_PER_HOUR) -> float:
    """Energy for a match of the given length at a constant hourly rate."""
    return (duration_seconds / 3600) * rate_per_hour


def format_clock(seconds: float) -> str:
    seconds = int(seconds)
    hours = seconds // 3600
    minutes = seconds // 60 % 60
    secs = seconds % 60
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def _parse_time(value) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    return datetime.fromisoformat(str(value).replace('Z', '+00:00'))


@dataclass
class MatchRecord:
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    team_a_games: int = 0
    team_b_games: int = 0
    start_time: datetime = field(default_factory=utcnow)
    end_time: Optional[datetime] = None
    duration: float = 0.0
    is_complete: bool = False
    estimated_energy: float = 0.0

    @property
    def total_games(self) -> int:
        return self.team_a_games + self.team_b_games

    @property
    def winner(self) -> Optional[str]:
        if not self.is_complete:
            return None
        if self.team_a_games > self.team_b_games:
            return 'Team A'
        if self.team_b_games > self.team_a_games:
            return 'Team B'
        return 'Draw'

    @property
    def duration_formatted(self) -> str:
        return format_clock(self.duration)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'teamAGames': self.team_a_games,
            'teamBGames': self.team_b_games,
            'startTime': self.start_time.isoformat(),
            'endTime': self.end_time.isoformat() if self.end_time else None,
            'duration': self.duration,
            'isComplete': self.is_complete,
            'estimatedEnergy': self.estimated_energy,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'MatchRecord':
        """Inverse of to_dict. Raises KeyError/ValueError/TypeError on bad input."""
        return cls(
            id=str(data['id']),
            team_a_games=int(data['teamAGames']),
            team_b_games=int(data['teamBGames']),
            start_time=_parse_time(data['startTime']),
            end_time=_parse_time(data.get('endTime')),
            duration=float(data['duration']),
            is_complete=bool(data['isComplete']),
            estimated_energy=float(data.get('estimatedEnergy', 0.0)),
        )

    def to_summary(self) -> dict:
        payload = self.to_dict()
        payload['totalGames'] = self.total_games
        payload['winner'] = self.winner
        payload['durationFormatted'] = self.duration_formatted
        return payload


class MatchLifecycleManager:
    """Owns the active match and the completed-match history.

    History is most-recent-first. Completed records are handed out as copies
    so nothing outside the manager can mutate an entry. A lock guards every
    access because the tick thread and request handlers share the manager.

    Starting a match while another is active replaces it; the unfinished
    match is dropped without reaching history.
    """

    def __init__(self, store=None, energy_rate: float = CALORIES_PER_HOUR,
                 clock: Callable[[], datetime] = utcnow):
        if store is None:
            from .store import InMemoryHistoryStore
            store = InMemoryHistoryStore()
        self.store = store
        self.energy_rate = energy_rate
        self.clock = clock
        self.active: Optional[MatchRecord] = None
        self._lock = threading.RLock()
        self._history: List[MatchRecord] = list(store.load())

    @property
    def is_match_active(self) -> bool:
        return self.active is not None

    @property
    def history(self) -> List[MatchRecord]:
        with self._lock:
            return [replace(m) for m in self._history]

    def active_snapshot(self) -> Optional[MatchRecord]:
        with self._lock:
            return replace(self.active) if self.active else None

    def start_new_match(self) -> MatchRecord:
        with self._lock:
            if self.active is not None:
                logger.warning(f"[match-replace] discarding unfinished match {self.active.id}")
            self.active = MatchRecord(start_time=self.clock())
            logger.info(f"[match-start] match={self.active.id}")
            return replace(self.active)

    def update_active(self, team_a_games: int, team_b_games: int, elapsed_seconds: float) -> Optional[MatchRecord]:
        with self._lock:
            match = self.active
            if match is None:
                return None
            match.team_a_games = team_a_games
            match.team_b_games = team_b_games
            match.duration = max(match.duration, float(elapsed_seconds))
            match.estimated_energy = estimated_energy(match.duration, self.energy_rate)
            return replace(match)

    def discard_active_match(self) -> Optional[MatchRecord]:
        with self._lock:
            match, self.active = self.active, None
            if match is not None:
                logger.info(f"[match-discard] match={match.id}")
            return match

    def complete_active_match(self) -> Optional[MatchRecord]:
        with self._lock:
            match = self.active
            if match is None:
                return None
            match.end_time = self.clock()
            match.is_complete = True
            completed = replace(match)
            self._history.insert(0, completed)
            self.active = None
            logger.info(
                f"[match-end] match={completed.id} score={completed.team_a_games}-{completed.team_b_games} "
                f"duration={completed.duration:.0f}s"
            )
            self._save()
            return replace(completed)

    def delete_from_history(self, index: int) -> Optional[MatchRecord]:
        with self._lock:
            if not 0 <= index < len(self._history):
                return None
            removed = self._history.pop(index)
            self._save()
            return removed

    def clear_history(self) -> None:
        with self._lock:
            self._history = []
            self._save()

    def _save(self) -> bool:
        ok = self.store.save(self._history)
        if not ok:
            logger.warning(f"[history-save-failed] entries={len(self._history)}")
        return ok
