from dataclasses import dataclass
from typing import Sequence

from .lifecycle import MatchRecord


def format_play_time(seconds: float) -> str:
    hours = int(seconds) // 3600
    minutes = int(seconds) // 60 % 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_minutes(seconds: float) -> str:
    return f"{int(seconds) // 60}m"


@dataclass(frozen=True)
class MatchStatistics:
    total_matches: int = 0
    total_play_time: float = 0.0
    total_games: int = 0
    total_energy: int = 0
    average_duration: float = 0.0

    def to_dict(self) -> dict:
        return {
            'totalMatches': self.total_matches,
            'totalPlayTime': self.total_play_time,
            'totalPlayTimeFormatted': format_play_time(self.total_play_time),
            'totalGames': self.total_games,
            'totalEnergy': self.total_energy,
            'averageDuration': self.average_duration,
            'averageDurationFormatted': format_minutes(self.average_duration),
        }


class StatisticsAggregator:
    """Lifetime figures folded over a history snapshot.

    Every figure is recomputed from the sequence on each read.
    """

    def __init__(self, history: Sequence[MatchRecord]):
        self.history = tuple(history)

    @property
    def total_matches(self) -> int:
        return len(self.history)

    @property
    def total_play_time(self) -> float:
        return sum(m.duration for m in self.history)

    @property
    def total_games(self) -> int:
        return sum(m.team_a_games + m.team_b_games for m in self.history)

    @property
    def total_energy(self) -> int:
        return int(sum(m.estimated_energy for m in self.history))

    @property
    def average_duration(self) -> float:
        if not self.history:
            return 0.0
        return self.total_play_time / self.total_matches

    def summary(self) -> MatchStatistics:
        return MatchStatistics(
            total_matches=self.total_matches,
            total_play_time=self.total_play_time,
            total_games=self.total_games,
            total_energy=self.total_energy,
            average_duration=self.average_duration,
        )
