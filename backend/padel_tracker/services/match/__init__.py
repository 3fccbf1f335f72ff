"""Match domain services: scoring, lifecycle, statistics and timers.

This package contains pure(ish) domain logic that should be imported by
HTTP routes and socket handlers, keeping transport concerns separated
from the scoring rules and the match history.
"""

from .scoring import Team, PointScoreEngine, GameScoreTracker
from .lifecycle import MatchRecord, MatchLifecycleManager, estimated_energy
from .stats import MatchStatistics, StatisticsAggregator
from .store import HistoryStore, InMemoryHistoryStore, SqlHistoryStore
from .scheduler import MatchTimer
from .workouts import WorkoutSync, DisabledWorkoutSync, WebhookWorkoutSync
from .session import ScoreboardSession

__all__ = [
    'Team',
    'PointScoreEngine',
    'GameScoreTracker',
    'MatchRecord',
    'MatchLifecycleManager',
    'estimated_energy',
    'MatchStatistics',
    'StatisticsAggregator',
    'HistoryStore',
    'InMemoryHistoryStore',
    'SqlHistoryStore',
    'MatchTimer',
    'WorkoutSync',
    'DisabledWorkoutSync',
    'WebhookWorkoutSync',
    'ScoreboardSession',
]
