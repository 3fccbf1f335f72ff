from enum import Enum
from typing import Dict, Optional


POINT_LABELS = ('0', '15', '30', '40')
ADVANTAGE = 'AD'


class Team(str, Enum):
    A = 'A'
    B = 'B'

    @property
    def opponent(self) -> 'Team':
        return Team.B if self is Team.A else Team.A

    @classmethod
    def parse(cls, value) -> 'Team':
        """Accept 'A'/'B' (any case) or a Team; raise ValueError otherwise."""
        if isinstance(value, Team):
            return value
        if isinstance(value, str) and value.strip().upper() in ('A', 'B'):
            return cls(value.strip().upper())
        raise ValueError(f"Unknown team: {value!r}")


class PointScoreEngine:
    """Point tally for the game in progress.

    Counts are raw integers; display values are derived on read so the
    engine never holds a separate deuce/advantage flag.
    """

    def __init__(self):
        self.points: Dict[Team, int] = {Team.A: 0, Team.B: 0}

    def award_point(self, team: Team) -> bool:
        self.points[team] += 1
        return self.has_won(team)

    def remove_point(self, team: Team) -> bool:
        if self.points[team] <= 0:
            return False
        self.points[team] -= 1
        return True

    def display_value(self, team: Team) -> str:
        points = self.points[team]
        opponent_points = self.points[team.opponent]

        if self.points[Team.A] >= 3 and self.points[Team.B] >= 3:
            # the trailing team keeps showing 40 during advantage
            return ADVANTAGE if points > opponent_points else POINT_LABELS[3]

        return POINT_LABELS[min(points, 3)]

    def has_won(self, team: Team) -> bool:
        points = self.points[team]
        return points >= 4 and points >= self.points[team.opponent] + 2

    def reset(self) -> None:
        self.points[Team.A] = 0
        self.points[Team.B] = 0

    def to_dict(self) -> dict:
        return {team.value: self.display_value(team) for team in Team}


class GameScoreTracker:
    """Running game score for a match, fed one point at a time.

    Only the most recent scoring team is remembered, so undo reaches back a
    single point and never across a completed game.
    """

    def __init__(self):
        self.engine = PointScoreEngine()
        self.games: Dict[Team, int] = {Team.A: 0, Team.B: 0}
        self.last_scoring_team: Optional[Team] = None

    @property
    def games_a(self) -> int:
        return self.games[Team.A]

    @property
    def games_b(self) -> int:
        return self.games[Team.B]

    def point_won_by(self, team: Team) -> bool:
        """Record a point; return True when it closed out the game."""
        self.last_scoring_team = team
        if not self.engine.award_point(team):
            return False
        self.games[team] += 1
        self.engine.reset()
        return True

    def undo_last_point(self) -> bool:
        team = self.last_scoring_team
        if team is None:
            return False
        if not self.engine.remove_point(team):
            return False
        self.last_scoring_team = None
        return True

    def reset_match(self) -> None:
        self.games[Team.A] = 0
        self.games[Team.B] = 0
        self.engine.reset()
        self.last_scoring_team = None

    def to_dict(self) -> dict:
        return {
            'points': self.engine.to_dict(),
            'raw_points': {team.value: self.engine.points[team] for team in Team},
            'games': {team.value: self.games[team] for team in Team},
            'last_scoring_team': self.last_scoring_team.value if self.last_scoring_team else None,
        }
