# karta_backend/models/standing_model.py
# Derived (never persisted) view models: standings rows and statistics lists.
# They are rebuilt from scratch on every recomputation pass.

from typing import Optional, Dict
from pydantic import BaseModel


class Standing(BaseModel):
    """A team's accumulated record within its group."""
    team_id: int
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against


class TopScorer(BaseModel):
    player_id: int
    team_id: int
    goals: int = 0


class CardAccumulation(BaseModel):
    """A player whose accumulated cards carry a suspension."""
    player_id: int
    player_name: Optional[str] = None   # None when the player id no longer resolves
    team_id: int
    team_name: Optional[str] = None     # Live join on the current team set
    yellow_cards: int = 0
    red_cards: int = 0
    ban_matches: int = 0


class TeamCardStats(BaseModel):
    team_id: int
    team_name: str
    group: str
    yellow_cards: int = 0
    red_cards: int = 0
    total_cards: int = 0


class TournamentSummary(BaseModel):
    matches: int = 0                 # Completed matches
    goals: int = 0                   # Goals recorded in completed matches
    yellow_cards: int = 0
    red_cards: int = 0
    avg_goals_per_match: float = 0.0


class TeamScheduleStats(BaseModel):
    """Rest days between a team's consecutive match dates."""
    team_id: int
    total_matches: int = 0
    total_rest_days: int = 0
    average_rest_days: float = 0.0
    min_rest_days: int = 0
    max_rest_days: int = 0
    rest_days_distribution: Dict[int, int] = {}


class MatchSummary(BaseModel):
    """Counts shown above the match list."""
    total_matches: int = 0
    completed_matches: int = 0
    scheduled_matches: int = 0
    cancelled_matches: int = 0
    matches_by_group: Dict[str, int] = {}
    goals: int = 0                   # Goals recorded in any match
    avg_goals_per_match: float = 0.0  # Per completed match
    yellow_cards: int = 0
    red_cards: int = 0
    total_cards: int = 0
