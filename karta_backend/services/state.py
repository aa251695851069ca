# karta_backend/services/state.py
# In-memory tournament snapshot and the derived views computed from it.
#
# The controller (tournament_service.TournamentService) owns one snapshot,
# replaces it wholesale after every mutation and calls derive_views() again.
# Nothing here touches the database.

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from karta_backend.models.team_model import TeamRead, PlayerRead
from karta_backend.models.match_model import MatchRead
from karta_backend.models.standing_model import Standing, TopScorer, CardAccumulation


@dataclass(frozen=True)
class TournamentState:
    """Teams (with rosters) and matches (with goals and cards) at one point in time."""
    teams: List[TeamRead] = field(default_factory=list)
    matches: List[MatchRead] = field(default_factory=list)

    def find_team(self, team_id: int) -> Optional[TeamRead]:
        for team in self.teams:
            if team.id == team_id:
                return team
        return None

    def find_player(self, player_id: int) -> Optional[PlayerRead]:
        for team in self.teams:
            for player in team.players:
                if player.id == player_id:
                    return player
        return None

    def find_match(self, match_id: int) -> Optional[MatchRead]:
        for match in self.matches:
            if match.id == match_id:
                return match
        return None

    def groups(self) -> List[str]:
        """Group labels in first-seen team order."""
        seen: List[str] = []
        for team in self.teams:
            if team.group not in seen:
                seen.append(team.group)
        return seen

    def teams_in_group(self, group: str) -> List[TeamRead]:
        return [team for team in self.teams if team.group == group]


@dataclass(frozen=True)
class TournamentViews:
    standings: Dict[str, List[Standing]] = field(default_factory=dict)
    top_scorers: List[TopScorer] = field(default_factory=list)
    card_accumulation: List[CardAccumulation] = field(default_factory=list)


def derive_views(state: TournamentState) -> TournamentViews:
    """Recompute every derived view from scratch."""
    # Local imports keep the calculators free to import TournamentState
    from karta_backend.services.standings import calculate_standings
    from karta_backend.services.statistics import calculate_top_scorers, evaluate_card_accumulation

    return TournamentViews(
        standings=calculate_standings(state),
        top_scorers=calculate_top_scorers(state),
        card_accumulation=evaluate_card_accumulation(state),
    )
