# tournament_service.py
# The tournament controller: owns the in-memory snapshot, runs every mutation
# through the repository and recomputes the derived views afterwards.

import logging
from enum import Enum
from typing import Dict, List, Optional

from sqlmodel import Session

from karta_backend.core.config import DEFAULT_VENUE, TEAM_DELETE_POLICY, MATCH_SLOTS
from karta_backend.core.errors import ValidationError, NotFoundError, ConflictError
from karta_backend.models.team_model import TeamRead, PlayerRead, TeamCreate, TeamUpdate, PlayerCreate, PlayerUpdate
from karta_backend.models.match_model import MatchRead, MatchStatus, MatchUpdate, GoalCreate, CardCreate
from karta_backend.models.standing_model import (
    Standing, TopScorer, CardAccumulation, TeamCardStats, TournamentSummary, TeamScheduleStats, MatchSummary,
)
from karta_backend.services.generate_fixtures import parse_start_date, build_group_fixtures
from karta_backend.services.match_calendar import assign_match_slots, is_schedule_balanced, team_schedule_stats
from karta_backend.services.repository import TournamentRepository
from karta_backend.services.state import TournamentState, TournamentViews, derive_views
from karta_backend.services import statistics

logger = logging.getLogger(__name__)


class TeamDeletePolicy(str, Enum):
    """What happens to matches that reference a deleted team."""
    KEEP_HISTORY = "keep_history"                    # matches keep the dangling team id
    REJECT_IF_REFERENCED = "reject_if_referenced"    # refuse the delete
    CASCADE = "cascade"                              # delete those matches too


def _require_text(value: Optional[str], message: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(message)
    return value.strip()


class TournamentService:
    """
    Single controller for one tournament session.

    The snapshot is loaded lazily, replaced wholesale after every successful
    mutation and the views (standings, top scorers, card accumulation) are
    recomputed from it each time. Nothing is updated incrementally.
    """

    def __init__(self, db: Session, delete_policy: str = TEAM_DELETE_POLICY):
        self.repository = TournamentRepository(db)
        self.delete_policy = TeamDeletePolicy(delete_policy)
        self._state: Optional[TournamentState] = None
        self._views: Optional[TournamentViews] = None

    # ---------------------------------------------
    # Snapshot
    # ---------------------------------------------
    def refresh(self) -> TournamentState:
        self._state = TournamentState(
            teams=self.repository.load_teams_with_players(),
            matches=self.repository.load_matches_with_goals_and_cards(),
        )
        self._views = derive_views(self._state)
        return self._state

    @property
    def state(self) -> TournamentState:
        if self._state is None:
            self.refresh()
        return self._state

    @property
    def views(self) -> TournamentViews:
        if self._views is None:
            self.refresh()
        return self._views

    # ---------------------------------------------
    # Teams
    # ---------------------------------------------
    def get_team(self, team_id: int) -> TeamRead:
        team = self.state.find_team(team_id)
        if team is None:
            raise NotFoundError(f"Team {team_id} not found.")
        return team

    def add_team(self, data: TeamCreate) -> TeamRead:
        name = _require_text(data.name, "Team name must not be empty.")
        group = _require_text(data.group, "Team group must not be empty.")

        team = self.repository.add_team(name=name, group=group, logo=data.logo)
        logger.info("Team added: %s (group %s, id %s)", team.name, team.group, team.id)

        self.refresh()
        return self.get_team(team.id)

    def update_team(self, team_id: int, data: TeamUpdate) -> TeamRead:
        team = self.repository.get_team(team_id)
        if team is None:
            raise NotFoundError(f"Team {team_id} not found.")

        fields = data.model_dump(exclude_unset=True)
        if "name" in fields:
            fields["name"] = _require_text(fields["name"], "Team name must not be empty.")
        if "group" in fields:
            fields["group"] = _require_text(fields["group"], "Team group must not be empty.")

        self.repository.update_team(team, fields)
        self.refresh()
        return self.get_team(team_id)

    def delete_team(self, team_id: int) -> Dict[str, int]:
        """
        Removes the team and its players in one batch.
        Matches referencing the team are handled per the configured policy.
        """
        team = self.repository.get_team(team_id)
        if team is None:
            raise NotFoundError(f"Team {team_id} not found.")

        match_ids = self.repository.match_ids_for_team(team_id)
        if match_ids and self.delete_policy == TeamDeletePolicy.REJECT_IF_REFERENCED:
            raise ConflictError(f"Team {team_id} is referenced by {len(match_ids)} match(es).")

        to_delete = match_ids if self.delete_policy == TeamDeletePolicy.CASCADE else []
        players_removed = self.repository.delete_team_with_players(team, match_ids=to_delete)
        logger.info("Team %s deleted with %d player(s), %d match(es) removed (policy %s)",
                    team_id, players_removed, len(to_delete), self.delete_policy.value)

        self.refresh()
        return {"team_id": team_id, "players_removed": players_removed, "matches_removed": len(to_delete)}

    # ---------------------------------------------
    # Players
    # ---------------------------------------------
    def add_player(self, team_id: int, data: PlayerCreate) -> PlayerRead:
        name = _require_text(data.name, "Player name must not be empty.")
        if self.repository.get_team(team_id) is None:
            raise NotFoundError(f"Team {team_id} not found.")

        player = self.repository.add_player(
            team_id=team_id,
            name=name,
            number=data.number,
            position=(data.position or "").strip(),
            photo=data.photo,
        )
        self.refresh()
        return self.state.find_player(player.id)

    def update_player(self, player_id: int, data: PlayerUpdate) -> PlayerRead:
        player = self.repository.get_player(player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found.")

        fields = data.model_dump(exclude_unset=True)
        if "name" in fields:
            fields["name"] = _require_text(fields["name"], "Player name must not be empty.")
        if fields.get("team_id") is not None and self.repository.get_team(fields["team_id"]) is None:
            raise NotFoundError(f"Team {fields['team_id']} not found.")
        fields = {key: value for key, value in fields.items() if not (key in ("team_id", "number", "position") and value is None)}

        self.repository.update_player(player, fields)
        self.refresh()
        return self.state.find_player(player_id)

    def delete_player(self, player_id: int) -> None:
        player = self.repository.get_player(player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found.")
        self.repository.delete_player(player)
        self.refresh()

    # ---------------------------------------------
    # Schedule
    # ---------------------------------------------
    def generate_schedule(self, start_date) -> Dict:
        """
        Replaces the whole schedule with a fresh round robin per group.
        The previous schedule (with its goals and cards) is cleared first.
        """
        first_day = parse_start_date(start_date)
        if not MATCH_SLOTS:
            raise ValidationError("No match slots are configured.")

        fixtures = build_group_fixtures(self.refresh().teams)
        assign_match_slots(fixtures, first_day)
        balanced = is_schedule_balanced(fixtures)
        if not balanced:
            logger.warning("⚠️ Generated schedule has uneven rest days between matches.")

        cleared, matches = self.repository.replace_all_matches(fixtures, venue=DEFAULT_VENUE)
        logger.info("✅ Schedule generated from %s: %d matches (%d previous removed)",
                    first_day.isoformat(), len(matches), cleared)

        self.refresh()
        return {
            "start_date": first_day.isoformat(),
            "matches_created": len(matches),
            "matches_removed": cleared,
            "balanced": balanced,
        }

    def clear_schedule(self) -> int:
        removed = self.repository.delete_all_matches()
        logger.info("Schedule cleared: %d match(es) removed", removed)
        self.refresh()
        return removed

    def schedule_by_date(self) -> Dict[str, List[MatchRead]]:
        """Matches grouped by date, dates ascending, undated matches last under ""."""
        by_date: Dict[str, List[MatchRead]] = {}
        for match in self.state.matches:
            by_date.setdefault(match.date or "", []).append(match)
        ordered = sorted(by_date, key=lambda d: (d == "", d))
        return {day: sorted(by_date[day], key=lambda m: (m.time, m.id)) for day in ordered}

    # ---------------------------------------------
    # Matches
    # ---------------------------------------------
    def get_match(self, match_id: int) -> MatchRead:
        match = self.state.find_match(match_id)
        if match is None:
            raise NotFoundError(f"Match {match_id} not found.")
        return match

    def list_matches(
        self,
        group: Optional[str] = None,
        status: Optional[MatchStatus] = None,
        search: Optional[str] = None,
    ) -> List[MatchRead]:
        """
        Matches in id order, filtered by group, status and a case-insensitive
        team-name search (home or away). A blank search keeps everything.
        """
        needle = (search or "").strip().lower()

        def _name_matches(team_id: int) -> bool:
            team = self.state.find_team(team_id)
            return team is not None and needle in team.name.lower()

        return [
            m for m in self.state.matches
            if (group is None or m.group == group)
            and (status is None or m.status == status)
            and (not needle or _name_matches(m.home_team_id) or _name_matches(m.away_team_id))
        ]

    def update_match(self, match_id: int, data: MatchUpdate) -> MatchRead:
        match = self.repository.get_match(match_id)
        if match is None:
            raise NotFoundError(f"Match {match_id} not found.")

        # Scores may be cleared with null; the other columns are required
        fields = {
            key: value for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in ("home_score", "away_score")
        }
        self.repository.update_match(match, fields)
        self.refresh()
        return self.get_match(match_id)

    def _check_event(self, match_id: int, player_id: Optional[int], team_id: int, message: str) -> None:
        if player_id is None:
            raise ValidationError(message)
        match = self.repository.get_match(match_id)
        if match is None:
            raise NotFoundError(f"Match {match_id} not found.")
        if team_id not in (match.home_team_id, match.away_team_id):
            raise ValidationError(f"Team {team_id} does not play in match {match_id}.")

    def record_goal(self, match_id: int, data: GoalCreate) -> MatchRead:
        self._check_event(match_id, data.player_id, data.team_id, "Choose the player who scored.")
        self.repository.add_goal(
            match_id=match_id,
            player_id=data.player_id,
            team_id=data.team_id,
            minute=data.minute,
            is_own_goal=data.is_own_goal,
        )
        self.refresh()
        return self.get_match(match_id)

    def record_card(self, match_id: int, data: CardCreate) -> MatchRead:
        self._check_event(match_id, data.player_id, data.team_id, "Choose the player who received the card.")
        self.repository.add_card(
            match_id=match_id,
            player_id=data.player_id,
            team_id=data.team_id,
            minute=data.minute,
            card_type=data.type,
        )
        self.refresh()
        return self.get_match(match_id)

    # ---------------------------------------------
    # Derived views
    # ---------------------------------------------
    def standings(self, group: Optional[str] = None) -> Dict[str, List[Standing]]:
        if group is None:
            return self.views.standings
        if group not in self.views.standings:
            raise NotFoundError(f"Group {group} not found.")
        return {group: self.views.standings[group]}

    def top_scorers(self, group: Optional[str] = None, limit: Optional[int] = None) -> List[TopScorer]:
        if group is None and limit is None:
            return self.views.top_scorers
        return statistics.calculate_top_scorers(self.state, group=group, limit=limit)

    def card_accumulation(self) -> List[CardAccumulation]:
        return self.views.card_accumulation

    def team_card_stats(self, group: Optional[str] = None) -> List[TeamCardStats]:
        return statistics.team_card_stats(self.state, group=group)

    def summary(self) -> TournamentSummary:
        return statistics.tournament_summary(self.state)

    def dashboard(self) -> Dict:
        return statistics.build_dashboard(self.state)

    def team_schedule_stats(self, team_id: int) -> TeamScheduleStats:
        self.get_team(team_id)
        return team_schedule_stats(team_id, self.state.matches)

    def match_summary(self) -> MatchSummary:
        return statistics.match_summary(self.state)

    def latest_matches(self, group: Optional[str] = None, limit: int = 5) -> List[MatchRead]:
        return statistics.latest_match_statistics(self.state, group=group, limit=limit)
