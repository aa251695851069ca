# repository.py
# Persistence collaborator: every read and write against the tournament tables.
#
# Reads come back as snapshot read models (TeamRead/MatchRead); writes return
# the stored table rows. Every session call runs inside _guard(): any
# SQLAlchemy failure is rolled back, logged and re-raised as PersistenceError
# with a generic message (no retry).

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select, or_

from karta_backend.core.errors import PersistenceError
from karta_backend.models.team_model import Team, Player, TeamRead
from karta_backend.models.match_model import (
    Match, Goal, YellowCard, RedCard, CardType, MatchStatus,
    MatchRead, GoalRead, CardRead,
)
from karta_backend.services.generate_fixtures import Fixture

logger = logging.getLogger(__name__)

LOAD_FAILED = "The tournament data could not be loaded. Please try again."


def to_match_read(match: Match) -> MatchRead:
    """Match row -> snapshot model; yellow cards first, then red, each in id order."""
    cards = [CardRead(**card.model_dump(), type=CardType.YELLOW) for card in match.yellow_cards]
    cards += [CardRead(**card.model_dump(), type=CardType.RED) for card in match.red_cards]
    return MatchRead(
        **match.model_dump(),
        goals=[GoalRead.model_validate(goal) for goal in match.goals],
        cards=cards,
    )


class TournamentRepository:
    def __init__(self, db: Session):
        self.db = db

    # ---------------------------------------------
    # Helpers
    # ---------------------------------------------
    @contextmanager
    def _guard(self, action: str, message: Optional[str] = None):
        try:
            yield
        except SQLAlchemyError:
            try:
                self.db.rollback()
            except SQLAlchemyError:
                logger.exception("❌ Rollback failed after: %s", action)
            logger.exception("❌ Failed to %s", action)
            if message:
                raise PersistenceError(message)
            raise PersistenceError()

    def _save(self, row, action: str):
        """Adds, commits and reloads one row."""
        with self._guard(action):
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        return row

    def _update_fields(self, row, fields: Dict[str, Any], action: str):
        for key, value in fields.items():
            setattr(row, key, value)
        return self._save(row, action)

    def _get(self, model, row_id: int, action: str):
        with self._guard(action, LOAD_FAILED):
            return self.db.get(model, row_id)

    # ---------------------------------------------
    # Loads
    # ---------------------------------------------
    def load_teams_with_players(self) -> List[TeamRead]:
        with self._guard("load teams", LOAD_FAILED):
            teams = self.db.exec(
                select(Team).options(selectinload(Team.players)).order_by(Team.id)
            ).all()
            return [TeamRead.model_validate(team) for team in teams]

    def load_matches_with_goals_and_cards(self) -> List[MatchRead]:
        with self._guard("load matches", LOAD_FAILED):
            matches = self.db.exec(
                select(Match)
                .options(
                    selectinload(Match.goals),
                    selectinload(Match.yellow_cards),
                    selectinload(Match.red_cards),
                )
                .order_by(Match.id)
            ).all()
            return [to_match_read(match) for match in matches]

    def get_team(self, team_id: int) -> Optional[Team]:
        return self._get(Team, team_id, "look up team")

    def get_player(self, player_id: int) -> Optional[Player]:
        return self._get(Player, player_id, "look up player")

    def get_match(self, match_id: int) -> Optional[Match]:
        return self._get(Match, match_id, "look up match")

    def match_ids_for_team(self, team_id: int) -> List[int]:
        with self._guard("look up matches for team", LOAD_FAILED):
            return list(self.db.exec(
                select(Match.id).where(or_(Match.home_team_id == team_id, Match.away_team_id == team_id))
            ).all())

    # ---------------------------------------------
    # Teams and players
    # ---------------------------------------------
    def add_team(self, name: str, group: str, logo: Optional[str] = None) -> Team:
        return self._save(Team(name=name, group=group, logo=logo), "add team")

    def update_team(self, team: Team, fields: Dict[str, Any]) -> Team:
        return self._update_fields(team, fields, "update team")

    def delete_team_with_players(self, team: Team, match_ids: Optional[List[int]] = None) -> int:
        """
        Team, its players and (optionally) the given matches go in one commit.
        Returns the number of players removed.
        """
        with self._guard("delete team"):
            players_removed = len(team.players)
            for match_id in match_ids or []:
                match = self.db.get(Match, match_id)
                if match:
                    self.db.delete(match)
            self.db.delete(team)  # players cascade
            self.db.commit()
        return players_removed

    def add_player(self, team_id: int, name: str, number: int, position: str, photo: Optional[str] = None) -> Player:
        player = Player(team_id=team_id, name=name, number=number, position=position, photo=photo)
        return self._save(player, "add player")

    def update_player(self, player: Player, fields: Dict[str, Any]) -> Player:
        return self._update_fields(player, fields, "update player")

    def delete_player(self, player: Player) -> None:
        with self._guard("delete player"):
            self.db.delete(player)
            self.db.commit()

    # ---------------------------------------------
    # Matches and events
    # ---------------------------------------------
    @staticmethod
    def _fixture_to_match(fx: Fixture, venue: str) -> Match:
        # New fixtures carry no scores, goals or cards
        return Match(
            home_team_id=fx.home_team_id,
            away_team_id=fx.away_team_id,
            date=fx.date,
            time=fx.time,
            venue=venue,
            group=fx.group,
            round=fx.round,
            status=MatchStatus.SCHEDULED,
        )

    def update_match(self, match: Match, fields: Dict[str, Any]) -> Match:
        return self._update_fields(match, fields, "update match")

    def add_goal(self, match_id: int, player_id: int, team_id: int, minute: int, is_own_goal: bool) -> Goal:
        goal = Goal(match_id=match_id, player_id=player_id, team_id=team_id, minute=minute, is_own_goal=is_own_goal)
        return self._save(goal, "add goal")

    def add_card(self, match_id: int, player_id: int, team_id: int, minute: int, card_type: CardType):
        """Yellow and red cards live in separate tables."""
        model = YellowCard if card_type == CardType.YELLOW else RedCard
        card = model(match_id=match_id, player_id=player_id, team_id=team_id, minute=minute)
        return self._save(card, f"add {card_type.value} card")

    def delete_all_matches(self) -> int:
        """Removes every match with its goals and cards in one commit."""
        with self._guard("clear schedule"):
            matches = self.db.exec(select(Match)).all()
            for match in matches:
                self.db.delete(match)  # goals and cards cascade
            self.db.commit()
        return len(matches)

    def replace_all_matches(self, fixtures: List[Fixture], venue: str) -> Tuple[int, List[Match]]:
        """Clears the old schedule and stores the new one in the same transaction."""
        with self._guard("replace schedule"):
            old_matches = self.db.exec(select(Match)).all()
            for match in old_matches:
                self.db.delete(match)
            self.db.flush()

            matches = [self._fixture_to_match(fx, venue) for fx in fixtures]
            self.db.add_all(matches)
            self.db.commit()
        return len(old_matches), matches
