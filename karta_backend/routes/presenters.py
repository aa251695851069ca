# presenters.py
# Shared route helpers: service dependency, error translation and the
# frontend-friendly payload builders (names resolved, placeholders rendered).

from contextlib import contextmanager
from typing import Dict, List, Optional

from fastapi import Depends, HTTPException
from sqlmodel import Session

from karta_backend.core.config import MISSING_REFERENCE_LABEL
from karta_backend.core.database import get_session
from karta_backend.core.errors import ValidationError, NotFoundError, ConflictError, PersistenceError
from karta_backend.models.match_model import MatchRead
from karta_backend.models.standing_model import Standing
from karta_backend.services.match_calendar import kickoff_datetime
from karta_backend.services.state import TournamentState
from karta_backend.services.tournament_service import TournamentService


def get_tournament(session: Session = Depends(get_session)) -> TournamentService:
    return TournamentService(session)


@contextmanager
def http_errors():
    """Translates service exceptions into HTTP errors."""
    try:
        yield
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))


# ---------------------------------------------
# Name lookups (missing references become a placeholder)
# ---------------------------------------------
def team_label(state: TournamentState, team_id: Optional[int]) -> str:
    team = state.find_team(team_id) if team_id is not None else None
    return team.name if team else MISSING_REFERENCE_LABEL


def player_label(state: TournamentState, player_id: Optional[int]) -> str:
    player = state.find_player(player_id) if player_id is not None else None
    return player.name if player else MISSING_REFERENCE_LABEL


def serialize_match(state: TournamentState, match: MatchRead, with_events: bool = False) -> dict:
    kickoff = kickoff_datetime(match.date, match.time)
    payload = {
        **match.model_dump(exclude={"goals", "cards"}),
        "home_team_name": team_label(state, match.home_team_id),
        "away_team_name": team_label(state, match.away_team_id),
        "kickoff_at": kickoff.isoformat() if kickoff else None,
    }
    if with_events:
        payload["goals"] = [
            {**goal.model_dump(), "player_name": player_label(state, goal.player_id),
             "team_name": team_label(state, goal.team_id)}
            for goal in match.goals
        ]
        payload["cards"] = [
            {**card.model_dump(), "player_name": player_label(state, card.player_id),
             "team_name": team_label(state, card.team_id)}
            for card in match.cards
        ]
    return payload


def serialize_standings(state: TournamentState, standings: Dict[str, List[Standing]]) -> Dict[str, List[dict]]:
    return {
        group: [
            {
                "position": position,
                "team_name": team_label(state, row.team_id),
                **row.model_dump(),
                "goal_difference": row.goal_difference,
            }
            for position, row in enumerate(rows, start=1)
        ]
        for group, rows in standings.items()
    }
