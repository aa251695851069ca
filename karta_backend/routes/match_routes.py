# match_routes.py
# Defines API routes for match results and match events (goals, cards).

from typing import Optional

from fastapi import APIRouter, Depends, Query

from karta_backend.models.match_model import MatchStatus, MatchUpdate, GoalCreate, CardCreate
from karta_backend.routes.presenters import get_tournament, http_errors, serialize_match
from karta_backend.services.tournament_service import TournamentService

router = APIRouter()


@router.get("")
def list_matches(
    group: Optional[str] = None,
    status: Optional[MatchStatus] = None,
    search: Optional[str] = Query(None, description="Case-insensitive part of the home or away team name"),
    service: TournamentService = Depends(get_tournament),
):
    """All matches with team names, optionally filtered by group, status and team name."""
    with http_errors():
        matches = service.list_matches(group=group, status=status, search=search)
        state = service.state
    return [serialize_match(state, m) for m in matches]


@router.get("/summary")
def get_match_summary(service: TournamentService = Depends(get_tournament)):
    """Counts per status and group, goal and card totals."""
    with http_errors():
        return service.match_summary()


@router.get("/{match_id}")
def get_match(match_id: int, service: TournamentService = Depends(get_tournament)):
    """Match detail including goals and cards with player/team names."""
    with http_errors():
        match = service.get_match(match_id)
    return serialize_match(service.state, match, with_events=True)


@router.put("/{match_id}")
def update_match(match_id: int, data: MatchUpdate, service: TournamentService = Depends(get_tournament)):
    """Updates score, status, date, time or venue. Standings are recomputed afterwards."""
    with http_errors():
        match = service.update_match(match_id, data)
    return serialize_match(service.state, match, with_events=True)


@router.post("/{match_id}/goals", status_code=201)
def record_goal(match_id: int, data: GoalCreate, service: TournamentService = Depends(get_tournament)):
    with http_errors():
        match = service.record_goal(match_id, data)
    return serialize_match(service.state, match, with_events=True)


@router.post("/{match_id}/cards", status_code=201)
def record_card(match_id: int, data: CardCreate, service: TournamentService = Depends(get_tournament)):
    with http_errors():
        match = service.record_card(match_id, data)
    return serialize_match(service.state, match, with_events=True)
