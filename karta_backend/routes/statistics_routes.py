# statistics_routes.py
# Defines API routes for tournament statistics (scorers, cards, summary).

from typing import Optional

from fastapi import APIRouter, Depends, Query

from karta_backend.core.config import MISSING_REFERENCE_LABEL
from karta_backend.routes.presenters import get_tournament, http_errors, player_label, team_label, serialize_match
from karta_backend.services.tournament_service import TournamentService

router = APIRouter()


@router.get("/top-scorers")
def get_top_scorers(
    group: Optional[str] = Query(None, description="Only scorers whose team is in this group"),
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of rows, e.g. 10"),
    service: TournamentService = Depends(get_tournament),
):
    """Goals per player, own goals excluded."""
    with http_errors():
        scorers = service.top_scorers(group=group, limit=limit)
        state = service.state
    return [
        {
            **scorer.model_dump(),
            "player_name": player_label(state, scorer.player_id),
            "team_name": team_label(state, scorer.team_id),
        }
        for scorer in scorers
    ]


@router.get("/card-accumulation")
def get_card_accumulation(service: TournamentService = Depends(get_tournament)):
    """
    Players suspended by accumulated cards.
    Every 2 yellows => 1 match, every red => 1 match; never reset.
    """
    with http_errors():
        rows = service.card_accumulation()
    return [
        {
            **row.model_dump(),
            "player_name": row.player_name or MISSING_REFERENCE_LABEL,
            "team_name": row.team_name or MISSING_REFERENCE_LABEL,
        }
        for row in rows
    ]


@router.get("/team-cards")
def get_team_cards(
    group: Optional[str] = Query(None),
    service: TournamentService = Depends(get_tournament),
):
    with http_errors():
        return service.team_card_stats(group=group)


@router.get("/summary")
def get_summary(service: TournamentService = Depends(get_tournament)):
    with http_errors():
        return service.summary()


@router.get("/latest-matches")
def get_latest_matches(
    group: Optional[str] = Query(None),
    limit: int = Query(5, ge=1, description="Maximum number of matches"),
    service: TournamentService = Depends(get_tournament),
):
    """Completed matches with the most goals, with goal and card counts."""
    with http_errors():
        matches = service.latest_matches(group=group, limit=limit)
        state = service.state
    return [
        {**serialize_match(state, m), "goal_count": len(m.goals), "card_count": len(m.cards)}
        for m in matches
    ]
