# standings_routes.py
# Defines API routes for group standings tables.

from fastapi import APIRouter, Depends

from karta_backend.routes.presenters import get_tournament, http_errors, serialize_standings
from karta_backend.services.tournament_service import TournamentService

router = APIRouter()


# =========================================
# GET STANDINGS
# =========================================
@router.get("")
def get_standings(service: TournamentService = Depends(get_tournament)):
    """
    Standings for every group.
    Order: points, goal difference, goals scored (descending), then team id.
    """
    with http_errors():
        return serialize_standings(service.state, service.standings())


@router.get("/{group}")
def get_group_standings(group: str, service: TournamentService = Depends(get_tournament)):
    with http_errors():
        standings = service.standings(group)
    return serialize_standings(service.state, standings)[group]
