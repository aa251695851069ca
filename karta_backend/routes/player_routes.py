# player_routes.py
# Defines API routes for editing and removing individual players.

from fastapi import APIRouter, Depends

from karta_backend.models.team_model import PlayerUpdate
from karta_backend.routes.presenters import get_tournament, http_errors
from karta_backend.services.tournament_service import TournamentService

router = APIRouter()


@router.put("/{player_id}")
def update_player(player_id: int, data: PlayerUpdate, service: TournamentService = Depends(get_tournament)):
    """Updates player details; passing team_id moves the player to another team."""
    with http_errors():
        return service.update_player(player_id, data)


@router.delete("/{player_id}")
def delete_player(player_id: int, service: TournamentService = Depends(get_tournament)):
    with http_errors():
        service.delete_player(player_id)
    return {"message": f"Player {player_id} deleted."}
