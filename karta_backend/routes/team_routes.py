# team_routes.py
# Defines API routes for team and roster management.

from fastapi import APIRouter, Depends

from karta_backend.models.team_model import TeamCreate, TeamUpdate, PlayerCreate
from karta_backend.routes.presenters import get_tournament, http_errors
from karta_backend.services.tournament_service import TournamentService

router = APIRouter()


# =========================================
# TEAMS
# =========================================
@router.get("")
def list_teams(service: TournamentService = Depends(get_tournament)):
    """All teams with their rosters, in creation order."""
    with http_errors():
        return service.state.teams


@router.post("", status_code=201)
def add_team(data: TeamCreate, service: TournamentService = Depends(get_tournament)):
    with http_errors():
        return service.add_team(data)


@router.get("/{team_id}")
def get_team(team_id: int, service: TournamentService = Depends(get_tournament)):
    with http_errors():
        return service.get_team(team_id)


@router.put("/{team_id}")
def update_team(team_id: int, data: TeamUpdate, service: TournamentService = Depends(get_tournament)):
    with http_errors():
        return service.update_team(team_id, data)


@router.delete("/{team_id}")
def delete_team(team_id: int, service: TournamentService = Depends(get_tournament)):
    """
    Deletes a team together with its players.
    Matches that reference the team follow TEAM_DELETE_POLICY.
    """
    with http_errors():
        result = service.delete_team(team_id)
    return {"message": f"Team {team_id} deleted.", **result}


@router.get("/{team_id}/schedule-stats")
def get_team_schedule_stats(team_id: int, service: TournamentService = Depends(get_tournament)):
    """Rest days between the team's matches (count, total, average, min, max, distribution)."""
    with http_errors():
        return service.team_schedule_stats(team_id)


# =========================================
# ROSTER
# =========================================
@router.post("/{team_id}/players", status_code=201)
def add_player(team_id: int, data: PlayerCreate, service: TournamentService = Depends(get_tournament)):
    with http_errors():
        return service.add_player(team_id, data)
