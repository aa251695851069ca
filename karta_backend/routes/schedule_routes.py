# schedule_routes.py
# Defines API routes for viewing, generating and clearing the match schedule.

from fastapi import APIRouter, Depends

from karta_backend.models.match_model import ScheduleRequest
from karta_backend.routes.presenters import get_tournament, http_errors, serialize_match
from karta_backend.services.tournament_service import TournamentService

router = APIRouter()


@router.get("")
def get_schedule(service: TournamentService = Depends(get_tournament)):
    """Matches grouped by date (ascending), each day ordered by kick-off slot."""
    with http_errors():
        by_date = service.schedule_by_date()
        state = service.state
    return [
        {"date": day, "matches": [serialize_match(state, m) for m in matches]}
        for day, matches in by_date.items()
    ]


@router.post("/generate", status_code=201)
def generate_schedule(data: ScheduleRequest, service: TournamentService = Depends(get_tournament)):
    """
    Generates a single round robin per group starting at start_date.
    Any existing schedule (with its goals and cards) is replaced.
    """
    with http_errors():
        result = service.generate_schedule(data.start_date)
    return {"message": "✅ Schedule generated.", **result}


@router.delete("")
def clear_schedule(service: TournamentService = Depends(get_tournament)):
    with http_errors():
        removed = service.clear_schedule()
    return {"message": "Schedule cleared.", "matches_removed": removed}
