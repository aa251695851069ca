# dashboard_routes.py
# Defines the dashboard route (quick stats + next matches).

from fastapi import APIRouter, Depends

from karta_backend.routes.presenters import get_tournament, http_errors, serialize_match
from karta_backend.services.tournament_service import TournamentService

router = APIRouter()


@router.get("/dashboard")
def get_dashboard(service: TournamentService = Depends(get_tournament)):
    with http_errors():
        dashboard = service.dashboard()
        state = service.state
    dashboard["upcoming_matches"] = [serialize_match(state, m) for m in dashboard["upcoming_matches"]]
    return dashboard
