import logging
from fastapi import FastAPI
from karta_backend.core.config import LOG_LEVEL
from karta_backend.core.database import init_db
from karta_backend.core.tournament_config import TOURNAMENT_NAME

# --- Routers ---
from karta_backend.routes.dashboard_routes import router as dashboard_router
from karta_backend.routes.team_routes import router as team_router
from karta_backend.routes.player_routes import router as player_router
from karta_backend.routes.schedule_routes import router as schedule_router
from karta_backend.routes.match_routes import router as match_router
from karta_backend.routes.standings_routes import router as standings_router
from karta_backend.routes.statistics_routes import router as statistics_router

# Setup logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=f"{TOURNAMENT_NAME} backend")


@app.on_event("startup")
async def on_startup():
    # Init DB tables async
    try:
        await init_db()
        logger.info("✅ Database connected and tables created.")
    except Exception:
        logger.exception("❌ Database connection error")
        raise


@app.get("/")
async def home():
    return {"message": f"Welcome to the {TOURNAMENT_NAME} backend"}


# Routers
app.include_router(dashboard_router, tags=["Dashboard"])
app.include_router(team_router, prefix="/teams", tags=["Teams"])
app.include_router(player_router, prefix="/players", tags=["Players"])
app.include_router(schedule_router, prefix="/schedule", tags=["Schedule"])
app.include_router(match_router, prefix="/matches", tags=["Matches"])
app.include_router(standings_router, prefix="/standings", tags=["Standings"])
app.include_router(statistics_router, prefix="/statistics", tags=["Statistics"])
