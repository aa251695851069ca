import logging
import os
from sqlmodel import SQLModel, Session
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy import create_engine as create_sync_engine
from karta_backend.core.config import DB_PATH as CONFIGURED_DB_PATH, SQL_ECHO

logger = logging.getLogger(__name__)

# --- Absolute database path ---
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
DB_PATH = CONFIGURED_DB_PATH if os.path.isabs(CONFIGURED_DB_PATH) else os.path.join(BASE_DIR, CONFIGURED_DB_PATH)

# Ensure DB file exists (prevents async context errors)
if not os.path.exists(DB_PATH):
    logger.info("📂 Database file not found. Creating %s", DB_PATH)
    open(DB_PATH, 'a').close()

# --- Database URLs ---
DATABASE_URL = f"sqlite+aiosqlite:///{DB_PATH}"    # Async engine (startup)
SYNC_DATABASE_URL = f"sqlite:///{DB_PATH}"         # Sync engine (routes/seeding)

# --- Engines ---
engine = create_async_engine(DATABASE_URL, echo=SQL_ECHO, future=True)        # Async
sync_engine = create_sync_engine(
    SYNC_DATABASE_URL,
    echo=SQL_ECHO,
    future=True,
    connect_args={"check_same_thread": False},  # FastAPI runs sync routes in a threadpool
)

# --- Initialize DB tables ---
async def init_db():
    """Create tables asynchronously if they don't exist."""
    # Table models must be registered on SQLModel.metadata first
    from karta_backend import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

# --- Sync session for seeding/scripts ---
def get_sync_session():
    return Session(sync_engine)

# --- Session dependency (used in routes) ---
def get_session():
    with Session(sync_engine) as session:
        yield session
