# seed_all.py
# Orchestrates seeding: tables, demo teams/rosters and (optionally) the schedule.

import argparse
import asyncio
import logging
from contextlib import nullcontext
from datetime import date
from typing import Optional

from sqlmodel import Session

from karta_backend.core.database import get_sync_session, init_db
from karta_backend.seed.seed_tournament import seed_tournament
from karta_backend.services.tournament_service import TournamentService

logger = logging.getLogger(__name__)


def seed_all(start_date: Optional[str] = None, force: bool = False, session: Optional[Session] = None) -> dict:
    logger.info("🌱 Starting full database seeding...")

    # A caller-provided session is used as-is and left open
    with (get_sync_session() if session is None else nullcontext(session)) as db:
        logger.info("➡️  Step 1: Seeding teams and players...")
        seeded = seed_tournament(session=db, force=force)

        schedule = None
        if start_date:
            logger.info("➡️  Step 2: Generating the schedule from %s...", start_date)
            schedule = TournamentService(db).generate_schedule(start_date)

    logger.info("✅ Database seeding complete.")
    return {"seeded": seeded, "schedule": schedule}


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the tournament database.")
    parser.add_argument("--start-date", default=None, help="Generate the schedule from this date (YYYY-MM-DD)")
    parser.add_argument("--today", action="store_true", help="Generate the schedule starting today")
    parser.add_argument("--force", action="store_true", help="Seed even when teams already exist")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_db())
    seed_all(start_date=date.today().isoformat() if args.today else args.start_date, force=args.force)
