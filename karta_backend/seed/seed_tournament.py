"""
seed_tournament.py
------------------
Seeds the demo tournament (teams and rosters) from tournament_config.py.

✅ Guards against duplicates:
   - Skips entirely when teams already exist, unless force=True.
   - Teams without a name or group are skipped with a warning.

Usage:
    python -m karta_backend.seed.seed_tournament
"""

import logging
from typing import Dict, List, Optional

from sqlmodel import Session, select

from karta_backend.core.database import get_sync_session
from karta_backend.core.tournament_config import tournament_config, ROSTER_TEMPLATE, DEMO_PLAYER_NAMES
from karta_backend.models.team_model import Team, Player

logger = logging.getLogger(__name__)


def _insert_teams(session: Session, config: Dict[str, List[str]]) -> Dict[str, int]:
    teams_added = 0
    players_added = 0
    name_index = 0

    for group, team_names in config.items():
        for team_name in team_names:
            if not team_name or not team_name.strip() or not group or not group.strip():
                logger.warning("Skipping invalid team: %r (group %r)", team_name, group)
                continue

            team = Team(name=team_name.strip(), group=group.strip())
            for number, position in ROSTER_TEMPLATE:
                first_name = DEMO_PLAYER_NAMES[name_index % len(DEMO_PLAYER_NAMES)]
                name_index += 1
                team.players.append(Player(name=first_name, number=number, position=position))
                players_added += 1

            session.add(team)
            teams_added += 1

    # Teams and players go in one batch
    session.commit()
    return {"teams": teams_added, "players": players_added}


def seed_tournament(session: Optional[Session] = None, force: bool = False,
                    config: Optional[Dict[str, List[str]]] = None) -> Dict[str, int]:
    config = tournament_config if config is None else config

    def _run(db: Session) -> Dict[str, int]:
        existing = len(db.exec(select(Team)).all())
        if existing and not force:
            logger.info("✅ %d team(s) already exist. Skipping tournament seed.", existing)
            return {"teams": 0, "players": 0}
        if existing:
            logger.warning("⚠️ %d team(s) already exist; seeding anyway may duplicate data.", existing)

        result = _insert_teams(db, config)
        logger.info("🌱 Seeded %d teams and %d players.", result["teams"], result["players"])
        return result

    if session is not None:
        return _run(session)
    with get_sync_session() as db:
        return _run(db)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_tournament()
