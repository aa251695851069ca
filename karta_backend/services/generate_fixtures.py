# generate_fixtures.py
# Round-robin fixture generation per group (single round-robin, "circle method").

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from karta_backend.core.errors import ValidationError
from karta_backend.models.team_model import TeamRead

logger = logging.getLogger(__name__)


@dataclass
class Fixture:
    """A pairing waiting to be persisted as a Match."""
    group: str
    round: int
    home_team_id: int
    away_team_id: int
    date: str = ""
    time: str = ""


def parse_start_date(value: Union[str, date, None]) -> date:
    """
    Parse the tournament start date (ISO format, YYYY-MM-DD).
    Raises ValidationError when the value is absent or unparseable.
    """
    if isinstance(value, date):
        return value
    if value is None or not str(value).strip():
        raise ValidationError("A start date is required to generate the schedule.")
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid start date: {value!r} (expected YYYY-MM-DD).")


def round_robin_rounds(team_ids: Sequence[int]) -> List[List[Tuple[int, int]]]:
    """
    Single round-robin pairings for one group.

    Algorithm: "Circle Method". Position i meets position n-1-i; after each
    round the last team moves to position 1 while position 0 stays fixed.
    An odd field gets a None bye placeholder and its pairings are skipped,
    so no team ever meets itself and every pair meets exactly once.

    Returns one list of (home, away) pairs per round, round 1 first.
    """
    slots: List[Optional[int]] = list(team_ids)
    if len(slots) < 2:
        return []
    if len(slots) % 2 != 0:
        slots.append(None)  # Add a dummy "bye" if odd number of teams

    n = len(slots)
    half = n // 2
    rounds = []

    for _ in range(n - 1):
        pairings = []
        for i in range(half):
            home = slots[i]
            away = slots[n - 1 - i]

            if home is None or away is None:
                continue  # Skip bye
            pairings.append((home, away))

        rounds.append(pairings)

        # Rotate teams (keep the first team fixed)
        slots = [slots[0]] + [slots[-1]] + slots[1:-1]

    return rounds


def group_teams(teams: Iterable[TeamRead]) -> Dict[str, List[TeamRead]]:
    """Teams keyed by group label, groups in first-seen order, teams ordered by id."""
    grouped: Dict[str, List[TeamRead]] = {}
    for team in teams:
        grouped.setdefault(team.group, []).append(team)
    return {group: sorted(members, key=lambda t: t.id) for group, members in grouped.items()}


def build_group_fixtures(teams: Iterable[TeamRead]) -> List[Fixture]:
    """
    Builds the full fixture list: an independent round robin for every group.
    Rounds are numbered from 1 within each group. Groups with fewer than two
    teams produce nothing.
    """
    fixtures: List[Fixture] = []

    for group, members in group_teams(teams).items():
        if len(members) < 2:
            logger.warning("Group %s has %d team(s); no fixtures generated for it.", group, len(members))
            continue

        rounds = round_robin_rounds([team.id for team in members])
        for round_number, pairings in enumerate(rounds, start=1):
            for home_id, away_id in pairings:
                fixtures.append(Fixture(
                    group=group,
                    round=round_number,
                    home_team_id=home_id,
                    away_team_id=away_id,
                ))

        logger.info("⚽ Group %s: %d teams, %d rounds, %d fixtures",
                    group, len(members), len(rounds), sum(len(r) for r in rounds))

    return fixtures
