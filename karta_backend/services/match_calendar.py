# match_calendar.py
# Assigns dates and kick-off slots to generated fixtures and measures rest days.

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

import pytz

from karta_backend.core.config import MATCH_SLOTS, TOURNAMENT_TIMEZONE
from karta_backend.models.match_model import MatchRead
from karta_backend.models.standing_model import TeamScheduleStats
from karta_backend.services.generate_fixtures import Fixture

logger = logging.getLogger(__name__)


def parse_match_date(value: str) -> Optional[date]:
    """ISO date of a match, or None when empty/unparseable."""
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def kickoff_datetime(match_date: str, match_time: str = "", tz_name: str = TOURNAMENT_TIMEZONE) -> Optional[datetime]:
    """
    Localized kick-off datetime of a match.
    Returns None when the date is missing or unparseable; a missing or bad
    time falls back to midnight.
    """
    day = parse_match_date(match_date)
    if day is None:
        return None

    try:
        clock = datetime.strptime(match_time, "%H:%M").time() if match_time else datetime.min.time()
    except ValueError:
        clock = datetime.min.time()

    return pytz.timezone(tz_name).localize(datetime.combine(day, clock))


def _team_is_free(team_id: int, day: date, playing: Dict[int, Set[date]]) -> bool:
    # No match on the same day nor on an adjacent day
    busy = playing[team_id]
    return not ({day - timedelta(days=1), day, day + timedelta(days=1)} & busy)


def assign_match_slots(
    fixtures: List[Fixture],
    start_date: date,
    slots: Sequence[str] = MATCH_SLOTS,
) -> List[Fixture]:
    """
    Places each fixture on the earliest free (date, slot).

    Rules:
    - Fixtures are placed in the given order (group, round, pairing).
    - Every group starts searching at start_date; within a group the search
      continues from the previously used slot and never moves backwards.
    - A slot can host one match per day across all groups.
    - Neither team may play on the same day, the day before or the day after.

    Mutates and returns the fixtures.
    """
    if not slots:
        raise ValueError("At least one match slot must be configured.")

    taken: Set[Tuple[date, str]] = set()
    playing: Dict[int, Set[date]] = defaultdict(set)
    cursors: Dict[str, Tuple[date, int]] = {}

    for fixture in fixtures:
        day, slot_index = cursors.get(fixture.group, (start_date, 0))

        while not (
            (day, slots[slot_index]) not in taken
            and _team_is_free(fixture.home_team_id, day, playing)
            and _team_is_free(fixture.away_team_id, day, playing)
        ):
            # All slots tried for this day -> move to the next day
            if slot_index == len(slots) - 1:
                day += timedelta(days=1)
                slot_index = 0
            else:
                slot_index += 1

        fixture.date = day.isoformat()
        fixture.time = slots[slot_index]
        taken.add((day, slots[slot_index]))
        playing[fixture.home_team_id].add(day)
        playing[fixture.away_team_id].add(day)

        cursors[fixture.group] = (day, (slot_index + 1) % len(slots))

    return fixtures


def _rest_day_gaps(team_id: int, matches: Iterable) -> List[int]:
    """Rest days between consecutive dated matches of a team (gap in days - 1)."""
    days = sorted(
        day
        for day in (
            parse_match_date(m.date)
            for m in matches
            if team_id in (m.home_team_id, m.away_team_id)
        )
        if day is not None
    )
    return [(later - earlier).days - 1 for earlier, later in zip(days, days[1:])]


def team_schedule_stats(team_id: int, matches: Iterable[MatchRead]) -> TeamScheduleStats:
    """Rest-day statistics for one team's schedule."""
    matches = list(matches)
    total_matches = sum(1 for m in matches if team_id in (m.home_team_id, m.away_team_id))
    gaps = _rest_day_gaps(team_id, matches)

    if not gaps:
        return TeamScheduleStats(team_id=team_id, total_matches=total_matches)

    distribution: Dict[int, int] = {}
    for gap in gaps:
        distribution[gap] = distribution.get(gap, 0) + 1

    return TeamScheduleStats(
        team_id=team_id,
        total_matches=total_matches,
        total_rest_days=sum(gaps),
        average_rest_days=sum(gaps) / len(gaps),
        min_rest_days=min(gaps),
        max_rest_days=max(gaps),
        rest_days_distribution=dict(sorted(distribution.items())),
    )


def is_schedule_balanced(matches: Iterable) -> bool:
    """
    A schedule is balanced when, for every team, the variance of its
    rest-day gaps is below 1.
    Accepts MatchRead rows or Fixture records (anything with date and team ids).
    """
    matches = list(matches)
    team_ids = []
    for m in matches:
        for team_id in (m.home_team_id, m.away_team_id):
            if team_id not in team_ids:
                team_ids.append(team_id)

    for team_id in team_ids:
        gaps = _rest_day_gaps(team_id, matches)
        if not gaps:
            continue
        mean = sum(gaps) / len(gaps)
        variance = sum((gap - mean) ** 2 for gap in gaps) / len(gaps)
        if variance >= 1:
            logger.debug("Team %s rest-day variance %.2f", team_id, variance)
            return False

    return True
