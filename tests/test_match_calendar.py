"""Tests for date/slot assignment and rest-day statistics."""

from datetime import date, timedelta

import pytest

from karta_backend.services.generate_fixtures import Fixture, build_group_fixtures
from karta_backend.services.match_calendar import (
    assign_match_slots,
    kickoff_datetime,
    team_schedule_stats,
    is_schedule_balanced,
)
from factories import make_team, make_match

SLOTS = ["13:30", "14:45", "16:00"]


def test_single_group_is_spread_every_other_day():
    fixtures = build_group_fixtures([make_team(i) for i in range(1, 5)])

    assign_match_slots(fixtures, date(2026, 11, 1), SLOTS)

    placed = [(f.round, f.home_team_id, f.away_team_id, f.date, f.time) for f in fixtures]
    assert placed == [
        (1, 1, 4, "2026-11-01", "13:30"),
        (1, 2, 3, "2026-11-01", "14:45"),
        (2, 1, 3, "2026-11-03", "13:30"),
        (2, 4, 2, "2026-11-03", "14:45"),
        (3, 1, 2, "2026-11-05", "13:30"),
        (3, 3, 4, "2026-11-05", "14:45"),
    ]
    assert is_schedule_balanced(fixtures)


def test_slots_are_unique_and_teams_rest_between_matches():
    teams = [make_team(i, group=g) for i, g in zip(range(1, 17), "AAAABBBBCCCCDDDD")]
    fixtures = assign_match_slots(build_group_fixtures(teams), date(2026, 11, 1), SLOTS)

    slots_used = [(f.date, f.time) for f in fixtures]
    assert len(slots_used) == len(set(slots_used))
    assert all(f.time in SLOTS for f in fixtures)
    assert min(f.date for f in fixtures) == "2026-11-01"

    for team in teams:
        days = sorted(
            date.fromisoformat(f.date)
            for f in fixtures
            if team.id in (f.home_team_id, f.away_team_id)
        )
        assert len(days) == 3
        for earlier, later in zip(days, days[1:]):
            assert later - earlier >= timedelta(days=2)


def test_groups_start_at_the_start_date():
    fixtures = [
        Fixture(group="A", round=1, home_team_id=1, away_team_id=2),
        Fixture(group="B", round=1, home_team_id=3, away_team_id=4),
    ]

    assign_match_slots(fixtures, date(2026, 11, 1), SLOTS)

    assert (fixtures[0].date, fixtures[0].time) == ("2026-11-01", "13:30")
    assert (fixtures[1].date, fixtures[1].time) == ("2026-11-01", "14:45")


def test_assign_requires_slots():
    with pytest.raises(ValueError):
        assign_match_slots([Fixture(group="A", round=1, home_team_id=1, away_team_id=2)], date(2026, 1, 1), [])


def test_kickoff_datetime_is_localized():
    kickoff = kickoff_datetime("2026-11-01", "13:30", tz_name="Asia/Jakarta")

    assert kickoff.hour == 13 and kickoff.minute == 30
    assert kickoff.utcoffset() == timedelta(hours=7)


def test_kickoff_datetime_handles_missing_values():
    assert kickoff_datetime("", "13:30") is None
    assert kickoff_datetime("not-a-date", "13:30") is None
    assert kickoff_datetime("2026-11-01", "").hour == 0
    assert kickoff_datetime("2026-11-01", "late").hour == 0


def test_team_schedule_stats():
    matches = [
        make_match(1, 1, 2, date="2026-11-01"),
        make_match(2, 3, 1, date="2026-11-03"),
        make_match(3, 1, 4, date="2026-11-07"),
        make_match(4, 2, 3, date="2026-11-02"),
    ]

    stats = team_schedule_stats(1, matches)

    assert stats.total_matches == 3
    assert stats.total_rest_days == 1 + 3
    assert stats.average_rest_days == 2.0
    assert stats.min_rest_days == 1
    assert stats.max_rest_days == 3
    assert stats.rest_days_distribution == {1: 1, 3: 1}


def test_team_schedule_stats_without_gaps():
    stats = team_schedule_stats(9, [make_match(1, 9, 2, date="2026-11-01"), make_match(2, 3, 4)])

    assert stats.total_matches == 1
    assert stats.total_rest_days == 0
    assert stats.rest_days_distribution == {}


def test_unbalanced_schedule_is_detected():
    matches = [
        make_match(1, 1, 2, date="2026-11-01"),
        make_match(2, 1, 3, date="2026-11-03"),
        make_match(3, 1, 4, date="2026-11-10"),
    ]

    # Team 1 rests 1 day, then 6 days: variance 6.25
    assert not is_schedule_balanced(matches)
    assert is_schedule_balanced(matches[:2])
    assert is_schedule_balanced([])
