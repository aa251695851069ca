# standings.py
# Folds completed matches into per-group standings tables.

from typing import Dict, Iterable, List

from karta_backend.models.match_model import MatchRead
from karta_backend.models.standing_model import Standing
from karta_backend.services.state import TournamentState

POINTS_FOR_WIN = 3
POINTS_FOR_DRAW = 1


def _counts_for_group(match: MatchRead, group: str, team_groups: Dict[int, str]) -> bool:
    """
    A match belongs to a group when it declares that group, or when both
    participants currently belong to it.
    """
    if match.group == group:
        return True
    return team_groups.get(match.home_team_id) == group and team_groups.get(match.away_team_id) == group


def apply_result(home: Standing, away: Standing, home_score: int, away_score: int) -> None:
    """Adds one match result to both teams' rows."""
    home.played += 1
    away.played += 1

    home.goals_for += home_score
    home.goals_against += away_score
    away.goals_for += away_score
    away.goals_against += home_score

    if home_score > away_score:
        home.won += 1
        home.points += POINTS_FOR_WIN
        away.lost += 1
    elif home_score < away_score:
        away.won += 1
        away.points += POINTS_FOR_WIN
        home.lost += 1
    else:
        home.drawn += 1
        away.drawn += 1
        home.points += POINTS_FOR_DRAW
        away.points += POINTS_FOR_DRAW


def rank_standings(rows: Iterable[Standing]) -> List[Standing]:
    """
    Ranking order: points, goal difference, goals scored (all descending),
    then team id ascending so equal rows always come out the same way.
    """
    return sorted(
        rows,
        key=lambda s: (-s.points, -s.goal_difference, -s.goals_for, s.team_id),
    )


def calculate_standings(state: TournamentState) -> Dict[str, List[Standing]]:
    """
    Standings for every group, recomputed from scratch.

    Only completed matches with both scores present are folded in. Every team
    of the group gets a row, including teams without a completed match.
    Matches referencing a team that is no longer in the group's table are skipped.
    """
    team_groups = {team.id: team.group for team in state.teams}
    standings: Dict[str, List[Standing]] = {}

    for group in state.groups():
        rows = {team.id: Standing(team_id=team.id) for team in state.teams_in_group(group)}

        for match in state.matches:
            if not match.has_result or not _counts_for_group(match, group, team_groups):
                continue

            home = rows.get(match.home_team_id)
            away = rows.get(match.away_team_id)
            if home is None or away is None:
                continue

            apply_result(home, away, match.home_score, match.away_score)

        standings[group] = rank_standings(rows.values())

    return standings
