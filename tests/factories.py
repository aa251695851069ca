"""Builders for in-memory tournament snapshots."""

from karta_backend.models.team_model import TeamRead, PlayerRead
from karta_backend.models.match_model import MatchRead, GoalRead, CardRead, MatchStatus, CardType
from karta_backend.services.state import TournamentState


def make_team(team_id, group="A", name=None, player_ids=()):
    return TeamRead(
        id=team_id,
        name=name or f"Team {team_id}",
        group=group,
        players=[
            PlayerRead(id=pid, name=f"Player {pid}", number=pid % 99, position="FW", team_id=team_id)
            for pid in player_ids
        ],
    )


def make_goal(goal_id, match_id, player_id, team_id, minute=10, own_goal=False):
    return GoalRead(id=goal_id, match_id=match_id, player_id=player_id, team_id=team_id,
                    minute=minute, is_own_goal=own_goal)


def make_card(card_id, match_id, player_id, team_id, card_type=CardType.YELLOW, minute=30):
    return CardRead(id=card_id, match_id=match_id, player_id=player_id, team_id=team_id,
                    minute=minute, type=card_type)


def make_match(match_id, home, away, home_score=None, away_score=None, status=None,
               group="A", round=1, date="", time="", goals=(), cards=()):
    if status is None:
        status = MatchStatus.COMPLETED if home_score is not None else MatchStatus.SCHEDULED
    return MatchRead(
        id=match_id,
        home_team_id=home,
        away_team_id=away,
        home_score=home_score,
        away_score=away_score,
        status=status,
        group=group,
        round=round,
        date=date,
        time=time,
        goals=list(goals),
        cards=list(cards),
    )


def make_state(teams=(), matches=()):
    return TournamentState(teams=list(teams), matches=list(matches))
