# statistics.py
# Player and team statistics derived from the tournament snapshot:
# top scorers, card accumulation (suspensions), team card table and summaries.

from typing import Dict, List, Optional

from karta_backend.core.config import YELLOW_CARDS_PER_BAN, MATCHES_PER_RED
from karta_backend.models.match_model import CardType, MatchStatus, MatchRead
from karta_backend.models.standing_model import (
    TopScorer,
    CardAccumulation,
    TeamCardStats,
    TournamentSummary,
    MatchSummary,
)
from karta_backend.services.match_calendar import kickoff_datetime
from karta_backend.services.state import TournamentState


# =========================================
# ⚽ Top scorers
# =========================================
def calculate_top_scorers(
    state: TournamentState,
    group: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[TopScorer]:
    """
    Goals per player over every match, own goals excluded.

    A player is credited to the team of the first goal found for them.
    Order: goals descending, then player id. With `group`, only scorers whose
    team currently belongs to that group are kept.
    """
    scorers: Dict[int, TopScorer] = {}

    for match in state.matches:
        for goal in match.goals:
            if goal.is_own_goal:
                continue
            if goal.player_id not in scorers:
                scorers[goal.player_id] = TopScorer(player_id=goal.player_id, team_id=goal.team_id)
            scorers[goal.player_id].goals += 1

    ranked = sorted(scorers.values(), key=lambda s: (-s.goals, s.player_id))

    if group is not None:
        group_team_ids = {team.id for team in state.teams_in_group(group)}
        ranked = [scorer for scorer in ranked if scorer.team_id in group_team_ids]
    if limit is not None:
        ranked = ranked[:limit]

    return ranked


# =========================================
# 🟨🟥 Card accumulation
# =========================================
def calculate_ban_matches(
    yellow_cards: int,
    red_cards: int,
    yellow_cards_per_ban: int = YELLOW_CARDS_PER_BAN,
    matches_per_red: int = MATCHES_PER_RED,
) -> int:
    """
    Matches banned for a card tally.
    Every `yellow_cards_per_ban` yellows => 1 match (no partial bans),
    every red => `matches_per_red` matches.
    """
    yellow_bans = yellow_cards // yellow_cards_per_ban if yellow_cards_per_ban > 0 else 0
    return yellow_bans + red_cards * matches_per_red


def evaluate_card_accumulation(
    state: TournamentState,
    yellow_cards_per_ban: int = YELLOW_CARDS_PER_BAN,
    matches_per_red: int = MATCHES_PER_RED,
) -> List[CardAccumulation]:
    """
    Suspension list over the whole tournament (cards never reset).

    Only players with at least one banned match are returned, ordered by
    ban length descending, then player id. Team names are joined from the
    current team set; the player's current team wins over the team recorded
    on the card. Unresolvable names are None.
    """
    tallies: Dict[int, Dict[str, int]] = {}

    for match in state.matches:
        for card in match.cards:
            tally = tallies.setdefault(card.player_id, {"team_id": card.team_id, "yellow": 0, "red": 0})
            if card.type == CardType.YELLOW:
                tally["yellow"] += 1
            else:
                tally["red"] += 1

    rows: List[CardAccumulation] = []
    for player_id, tally in tallies.items():
        ban = calculate_ban_matches(tally["yellow"], tally["red"], yellow_cards_per_ban, matches_per_red)
        if ban <= 0:
            continue

        player = state.find_player(player_id)
        team_id = player.team_id if player else tally["team_id"]
        team = state.find_team(team_id)

        rows.append(CardAccumulation(
            player_id=player_id,
            player_name=player.name if player else None,
            team_id=team_id,
            team_name=team.name if team else None,
            yellow_cards=tally["yellow"],
            red_cards=tally["red"],
            ban_matches=ban,
        ))

    return sorted(rows, key=lambda r: (-r.ban_matches, r.player_id))


# =========================================
# 📊 Team cards and tournament summary
# =========================================
def team_card_stats(state: TournamentState, group: Optional[str] = None) -> List[TeamCardStats]:
    """Cards collected by each team, most carded first."""
    rows = []
    for team in state.teams:
        if group is not None and team.group != group:
            continue

        cards = [card for match in state.matches for card in match.cards if card.team_id == team.id]
        yellow = sum(1 for card in cards if card.type == CardType.YELLOW)
        red = len(cards) - yellow

        rows.append(TeamCardStats(
            team_id=team.id,
            team_name=team.name,
            group=team.group,
            yellow_cards=yellow,
            red_cards=red,
            total_cards=yellow + red,
        ))

    return sorted(rows, key=lambda r: (-r.total_cards, r.team_id))


def tournament_summary(state: TournamentState) -> TournamentSummary:
    completed = [m for m in state.matches if m.status == MatchStatus.COMPLETED]
    goals = sum(len(m.goals) for m in completed)
    cards = [card for m in state.matches for card in m.cards]
    yellow = sum(1 for card in cards if card.type == CardType.YELLOW)

    return TournamentSummary(
        matches=len(completed),
        goals=goals,
        yellow_cards=yellow,
        red_cards=len(cards) - yellow,
        avg_goals_per_match=round(goals / len(completed), 2) if completed else 0.0,
    )


def match_summary(state: TournamentState) -> MatchSummary:
    """
    Overview of the match list: counts per status and per group, goals and
    cards over every match. The average divides all goals by completed matches.
    """
    by_status = {status: 0 for status in MatchStatus}
    by_group: Dict[str, int] = {}
    for match in state.matches:
        by_status[match.status] += 1
        by_group[match.group] = by_group.get(match.group, 0) + 1

    goals = sum(len(m.goals) for m in state.matches)
    cards = [card for m in state.matches for card in m.cards]
    yellow = sum(1 for card in cards if card.type == CardType.YELLOW)
    completed = by_status[MatchStatus.COMPLETED]

    return MatchSummary(
        total_matches=len(state.matches),
        completed_matches=completed,
        scheduled_matches=by_status[MatchStatus.SCHEDULED],
        cancelled_matches=by_status[MatchStatus.CANCELLED],
        matches_by_group=dict(sorted(by_group.items())),
        goals=goals,
        avg_goals_per_match=round(goals / completed, 2) if completed else 0.0,
        yellow_cards=yellow,
        red_cards=len(cards) - yellow,
        total_cards=len(cards),
    )


def latest_match_statistics(state: TournamentState, group: Optional[str] = None, limit: int = 5) -> List[MatchRead]:
    """Completed matches with the most goals recorded; ties keep match id order."""
    completed = [
        m for m in state.matches
        if m.status == MatchStatus.COMPLETED and (group is None or m.group == group)
    ]
    return sorted(completed, key=lambda m: (-len(m.goals), m.id))[:limit]


def build_dashboard(state: TournamentState, upcoming_limit: int = 3) -> dict:
    """
    Quick stats for the dashboard page plus the next scheduled matches.
    Upcoming matches are ordered by kick-off; undated fixtures come last.
    """
    completed = [m for m in state.matches if m.status == MatchStatus.COMPLETED]
    scheduled = [m for m in state.matches if m.status == MatchStatus.SCHEDULED]
    top_scorers = calculate_top_scorers(state, limit=1)

    def _kickoff_key(match):
        kickoff = kickoff_datetime(match.date, match.time)
        return (kickoff is None, kickoff.timestamp() if kickoff else 0, match.id)

    return {
        "total_teams": len(state.teams),
        "total_players": sum(len(team.players) for team in state.teams),
        "completed_matches": len(completed),
        "scheduled_matches": len(scheduled),
        "top_scorer_goals": top_scorers[0].goals if top_scorers else 0,
        "upcoming_matches": sorted(scheduled, key=_kickoff_key)[:upcoming_limit],
    }
