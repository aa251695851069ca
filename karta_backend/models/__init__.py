# karta_backend/models/__init__.py
# Centralized imports for all database models and schemas

# Teams and players
from .team_model import (
    Team, Player, TeamRead, PlayerRead, TeamCreate, TeamUpdate, PlayerCreate, PlayerUpdate
)

# Matches and match events
from .match_model import (
    Match, Goal, YellowCard, RedCard, MatchStatus, CardType,
    MatchRead, GoalRead, CardRead, MatchUpdate, GoalCreate, CardCreate, ScheduleRequest
)

# Derived views
from .standing_model import (
    Standing, TopScorer, CardAccumulation, TeamCardStats, TournamentSummary, TeamScheduleStats, MatchSummary
)
