# karta_backend/core/config.py
import os

# =====================================
# Global configuration for the Karta tournament backend
# =====================================


def env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def env_choice(name: str, default: str, choices) -> str:
    """Reads a setting that must be one of `choices`; a bad value fails at import."""
    value = os.getenv(name, default).strip().lower()
    if value not in choices:
        raise ValueError(f"{name}={value!r} is not valid; expected one of: {', '.join(choices)}")
    return value


# Logging level for logging.basicConfig in main.py
LOG_LEVEL = os.getenv("KARTA_LOG_LEVEL", "INFO").upper()

# SQLite database file (relative paths resolve against the project root)
DB_PATH = os.getenv("KARTA_DB_PATH", "karta.db")

# Echo SQL statements from both engines
SQL_ECHO = env_flag("KARTA_SQL_ECHO")

# =====================================
# ⚽ Match scheduling
# =====================================
DEFAULT_VENUE = os.getenv("KARTA_DEFAULT_VENUE", "Lapangan KARTA")

# Daily kick-off slots, comma separated HH:MM
MATCH_SLOTS = [
    slot.strip()
    for slot in os.getenv("KARTA_MATCH_SLOTS", "13:30,14:45,16:00").split(",")
    if slot.strip()
]

# Timezone used to stamp kick-off datetimes
TOURNAMENT_TIMEZONE = os.getenv("KARTA_TIMEZONE", "Asia/Jakarta")

# =====================================
# 🟨🟥 Card accumulation
# =====================================
YELLOW_CARDS_PER_BAN = int(os.getenv("KARTA_YELLOW_CARDS_PER_BAN", "2"))  # every 2 yellows => 1 match
MATCHES_PER_RED = int(os.getenv("KARTA_MATCHES_PER_RED", "1"))            # every red => 1 match

# =====================================
# 🗑️ Team deletion
# =====================================
# keep_history:         delete team + players, matches keep the dangling team id
# reject_if_referenced: refuse while any match references the team
# cascade:              also delete the team's matches with goals and cards
TEAM_DELETE_POLICIES = ("keep_history", "reject_if_referenced", "cascade")
TEAM_DELETE_POLICY = env_choice("KARTA_TEAM_DELETE_POLICY", "keep_history", TEAM_DELETE_POLICIES)

# Label rendered by the API when a team or player id no longer resolves
MISSING_REFERENCE_LABEL = "not found"
