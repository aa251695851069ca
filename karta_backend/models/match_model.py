# karta_backend/models/match_model.py
# Defines the Match table (fixtures and results), its goal/card event tables
# and the read schemas the tournament snapshot is built from.

from typing import Optional, List
from enum import Enum
from sqlmodel import SQLModel, Field, Relationship
from pydantic import BaseModel


class MatchStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CardType(str, Enum):
    YELLOW = "yellow"
    RED = "red"


class Match(SQLModel, table=True):
    """
    A fixture between two teams of a group.
    Team ids are plain integers (no foreign key): a deleted team leaves the
    historical match in place and lookups of the id resolve to nothing.
    """
    id: Optional[int] = Field(default=None, primary_key=True)

    home_team_id: int = Field(index=True)
    away_team_id: int = Field(index=True)

    # Match details
    date: str = ""                      # ISO date (YYYY-MM-DD), empty when unscheduled
    time: str = ""                      # Kick-off slot (HH:MM)
    venue: str = ""
    group: str = Field(default="", index=True)
    round: int = 1                      # Round number within the group, starting at 1

    # Results (meaningful only once status == completed)
    home_score: Optional[int] = Field(default=None, ge=0)
    away_score: Optional[int] = Field(default=None, ge=0)
    status: MatchStatus = Field(default=MatchStatus.SCHEDULED)

    goals: List["Goal"] = Relationship(
        back_populates="match", sa_relationship_kwargs={"order_by": "Goal.id", "cascade": "all, delete-orphan"}
    )
    yellow_cards: List["YellowCard"] = Relationship(
        back_populates="match", sa_relationship_kwargs={"order_by": "YellowCard.id", "cascade": "all, delete-orphan"}
    )
    red_cards: List["RedCard"] = Relationship(
        back_populates="match", sa_relationship_kwargs={"order_by": "RedCard.id", "cascade": "all, delete-orphan"}
    )


class Goal(SQLModel, table=True):
    """A goal event. Own goals count for the conceding side's opponent but never for the scorer."""
    id: Optional[int] = Field(default=None, primary_key=True)
    match_id: int = Field(foreign_key="match.id", index=True)
    player_id: int = Field(index=True)
    team_id: int                         # Team credited with the goal
    minute: int = 1                      # 1–90 nominal, not validated
    is_own_goal: bool = False

    match: Optional[Match] = Relationship(back_populates="goals")


class CardBase(SQLModel):
    match_id: int = Field(foreign_key="match.id", index=True)
    player_id: int = Field(index=True)
    team_id: int
    minute: int = 1


class YellowCard(CardBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    match: Optional[Match] = Relationship(back_populates="yellow_cards")


class RedCard(CardBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    match: Optional[Match] = Relationship(back_populates="red_cards")


# -------------------------------
# Pydantic schemas for API requests/responses
# -------------------------------

class GoalRead(BaseModel):
    id: int
    match_id: int
    player_id: int
    team_id: int
    minute: int
    is_own_goal: bool = False

    class Config:
        from_attributes = True


class CardRead(BaseModel):
    """Unified view over YellowCard/RedCard rows."""
    id: int
    match_id: int
    player_id: int
    team_id: int
    minute: int
    type: CardType

    class Config:
        from_attributes = True


class MatchRead(BaseModel):
    id: int
    home_team_id: int
    away_team_id: int
    date: str = ""
    time: str = ""
    venue: str = ""
    group: str = ""
    round: int = 1
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    status: MatchStatus = MatchStatus.SCHEDULED
    goals: List[GoalRead] = []
    cards: List[CardRead] = []

    class Config:
        from_attributes = True

    @property
    def has_result(self) -> bool:
        """True when the match is completed and both scores are present."""
        return (
            self.status == MatchStatus.COMPLETED
            and isinstance(self.home_score, int)
            and isinstance(self.away_score, int)
        )


class MatchUpdate(BaseModel):
    home_score: Optional[int] = Field(default=None, ge=0)
    away_score: Optional[int] = Field(default=None, ge=0)
    status: Optional[MatchStatus] = None
    date: Optional[str] = None
    time: Optional[str] = None
    venue: Optional[str] = None


class GoalCreate(BaseModel):
    player_id: Optional[int] = None
    team_id: int
    minute: int = 1
    is_own_goal: bool = False


class CardCreate(BaseModel):
    player_id: Optional[int] = None
    team_id: int
    minute: int = 1
    type: CardType = CardType.YELLOW


class ScheduleRequest(BaseModel):
    start_date: Optional[str] = None
