# karta_backend/models/team_model.py
# Defines the Team and Player tables plus their request/response schemas.

from typing import Optional, List
from sqlmodel import SQLModel, Field, Relationship
from pydantic import BaseModel


class Team(SQLModel, table=True):
    """A tournament team. Owns its players (deleting a team removes them)."""
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    group: str = Field(index=True)         # Group label, e.g. "A"
    logo: Optional[str] = None             # Image reference or data URL

    # Players are returned in id order so the roster keeps insertion order
    players: List["Player"] = Relationship(
        back_populates="team",
        sa_relationship_kwargs={"order_by": "Player.id", "cascade": "all, delete-orphan"},
    )


class Player(SQLModel, table=True):
    """A player registered to exactly one team at a time."""
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    number: int = Field(ge=0, description="Shirt number")
    position: str
    photo: Optional[str] = None

    team_id: int = Field(foreign_key="team.id", index=True)
    team: Optional[Team] = Relationship(back_populates="players")


# -------------------------------
# Pydantic schemas for API requests/responses
# -------------------------------

class PlayerRead(BaseModel):
    id: int
    name: str
    number: int
    position: str
    team_id: int
    photo: Optional[str] = None

    class Config:
        from_attributes = True


class TeamRead(BaseModel):
    """Team with its ordered roster, as held in the tournament snapshot."""
    id: int
    name: str
    group: str
    logo: Optional[str] = None
    players: List[PlayerRead] = []

    class Config:
        from_attributes = True


class TeamCreate(BaseModel):
    name: str
    group: str
    logo: Optional[str] = None


class TeamUpdate(BaseModel):
    name: Optional[str] = None
    group: Optional[str] = None
    logo: Optional[str] = None


class PlayerCreate(BaseModel):
    name: str
    number: int = Field(ge=0)
    position: str = ""
    photo: Optional[str] = None


class PlayerUpdate(BaseModel):
    name: Optional[str] = None
    number: Optional[int] = Field(default=None, ge=0)
    position: Optional[str] = None
    photo: Optional[str] = None
    team_id: Optional[int] = None  # Move the player to another team
