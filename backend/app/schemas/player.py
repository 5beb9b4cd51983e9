"""Player Schemas: Pydantic models with field-level validation for player endpoints.

Invariants:
    - PlayerCreate.name: 1-50 chars after stripping, non-empty
    - PlayerUpdate fields are all optional; omitted fields keep their value
    - avatar is a non-negative index into the client's avatar set

Design Decisions:
    - Names stripped in a before-validator, so the length bounds apply to the stripped name
    - color kept as an opaque tag (no hex validation): theming is a client concern
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_name(v):
    if not isinstance(v, str):
        return v
    v = v.strip()
    if not v:
        raise ValueError("name cannot be empty or whitespace")
    return v


class PlayerCreate(BaseModel):
    """Player creation: validates name length and whitespace."""
    name: str = Field(min_length=1, max_length=50)
    color: str = Field("#FFFFFF", max_length=20)
    avatar: int = Field(0, ge=0)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return _strip_name(v)


class PlayerUpdate(BaseModel):
    """Partial player update."""
    name: str | None = Field(None, min_length=1, max_length=50)
    color: str | None = Field(None, max_length=20)
    avatar: int | None = Field(None, ge=0)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return _strip_name(v)


class PlayerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    color: str
    avatar: int
    created_at: datetime


class PlayerStatsResponse(BaseModel):
    player: PlayerResponse
    games_played: int
    games_won: int
    total_score: int
    average_score_per_game: float
    best_score: int
    win_rate: float
