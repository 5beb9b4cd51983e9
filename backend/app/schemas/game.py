"""Game Schemas: Pydantic models for game commands and match read models.

Invariants:
    - GameCreate.player_ids order IS the seat order
    - RoundSubmit only checks shape; score rules (non-negative, exact player set)
      live in core/score_ledger.py so direct service callers get the same checks
    - Scores are StrictInt: "5" and 5.0 are rejected, as validate_scores rejects them
    - Response models are built from core records via from_attributes

Design Decisions:
    - Player-count range not duplicated here: core raises PlayerCountError with the range
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from app.core.domain_types import GameStatus
from app.core.match_records import RoundWithScores
from app.core.round_sequence import TOTAL_ROUNDS, round_label
from app.core.standings import MatchView


class GameCreate(BaseModel):
    """Game creation: ordered seat list of existing players."""
    player_ids: list[UUID]


class RoundSubmit(BaseModel):
    """One round's scores, keyed by player id."""
    round_index: int = Field(ge=0)
    scores: dict[UUID, StrictInt]


class GameResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    status: GameStatus
    current_round_index: int
    created_at: datetime
    completed_at: datetime | None = None
    winner_player_id: UUID | None = None


class StandingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    rank: int
    player_id: UUID
    name: str | None = None
    seat_position: int
    total_score: int
    is_winner: bool


class RoundInfoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    round_index: int
    spinner_value: int
    label: str
    shaker_seat: int
    shaker_player_id: UUID
    shaker_name: str | None = None


class MatchViewResponse(BaseModel):
    """Scoreboard payload: standings, next round, completion."""
    game: GameResponse
    standings: list[StandingResponse]
    current_round: RoundInfoResponse | None
    completed_rounds: int
    total_rounds: int = TOTAL_ROUNDS
    is_complete: bool
    winner_player_id: UUID | None = None

    @classmethod
    def from_view(cls, view: MatchView) -> "MatchViewResponse":
        return cls(
            game=GameResponse.model_validate(view.game),
            standings=[
                StandingResponse.model_validate(s) for s in view.standings
            ],
            current_round=(
                RoundInfoResponse.model_validate(view.current_round)
                if view.current_round else None
            ),
            completed_rounds=view.completed_rounds,
            is_complete=view.is_complete,
            winner_player_id=view.winner_player_id,
        )


class SubmitRoundResponse(BaseModel):
    completed: bool
    next_round_index: int
    winner_player_id: UUID | None = None
    match: MatchViewResponse


class UndoRoundResponse(BaseModel):
    undone: bool
    match: MatchViewResponse


class RoundScoreResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    player_id: UUID
    score: int


class RoundHistoryEntry(BaseModel):
    round_index: int
    spinner_value: int
    label: str
    shaker_player_id: UUID
    completed_at: datetime | None = None
    scores: list[RoundScoreResponse]

    @classmethod
    def from_round(cls, entry: RoundWithScores) -> "RoundHistoryEntry":
        return cls(
            round_index=entry.round.round_index,
            spinner_value=entry.round.spinner_value,
            label=round_label(entry.round.round_index),
            shaker_player_id=entry.round.shaker_player_id,
            completed_at=entry.round.completed_at,
            scores=[RoundScoreResponse.model_validate(s) for s in entry.scores],
        )
