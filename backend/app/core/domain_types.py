"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - GameId, PlayerId, RoundId wrap UUIDs; never use bare UUID in domain logic
    - Round scores are non-negative ints (enforced by score_ledger, not by the type)
    - All valid game states encoded as an Enum; no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: status persists as its value and serializes to JSON without custom encoders
    - GameStatus.parse is strict: an unknown stored value raises UnknownGameStatusError
      instead of silently falling back to ACTIVE
"""

from enum import Enum
from typing import NewType
from uuid import UUID

from app.core.errors import UnknownGameStatusError


# ─── Identity Types ──────────────────────────────────────────────

GameId = NewType("GameId", UUID)
PlayerId = NewType("PlayerId", UUID)
RoundId = NewType("RoundId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

RoundScore = NewType("RoundScore", int)     # >= 0, 0 marks the round winner
SeatPosition = NewType("SeatPosition", int)  # 0-based, fixed per game


# ─── Enums ───────────────────────────────────────────────────────

class GameStatus(str, Enum):
    """Game lifecycle states; maps to DB `status` column."""
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value: str) -> "GameStatus":
        """Parse a stored status value (case-insensitive)."""
        try:
            return cls(value.lower())
        except (ValueError, AttributeError):
            raise UnknownGameStatusError(str(value))


class MatchEvent(str, Enum):
    """Commands that drive the match state machine."""
    PAUSE = "pause"
    RESUME = "resume"
    SUBMIT_ROUND = "submit_round"
    UNDO_ROUND = "undo_round"
    DELETE = "delete"


IN_PROGRESS_STATUSES: frozenset[GameStatus] = frozenset(
    {GameStatus.ACTIVE, GameStatus.PAUSED},
)
