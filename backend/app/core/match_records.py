"""Match Records: immutable snapshots exchanged between the store and the engine.

Invariants:
    - Records are frozen; the engine never mutates a snapshot, it asks the store to write
    - GameRecord.winner_player_id is not None iff status == COMPLETED
    - SeatedPlayer lists are always ordered by seat_position ascending

Design Decisions:
    - Dataclasses over ORM objects: core stays free of SQLAlchemy and lazy-loading
    - Player display fields (name, color, avatar) ride along on SeatedPlayer so read models
      do not need a second lookup
"""

from dataclasses import dataclass
from datetime import datetime

from app.core.domain_types import GameId, GameStatus, PlayerId, RoundId


@dataclass(frozen=True)
class PlayerRecord:
    id: PlayerId
    name: str
    color: str
    avatar: int
    created_at: datetime


@dataclass(frozen=True)
class GameRecord:
    id: GameId
    status: GameStatus
    current_round_index: int
    created_at: datetime
    completed_at: datetime | None = None
    winner_player_id: PlayerId | None = None

    @property
    def completed_rounds(self) -> int:
        return self.current_round_index


@dataclass(frozen=True)
class SeatedPlayer:
    player_id: PlayerId
    seat_position: int
    total_score: int = 0
    is_winner: bool = False
    name: str | None = None


@dataclass(frozen=True)
class RoundRecord:
    id: RoundId
    game_id: GameId
    round_index: int
    spinner_value: int
    shaker_player_id: PlayerId
    completed_at: datetime | None = None


@dataclass(frozen=True)
class RoundScoreEntry:
    player_id: PlayerId
    score: int


@dataclass(frozen=True)
class RoundWithScores:
    round: RoundRecord
    scores: tuple[RoundScoreEntry, ...]


@dataclass(frozen=True)
class CompletedSeating:
    """One completed game as seen by a single player (input to player stats)."""
    game_id: GameId
    total_score: int
    is_winner: bool
