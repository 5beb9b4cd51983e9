"""GamePlayer ORM: a player's seat and running total within one game.

Invariants:
    - (game_id, player_id) is the primary key; one row per seat
    - seat_position is 0-based, unique per game, never changed after creation
    - total_score changes only by deltas (submit adds, undo subtracts)
    - is_winner true for exactly one row of a completed game

Design Decisions:
    - Composite primary key instead of surrogate id: the pair is the identity
"""

import uuid

from sqlalchemy import Integer, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class GamePlayer(Base):
    """Seat in a game."""
    __tablename__ = "game_players"
    __table_args__ = (
        UniqueConstraint("game_id", "seat_position", name="uq_game_players_seat"),
    )

    game_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("games.id", ondelete="CASCADE"),
        primary_key=True,
    )
    player_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("players.id"), primary_key=True,
        index=True,
    )
    seat_position: Mapped[int] = mapped_column(Integer, nullable=False)
    total_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_winner: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    player: Mapped["Player"] = relationship("Player", lazy="joined")
