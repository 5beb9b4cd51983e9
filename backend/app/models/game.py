"""Game ORM: the aggregate root of a 14-round match.

Invariants:
    - status is one of GameStatus values ("active", "paused", "completed")
    - current_round_index in [0, TOTAL_ROUNDS] equals the number of submitted rounds
    - winner_player_id is set iff status == "completed"

Design Decisions:
    - status stored as String(20): str Enum value, parsed strictly on read
    - Seats and rounds reference games.id with ON DELETE CASCADE; the SQL store also
      deletes children explicitly so SQLite (FKs off by default) behaves the same
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Game(Base):
    """Game aggregate root: owns GamePlayers, Rounds and (through them) RoundScores."""
    __tablename__ = "games"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="active", index=True,
    )
    current_round_index: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    winner_player_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("players.id"), nullable=True,
    )
