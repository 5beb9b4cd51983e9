"""Round ORM: one submitted round of a match.

Invariants:
    - Always belongs to a Game (game_id FK)
    - round_index is 0-based and unique per game
    - spinner_value and shaker_player_id come from core/round_sequence.py
    - Rows are created already completed (completed_at set) by round submission and
      deleted only by undo of the latest round

Design Decisions:
    - round_index as Integer (not auto-increment): controlled by Game.current_round_index
    - RoundScores reference rounds.id with ON DELETE CASCADE: the round owns its scores
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Round(Base):
    """Round entity: spinner value and shaker of one submitted round."""
    __tablename__ = "rounds"
    __table_args__ = (
        UniqueConstraint("game_id", "round_index", name="uq_rounds_game_index"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    game_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    round_index: Mapped[int] = mapped_column(Integer, nullable=False)
    spinner_value: Mapped[int] = mapped_column(Integer, nullable=False)
    shaker_player_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("players.id"), nullable=False,
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=lambda: datetime.now(timezone.utc),
    )
