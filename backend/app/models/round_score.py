"""RoundScore ORM: points one player took in one round.

Invariants:
    - (round_id, player_id) is the primary key
    - score >= 0; 0 marks the round winner by convention
"""

import uuid

from sqlalchemy import Integer, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class RoundScore(Base):
    """Per-player score of a round."""
    __tablename__ = "round_scores"
    __table_args__ = (
        CheckConstraint("score >= 0", name="ck_round_scores_non_negative"),
    )

    round_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("rounds.id", ondelete="CASCADE"),
        primary_key=True,
    )
    player_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("players.id"), primary_key=True,
        index=True,
    )
    score: Mapped[int] = mapped_column(Integer, nullable=False)
