"""Player ORM: a named person who can be seated in games.

Invariants:
    - name is unique, trimmed and non-blank (trimming enforced by core/player_rules.py)
    - color/avatar are opaque presentation tags

Design Decisions:
    - No cascade from Player to GamePlayer: deleting a seated player is rejected by
      the service instead of erasing game history
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Player(Base):
    """Player entity."""
    __tablename__ = "players"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    color: Mapped[str] = mapped_column(
        String(20), nullable=False, default="#FFFFFF",
    )
    avatar: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
