"""ORM Models: SQLAlchemy declarative models for players, games, seats, rounds and scores.

Invariants:
    - All models inherit from Base (db/base.py)
    - Game is the aggregate root; seats and rounds scoped by game_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.player import Player  # noqa: F401
from app.models.game import Game  # noqa: F401
from app.models.game_player import GamePlayer  # noqa: F401
from app.models.round import Round  # noqa: F401
from app.models.round_score import RoundScore  # noqa: F401
