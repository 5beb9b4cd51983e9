"""Initial schema: players, games, game_players, rounds, round_scores.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "players",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
        sa.Column("color", sa.String(20), nullable=False, server_default="#FFFFFF"),
        sa.Column("avatar", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "games",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("current_round_index", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("winner_player_id", UUID(as_uuid=True), sa.ForeignKey("players.id"), nullable=True),
    )
    op.create_index("ix_games_status", "games", ["status"])

    op.create_table(
        "game_players",
        sa.Column("game_id", UUID(as_uuid=True), sa.ForeignKey("games.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("player_id", UUID(as_uuid=True), sa.ForeignKey("players.id"), primary_key=True),
        sa.Column("seat_position", sa.Integer, nullable=False),
        sa.Column("total_score", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_winner", sa.Boolean, nullable=False, server_default="false"),
        sa.UniqueConstraint("game_id", "seat_position", name="uq_game_players_seat"),
    )
    op.create_index("ix_game_players_player_id", "game_players", ["player_id"])

    op.create_table(
        "rounds",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("game_id", UUID(as_uuid=True), sa.ForeignKey("games.id", ondelete="CASCADE"), nullable=False),
        sa.Column("round_index", sa.Integer, nullable=False),
        sa.Column("spinner_value", sa.Integer, nullable=False),
        sa.Column("shaker_player_id", UUID(as_uuid=True), sa.ForeignKey("players.id"), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("game_id", "round_index", name="uq_rounds_game_index"),
    )
    op.create_index("ix_rounds_game_id", "rounds", ["game_id"])

    op.create_table(
        "round_scores",
        sa.Column("round_id", UUID(as_uuid=True), sa.ForeignKey("rounds.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("player_id", UUID(as_uuid=True), sa.ForeignKey("players.id"), primary_key=True),
        sa.Column("score", sa.Integer, nullable=False),
        sa.CheckConstraint("score >= 0", name="ck_round_scores_non_negative"),
    )
    op.create_index("ix_round_scores_player_id", "round_scores", ["player_id"])


def downgrade() -> None:
    op.drop_index("ix_round_scores_player_id", table_name="round_scores")
    op.drop_table("round_scores")
    op.drop_index("ix_rounds_game_id", table_name="rounds")
    op.drop_table("rounds")
    op.drop_index("ix_game_players_player_id", table_name="game_players")
    op.drop_table("game_players")
    op.drop_index("ix_games_status", table_name="games")
    op.drop_table("games")
    op.drop_table("players")
