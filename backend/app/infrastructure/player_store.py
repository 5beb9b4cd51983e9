"""SQL Player Store: SQLAlchemy implementation of the PlayerStore protocol.

Invariants:
    - Name uniqueness checked by exact match on the trimmed name (DB unique index backs it)
    - get_completed_seatings only returns seats of games whose status is "completed"
"""

import uuid
from typing import Sequence

from sqlalchemy import select, update, delete, exists

from app.core.domain_types import GameId, GameStatus, PlayerId
from app.core.match_records import CompletedSeating, PlayerRecord
from app.infrastructure.sql_store import SqlStore
from app.models import Game, GamePlayer, Player


def _to_player_record(player: Player) -> PlayerRecord:
    return PlayerRecord(
        id=PlayerId(player.id),
        name=player.name,
        color=player.color,
        avatar=player.avatar,
        created_at=player.created_at,
    )


class SqlPlayerStore(SqlStore):
    """Players on one AsyncSession."""

    async def create_player(self, name: str, color: str, avatar: int) -> PlayerId:
        player = Player(id=uuid.uuid4(), name=name, color=color, avatar=avatar)
        self.db.add(player)
        await self.db.flush()
        return PlayerId(player.id)

    async def get_player(self, player_id: PlayerId) -> PlayerRecord | None:
        result = await self.db.execute(
            select(Player)
            .where(Player.id == player_id)
            .execution_options(populate_existing=True),
        )
        player = result.scalar_one_or_none()
        return _to_player_record(player) if player else None

    async def get_players(self, player_ids: Sequence[PlayerId]) -> list[PlayerRecord]:
        if not player_ids:
            return []
        result = await self.db.execute(
            select(Player)
            .where(Player.id.in_(list(player_ids)))
            .execution_options(populate_existing=True),
        )
        return [_to_player_record(p) for p in result.scalars().all()]

    async def list_players(self) -> list[PlayerRecord]:
        result = await self.db.execute(
            select(Player)
            .order_by(Player.name)
            .execution_options(populate_existing=True),
        )
        return [_to_player_record(p) for p in result.scalars().all()]

    async def update_player(self, player_id: PlayerId, **fields: object) -> None:
        await self.db.execute(
            update(Player).where(Player.id == player_id).values(**fields),
        )

    async def delete_player(self, player_id: PlayerId) -> None:
        await self.db.execute(delete(Player).where(Player.id == player_id))

    async def is_name_taken(
        self, name: str, exclude_id: PlayerId | None = None,
    ) -> bool:
        query = select(Player.id).where(Player.name == name.strip())
        if exclude_id is not None:
            query = query.where(Player.id != exclude_id)
        result = await self.db.execute(select(query.exists()))
        return bool(result.scalar())

    async def is_seated_in_any_game(self, player_id: PlayerId) -> bool:
        result = await self.db.execute(
            select(exists().where(GamePlayer.player_id == player_id)),
        )
        return bool(result.scalar())

    async def get_completed_seatings(
        self, player_id: PlayerId,
    ) -> list[CompletedSeating]:
        result = await self.db.execute(
            select(GamePlayer.game_id, GamePlayer.total_score, GamePlayer.is_winner)
            .join(Game, Game.id == GamePlayer.game_id)
            .where(
                GamePlayer.player_id == player_id,
                Game.status == GameStatus.COMPLETED.value,
            )
            .order_by(Game.completed_at),
        )
        return [
            CompletedSeating(
                game_id=GameId(row.game_id),
                total_score=row.total_score,
                is_winner=row.is_winner,
            )
            for row in result.all()
        ]
