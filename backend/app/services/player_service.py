"""Player Service: player CRUD and statistics over a PlayerStore.

Invariants:
    - Names are trimmed and unique (case-sensitive); checked before any write
    - A player seated in any game (in progress or finished) cannot be deleted
    - Stats only count completed games (core/player_stats.py)
"""

import logging

from app.core.domain_types import PlayerId
from app.core.errors import (
    PlayerInUseError, PlayerNameTakenError, ResourceNotFoundError,
)
from app.core.match_records import PlayerRecord
from app.core.player_rules import normalize_player_name
from app.core.player_stats import compute_player_stats
from app.core.repository_protocols import PlayerStore

logger = logging.getLogger(__name__)


class PlayerService:

    def __init__(self, store: PlayerStore):
        self.store = store

    async def get_player(self, player_id: PlayerId) -> PlayerRecord:
        player = await self.store.get_player(player_id)
        if player is None:
            raise ResourceNotFoundError("Player", str(player_id))
        return player

    async def list_players(self) -> list[PlayerRecord]:
        return await self.store.list_players()

    async def create_player(
        self, name: str, color: str = "#FFFFFF", avatar: int = 0,
    ) -> PlayerRecord:
        name = normalize_player_name(name)
        if await self.store.is_name_taken(name):
            raise PlayerNameTakenError(name)
        async with self.store.transaction():
            player_id = await self.store.create_player(name, color, avatar)
        logger.info("Player created", extra={"player_id": str(player_id)})
        return await self.get_player(player_id)

    async def update_player(
        self,
        player_id: PlayerId,
        name: str | None = None,
        color: str | None = None,
        avatar: int | None = None,
    ) -> PlayerRecord:
        """Partial update; None leaves a field unchanged."""
        await self.get_player(player_id)
        fields: dict[str, object] = {}
        if name is not None:
            name = normalize_player_name(name)
            if await self.store.is_name_taken(name, exclude_id=player_id):
                raise PlayerNameTakenError(name)
            fields["name"] = name
        if color is not None:
            fields["color"] = color
        if avatar is not None:
            fields["avatar"] = avatar

        if fields:
            async with self.store.transaction():
                await self.store.update_player(player_id, **fields)
            logger.info(
                f"Player updated: {', '.join(sorted(fields))}",
                extra={"player_id": str(player_id)},
            )
        return await self.get_player(player_id)

    async def delete_player(self, player_id: PlayerId) -> None:
        await self.get_player(player_id)
        if await self.store.is_seated_in_any_game(player_id):
            raise PlayerInUseError(str(player_id))
        async with self.store.transaction():
            await self.store.delete_player(player_id)
        logger.info("Player deleted", extra={"player_id": str(player_id)})

    async def get_player_stats(self, player_id: PlayerId) -> dict:
        player = await self.get_player(player_id)
        seatings = await self.store.get_completed_seatings(player_id)
        return {"player": player, **compute_player_stats(seatings)}
