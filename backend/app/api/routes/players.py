"""Player Routes: player CRUD and per-player statistics.

Invariants:
    - User input is validated by Pydantic before reaching the route handler
    - Name uniqueness and in-use checks live in PlayerService
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_player_service
from app.schemas.player import (
    PlayerCreate, PlayerResponse, PlayerStatsResponse, PlayerUpdate,
)
from app.services.player_service import PlayerService

router = APIRouter(prefix="/api/v1/players", tags=["players"])


@router.post(
    "", response_model=PlayerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_player(
    body: PlayerCreate, service: PlayerService = Depends(get_player_service),
):
    player = await service.create_player(body.name, body.color, body.avatar)
    return PlayerResponse.model_validate(player)


@router.get("")
async def list_players(service: PlayerService = Depends(get_player_service)):
    """All players, alphabetical."""
    players = await service.list_players()
    return {"players": [PlayerResponse.model_validate(p) for p in players]}


@router.get("/{player_id}", response_model=PlayerResponse)
async def get_player(
    player_id: UUID, service: PlayerService = Depends(get_player_service),
):
    return PlayerResponse.model_validate(await service.get_player(player_id))


@router.patch("/{player_id}", response_model=PlayerResponse)
async def update_player(
    player_id: UUID, body: PlayerUpdate,
    service: PlayerService = Depends(get_player_service),
):
    player = await service.update_player(
        player_id, name=body.name, color=body.color, avatar=body.avatar,
    )
    return PlayerResponse.model_validate(player)


@router.delete("/{player_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_player(
    player_id: UUID, service: PlayerService = Depends(get_player_service),
):
    """Delete a player who has never been seated."""
    await service.delete_player(player_id)


@router.get("/{player_id}/stats", response_model=PlayerStatsResponse)
async def get_player_stats(
    player_id: UUID, service: PlayerService = Depends(get_player_service),
):
    stats = await service.get_player_stats(player_id)
    return PlayerStatsResponse(
        **{**stats, "player": PlayerResponse.model_validate(stats["player"])},
    )
