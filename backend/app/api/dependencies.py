"""Request Dependencies: per-request services bound to the request's AsyncSession.

Invariants:
    - One AsyncSession per request, shared by every store the request touches
    - Services built fresh per request; only db_manager and event_bus are process-wide
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database import get_db
from app.infrastructure.game_events import GameEventBus, get_event_bus
from app.infrastructure.match_store import SqlMatchStore
from app.infrastructure.player_store import SqlPlayerStore
from app.services.match_engine import MatchEngine
from app.services.player_service import PlayerService


async def get_match_engine(
    db: AsyncSession = Depends(get_db),
    events: GameEventBus = Depends(get_event_bus),
) -> MatchEngine:
    return MatchEngine(SqlMatchStore(db), SqlPlayerStore(db), events)


async def get_player_service(
    db: AsyncSession = Depends(get_db),
) -> PlayerService:
    return PlayerService(SqlPlayerStore(db))
