"""Game Stream: SSE feed of one game's match view for live scoreboards.

Invariants:
    - First event is always the current snapshot (type "game_updated")
    - Subsequent events mirror GameEventBus publications, in publish order
    - Stream ends after "game_deleted"; a keepalive comment is sent when idle

Design Decisions:
    - Snapshot read BEFORE the response starts: the generator never touches the
      request's AsyncSession
    - Client disconnect surfaces as CancelledError in the generator: logged, not raised
"""

import asyncio
import json
import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from app.api.dependencies import get_match_engine
from app.core.standings import MatchView
from app.infrastructure.game_events import GameEventBus, get_event_bus
from app.schemas.game import MatchViewResponse
from app.services.match_engine import MatchEngine

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/games", tags=["games"])

# SSE headers prevent proxy/browser buffering of streamed events.
_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}
KEEPALIVE_SECONDS = 15.0


def serialize_event(event: dict) -> dict:
    """Turn a bus event into a JSON-safe dict (MatchView payloads via the schema)."""
    data = event.get("data")
    if isinstance(data, MatchView):
        data = MatchViewResponse.from_view(data).model_dump(mode="json")
    return {"type": event["type"], "data": data}


def _sse_line(event: dict) -> str:
    """Format event as SSE data line."""
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"


@router.get("/{game_id}/stream")
async def stream_game(
    game_id: UUID,
    engine: MatchEngine = Depends(get_match_engine),
    events: GameEventBus = Depends(get_event_bus),
):
    """SSE stream of match view updates for one game."""
    snapshot = await engine.get_match_view(game_id)

    async def event_generator():
        try:
            async with events.subscribe(game_id) as queue:
                yield _sse_line(serialize_event(
                    {"type": "game_updated", "data": snapshot},
                ))
                while True:
                    try:
                        event = await asyncio.wait_for(
                            queue.get(), timeout=KEEPALIVE_SECONDS,
                        )
                    except asyncio.TimeoutError:
                        yield ": keepalive\n\n"
                        continue
                    yield _sse_line(serialize_event(event))
                    if event["type"] == "game_deleted":
                        return
        except asyncio.CancelledError:
            logger.info(
                "Client disconnected from game stream",
                extra={"game_id": str(game_id)},
            )
            return

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers=_SSE_HEADERS,
    )
