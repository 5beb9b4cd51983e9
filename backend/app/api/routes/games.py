"""Game Routes: game lifecycle, round submission/undo and round history.

Invariants:
    - Every command answers with the committed match view (no client-side recompute)
    - Round scores validated by core rules inside MatchEngine, not here
    - ?status filter limited to active | paused | completed | in_progress

Design Decisions:
    - DominoError propagates to the global handlers (api/error_handlers.py)
    - in_progress = Active + Paused: the "continue a game" list
"""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_match_engine
from app.core.domain_types import GameStatus, IN_PROGRESS_STATUSES
from app.schemas.game import (
    GameCreate, GameResponse, MatchViewResponse, RoundHistoryEntry,
    RoundInfoResponse, RoundSubmit, SubmitRoundResponse, UndoRoundResponse,
)
from app.services.match_engine import MatchEngine

router = APIRouter(prefix="/api/v1/games", tags=["games"])

_STATUS_FILTERS: dict[str, frozenset[GameStatus]] = {
    "active": frozenset({GameStatus.ACTIVE}),
    "paused": frozenset({GameStatus.PAUSED}),
    "completed": frozenset({GameStatus.COMPLETED}),
    "in_progress": IN_PROGRESS_STATUSES,
}


async def _view(engine: MatchEngine, game_id: UUID) -> MatchViewResponse:
    return MatchViewResponse.from_view(await engine.get_match_view(game_id))


@router.post(
    "", response_model=MatchViewResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_game(
    body: GameCreate, engine: MatchEngine = Depends(get_match_engine),
):
    """Start a new game; seats follow the order of player_ids."""
    game_id = await engine.create_game(body.player_ids)
    return await _view(engine, game_id)


@router.get("")
async def list_games(
    status_filter: Literal["active", "paused", "completed", "in_progress"] | None = Query(
        None, alias="status",
    ),
    engine: MatchEngine = Depends(get_match_engine),
):
    """List games, newest first."""
    statuses = _STATUS_FILTERS[status_filter] if status_filter else None
    games = await engine.list_games(statuses)
    return {"games": [GameResponse.model_validate(g) for g in games]}


@router.get("/{game_id}", response_model=MatchViewResponse)
async def get_game(
    game_id: UUID, engine: MatchEngine = Depends(get_match_engine),
):
    return await _view(engine, game_id)


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_game(
    game_id: UUID, engine: MatchEngine = Depends(get_match_engine),
):
    await engine.delete_game(game_id)


@router.post("/{game_id}/pause", response_model=MatchViewResponse)
async def pause_game(
    game_id: UUID, engine: MatchEngine = Depends(get_match_engine),
):
    await engine.pause_game(game_id)
    return await _view(engine, game_id)


@router.post("/{game_id}/resume", response_model=MatchViewResponse)
async def resume_game(
    game_id: UUID, engine: MatchEngine = Depends(get_match_engine),
):
    await engine.resume_game(game_id)
    return await _view(engine, game_id)


@router.post(
    "/{game_id}/rounds", response_model=SubmitRoundResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_round(
    game_id: UUID, body: RoundSubmit,
    engine: MatchEngine = Depends(get_match_engine),
):
    """Record the current round's scores."""
    outcome = await engine.submit_round_scores(
        game_id, body.round_index, body.scores,
    )
    return SubmitRoundResponse(
        completed=outcome.completed,
        next_round_index=outcome.next_round_index,
        winner_player_id=outcome.winner_player_id,
        match=await _view(engine, game_id),
    )


@router.post("/{game_id}/rounds/undo", response_model=UndoRoundResponse)
async def undo_round(
    game_id: UUID, engine: MatchEngine = Depends(get_match_engine),
):
    """Revert the most recent round (no-op when none has been played)."""
    undone = await engine.undo_last_round(game_id)
    return UndoRoundResponse(undone=undone, match=await _view(engine, game_id))


@router.get("/{game_id}/rounds")
async def list_rounds(
    game_id: UUID, engine: MatchEngine = Depends(get_match_engine),
):
    rounds = await engine.list_rounds(game_id)
    return {"rounds": [RoundHistoryEntry.from_round(r) for r in rounds]}


@router.get("/{game_id}/rounds/{round_index}", response_model=RoundInfoResponse)
async def get_round_info(
    game_id: UUID, round_index: int,
    engine: MatchEngine = Depends(get_match_engine),
):
    """Spinner, label and shaker for a played or current round."""
    info = await engine.get_round_info(game_id, round_index)
    return RoundInfoResponse.model_validate(info)
