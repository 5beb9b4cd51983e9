"""Match Engine: command/query shell over the pure round, ledger and state rules.

Invariants:
    - Every command validates fully (core rules) BEFORE its transaction writes anything
    - Every mutating command is exactly one store.transaction(): all writes or none
    - Mutations run as a shielded task the caller waits out: a cancelled caller never
      cuts a transaction short, and the session stays open until the task finishes
    - Events are published only after commit, never for rolled-back work
    - current_round_index == number of completed rounds; TOTAL_ROUNDS once Completed

Design Decisions:
    - Stores injected via constructor (MatchStore, PlayerStore protocols): engine never
      touches SQLAlchemy, tests patch failing store methods with monkeypatch
    - Winner picked from apply_score_deltas preview, not re-read from the store, so the
      final submit needs no mid-transaction read-back
    - Event bus optional: engine works headless (CLI, tests) without subscribers
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Iterable, Mapping, Sequence, TypeVar

from app.core.domain_types import (
    GameId, GameStatus, MatchEvent, PlayerId,
)
from app.core.errors import (
    ErrorContext, ResourceNotFoundError, RoundOutOfRangeError,
)
from app.core.match_records import (
    GameRecord, RoundScoreEntry, RoundWithScores,
)
from app.core.match_state import next_status
from app.core.player_rules import validate_seating
from app.core.repository_protocols import MatchStore, PlayerStore
from app.core.round_sequence import (
    TOTAL_ROUNDS, is_final_round, shaker_seat_index, spinner_value,
)
from app.core.score_ledger import (
    apply_score_deltas, determine_winner, validate_round_submission,
)
from app.core.standings import (
    MatchView, RoundInfo, build_match_view, build_round_info,
)
from app.infrastructure.game_events import GameEventBus

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _run_to_completion(coro: Awaitable[T]) -> T:
    """Await `coro` as a task that outlives cancellation of the caller.

    A cancelled caller still waits for the task before CancelledError propagates,
    so the session it lent the task is not closed mid-transaction.
    """
    task = asyncio.ensure_future(coro)
    try:
        return await asyncio.shield(task)
    except asyncio.CancelledError:
        while not task.done():
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                continue
        raise


@dataclass(frozen=True)
class SubmitOutcome:
    completed: bool
    next_round_index: int
    winner_player_id: PlayerId | None = None


class MatchEngine:
    """Drives one game at a time through its 14 rounds."""

    def __init__(
        self,
        store: MatchStore,
        players: PlayerStore,
        events: GameEventBus | None = None,
    ):
        self.store = store
        self.players = players
        self.events = events

    # -- commands --------------------------------------------------------

    async def create_game(self, player_ids: Sequence[PlayerId]) -> GameId:
        """New Active game at round 0; seat order = list order."""
        validate_seating(player_ids)
        found = {p.id for p in await self.players.get_players(player_ids)}
        for player_id in player_ids:
            if player_id not in found:
                raise ResourceNotFoundError("Player", str(player_id))

        async with self.store.transaction():
            game_id = await self.store.create_game(list(player_ids))
        logger.info(
            f"Game created with {len(player_ids)} players",
            extra={"game_id": str(game_id)},
        )
        return game_id

    async def pause_game(self, game_id: GameId) -> GameRecord:
        return await _run_to_completion(
            self._change_status(game_id, MatchEvent.PAUSE),
        )

    async def resume_game(self, game_id: GameId) -> GameRecord:
        return await _run_to_completion(
            self._change_status(game_id, MatchEvent.RESUME),
        )

    async def delete_game(self, game_id: GameId) -> None:
        await _run_to_completion(self._delete_game(game_id))

    async def submit_round_scores(
        self,
        game_id: GameId,
        round_index: int,
        scores: Mapping[PlayerId, int],
    ) -> SubmitOutcome:
        """Record one round; completes the game on the final round."""
        return await _run_to_completion(
            self._submit_round_scores(game_id, round_index, dict(scores)),
        )

    async def undo_last_round(self, game_id: GameId) -> bool:
        """Revert the most recent round. False when nothing has been played."""
        return await _run_to_completion(self._undo_last_round(game_id))

    # -- queries ---------------------------------------------------------

    async def get_game(self, game_id: GameId) -> GameRecord:
        game = await self.store.get_game(game_id)
        if game is None:
            raise ResourceNotFoundError("Game", str(game_id))
        return game

    async def get_match_view(self, game_id: GameId) -> MatchView:
        game = await self.get_game(game_id)
        seated = await self.store.get_seated_players(game_id)
        return build_match_view(game, seated)

    async def get_round_info(self, game_id: GameId, round_index: int) -> RoundInfo:
        """Spinner and shaker for a round already played or the one being played."""
        game = await self.get_game(game_id)
        if not 0 <= round_index < TOTAL_ROUNDS or round_index > game.current_round_index:
            raise RoundOutOfRangeError(
                round_index,
                ErrorContext(game_id=str(game_id), round_index=round_index),
            )
        seated = await self.store.get_seated_players(game_id)
        return build_round_info(round_index, seated)

    async def list_rounds(self, game_id: GameId) -> list[RoundWithScores]:
        """Played rounds, oldest first, each with scores in seat order."""
        await self.get_game(game_id)
        seats = {
            p.player_id: p.seat_position
            for p in await self.store.get_seated_players(game_id)
        }
        history = []
        for round_record in await self.store.list_rounds(game_id):
            scores = await self.store.get_round_scores(round_record.id)
            scores.sort(key=lambda s: seats.get(s.player_id, len(seats)))
            history.append(RoundWithScores(round=round_record, scores=tuple(scores)))
        return history

    async def list_games(
        self, statuses: Iterable[GameStatus] | None = None,
    ) -> list[GameRecord]:
        return await self.store.list_games(statuses)

    # -- internals -------------------------------------------------------

    async def _change_status(
        self, game_id: GameId, event: MatchEvent,
    ) -> GameRecord:
        game = await self.get_game(game_id)
        target = next_status(game.status, event)
        async with self.store.transaction():
            await self.store.update_game(game_id, status=target)
        logger.info(
            f"Game {event.value}: {game.status.value} -> {target.value}",
            extra={"game_id": str(game_id)},
        )
        await self._publish_view(game_id)
        return await self.get_game(game_id)

    async def _delete_game(self, game_id: GameId) -> None:
        await self.get_game(game_id)
        async with self.store.transaction():
            await self.store.delete_game(game_id)
        logger.info("Game deleted", extra={"game_id": str(game_id)})
        if self.events:
            self.events.publish(
                game_id, {"type": "game_deleted", "data": {"game_id": str(game_id)}},
            )

    async def _submit_round_scores(
        self,
        game_id: GameId,
        round_index: int,
        scores: dict[PlayerId, int],
    ) -> SubmitOutcome:
        game = await self.get_game(game_id)
        seated = await self.store.get_seated_players(game_id)
        validate_round_submission(game, seated, round_index, scores)

        final = is_final_round(round_index)
        shaker = seated[shaker_seat_index(round_index, len(seated))]
        winner_id: PlayerId | None = None

        async with self.store.transaction():
            round_id = await self.store.create_round(
                game_id, round_index,
                spinner_value(round_index), shaker.player_id,
            )
            await self.store.save_round_scores(round_id, [
                RoundScoreEntry(player_id=p.player_id, score=scores[p.player_id])
                for p in seated
            ])
            for player in seated:
                await self.store.adjust_player_score(
                    game_id, player.player_id, scores[player.player_id],
                )

            if final:
                winner_id = determine_winner(apply_score_deltas(seated, scores))
                await self.store.update_game(
                    game_id,
                    status=next_status(
                        game.status, MatchEvent.SUBMIT_ROUND, final_round=True,
                    ),
                    current_round_index=TOTAL_ROUNDS,
                    completed_at=datetime.now(timezone.utc),
                    winner_player_id=winner_id,
                )
                await self.store.set_player_winner(game_id, winner_id, True)
            else:
                await self.store.update_game(
                    game_id, current_round_index=round_index + 1,
                )

        logger.info(
            "Round submitted" + (" (game completed)" if final else ""),
            extra={
                "game_id": str(game_id), "round_index": round_index,
                "completed": final,
            },
        )
        await self._publish_view(game_id)
        return SubmitOutcome(
            completed=final,
            next_round_index=TOTAL_ROUNDS if final else round_index + 1,
            winner_player_id=winner_id,
        )

    async def _undo_last_round(self, game_id: GameId) -> bool:
        game = await self.get_game(game_id)
        next_status(game.status, MatchEvent.UNDO_ROUND)

        latest = await self.store.get_latest_round(game_id)
        if latest is None:
            return False
        scores = await self.store.get_round_scores(latest.id)

        async with self.store.transaction():
            for entry in scores:
                await self.store.adjust_player_score(
                    game_id, entry.player_id, -entry.score,
                )
            await self.store.delete_round_scores(latest.id)
            await self.store.delete_round(latest.id)

            if game.status == GameStatus.COMPLETED:
                await self.store.update_game(
                    game_id,
                    status=GameStatus.ACTIVE,
                    current_round_index=latest.round_index,
                    completed_at=None,
                    winner_player_id=None,
                )
                await self.store.clear_winners(game_id)
            else:
                await self.store.update_game(
                    game_id, current_round_index=latest.round_index,
                )

        logger.info(
            "Round undone",
            extra={"game_id": str(game_id), "round_index": latest.round_index},
        )
        await self._publish_view(game_id)
        return True

    async def _publish_view(self, game_id: GameId) -> None:
        if not self.events or not self.events.subscriber_count(game_id):
            return
        view = await self.get_match_view(game_id)
        self.events.publish(game_id, {"type": "game_updated", "data": view})

