"""SQL Match Store: SQLAlchemy implementation of the MatchStore protocol.

Invariants:
    - Every read returns core records (core/match_records.py), never ORM objects
    - Reads use populate_existing so a rolled-back session never serves stale totals
    - Score changes are relative UPDATEs (total_score = total_score + delta), never overwrites
    - delete_game removes scores, rounds, seats and the game explicitly (cascade order)

Design Decisions:
    - Statement-level update/delete over loading ORM objects: one round-trip per step,
      and the engine composes the steps inside SqlStore.transaction()
"""

import uuid
from typing import Iterable, Sequence

from sqlalchemy import select, update, delete

from app.core.domain_types import GameId, GameStatus, PlayerId, RoundId
from app.core.match_records import (
    GameRecord, RoundRecord, RoundScoreEntry, SeatedPlayer,
)
from app.infrastructure.sql_store import SqlStore
from app.models import Game, GamePlayer, Round, RoundScore


def _to_game_record(game: Game) -> GameRecord:
    return GameRecord(
        id=GameId(game.id),
        status=GameStatus.parse(game.status),
        current_round_index=game.current_round_index,
        created_at=game.created_at,
        completed_at=game.completed_at,
        winner_player_id=(
            PlayerId(game.winner_player_id) if game.winner_player_id else None
        ),
    )


def _to_round_record(round_row: Round) -> RoundRecord:
    return RoundRecord(
        id=RoundId(round_row.id),
        game_id=GameId(round_row.game_id),
        round_index=round_row.round_index,
        spinner_value=round_row.spinner_value,
        shaker_player_id=PlayerId(round_row.shaker_player_id),
        completed_at=round_row.completed_at,
    )


class SqlMatchStore(SqlStore):
    """Games, seats, rounds and round scores on one AsyncSession."""

    # ─── Games ───────────────────────────────────────────────────

    async def create_game(self, seated_player_ids: Sequence[PlayerId]) -> GameId:
        game = Game(
            id=uuid.uuid4(),
            status=GameStatus.ACTIVE.value,
            current_round_index=0,
        )
        self.db.add(game)
        self.db.add_all([
            GamePlayer(
                game_id=game.id,
                player_id=player_id,
                seat_position=seat,
                total_score=0,
                is_winner=False,
            )
            for seat, player_id in enumerate(seated_player_ids)
        ])
        await self.db.flush()
        return GameId(game.id)

    async def get_game(self, game_id: GameId) -> GameRecord | None:
        result = await self.db.execute(
            select(Game)
            .where(Game.id == game_id)
            .execution_options(populate_existing=True),
        )
        game = result.scalar_one_or_none()
        return _to_game_record(game) if game else None

    async def update_game(self, game_id: GameId, **fields: object) -> None:
        values = {
            key: value.value if isinstance(value, GameStatus) else value
            for key, value in fields.items()
        }
        await self.db.execute(
            update(Game).where(Game.id == game_id).values(**values),
        )

    async def delete_game(self, game_id: GameId) -> None:
        round_ids = select(Round.id).where(Round.game_id == game_id)
        await self.db.execute(
            delete(RoundScore).where(RoundScore.round_id.in_(round_ids)),
        )
        await self.db.execute(delete(Round).where(Round.game_id == game_id))
        await self.db.execute(
            delete(GamePlayer).where(GamePlayer.game_id == game_id),
        )
        await self.db.execute(delete(Game).where(Game.id == game_id))

    async def list_games(
        self, statuses: Iterable[GameStatus] | None = None,
    ) -> list[GameRecord]:
        query = select(Game).order_by(Game.created_at.desc())
        if statuses is not None:
            query = query.where(Game.status.in_([s.value for s in statuses]))
        result = await self.db.execute(
            query.execution_options(populate_existing=True),
        )
        return [_to_game_record(g) for g in result.scalars().all()]

    # ─── Seats ───────────────────────────────────────────────────

    async def get_seated_players(self, game_id: GameId) -> list[SeatedPlayer]:
        result = await self.db.execute(
            select(GamePlayer)
            .where(GamePlayer.game_id == game_id)
            .order_by(GamePlayer.seat_position)
            .execution_options(populate_existing=True),
        )
        return [
            SeatedPlayer(
                player_id=PlayerId(gp.player_id),
                seat_position=gp.seat_position,
                total_score=gp.total_score,
                is_winner=gp.is_winner,
                name=gp.player.name if gp.player else None,
            )
            for gp in result.scalars().all()
        ]

    async def adjust_player_score(
        self, game_id: GameId, player_id: PlayerId, delta: int,
    ) -> None:
        await self.db.execute(
            update(GamePlayer)
            .where(
                GamePlayer.game_id == game_id,
                GamePlayer.player_id == player_id,
            )
            .values(total_score=GamePlayer.total_score + delta),
        )

    async def set_player_winner(
        self, game_id: GameId, player_id: PlayerId, is_winner: bool,
    ) -> None:
        await self.db.execute(
            update(GamePlayer)
            .where(
                GamePlayer.game_id == game_id,
                GamePlayer.player_id == player_id,
            )
            .values(is_winner=is_winner),
        )

    async def clear_winners(self, game_id: GameId) -> None:
        await self.db.execute(
            update(GamePlayer)
            .where(GamePlayer.game_id == game_id)
            .values(is_winner=False),
        )

    # ─── Rounds ──────────────────────────────────────────────────

    async def create_round(
        self, game_id: GameId, round_index: int,
        spinner_value: int, shaker_player_id: PlayerId,
    ) -> RoundId:
        round_row = Round(
            id=uuid.uuid4(),
            game_id=game_id,
            round_index=round_index,
            spinner_value=spinner_value,
            shaker_player_id=shaker_player_id,
        )
        self.db.add(round_row)
        await self.db.flush()
        return RoundId(round_row.id)

    async def delete_round(self, round_id: RoundId) -> None:
        await self.db.execute(delete(Round).where(Round.id == round_id))

    async def get_latest_round(self, game_id: GameId) -> RoundRecord | None:
        result = await self.db.execute(
            select(Round)
            .where(Round.game_id == game_id)
            .order_by(Round.round_index.desc())
            .limit(1)
            .execution_options(populate_existing=True),
        )
        round_row = result.scalar_one_or_none()
        return _to_round_record(round_row) if round_row else None

    async def list_rounds(self, game_id: GameId) -> list[RoundRecord]:
        result = await self.db.execute(
            select(Round)
            .where(Round.game_id == game_id)
            .order_by(Round.round_index)
            .execution_options(populate_existing=True),
        )
        return [_to_round_record(r) for r in result.scalars().all()]

    # ─── Round scores ────────────────────────────────────────────

    async def save_round_scores(
        self, round_id: RoundId, scores: Sequence[RoundScoreEntry],
    ) -> None:
        self.db.add_all([
            RoundScore(round_id=round_id, player_id=s.player_id, score=s.score)
            for s in scores
        ])
        await self.db.flush()

    async def get_round_scores(self, round_id: RoundId) -> list[RoundScoreEntry]:
        result = await self.db.execute(
            select(RoundScore)
            .where(RoundScore.round_id == round_id)
            .execution_options(populate_existing=True),
        )
        return [
            RoundScoreEntry(player_id=PlayerId(rs.player_id), score=rs.score)
            for rs in result.scalars().all()
        ]

    async def delete_round_scores(self, round_id: RoundId) -> None:
        await self.db.execute(
            delete(RoundScore).where(RoundScore.round_id == round_id),
        )
