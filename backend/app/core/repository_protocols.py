"""Boundary Protocols: contracts between the match engine and its store.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Every mutating method is awaitable; the caller composes them inside transaction()
    - transaction() commits on normal exit and rolls back on any exception

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the pure rules that consume the
      returned records are never async themselves
    - Records (core/match_records.py) cross the boundary, never ORM objects
"""

from contextlib import AbstractAsyncContextManager
from typing import Iterable, Protocol, Sequence

from app.core.domain_types import GameId, GameStatus, PlayerId, RoundId
from app.core.match_records import (
    CompletedSeating, GameRecord, PlayerRecord, RoundRecord,
    RoundScoreEntry, SeatedPlayer,
)


class MatchStore(Protocol):
    """Contract for game, seat, round and round-score persistence."""
    def transaction(self) -> AbstractAsyncContextManager[None]: ...

    async def create_game(self, seated_player_ids: Sequence[PlayerId]) -> GameId: ...
    async def get_game(self, game_id: GameId) -> GameRecord | None: ...
    async def update_game(self, game_id: GameId, **fields: object) -> None: ...
    async def delete_game(self, game_id: GameId) -> None: ...
    async def list_games(
        self, statuses: Iterable[GameStatus] | None = None,
    ) -> list[GameRecord]: ...

    async def get_seated_players(self, game_id: GameId) -> list[SeatedPlayer]: ...
    async def adjust_player_score(
        self, game_id: GameId, player_id: PlayerId, delta: int,
    ) -> None: ...
    async def set_player_winner(
        self, game_id: GameId, player_id: PlayerId, is_winner: bool,
    ) -> None: ...
    async def clear_winners(self, game_id: GameId) -> None: ...

    async def create_round(
        self, game_id: GameId, round_index: int,
        spinner_value: int, shaker_player_id: PlayerId,
    ) -> RoundId: ...
    async def delete_round(self, round_id: RoundId) -> None: ...
    async def get_latest_round(self, game_id: GameId) -> RoundRecord | None: ...
    async def list_rounds(self, game_id: GameId) -> list[RoundRecord]: ...

    async def save_round_scores(
        self, round_id: RoundId, scores: Sequence[RoundScoreEntry],
    ) -> None: ...
    async def get_round_scores(self, round_id: RoundId) -> list[RoundScoreEntry]: ...
    async def delete_round_scores(self, round_id: RoundId) -> None: ...


class PlayerStore(Protocol):
    """Contract for player persistence."""
    def transaction(self) -> AbstractAsyncContextManager[None]: ...

    async def create_player(self, name: str, color: str, avatar: int) -> PlayerId: ...
    async def get_player(self, player_id: PlayerId) -> PlayerRecord | None: ...
    async def get_players(self, player_ids: Sequence[PlayerId]) -> list[PlayerRecord]: ...
    async def list_players(self) -> list[PlayerRecord]: ...
    async def update_player(self, player_id: PlayerId, **fields: object) -> None: ...
    async def delete_player(self, player_id: PlayerId) -> None: ...
    async def is_name_taken(
        self, name: str, exclude_id: PlayerId | None = None,
    ) -> bool: ...
    async def is_seated_in_any_game(self, player_id: PlayerId) -> bool: ...
    async def get_completed_seatings(
        self, player_id: PlayerId,
    ) -> list[CompletedSeating]: ...
