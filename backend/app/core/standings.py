"""Standings & Round Info: read models the presentation layer renders.

Invariants:
    - Standings ordered by total_score ascending, then seat_position (rank 1 = leader)
    - Competition ranking: tied totals share a rank, the next rank skips (1, 1, 3)
    - RoundInfo exists only for 0 <= round_index < TOTAL_ROUNDS

Design Decisions:
    - Pure functions over SeatedPlayer snapshots; the shell decides which rounds are
      queryable (current or already played)
"""

from dataclasses import dataclass

from app.core.domain_types import GameStatus, PlayerId
from app.core.match_records import GameRecord, SeatedPlayer
from app.core.round_sequence import (
    TOTAL_ROUNDS, round_label, shaker_seat_index, spinner_value,
)


@dataclass(frozen=True)
class Standing:
    rank: int
    player_id: PlayerId
    seat_position: int
    total_score: int
    is_winner: bool
    name: str | None = None


@dataclass(frozen=True)
class RoundInfo:
    round_index: int
    spinner_value: int
    label: str
    shaker_seat: int
    shaker_player_id: PlayerId
    shaker_name: str | None = None


def rank_standings(seated: list[SeatedPlayer]) -> list[Standing]:
    """Rank players for display, lowest total first."""
    ordered = sorted(seated, key=lambda p: (p.total_score, p.seat_position))
    standings: list[Standing] = []
    for position, player in enumerate(ordered, start=1):
        if standings and standings[-1].total_score == player.total_score:
            rank = standings[-1].rank
        else:
            rank = position
        standings.append(Standing(
            rank=rank,
            player_id=player.player_id,
            seat_position=player.seat_position,
            total_score=player.total_score,
            is_winner=player.is_winner,
            name=player.name,
        ))
    return standings


def build_round_info(round_index: int, seated: list[SeatedPlayer]) -> RoundInfo:
    """Spinner and shaker for `round_index`. `seated` must be in seat order."""
    seat = shaker_seat_index(round_index, len(seated))
    shaker = seated[seat]
    return RoundInfo(
        round_index=round_index,
        spinner_value=spinner_value(round_index),
        label=round_label(round_index),
        shaker_seat=seat,
        shaker_player_id=shaker.player_id,
        shaker_name=shaker.name,
    )


@dataclass(frozen=True)
class MatchView:
    """Everything a scoreboard needs to render one game."""
    game: GameRecord
    standings: list[Standing]
    current_round: RoundInfo | None

    @property
    def completed_rounds(self) -> int:
        return self.game.completed_rounds

    @property
    def is_complete(self) -> bool:
        return self.game.status == GameStatus.COMPLETED

    @property
    def winner_player_id(self) -> PlayerId | None:
        return self.game.winner_player_id


def build_match_view(game: GameRecord, seated: list[SeatedPlayer]) -> MatchView:
    """Standings plus the round to be played next (None once the match is over)."""
    current_round = None
    if game.status != GameStatus.COMPLETED and game.current_round_index < TOTAL_ROUNDS:
        current_round = build_round_info(game.current_round_index, seated)
    return MatchView(
        game=game,
        standings=rank_standings(seated),
        current_round=current_round,
    )
