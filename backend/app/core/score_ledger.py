"""Score Ledger Rules: validation, delta application and winner selection for round scores.

Invariants:
    - validate_round_submission raises before any mutation; it never returns partial results
    - Scores are non-negative ints; bool is rejected even though it subclasses int
    - Score map keys must equal the seated player set exactly (no missing, no extra)
    - Totals change by deltas only: submit adds, undo subtracts the same values
    - Winner = lowest total_score; ties broken by seat_position ascending

Design Decisions:
    - Several players scoring 0 in one round is accepted (tie at the table)
    - apply_score_deltas returns new SeatedPlayer snapshots so the shell can pick the
      winner from post-submit totals without re-reading the store
"""

from dataclasses import replace
from typing import Mapping

from app.core.domain_types import MatchEvent, PlayerId
from app.core.errors import ErrorContext, RoundOutOfOrderError, ScoreValidationError
from app.core.match_records import GameRecord, SeatedPlayer
from app.core.match_state import next_status


def validate_scores(
    seated: list[SeatedPlayer], scores: Mapping[PlayerId, int],
) -> None:
    """Check one round's score map against the seated players."""
    seated_ids = {p.player_id for p in seated}
    submitted_ids = set(scores)

    missing = seated_ids - submitted_ids
    if missing:
        raise ScoreValidationError(
            f"Missing score for {len(missing)} seated player(s)",
            field="scores",
            context=ErrorContext(player_id=str(sorted(missing, key=str)[0])),
        )
    extra = submitted_ids - seated_ids
    if extra:
        raise ScoreValidationError(
            f"{len(extra)} score(s) given for players not seated in this game",
            field="scores",
            context=ErrorContext(player_id=str(sorted(extra, key=str)[0])),
        )

    for player_id, score in scores.items():
        if isinstance(score, bool) or not isinstance(score, int):
            raise ScoreValidationError(
                f"Score must be an integer, got {type(score).__name__}",
                field=f"scores.{player_id}",
                context=ErrorContext(player_id=str(player_id)),
            )
        if score < 0:
            raise ScoreValidationError(
                f"Score cannot be negative ({score})",
                field=f"scores.{player_id}",
                context=ErrorContext(player_id=str(player_id)),
            )


def validate_round_submission(
    game: GameRecord,
    seated: list[SeatedPlayer],
    round_index: int,
    scores: Mapping[PlayerId, int],
) -> None:
    """All submit preconditions: status guard, round order, score map."""
    next_status(game.status, MatchEvent.SUBMIT_ROUND)
    if round_index != game.current_round_index:
        raise RoundOutOfOrderError(
            game.current_round_index, round_index,
            ErrorContext(game_id=str(game.id)),
        )
    validate_scores(seated, scores)


def apply_score_deltas(
    seated: list[SeatedPlayer], scores: Mapping[PlayerId, int], sign: int = 1,
) -> list[SeatedPlayer]:
    """New snapshots with `sign * score` added to each player's total. Pure."""
    return [
        replace(p, total_score=p.total_score + sign * scores.get(p.player_id, 0))
        for p in seated
    ]


def determine_winner(seated: list[SeatedPlayer]) -> PlayerId:
    """Lowest cumulative total wins; first seat wins a tie."""
    if not seated:
        raise ValueError("cannot determine a winner without seated players")
    leader = min(seated, key=lambda p: (p.total_score, p.seat_position))
    return leader.player_id

