"""Match State Machine: legal lifecycle transitions for a game.

Invariants:
    - Initial state is ACTIVE; COMPLETED is terminal except for undo_round
    - next_status is PURE: returns the target status or raises InvalidGameStateError
    - Rounds are submitted only while ACTIVE; pause/resume never touch current_round_index

Design Decisions:
    - Transition table as a dict keyed by (status, event): every legal move is listed,
      anything absent is rejected
    - Undo on a COMPLETED game re-opens it (ACTIVE); the shell clears the winner fields
    - Undo on a PAUSED game is rejected: resume first
"""

from app.core.domain_types import GameStatus, MatchEvent
from app.core.errors import InvalidGameStateError


_TRANSITIONS: dict[tuple[GameStatus, MatchEvent], GameStatus] = {
    (GameStatus.ACTIVE, MatchEvent.PAUSE): GameStatus.PAUSED,
    (GameStatus.PAUSED, MatchEvent.RESUME): GameStatus.ACTIVE,
    (GameStatus.ACTIVE, MatchEvent.SUBMIT_ROUND): GameStatus.ACTIVE,
    (GameStatus.ACTIVE, MatchEvent.UNDO_ROUND): GameStatus.ACTIVE,
    (GameStatus.COMPLETED, MatchEvent.UNDO_ROUND): GameStatus.ACTIVE,
}

# Verb used in error messages, e.g. "Cannot pause a game that is paused"
_ACTION_NAMES: dict[MatchEvent, str] = {
    MatchEvent.PAUSE: "pause",
    MatchEvent.RESUME: "resume",
    MatchEvent.SUBMIT_ROUND: "submit a round to",
    MatchEvent.UNDO_ROUND: "undo a round of",
    MatchEvent.DELETE: "delete",
}


def next_status(
    status: GameStatus, event: MatchEvent, *, final_round: bool = False,
) -> GameStatus | None:
    """Target status for `event`, or None when the game is removed (DELETE)."""
    if event == MatchEvent.DELETE:
        return None
    target = _TRANSITIONS.get((status, event))
    if target is None:
        raise InvalidGameStateError(_ACTION_NAMES[event], status.value)
    if event == MatchEvent.SUBMIT_ROUND and final_round:
        return GameStatus.COMPLETED
    return target


def can_apply(status: GameStatus, event: MatchEvent) -> bool:
    return event == MatchEvent.DELETE or (status, event) in _TRANSITIONS
