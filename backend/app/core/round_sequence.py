"""Round Sequencer: spinner value and shaker seat for every round of a match.

Invariants:
    - SPINNER_SEQUENCE is the single source of truth for round count and pip values
    - TOTAL_ROUNDS == len(SPINNER_SEQUENCE) (14); all termination logic uses it
    - Shaker rotates through seats in order: round_index % player_count
    - Valid domain: 0 <= round_index < TOTAL_ROUNDS, MIN_PLAYERS <= player_count <= MAX_PLAYERS

Design Decisions:
    - Out-of-range queries raise instead of wrapping: a round index of TOTAL_ROUNDS means
      the match is over and callers must check completion first
"""

from app.core.errors import PlayerCountError, RoundOutOfRangeError


# Countdown from double-six to double-blank, then back up.
SPINNER_SEQUENCE: tuple[int, ...] = (6, 5, 4, 3, 2, 1, 0, 0, 1, 2, 3, 4, 5, 6)
TOTAL_ROUNDS: int = len(SPINNER_SEQUENCE)

MIN_PLAYERS: int = 2
MAX_PLAYERS: int = 8


def check_player_count(player_count: int) -> None:
    """Raise PlayerCountError unless MIN_PLAYERS <= player_count <= MAX_PLAYERS."""
    if not MIN_PLAYERS <= player_count <= MAX_PLAYERS:
        raise PlayerCountError(player_count, MIN_PLAYERS, MAX_PLAYERS)


def check_round_index(round_index: int) -> None:
    if not 0 <= round_index < TOTAL_ROUNDS:
        raise RoundOutOfRangeError(round_index)


def spinner_value(round_index: int) -> int:
    """Pips on the double the shaker must open round `round_index` with."""
    check_round_index(round_index)
    return SPINNER_SEQUENCE[round_index]


def shaker_seat_index(round_index: int, player_count: int) -> int:
    """Seat position of the player who starts round `round_index`."""
    check_round_index(round_index)
    check_player_count(player_count)
    return round_index % player_count


def round_label(round_index: int) -> str:
    """Human-readable label, e.g. 'Double-6' for round 0."""
    return f"Double-{spinner_value(round_index)}"


def is_final_round(round_index: int) -> bool:
    return round_index + 1 == TOTAL_ROUNDS
