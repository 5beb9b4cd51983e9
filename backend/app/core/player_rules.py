"""Player Rules: name normalization and game seating checks.

Invariants:
    - Stored names are trimmed and non-blank
    - A player appears at most once in a game's seat list
    - Seat list length is within [MIN_PLAYERS, MAX_PLAYERS]
"""

from typing import Sequence

from app.core.domain_types import PlayerId
from app.core.errors import BlankPlayerNameError, DuplicatePlayerError
from app.core.round_sequence import check_player_count


def normalize_player_name(name: str) -> str:
    """Trim surrounding whitespace; raise BlankPlayerNameError if nothing is left."""
    trimmed = name.strip()
    if not trimmed:
        raise BlankPlayerNameError()
    return trimmed


def validate_seating(player_ids: Sequence[PlayerId]) -> None:
    """Seat list rules for game creation: count range and no repeats."""
    check_player_count(len(player_ids))
    seen: set[PlayerId] = set()
    for player_id in player_ids:
        if player_id in seen:
            raise DuplicatePlayerError(str(player_id))
        seen.add(player_id)
