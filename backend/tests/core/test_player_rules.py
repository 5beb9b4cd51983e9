"""Player Rules: name trimming and seat list checks."""

from uuid import uuid4

import pytest

from app.core.errors import BlankPlayerNameError, DuplicatePlayerError, PlayerCountError
from app.core.player_rules import normalize_player_name, validate_seating


def test_name_is_trimmed():
    assert normalize_player_name("  Ana  ") == "Ana"


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_blank_name_rejected(name):
    with pytest.raises(BlankPlayerNameError):
        normalize_player_name(name)


def test_seating_accepts_two_to_eight():
    validate_seating([uuid4() for _ in range(2)])
    validate_seating([uuid4() for _ in range(8)])


@pytest.mark.parametrize("count", [1, 9])
def test_seating_rejects_bad_count(count):
    with pytest.raises(PlayerCountError):
        validate_seating([uuid4() for _ in range(count)])


def test_seating_rejects_duplicates():
    pid = uuid4()
    with pytest.raises(DuplicatePlayerError) as exc_info:
        validate_seating([pid, uuid4(), pid])
    assert exc_info.value.context.player_id == str(pid)
