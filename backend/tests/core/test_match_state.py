"""Match State Machine: legal transitions and rejected commands."""

import pytest

from app.core.domain_types import GameStatus, MatchEvent
from app.core.errors import InvalidGameStateError
from app.core.match_state import can_apply, next_status


def test_pause_and_resume():
    assert next_status(GameStatus.ACTIVE, MatchEvent.PAUSE) == GameStatus.PAUSED
    assert next_status(GameStatus.PAUSED, MatchEvent.RESUME) == GameStatus.ACTIVE


def test_submit_keeps_active_until_final_round():
    assert next_status(GameStatus.ACTIVE, MatchEvent.SUBMIT_ROUND) == GameStatus.ACTIVE
    assert next_status(
        GameStatus.ACTIVE, MatchEvent.SUBMIT_ROUND, final_round=True,
    ) == GameStatus.COMPLETED


def test_undo_reopens_completed_game():
    assert next_status(GameStatus.COMPLETED, MatchEvent.UNDO_ROUND) == GameStatus.ACTIVE
    assert next_status(GameStatus.ACTIVE, MatchEvent.UNDO_ROUND) == GameStatus.ACTIVE


def test_delete_allowed_from_every_status():
    for status in GameStatus:
        assert next_status(status, MatchEvent.DELETE) is None
        assert can_apply(status, MatchEvent.DELETE)


@pytest.mark.parametrize("status,event", [
    (GameStatus.PAUSED, MatchEvent.PAUSE),
    (GameStatus.COMPLETED, MatchEvent.PAUSE),
    (GameStatus.ACTIVE, MatchEvent.RESUME),
    (GameStatus.COMPLETED, MatchEvent.RESUME),
    (GameStatus.PAUSED, MatchEvent.SUBMIT_ROUND),
    (GameStatus.COMPLETED, MatchEvent.SUBMIT_ROUND),
    (GameStatus.PAUSED, MatchEvent.UNDO_ROUND),
])
def test_illegal_transitions_raise(status, event):
    assert not can_apply(status, event)
    with pytest.raises(InvalidGameStateError) as exc_info:
        next_status(status, event)
    assert exc_info.value.http_status == 409
    assert status.value in exc_info.value.message
