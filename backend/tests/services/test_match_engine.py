"""Match Engine: round submission, undo, completion and game lifecycle on a real store.

Invariants:
    - Submit then undo restores totals, round index and removes the round records
    - Rejected submissions leave every total, round and index untouched
    - Final round completes the game with exactly one winner
    - Undo of the final round re-opens the game and clears the winner
"""

from uuid import uuid4

import pytest

from app.core.domain_types import GameStatus
from app.core.errors import (
    DuplicatePlayerError, InvalidGameStateError, PlayerCountError,
    ResourceNotFoundError, RoundOutOfOrderError, RoundOutOfRangeError,
    ScoreValidationError,
)
from app.core.round_sequence import TOTAL_ROUNDS
from app.services.match_engine import SubmitOutcome


async def _totals(store, game_id):
    return {p.player_id: p.total_score for p in await store.get_seated_players(game_id)}


async def _snapshot(engine, store, game_id):
    """Everything a rejected command must leave unchanged."""
    game = await engine.get_game(game_id)
    return (
        game.status,
        game.current_round_index,
        await _totals(store, game_id),
        len(await store.list_rounds(game_id)),
    )


async def _play_rounds(engine, game_id, players, count, start=0, score_of=None):
    score_of = score_of or (lambda seat, round_index: seat * 5)
    for round_index in range(start, start + count):
        await engine.submit_round_scores(game_id, round_index, {
            pid: score_of(seat, round_index) for seat, pid in enumerate(players)
        })


# ─── Round zero scenario ──────────────────────────────────────────

async def test_round_zero_submit_then_undo(engine, match_store, seed_players):
    a, b, c, d = seed_players[:4]
    game_id = await engine.create_game([a, b, c, d])

    info = await engine.get_round_info(game_id, 0)
    assert info.shaker_player_id == a
    assert info.spinner_value == 6

    outcome = await engine.submit_round_scores(
        game_id, 0, {a: 0, b: 12, c: 8, d: 20},
    )
    assert outcome == SubmitOutcome(completed=False, next_round_index=1)
    assert await _totals(match_store, game_id) == {a: 0, b: 12, c: 8, d: 20}
    assert (await engine.get_game(game_id)).current_round_index == 1

    rounds = await match_store.list_rounds(game_id)
    assert len(rounds) == 1
    assert rounds[0].shaker_player_id == a
    assert rounds[0].spinner_value == 6
    round_id = rounds[0].id

    assert await engine.undo_last_round(game_id) is True
    assert await _totals(match_store, game_id) == {a: 0, b: 0, c: 0, d: 0}
    assert (await engine.get_game(game_id)).current_round_index == 0
    assert await match_store.list_rounds(game_id) == []
    assert await match_store.get_round_scores(round_id) == []


async def test_undo_without_rounds_is_noop(engine, seed_players):
    game_id = await engine.create_game(seed_players[:2])
    assert await engine.undo_last_round(game_id) is False
    assert (await engine.get_game(game_id)).current_round_index == 0


async def test_undo_reverts_only_latest_round(engine, match_store, seed_players):
    a, b = seed_players[:2]
    game_id = await engine.create_game([a, b])
    await engine.submit_round_scores(game_id, 0, {a: 3, b: 4})
    await engine.submit_round_scores(game_id, 1, {a: 10, b: 0})

    await engine.undo_last_round(game_id)

    assert await _totals(match_store, game_id) == {a: 3, b: 4}
    assert [r.round_index for r in await match_store.list_rounds(game_id)] == [0]


# ─── Rejected submissions ─────────────────────────────────────────

async def test_out_of_order_round_changes_nothing(engine, match_store, seed_players):
    a, b, c = seed_players[:3]
    game_id = await engine.create_game([a, b, c])
    before = await _snapshot(engine, match_store, game_id)

    with pytest.raises(RoundOutOfOrderError):
        await engine.submit_round_scores(game_id, 1, {a: 1, b: 2, c: 3})

    assert await _snapshot(engine, match_store, game_id) == before


async def test_missing_player_changes_nothing(engine, match_store, seed_players):
    a, b, c = seed_players[:3]
    game_id = await engine.create_game([a, b, c])
    await engine.submit_round_scores(game_id, 0, {a: 1, b: 2, c: 3})
    before = await _snapshot(engine, match_store, game_id)

    with pytest.raises(ScoreValidationError):
        await engine.submit_round_scores(game_id, 1, {a: 1, b: 2})

    assert await _snapshot(engine, match_store, game_id) == before


async def test_negative_score_changes_nothing(engine, match_store, seed_players):
    a, b = seed_players[:2]
    game_id = await engine.create_game([a, b])
    before = await _snapshot(engine, match_store, game_id)

    with pytest.raises(ScoreValidationError):
        await engine.submit_round_scores(game_id, 0, {a: 5, b: -1})

    assert await _snapshot(engine, match_store, game_id) == before


async def test_submit_to_unknown_game(engine):
    with pytest.raises(ResourceNotFoundError):
        await engine.submit_round_scores(uuid4(), 0, {})


# ─── Completion ───────────────────────────────────────────────────

async def test_full_match_completes_with_lowest_total_winner(
    engine, match_store, seed_players,
):
    a, b, c, d = seed_players[:4]
    game_id = await engine.create_game([a, b, c, d])

    await _play_rounds(engine, game_id, [a, b, c, d], TOTAL_ROUNDS - 1)
    outcome = await engine.submit_round_scores(
        game_id, TOTAL_ROUNDS - 1, {a: 0, b: 1, c: 2, d: 3},
    )

    assert outcome.completed is True
    assert outcome.next_round_index == TOTAL_ROUNDS
    assert outcome.winner_player_id == a

    game = await engine.get_game(game_id)
    assert game.status == GameStatus.COMPLETED
    assert game.winner_player_id == a
    assert game.current_round_index == TOTAL_ROUNDS
    assert game.completed_at is not None

    seated = await match_store.get_seated_players(game_id)
    assert [p.player_id for p in seated if p.is_winner] == [a]


async def test_tied_totals_winner_is_first_seat(engine, match_store, seed_players):
    a, b = seed_players[:2]
    game_id = await engine.create_game([b, a])

    await _play_rounds(
        engine, game_id, [b, a], TOTAL_ROUNDS, score_of=lambda seat, i: 4,
    )

    game = await engine.get_game(game_id)
    assert game.winner_player_id == b
    totals = await _totals(match_store, game_id)
    assert totals[a] == totals[b] == 4 * TOTAL_ROUNDS


async def test_winner_uses_post_submit_totals(engine, seed_players):
    """The last round can swing the result."""
    a, b = seed_players[:2]
    game_id = await engine.create_game([a, b])
    await _play_rounds(
        engine, game_id, [a, b], TOTAL_ROUNDS - 1,
        score_of=lambda seat, i: 0 if seat == 0 else 1,
    )
    outcome = await engine.submit_round_scores(game_id, TOTAL_ROUNDS - 1, {a: 50, b: 0})
    assert outcome.winner_player_id == b


async def test_completed_game_rejects_more_rounds(engine, seed_players):
    a, b = seed_players[:2]
    game_id = await engine.create_game([a, b])
    await _play_rounds(engine, game_id, [a, b], TOTAL_ROUNDS)

    with pytest.raises(InvalidGameStateError):
        await engine.submit_round_scores(game_id, TOTAL_ROUNDS, {a: 0, b: 0})


async def test_undo_after_completion_reopens_game(engine, match_store, seed_players):
    a, b = seed_players[:2]
    game_id = await engine.create_game([a, b])
    await _play_rounds(engine, game_id, [a, b], TOTAL_ROUNDS)

    assert await engine.undo_last_round(game_id) is True

    game = await engine.get_game(game_id)
    assert game.status == GameStatus.ACTIVE
    assert game.current_round_index == TOTAL_ROUNDS - 1
    assert game.completed_at is None
    assert game.winner_player_id is None
    assert not any(p.is_winner for p in await match_store.get_seated_players(game_id))

    outcome = await engine.submit_round_scores(game_id, TOTAL_ROUNDS - 1, {a: 9, b: 0})
    assert outcome.completed is True


# ─── Creation ─────────────────────────────────────────────────────

@pytest.mark.parametrize("count", [1, 9])
async def test_create_rejects_bad_player_count(engine, seed_players, count):
    players = (seed_players + [uuid4()])[:count]
    with pytest.raises(PlayerCountError):
        await engine.create_game(players)


@pytest.mark.parametrize("count", [2, 8])
async def test_create_accepts_two_to_eight(engine, match_store, seed_players, count):
    game_id = await engine.create_game(seed_players[:count])
    game = await engine.get_game(game_id)
    assert game.status == GameStatus.ACTIVE
    assert game.current_round_index == 0

    seated = await match_store.get_seated_players(game_id)
    assert [p.player_id for p in seated] == seed_players[:count]
    assert [p.seat_position for p in seated] == list(range(count))
    assert all(p.total_score == 0 and not p.is_winner for p in seated)


async def test_create_rejects_duplicate_player(engine, seed_players):
    a, b = seed_players[:2]
    with pytest.raises(DuplicatePlayerError):
        await engine.create_game([a, b, a])


async def test_create_rejects_unknown_player(engine, match_store, seed_players):
    with pytest.raises(ResourceNotFoundError):
        await engine.create_game([seed_players[0], uuid4()])
    assert await match_store.list_games() == []


# ─── Pause / resume / delete ──────────────────────────────────────

async def test_pause_then_resume_keeps_round(engine, seed_players):
    a, b = seed_players[:2]
    game_id = await engine.create_game([a, b])
    await engine.submit_round_scores(game_id, 0, {a: 1, b: 2})

    paused = await engine.pause_game(game_id)
    assert paused.status == GameStatus.PAUSED
    resumed = await engine.resume_game(game_id)
    assert resumed.status == GameStatus.ACTIVE
    assert resumed.current_round_index == 1


async def test_paused_game_rejects_submit_and_undo(engine, match_store, seed_players):
    a, b = seed_players[:2]
    game_id = await engine.create_game([a, b])
    await engine.submit_round_scores(game_id, 0, {a: 1, b: 2})
    await engine.pause_game(game_id)
    before = await _snapshot(engine, match_store, game_id)

    with pytest.raises(InvalidGameStateError):
        await engine.submit_round_scores(game_id, 1, {a: 1, b: 2})
    with pytest.raises(InvalidGameStateError):
        await engine.undo_last_round(game_id)

    assert await _snapshot(engine, match_store, game_id) == before


async def test_illegal_pause_and_resume(engine, seed_players):
    game_id = await engine.create_game(seed_players[:2])
    with pytest.raises(InvalidGameStateError):
        await engine.resume_game(game_id)
    await engine.pause_game(game_id)
    with pytest.raises(InvalidGameStateError):
        await engine.pause_game(game_id)


async def test_delete_removes_game_and_rounds(engine, match_store, player_store, seed_players):
    a, b = seed_players[:2]
    game_id = await engine.create_game([a, b])
    await engine.submit_round_scores(game_id, 0, {a: 1, b: 2})
    round_id = (await match_store.list_rounds(game_id))[0].id

    await engine.delete_game(game_id)

    with pytest.raises(ResourceNotFoundError):
        await engine.get_game(game_id)
    assert await match_store.get_seated_players(game_id) == []
    assert await match_store.get_round_scores(round_id) == []
    assert await player_store.get_player(a) is not None


# ─── Queries ──────────────────────────────────────────────────────

async def test_round_info_limited_to_played_and_current(engine, seed_players):
    a, b, c = seed_players[:3]
    game_id = await engine.create_game([a, b, c])
    await engine.submit_round_scores(game_id, 0, {a: 1, b: 2, c: 3})

    assert (await engine.get_round_info(game_id, 0)).shaker_player_id == a
    current = await engine.get_round_info(game_id, 1)
    assert current.shaker_player_id == b
    assert current.label == "Double-5"
    with pytest.raises(RoundOutOfRangeError):
        await engine.get_round_info(game_id, 2)
    with pytest.raises(RoundOutOfRangeError):
        await engine.get_round_info(game_id, -1)


async def test_round_info_after_completion(engine, seed_players):
    a, b = seed_players[:2]
    game_id = await engine.create_game([a, b])
    await _play_rounds(engine, game_id, [a, b], TOTAL_ROUNDS)

    last = await engine.get_round_info(game_id, TOTAL_ROUNDS - 1)
    assert last.spinner_value == 6
    with pytest.raises(RoundOutOfRangeError):
        await engine.get_round_info(game_id, TOTAL_ROUNDS)


async def test_list_rounds_scores_in_seat_order(engine, seed_players):
    a, b, c = seed_players[:3]
    game_id = await engine.create_game([c, a, b])
    await engine.submit_round_scores(game_id, 0, {a: 1, b: 2, c: 3})
    await engine.submit_round_scores(game_id, 1, {a: 4, b: 0, c: 6})

    history = await engine.list_rounds(game_id)

    assert [h.round.round_index for h in history] == [0, 1]
    assert [s.player_id for s in history[0].scores] == [c, a, b]
    assert [s.score for s in history[1].scores] == [6, 4, 0]
    assert history[1].round.shaker_player_id == a


async def test_match_view_standings(engine, seed_players):
    a, b, c = seed_players[:3]
    game_id = await engine.create_game([a, b, c])
    await engine.submit_round_scores(game_id, 0, {a: 10, b: 0, c: 10})

    view = await engine.get_match_view(game_id)

    assert [(s.player_id, s.rank) for s in view.standings] == [(b, 1), (a, 2), (c, 2)]
    assert view.standings[0].name == "B"
    assert view.completed_rounds == 1
    assert view.current_round.shaker_player_id == b


async def test_list_games_by_status(engine, seed_players):
    a, b = seed_players[:2]
    active = await engine.create_game([a, b])
    paused = await engine.create_game([a, b])
    await engine.pause_game(paused)

    assert {g.id for g in await engine.list_games()} == {active, paused}
    assert [g.id for g in await engine.list_games([GameStatus.PAUSED])] == [paused]
    assert await engine.list_games([GameStatus.COMPLETED]) == []
