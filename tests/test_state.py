from dataclasses import replace

from termchess.state import GameState, PositionHistory


def test_default_state():
    state = GameState()
    assert state.white_move
    assert state.king_square(True) == (7, 4)
    assert state.king_square(False) == (0, 4)
    assert state.en_passant is None
    assert state.paused
    assert not state.timed_game


def test_king_square_follows_fields():
    state = GameState(white_king=(3, 3), black_king=(5, 1))
    assert state.king_square(True) == state.white_king
    assert state.king_square(False) == state.black_king


def test_castling_rights_default_on():
    state = GameState()
    rights = (
        state.white_can_castle_long,
        state.white_can_castle_short,
        state.black_can_castle_long,
        state.black_can_castle_short,
    )
    assert rights == (True, True, True, True)


def test_copy_is_independent():
    state = GameState()
    other = replace(state)
    other.white_move = False
    assert state.white_move
    assert other != state


def test_record_returns_running_count():
    history = PositionHistory()
    assert [history.record("x") for _ in range(3)] == [1, 2, 3]
    assert history.count("x") == 3


def test_unknown_position_count_is_zero():
    assert PositionHistory().count("missing") == 0


def test_threefold_repetition():
    history = PositionHistory()
    history.record("a")
    history.record("b")
    history.record("a")
    assert not history.has_threefold_repetition()
    history.record("a")
    assert history.has_threefold_repetition()


def test_items_keep_first_seen_order():
    history = PositionHistory()
    for pos in ["p", "q", "p", "r"]:
        history.record(pos)
    assert [name for name, _ in history.items()] == ["p", "q", "r"]
    assert sum(n for _, n in history.items()) == 4
    assert len(history) == 3


def test_history_from_counts():
    history = PositionHistory({"k": 2})
    assert history.record("k") == 3
    assert history.has_threefold_repetition()