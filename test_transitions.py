import copy
import curses

import pytest

from app_state import AppState, Mode
from cell_path import CellPath, IndexMember, KeyMember, ResolutionError, mutate, resolve
from keybindings import Keybindings
from keys import read_key, repr_key
from transitions import TransitionResult, transition_state

KB = Keybindings()
NAV = KB.navigation
PEEKING = KB.peeking


def _value():
    """{l: ["my", "list", "elements"], r: {a: 1, b: 2}, s: "some string", i: 123}"""
    return {
        "l": ["my", "list", "elements"],
        "r": {"a": 1, "b": 2},
        "s": "some string",
        "i": 123,
    }


def _path(*members):
    return CellPath(
        tuple(IndexMember(m) if isinstance(m, int) else KeyMember(m) for m in members)
    )


def _press(app, value, *keys):
    result = None
    for key in keys:
        result = transition_state(key, KB, app, value)
    return result


def test_switch_modes():
    app = AppState()
    value = _value()
    assert app.mode == Mode.NORMAL

    transitions = [
        (KB.normal, Mode.NORMAL),
        (KB.normal, Mode.NORMAL),
        (KB.peek, Mode.PEEKING),
        (KB.normal, Mode.NORMAL),
    ]
    for key, expected_mode in transitions:
        mode = app.mode
        result = transition_state(key, KB, app, value)
        assert not result.is_quit(), f"unexpected exit after {repr_key(key)} in {mode}"
        assert app.mode == expected_mode, (
            f"expected {expected_mode} after {repr_key(key)} in {mode}, found {app.mode}"
        )


def test_quit():
    app = AppState()
    value = _value()

    transitions = [
        (KB.insert, False),
        (KB.quit, True),
        (KB.normal, False),
        (KB.quit, True),
        (KB.peek, False),
        (KB.quit, True),
    ]
    for key, exit in transitions:
        mode = app.mode
        result = transition_state(key, KB, app, value)
        assert result.is_quit() is exit, f"{repr_key(key)} in {mode}"


def test_quit_from_bottom():
    app = AppState.from_value(_value())
    _press(app, _value(), NAV.down, NAV.down, NAV.right)
    assert app.is_at_bottom()
    assert _press(app, _value(), KB.quit) == TransitionResult.quit()


S = KeyMember
I = IndexMember  # noqa: E741

NAVIGATION_SCENARIO = [
    (NAV.up, [S("i")], False),
    (NAV.up, [S("s")], False),
    (NAV.up, [S("r")], False),
    (NAV.up, [S("l")], False),
    (NAV.down, [S("r")], False),
    (NAV.left, [S("r")], False),
    (NAV.right, [S("r"), S("a")], False),
    (NAV.right, [S("r"), S("a")], True),
    (NAV.up, [S("r"), S("a")], True),
    (NAV.down, [S("r"), S("a")], True),
    (NAV.left, [S("r"), S("a")], False),
    (NAV.down, [S("r"), S("b")], False),
    (NAV.right, [S("r"), S("b")], True),
    (NAV.up, [S("r"), S("b")], True),
    (NAV.down, [S("r"), S("b")], True),
    (NAV.left, [S("r"), S("b")], False),
    (NAV.up, [S("r"), S("a")], False),
    (NAV.up, [S("r"), S("b")], False),
    (NAV.left, [S("r")], False),
    (NAV.down, [S("s")], False),
    (NAV.left, [S("s")], False),
    (NAV.right, [S("s")], True),
    (NAV.up, [S("s")], True),
    (NAV.down, [S("s")], True),
    (NAV.left, [S("s")], False),
    (NAV.down, [S("i")], False),
    (NAV.left, [S("i")], False),
    (NAV.right, [S("i")], True),
    (NAV.up, [S("i")], True),
    (NAV.down, [S("i")], True),
    (NAV.left, [S("i")], False),
    (NAV.down, [S("l")], False),
    (NAV.left, [S("l")], False),
    (NAV.right, [S("l"), I(0)], False),
    (NAV.right, [S("l"), I(0)], True),
    (NAV.up, [S("l"), I(0)], True),
    (NAV.down, [S("l"), I(0)], True),
    (NAV.left, [S("l"), I(0)], False),
    (NAV.down, [S("l"), I(1)], False),
    (NAV.right, [S("l"), I(1)], True),
    (NAV.up, [S("l"), I(1)], True),
    (NAV.down, [S("l"), I(1)], True),
    (NAV.left, [S("l"), I(1)], False),
    (NAV.down, [S("l"), I(2)], False),
    (NAV.right, [S("l"), I(2)], True),
    (NAV.up, [S("l"), I(2)], True),
    (NAV.down, [S("l"), I(2)], True),
    (NAV.left, [S("l"), I(2)], False),
    (NAV.up, [S("l"), I(1)], False),
    (NAV.up, [S("l"), I(0)], False),
    (NAV.up, [S("l"), I(2)], False),
    (NAV.left, [S("l")], False),
]


def test_navigate_the_data():
    value = _value()
    app = AppState.from_value(value)

    assert not app.is_at_bottom()
    assert app.cell_path == _path("l")

    for step, (key, members, bottom) in enumerate(NAVIGATION_SCENARIO):
        expected = CellPath(tuple(members))
        result = transition_state(key, KB, app, value)

        assert result == TransitionResult.proceed()
        assert app.is_at_bottom() is bottom, f"step {step}: {repr_key(key)}"
        assert app.cell_path == expected, (
            f"step {step}: expected {expected}, found {app.cell_path}"
        )


def _run_peeking_scenario(transitions, value):
    app = AppState.from_value(value)
    for key, exit, expected in transitions:
        mode = app.mode
        result = transition_state(key, KB, app, value)

        assert result.is_quit() is exit, f"{repr_key(key)} in {mode}"
        if expected is None:
            assert result.kind != TransitionResult.RETURN
        else:
            assert result == TransitionResult.returning(expected), (
                f"unexpected data after {repr_key(key)} in {mode}"
            )


def test_peek_all_from_top():
    value = _value()
    _run_peeking_scenario([(KB.peek, False, None), (PEEKING.all, True, value)], value)


def test_peek_view_from_top_returns_whole_tree():
    value = _value()
    _run_peeking_scenario([(KB.peek, False, None), (PEEKING.view, True, value)], value)


def test_peek_all_and_view_inside_the_data():
    value = _value()
    _run_peeking_scenario(
        [
            (NAV.down, False, None),
            (NAV.right, False, None),  # on {r: {a: 1, b: 2}}
            (KB.peek, False, None),
            (PEEKING.all, True, value),
            (PEEKING.view, True, {"a": 1, "b": 2}),
        ],
        value,
    )


def test_peek_under():
    value = _value()
    _run_peeking_scenario(
        [
            (NAV.down, False, None),
            (NAV.right, False, None),
            (KB.peek, False, None),
            (PEEKING.all, True, value),
            (PEEKING.under, True, 1),
        ],
        value,
    )


def test_peek_cell_path():
    value = _value()
    _run_peeking_scenario(
        [
            (NAV.down, False, None),
            (NAV.right, False, None),
            (KB.peek, False, None),
            (PEEKING.cell_path, True, _path("r", "a")),
        ],
        value,
    )


def test_peek_at_the_bottom_skips_peeking_mode():
    value = _value()
    app = AppState.from_value(value)
    _press(app, value, NAV.right, NAV.right)
    assert app.cell_path == _path("l", 0)
    assert app.is_at_bottom()

    result = transition_state(KB.peek, KB, app, value)

    assert result == TransitionResult.returning("my")
    assert app.mode == Mode.BOTTOM


def test_peek_under_matches_selection_before_peeking():
    value = _value()
    app = AppState.from_value(value)
    _press(app, value, NAV.up, NAV.up, NAV.up)
    before = resolve(value, app.cell_path)
    result = _press(app, value, KB.peek, PEEKING.under)
    assert result.value == before


def test_normal_key_leaves_peeking():
    value = _value()
    app = AppState.from_value(value)
    _press(app, value, KB.peek, NAV.down)
    assert app.mode == Mode.PEEKING
    assert app.cell_path == _path("l")
    _press(app, value, KB.normal)
    assert app.mode == Mode.NORMAL


def test_insert_on_non_string_is_an_error():
    value = _value()
    app = AppState.from_value(value)
    _press(app, value, NAV.down)
    assert app.cell_path == _path("r")

    result = transition_state(KB.insert, KB, app, value)

    assert result == TransitionResult.error("can only edit string cells, found record")
    assert app.mode == Mode.NORMAL
    assert app.cell_path == _path("r")


def test_insert_is_ignored_at_bottom():
    value = _value()
    app = AppState.from_value(value)
    _press(app, value, NAV.up, NAV.up, NAV.right)
    assert app.cell_path == _path("s")
    assert _press(app, value, KB.insert) == TransitionResult.proceed()
    assert app.mode == Mode.BOTTOM


def test_edit_a_string_cell():
    value = _value()
    original = copy.deepcopy(value)
    app = AppState.from_value(value)
    _press(app, value, NAV.down, NAV.down, KB.insert)
    assert app.mode == Mode.INSERT
    assert app.editor.buffer == "some string"

    # bound keys are plain text while editing
    result = _press(app, value, KB.quit, NAV.left, KB.peek, KB.insert)
    assert result == TransitionResult.proceed()
    assert app.mode == Mode.INSERT

    result = _press(app, value, 10)
    assert result == TransitionResult.edit("some stringqhpi")
    assert app.mode == Mode.NORMAL
    assert app.cell_path == _path("s")

    new_value = mutate(value, app.cell_path, result.value)
    assert new_value["s"] == "some stringqhpi"
    assert value == original


def _typed(text):
    """Keys as the terminal delivers them for `text`, one per character."""
    keys = []
    for ch in text:
        raw = iter(ch.encode("utf-8"))
        keys.append(read_key(lambda: next(raw)))
    return keys


def test_insert_text_that_shares_numbers_with_key_codes():
    value = {"s": "ab"}
    app = AppState.from_value(value)
    _press(app, value, KB.insert)
    result = _press(app, value, *_typed("\u0107\u0104\u0105"), 10)
    assert result == TransitionResult.edit("ab\u0107\u0104\u0105")


def test_function_keys_are_not_inserted():
    value = {"s": "ab"}
    app = AppState.from_value(value)
    _press(app, value, KB.insert)
    result = _press(app, value, curses.KEY_NPAGE, curses.KEY_F1, 10)
    assert result == TransitionResult.edit("ab")


def test_normal_key_cancels_insert():
    value = _value()
    app = AppState.from_value(value)
    _press(app, value, NAV.down, NAV.down, KB.insert, ord("x"))
    result = _press(app, value, KB.normal)
    assert result == TransitionResult.proceed()
    assert app.mode == Mode.NORMAL


def test_empty_tree_uses_placeholder_selection():
    for value, placeholder in (([], IndexMember(0, True)), ({}, KeyMember("", True))):
        app = AppState.from_value(value)
        assert app.cell_path == CellPath((placeholder,))

        assert _press(app, value, NAV.down, NAV.up) == TransitionResult.proceed()
        assert app.cell_path == CellPath((placeholder,))

        result = _press(app, value, KB.insert)
        assert result == TransitionResult.error("can only edit string cells, found nothing")

        _press(app, value, NAV.right)
        assert app.is_at_bottom()
        assert _press(app, value, KB.peek) == TransitionResult.returning(None)


def test_bare_scalar_tree():
    value = "just text"
    app = AppState.from_value(value)
    assert app.cell_path == CellPath()

    _press(app, value, KB.insert, ord("!"), 10)
    assert app.mode == Mode.NORMAL

    _press(app, value, NAV.right)
    assert app.is_at_bottom()
    assert _press(app, value, KB.peek) == TransitionResult.returning(value)


def test_unbound_keys_are_ignored():
    value = _value()
    for setup in ((), (KB.peek,), (NAV.right, NAV.right)):
        app = AppState.from_value(value)
        _press(app, value, *setup)
        mode, path = app.mode, app.cell_path
        assert _press(app, value, ord("Z")) == TransitionResult.proceed()
        assert (app.mode, app.cell_path) == (mode, path)


def test_custom_keybindings_drive_the_dispatch():
    kb = Keybindings.from_dict({"quit": "Q", "navigation": {"down": "<down>"}})
    value = _value()
    app = AppState.from_value(value)

    assert transition_state(ord("q"), kb, app, value) == TransitionResult.proceed()
    transition_state(curses.KEY_DOWN, kb, app, value)
    assert app.cell_path == _path("r")
    assert transition_state(ord("Q"), kb, app, value).is_quit()


def test_broken_selection_propagates():
    app = AppState(_path("gone"))
    with pytest.raises(ResolutionError):
        transition_state(KB.peek, KB, AppState(_path("gone"), Mode.BOTTOM), _value())
    with pytest.raises(ResolutionError):
        transition_state(KB.insert, KB, app, _value())
