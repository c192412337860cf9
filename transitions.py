import logging
from dataclasses import dataclass
from typing import Any

import navigation
from app_state import AppState, Mode
from cell_editor import EditorOutcome
from cell_path import resolve, resolve_selection
from keybindings import Keybindings
from keys import Key
from value_tree import value_type

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionResult:
    QUIT = "quit"
    CONTINUE = "continue"
    RETURN = "return"
    EDIT = "edit"
    ERROR = "error"

    kind: str
    value: Any = None

    @classmethod
    def quit(cls):
        return cls(cls.QUIT)

    @classmethod
    def proceed(cls):
        return cls(cls.CONTINUE)

    @classmethod
    def returning(cls, value):
        return cls(cls.RETURN, value)

    @classmethod
    def edit(cls, value):
        return cls(cls.EDIT, value)

    @classmethod
    def error(cls, message: str):
        return cls(cls.ERROR, message)

    def is_quit(self) -> bool:
        return self.kind in (self.QUIT, self.RETURN)


# ---------- handlers: (app, tree) -> TransitionResult ----------


def _quit(app, tree):
    return TransitionResult.quit()


def _enter_insert(app, tree):
    value = resolve_selection(tree, app.cell_path)
    if not isinstance(value, str):
        return TransitionResult.error(
            f"can only edit string cells, found {value_type(value)}"
        )
    app.enter_editor(value)
    return TransitionResult.proceed()


def _back_to_normal(app, tree):
    app.mode = Mode.NORMAL
    return TransitionResult.proceed()


def _enter_peeking(app, tree):
    app.mode = Mode.PEEKING
    return TransitionResult.proceed()


def _navigate(move):
    def handler(app, tree):
        bottom = app.is_at_bottom()
        app.cell_path, bottom = move(tree, app.cell_path, bottom)
        if bottom:
            app.hit_bottom()
        else:
            app.mode = Mode.NORMAL
        return TransitionResult.proceed()

    return handler


def _leave_bottom(app, tree):
    app.cell_path, _ = navigation.go_back(app.cell_path, True)
    app.mode = Mode.NORMAL
    return TransitionResult.proceed()


def _peek_selection(app, tree):
    return TransitionResult.returning(resolve_selection(tree, app.cell_path))


def _peek_all(app, tree):
    return TransitionResult.returning(tree)


def _peek_view(app, tree):
    app.cell_path = app.cell_path.pop()
    return TransitionResult.returning(resolve(tree, app.cell_path))


def _peek_cell_path(app, tree):
    return TransitionResult.returning(app.cell_path)


DISPATCH = {
    (Mode.NORMAL, "quit"): _quit,
    (Mode.NORMAL, "insert"): _enter_insert,
    (Mode.NORMAL, "peek"): _enter_peeking,
    (Mode.NORMAL, "navigation.up"): _navigate(navigation.go_up),
    (Mode.NORMAL, "navigation.down"): _navigate(navigation.go_down),
    (Mode.NORMAL, "navigation.left"): _navigate(
        lambda tree, path, bottom: navigation.go_back(path, bottom)
    ),
    (Mode.NORMAL, "navigation.right"): _navigate(navigation.go_deeper),
    (Mode.INSERT, "normal"): _back_to_normal,
    (Mode.PEEKING, "quit"): _quit,
    (Mode.PEEKING, "normal"): _back_to_normal,
    (Mode.PEEKING, "peeking.all"): _peek_all,
    (Mode.PEEKING, "peeking.view"): _peek_view,
    (Mode.PEEKING, "peeking.under"): _peek_selection,
    (Mode.PEEKING, "peeking.cell_path"): _peek_cell_path,
    (Mode.BOTTOM, "quit"): _quit,
    (Mode.BOTTOM, "navigation.left"): _leave_bottom,
    (Mode.BOTTOM, "peek"): _peek_selection,
}


def _edit_cell(key, app):
    outcome = app.editor.handle_key(key)
    if outcome.kind == EditorOutcome.COMMIT:
        app.mode = Mode.NORMAL
        return TransitionResult.edit(outcome.value)
    if outcome.kind == EditorOutcome.CANCEL:
        app.mode = Mode.NORMAL
    return TransitionResult.proceed()


def transition_state(
    key: Key, keybindings: Keybindings, app: AppState, tree
) -> TransitionResult:
    """Apply one key press to `app` and report what the caller should do.

    Raises ResolutionError if the selection no longer resolves in `tree`.
    """
    action = keybindings.action_for(key, app.mode)
    handler = DISPATCH.get((app.mode, action)) if action else None
    if handler is not None:
        log.debug("%s: %s", app.mode, action)
        return handler(app, tree)

    if app.mode == Mode.INSERT:
        return _edit_cell(key, app)
    return TransitionResult.proceed()
