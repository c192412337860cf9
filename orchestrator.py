import curses
import logging
import time

from app_state import AppState, Mode
from cell_path import mutate, resolve_selection
from editor_pane import EditorPane
from keys import read_key
from overlay import OverlayView
from screen_layout import ScreenLayout
from status_bar import render_hints, render_status
from transitions import TransitionResult, transition_state
from tree_pane import TreePane
from value_tree import value_type

log = logging.getLogger(__name__)

KEY_CTRL_C = 3


class Orchestrator:
    def __init__(self, stdscr, tree, config, file_path=None):
        self.stdscr = stdscr
        curses.curs_set(0)
        curses.raw()
        self.stdscr.nodelay(False)
        self.stdscr.keypad(True)

        self.tree = tree
        self.app = AppState.from_value(tree)
        self.keybindings = config["KEYBINDINGS"]
        self.show_hints = config["SHOW_HINTS"]
        self.file_path = file_path

        self.layout = ScreenLayout(stdscr, self.show_hints)
        self.pane = TreePane()
        self.editor_pane = EditorPane(self.layout)
        self.overlay = OverlayView(self.layout)

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0
        warnings = config.get("WARNINGS") or []
        if warnings:
            self._set_status(warnings[0], seconds=6)

    # ---------------- helpers ----------------

    def _set_status(self, msg, seconds=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds

    def _relayout(self):
        self.layout = ScreenLayout(self.stdscr, self.show_hints)
        self.editor_pane = EditorPane(self.layout)
        self.overlay = OverlayView(self.layout)
        self.stdscr.clear()
        self.stdscr.refresh()

    def _read_key(self):
        return read_key(self.stdscr.getch)

    def _selected_type(self):
        return value_type(resolve_selection(self.tree, self.app.cell_path))

    # ---------------- UI ----------------

    def redraw(self, error=None):
        try:
            curses.curs_set(0)
        except curses.error:
            pass

        if self.app.mode == Mode.INSERT:
            self.app.editor.set_width(self.editor_pane.content_width())

        self.pane.draw(self.layout.data_win, self.tree, self.app)

        sw = self.layout.status_win
        sw.erase()
        _, w = sw.getmaxyx()
        context = {
            "status_msg": self.status_msg,
            "status_until": self.status_msg_until,
            "mode": self.app.mode,
            "cell_path": self.app.cell_path,
            "value_type": self._selected_type(),
            "file_path": self.file_path,
        }
        try:
            sw.addnstr(0, 0, render_status(context, w), w, curses.A_REVERSE)
        except curses.error:
            pass
        sw.refresh()

        hw = self.layout.hint_win
        if hw is not None:
            hw.erase()
            try:
                hw.addnstr(0, 0, render_hints(self.keybindings, self.app.mode, w), w, curses.A_DIM)
            except curses.error:
                pass
            hw.refresh()

        if error is not None:
            self.overlay.open_error(error)
        if self.overlay.visible:
            self.overlay.draw()
        elif self.app.mode == Mode.INSERT:
            self.editor_pane.draw(self.app.editor)

    # ---------------- main loop ----------------

    def run(self) -> TransitionResult:
        """Run until the user quits or peeks a value; return that outcome."""
        self.stdscr.clear()
        self.stdscr.refresh()

        while True:
            self.redraw()
            key = self._read_key()

            if key == curses.KEY_RESIZE:
                self._relayout()
                continue
            if key == KEY_CTRL_C:
                return TransitionResult.quit()

            result = transition_state(key, self.keybindings, self.app, self.tree)

            if result.kind == TransitionResult.QUIT:
                return result
            if result.kind == TransitionResult.RETURN:
                log.info("peeked %s at %s", value_type(result.value), self.app.cell_path)
                return result
            if result.kind == TransitionResult.EDIT:
                self.tree = mutate(self.tree, self.app.cell_path, result.value)
                self._set_status(f"Edited {self.app.cell_path}")
            elif result.kind == TransitionResult.ERROR:
                log.info("transition error: %s", result.value)
                self.redraw(error=result.value)
                key = self._read_key()
                self.overlay.handle_key(key)
                if key == curses.KEY_RESIZE:
                    self._relayout()
