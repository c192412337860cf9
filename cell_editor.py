import curses
from dataclasses import dataclass
from typing import Any

from keys import Key


@dataclass(frozen=True)
class EditorOutcome:
    UNHANDLED = "unhandled"
    CANCEL = "cancel"
    COMMIT = "commit"

    kind: str
    value: Any = None


_UNHANDLED = EditorOutcome(EditorOutcome.UNHANDLED)

KEYS_BACKSPACE = (curses.KEY_BACKSPACE, 127, 8)
KEYS_DELETE = (curses.KEY_DC, 4)  # Ctrl+D
KEYS_HOME = (curses.KEY_HOME, 1)  # Ctrl+A
KEYS_END = (curses.KEY_END, 5)  # Ctrl+E
KEYS_ENTER = (10, 13, curses.KEY_ENTER)
KEY_ESC = 27


class CellEditor:
    """In-place editor for a single string cell."""

    DEFAULT_WIDTH = 80

    def __init__(self, buffer: str = "", width: int = DEFAULT_WIDTH):
        self.buffer = buffer
        self.cursor = len(buffer)
        self.width = max(1, width)

    @classmethod
    def from_value(cls, value: str, width: int = DEFAULT_WIDTH) -> "CellEditor":
        return cls(value, width)

    def set_width(self, width: int):
        self.width = max(1, width)

    # ---------- key handling ----------
    def handle_key(self, ch: Key) -> EditorOutcome:
        if ch in KEYS_ENTER:
            return EditorOutcome(EditorOutcome.COMMIT, self.buffer)
        if ch == KEY_ESC:
            return EditorOutcome(EditorOutcome.CANCEL)

        if ch in KEYS_BACKSPACE:
            if self.cursor > 0:
                buf = self.buffer
                self.buffer = buf[: self.cursor - 1] + buf[self.cursor :]
                self.cursor -= 1
        elif ch in KEYS_DELETE:
            buf = self.buffer
            self.buffer = buf[: self.cursor] + buf[self.cursor + 1 :]
        elif ch == curses.KEY_LEFT:
            self._move_to(self.cursor - 1)
        elif ch == curses.KEY_RIGHT:
            self._move_to(self.cursor + 1)
        elif ch == curses.KEY_UP:
            self._move_to(self.cursor - self.width)
        elif ch == curses.KEY_DOWN:
            self._move_to(self.cursor + self.width)
        elif ch in KEYS_HOME:
            self._move_to(0)
        elif ch in KEYS_END:
            self._move_to(len(self.buffer))
        else:
            self._insert(ch)
        return _UNHANDLED

    def _move_to(self, position: int):
        self.cursor = max(0, min(position, len(self.buffer)))

    def _insert(self, ch: Key):
        # ints are only text inside printable ASCII; the rest are key codes
        if isinstance(ch, int):
            if not 32 <= ch < 127:
                return
            ch = chr(ch)
        if len(ch) != 1 or not ch.isprintable():
            return
        buf = self.buffer
        self.buffer = buf[: self.cursor] + ch + buf[self.cursor :]
        self.cursor += 1

    # ---------- layout ----------
    def wrapped_lines(self) -> list[str]:
        if not self.buffer:
            return [""]
        w = self.width
        lines = [self.buffer[i : i + w] for i in range(0, len(self.buffer), w)]
        # cursor sitting right after a full last row starts a new one
        if len(self.buffer) % w == 0 and self.cursor == len(self.buffer):
            lines.append("")
        return lines

    def cursor_row_col(self) -> tuple[int, int]:
        return divmod(self.cursor, self.width)
