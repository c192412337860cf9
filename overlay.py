import curses
import textwrap
from typing import List


class OverlayView:
    """Boxed error message that the next key press dismisses."""

    def __init__(self, layout):
        self.layout = layout
        self.visible = False
        self.lines: List[str] = []
        self.win = None

    def open_error(self, message: str):
        width = max(1, self.layout.W - 4)
        lines: List[str] = []
        for paragraph in str(message).splitlines() or [""]:
            lines.extend(textwrap.wrap(paragraph, width) or [""])
        lines.append("")
        lines.append("press any key to continue")

        overlay_h, overlay_y = self.layout.overlay_geometry(len(lines))
        self.lines = lines
        self.win = curses.newwin(overlay_h, self.layout.W, overlay_y, 0)
        self.win.leaveok(True)
        self.visible = True

    def close(self):
        self.visible = False
        self.lines = []
        self.win = None

    def handle_key(self, ch):
        if not self.visible:
            return
        self.close()

    def draw(self):
        if not self.visible or not self.win:
            return

        win = self.win
        win.erase()
        h, w = win.getmaxyx()
        win.box()
        try:
            win.addnstr(0, 2, " error ", max(0, w - 4), curses.A_BOLD)
        except curses.error:
            pass

        max_visible = max(0, h - 2)
        for i, line in enumerate(self.lines[:max_visible]):
            try:
                win.addnstr(1 + i, 2, line, max(0, w - 4))
            except curses.error:
                pass

        win.refresh()
