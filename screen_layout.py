import curses


class ScreenLayout:
    def __init__(self, stdscr, show_hints=True):
        self.stdscr = stdscr
        self.H, self.W = stdscr.getmaxyx()

        # layout: data pane (main), status bar (1 line), optional hint bar (1 line)
        self.status_h = 1
        self.hint_h = 1 if show_hints and self.H > 3 else 0

        self.data_h = max(1, self.H - self.status_h - self.hint_h)

        self.data_win = curses.newwin(self.data_h, self.W, 0, 0)
        self.data_win.leaveok(True)

        self.status_win = curses.newwin(self.status_h, self.W, self.data_h, 0)
        self.status_win.leaveok(True)

        self.hint_win = None
        if self.hint_h:
            self.hint_win = curses.newwin(
                self.hint_h, self.W, self.data_h + self.status_h, 0
            )
            self.hint_win.leaveok(True)

    def editor_geometry(self, content_lines: int):
        """(height, y) of the boxed editor at the bottom of the data pane."""
        max_h = max(3, self.data_h // 2)
        editor_h = max(3, min(content_lines + 2, max_h))
        return editor_h, max(0, self.data_h - editor_h)

    def overlay_geometry(self, content_lines: int):
        max_h = max(3, min(self.H // 2, self.H - 2))
        overlay_h = max(3, min(content_lines + 2, max_h))
        return overlay_h, max(0, (self.data_h - overlay_h) // 2)
