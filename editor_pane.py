import curses


class EditorPane:
    """Boxed, wrapped view of the cell editor buffer."""

    def __init__(self, layout):
        self.layout = layout
        self.scroll = 0

    def content_width(self):
        return max(1, self.layout.W - 2)

    def draw(self, editor):
        lines = editor.wrapped_lines()
        editor_h, editor_y = self.layout.editor_geometry(len(lines))
        win = curses.newwin(editor_h, self.layout.W, editor_y, 0)
        win.erase()
        win.box()
        try:
            win.addnstr(0, 2, " INSERT ", self.layout.W - 4)
        except curses.error:
            pass

        visible = max(1, editor_h - 2)
        row, col = editor.cursor_row_col()
        if row < self.scroll:
            self.scroll = row
        elif row >= self.scroll + visible:
            self.scroll = row - visible + 1

        for i, line in enumerate(lines[self.scroll : self.scroll + visible]):
            try:
                win.addnstr(1 + i, 1, line, self.content_width())
            except curses.error:
                pass

        win.refresh()
        try:
            curses.curs_set(1)
            win.move(1 + row - self.scroll, 1 + col)
            win.refresh()
        except curses.error:
            pass
