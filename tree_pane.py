import curses

from app_state import Mode
from cell_path import IndexMember, resolve, resolve_selection, siblings
from value_tree import preview, render_full, value_type


class TreePane:
    PAIR_SELECTED = 1
    PAIR_KEY = 2
    PAIR_TYPE = 3
    MAX_LABEL_WIDTH = 24

    def __init__(self):
        self.attr_selected = curses.A_REVERSE
        self.attr_key = 0
        self.attr_type = 0
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_SELECTED, curses.COLOR_BLACK, curses.COLOR_WHITE)
            curses.init_pair(self.PAIR_KEY, curses.COLOR_CYAN, -1)
            curses.init_pair(self.PAIR_TYPE, curses.COLOR_YELLOW, -1)
            self.attr_selected = curses.color_pair(self.PAIR_SELECTED)
            self.attr_key = curses.color_pair(self.PAIR_KEY)
            self.attr_type = curses.color_pair(self.PAIR_TYPE)
        except curses.error:
            pass

        self.row_offset = 0

    # ---------- rows ----------
    @staticmethod
    def rows_for(tree, cell_path):
        """(label, type, preview, selected) for every sibling of the selection."""
        if not cell_path:
            return [("$", value_type(tree), preview(tree), True)]

        container = resolve(tree, cell_path.parent)
        current = cell_path.last
        rows = []
        for member in siblings(container):
            if isinstance(member, IndexMember):
                label = str(member.index)
                value = container[member.index]
                selected = isinstance(current, IndexMember) and current.index == member.index
            else:
                label = member.key
                value = container[member.key]
                selected = not isinstance(current, IndexMember) and current.key == member.key
            rows.append((label, value_type(value), preview(value), selected))
        return rows

    def adjust_row_viewport(self, selected_idx, visible):
        if selected_idx < self.row_offset:
            self.row_offset = selected_idx
        elif selected_idx >= self.row_offset + visible:
            self.row_offset = selected_idx - visible + 1
        self.row_offset = max(0, self.row_offset)

    # ---------- rendering ----------
    def draw(self, win, tree, app):
        win.erase()
        h, w = win.getmaxyx()

        if app.mode == Mode.BOTTOM:
            self._draw_leaf(win, h, w, resolve_selection(tree, app.cell_path))
        else:
            self._draw_rows(win, h, w, self.rows_for(tree, app.cell_path))

        win.refresh()

    def _draw_rows(self, win, h, w, rows):
        if not rows:
            self._put(win, 0, 0, " (empty)", w, curses.A_DIM)
            return

        selected_idx = next((i for i, r in enumerate(rows) if r[3]), 0)
        self.adjust_row_viewport(selected_idx, h)

        label_w = min(self.MAX_LABEL_WIDTH, max(len(r[0]) for r in rows))
        type_w = max(len(r[1]) for r in rows)

        for screen_row, (label, typ, text, selected) in enumerate(
            rows[self.row_offset : self.row_offset + h]
        ):
            if selected:
                line = f" {label[:label_w].ljust(label_w)}  {typ.ljust(type_w)}  {text}"
                self._put(win, screen_row, 0, line.ljust(w), w, self.attr_selected)
                continue
            x = 1
            self._put(win, screen_row, x, label[:label_w], w - x, self.attr_key)
            x += label_w + 2
            self._put(win, screen_row, x, typ, w - x, self.attr_type)
            x += type_w + 2
            self._put(win, screen_row, x, text, w - x, 0)

    def _draw_leaf(self, win, h, w, value):
        lines = render_full(value)
        self._put(win, 0, 0, f" {value_type(value)}", w, self.attr_type)
        visible = max(0, h - 1)
        for i, line in enumerate(lines[:visible]):
            self._put(win, i + 1, 1, line, w - 1, 0)

    @staticmethod
    def _put(win, y, x, text, width, attr):
        if width <= 0:
            return
        try:
            win.addnstr(y, x, text, width, attr)
        except curses.error:
            pass
