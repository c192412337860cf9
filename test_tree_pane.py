import unittest

from app_state import AppState, Mode
from cell_path import CellPath, IndexMember, KeyMember
from tree_pane import TreePane
from value_tree import preview, render_full, to_output, value_type


class DummyWin:
    def __init__(self, h=10, w=40):
        self._h = h
        self._w = w
        self.lines = {}

    def getmaxyx(self):
        return self._h, self._w

    def erase(self):
        self.lines = {}

    def refresh(self):
        pass

    def addnstr(self, y, x, text, n, attr=0):
        self.lines[y] = self.lines.get(y, "") + text[:n]


def _tree():
    return {
        "l": ["my", "list", "elements"],
        "r": {"a": 1, "b": 2},
        "s": "some\nstring",
        "n": None,
    }


class TreePaneRowsTests(unittest.TestCase):
    def test_rows_list_siblings_of_selection(self):
        rows = TreePane.rows_for(_tree(), CellPath((KeyMember("r"),)))
        self.assertEqual(
            rows,
            [
                ("l", "list", "[list 3 items]", False),
                ("r", "record", "{record 2 fields}", True),
                ("s", "string", "some\\nstring", False),
                ("n", "nothing", "null", False),
            ],
        )

    def test_rows_inside_a_list(self):
        rows = TreePane.rows_for(_tree(), CellPath((KeyMember("l"), IndexMember(2))))
        self.assertEqual([r[0] for r in rows], ["0", "1", "2"])
        self.assertEqual([r[3] for r in rows], [False, False, True])

    def test_rows_for_empty_path(self):
        self.assertEqual(TreePane.rows_for(42, CellPath()), [("$", "int", "42", True)])

    def test_rows_for_placeholder(self):
        path = CellPath((IndexMember(0, optional=True),))
        self.assertEqual(TreePane.rows_for([], path), [])

    def test_viewport_follows_selection(self):
        pane = TreePane()
        pane.adjust_row_viewport(12, 5)
        self.assertEqual(pane.row_offset, 8)
        pane.adjust_row_viewport(3, 5)
        self.assertEqual(pane.row_offset, 3)


class TreePaneDrawTests(unittest.TestCase):
    def test_draw_bottom_shows_full_value(self):
        pane = TreePane()
        tree = _tree()
        app = AppState(CellPath((KeyMember("s"),)), Mode.BOTTOM)
        win = DummyWin()
        pane.draw(win, tree, app)
        self.assertEqual(win.lines[0].strip(), "string")
        self.assertEqual(win.lines[1], "some")
        self.assertEqual(win.lines[2], "string")

    def test_draw_empty_container(self):
        pane = TreePane()
        win = DummyWin()
        pane.draw(win, {}, AppState.from_value({}))
        self.assertIn("(empty)", win.lines[0])


class ValueTreeTests(unittest.TestCase):
    def test_value_type_names(self):
        self.assertEqual(value_type(True), "bool")
        self.assertEqual(value_type(0), "int")
        self.assertEqual(value_type(0.5), "float")
        self.assertEqual(value_type(CellPath()), "cell-path")
        with self.assertRaises(TypeError):
            value_type(object())

    def test_preview_counts(self):
        self.assertEqual(preview([1]), "[list 1 item]")
        self.assertEqual(preview({}), "{record 0 fields}")
        self.assertEqual(preview(False), "false")

    def test_render_full_container(self):
        self.assertEqual(render_full([]), ["[]"])
        self.assertEqual(render_full(None), ["null"])

    def test_to_output(self):
        self.assertEqual(to_output({"a": "é"}), '{\n  "a": "é"\n}')
        self.assertEqual(to_output(CellPath((KeyMember("r"), KeyMember("a")))), "$.r.a")
        self.assertEqual(to_output(None), "null")


if __name__ == "__main__":
    unittest.main()
