from enum import Enum

from cell_editor import CellEditor
from cell_path import CellPath, first_child


class Mode(Enum):
    NORMAL = "normal"  # navigate the data
    INSERT = "insert"  # edit the selected string cell
    PEEKING = "peeking"  # choose what to peek out of the session
    BOTTOM = "bottom"  # viewing a scalar or empty container in full

    def __str__(self):
        return self.name


class AppState:
    def __init__(self, cell_path: CellPath | None = None, mode: Mode = Mode.NORMAL):
        self.cell_path = cell_path if cell_path is not None else CellPath()
        self.mode = mode
        self.editor = CellEditor()

    @classmethod
    def from_value(cls, value) -> "AppState":
        member = first_child(value)
        if member is None:
            return cls()
        return cls(CellPath((member,)))

    def is_at_bottom(self) -> bool:
        return self.mode == Mode.BOTTOM

    def hit_bottom(self):
        self.mode = Mode.BOTTOM

    def enter_editor(self, value: str):
        self.mode = Mode.INSERT
        self.editor = CellEditor.from_value(value, self.editor.width)
