from enum import Enum

from cell_path import CellPath, IndexMember, resolve, resolve_selection, siblings
from value_tree import is_leaf


class Direction(Enum):
    UP = -1
    DOWN = 1


def _same_slot(a, b):
    if isinstance(a, IndexMember):
        return isinstance(b, IndexMember) and a.index == b.index
    return not isinstance(b, IndexMember) and a.key == b.key


def go_up_or_down(tree, cell_path: CellPath, bottom: bool, direction: Direction):
    """Cycle the selection among its siblings, wrapping at both ends."""
    if bottom or not cell_path:
        return cell_path, bottom

    container = resolve(tree, cell_path.parent)
    slots = siblings(container)
    if len(slots) < 2:
        return cell_path, bottom

    current = cell_path.last
    position = 0
    for i, slot in enumerate(slots):
        if _same_slot(slot, current):
            position = i
            break

    target = slots[(position + direction.value) % len(slots)]
    return cell_path.with_last(target), bottom


def go_deeper(tree, cell_path: CellPath, bottom: bool):
    if bottom:
        return cell_path, bottom

    node = resolve_selection(tree, cell_path)
    if is_leaf(node):
        return cell_path, True
    return cell_path.push(siblings(node)[0]), False


def go_back(cell_path: CellPath, bottom: bool):
    if bottom:
        return cell_path, False
    if len(cell_path) > 1:
        return cell_path.pop(), False
    return cell_path, False


def go_up(tree, cell_path, bottom):
    return go_up_or_down(tree, cell_path, bottom, Direction.UP)


def go_down(tree, cell_path, bottom):
    return go_up_or_down(tree, cell_path, bottom, Direction.DOWN)
