import json

from cell_path import CellPath


def value_type(value) -> str:
    if value is None:
        return "nothing"
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "list"
    if isinstance(value, dict):
        return "record"
    if isinstance(value, CellPath):
        return "cell-path"
    raise TypeError(f"unsupported value: {type(value).__name__}")


def is_container(value) -> bool:
    return isinstance(value, (list, dict))


def is_leaf(value) -> bool:
    """Scalars and empty containers have nothing to descend into."""
    return not is_container(value) or not value


def _plural(n, word):
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def preview(value) -> str:
    """One-line rendering used in the data pane."""
    if isinstance(value, list):
        return f"[list {_plural(len(value), 'item')}]"
    if isinstance(value, dict):
        return f"{{record {_plural(len(value), 'field')}}}"
    if isinstance(value, str):
        return value.replace("\n", "\\n").replace("\t", "\\t")
    return render_scalar(value)


def render_scalar(value) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_full(value) -> list[str]:
    """Multi-line rendering of a value viewed at the bottom of the tree."""
    if isinstance(value, str):
        return value.split("\n")
    if is_container(value):
        return to_output(value).split("\n")
    return [render_scalar(value)]


def to_output(value) -> str:
    """Text printed on stdout when a value is peeked out of the session."""
    if isinstance(value, CellPath):
        return str(value)
    return json.dumps(value, indent=2, ensure_ascii=False)
