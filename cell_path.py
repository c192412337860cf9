from dataclasses import dataclass


@dataclass(frozen=True)
class IndexMember:
    index: int
    optional: bool = False

    def __str__(self):
        return f"{self.index}?" if self.optional else str(self.index)


@dataclass(frozen=True)
class KeyMember:
    key: str
    optional: bool = False

    def __str__(self):
        return f"{self.key}?" if self.optional else self.key


@dataclass(frozen=True)
class CellPath:
    """Ordered root-to-leaf selectors into a value tree."""

    members: tuple = ()

    def __len__(self):
        return len(self.members)

    def __iter__(self):
        return iter(self.members)

    def __str__(self):
        if not self.members:
            return "$"
        return "$." + ".".join(str(m) for m in self.members)

    @property
    def last(self):
        return self.members[-1] if self.members else None

    @property
    def parent(self) -> "CellPath":
        return CellPath(self.members[:-1])

    def push(self, member) -> "CellPath":
        return CellPath(self.members + (member,))

    def pop(self) -> "CellPath":
        return self.parent

    def with_last(self, member) -> "CellPath":
        if not self.members:
            return CellPath((member,))
        return CellPath(self.members[:-1] + (member,))


class ResolutionError(LookupError):
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    KEY_NOT_FOUND = "key_not_found"
    NOT_A_CONTAINER = "not_a_container"

    def __init__(self, kind: str, position: int, member):
        self.kind = kind
        self.position = position
        self.member = member
        super().__init__(f"{kind} at member {position} ({member})")


def _step(node, member, position):
    if isinstance(member, IndexMember):
        if not isinstance(node, list):
            raise ResolutionError(ResolutionError.NOT_A_CONTAINER, position, member)
        if not 0 <= member.index < len(node):
            raise ResolutionError(ResolutionError.INDEX_OUT_OF_RANGE, position, member)
        return node[member.index]
    if isinstance(member, KeyMember):
        if not isinstance(node, dict):
            raise ResolutionError(ResolutionError.NOT_A_CONTAINER, position, member)
        if member.key not in node:
            raise ResolutionError(ResolutionError.KEY_NOT_FOUND, position, member)
        return node[member.key]
    raise TypeError(f"not a path member: {member!r}")


def resolve(tree, path: CellPath):
    node = tree
    for position, member in enumerate(path):
        node = _step(node, member, position)
    return node


def resolve_selection(tree, path: CellPath):
    """Resolve the selected node, or None when the selection is a placeholder.

    A trailing optional member only stands in for a child of an empty
    container; it is never looked up on its own.
    """
    last = path.last
    if last is not None and last.optional:
        container = resolve(tree, path.parent)
        if isinstance(container, (list, dict)) and not container:
            return None
    return resolve(tree, path)


def mutate(tree, path: CellPath, new_value):
    """Return a copy of `tree` with the node at `path` replaced.

    Only the containers along `path` are copied; everything else is shared
    with the original tree, which is left untouched.
    """
    return _rebuild(tree, path.members, 0, new_value)


def _rebuild(node, members, position, new_value):
    if position == len(members):
        return new_value
    member = members[position]
    child = _step(node, member, position)
    replaced = _rebuild(child, members, position + 1, new_value)
    if isinstance(member, IndexMember):
        copy = list(node)
        copy[member.index] = replaced
        return copy
    copy = dict(node)
    copy[member.key] = replaced
    return copy


def siblings(container) -> list:
    """Selectors of the children of `container`, in display order."""
    if isinstance(container, list):
        return [IndexMember(i) for i in range(len(container))]
    if isinstance(container, dict):
        return [KeyMember(k) for k in container]
    return []


def first_child(container):
    if isinstance(container, list):
        return IndexMember(0, optional=not container)
    if isinstance(container, dict):
        return KeyMember(next(iter(container), ""), optional=not container)
    return None
