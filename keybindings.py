import logging
from dataclasses import dataclass, field, fields, replace

from app_state import Mode
from keys import Key, parse_key, repr_key

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigationBindings:
    up: Key = ord("k")
    down: Key = ord("j")
    left: Key = ord("h")
    right: Key = ord("l")


@dataclass(frozen=True)
class PeekingBindings:
    all: Key = ord("a")
    view: Key = ord("v")
    under: Key = ord("u")
    cell_path: Key = ord("c")


@dataclass(frozen=True)
class Keybindings:
    quit: Key = ord("q")
    insert: Key = ord("i")
    normal: Key = 27
    peek: Key = ord("p")
    navigation: NavigationBindings = field(default_factory=NavigationBindings)
    peeking: PeekingBindings = field(default_factory=PeekingBindings)

    def get(self, action: str) -> Key:
        target = self
        for part in action.split("."):
            target = getattr(target, part)
        return target

    def action_for(self, key: Key, mode: Mode) -> str | None:
        for action in ACTIONS_BY_MODE[mode]:
            if self.get(action) == key:
                return action
        return None

    def collisions(self) -> list[tuple[Mode, str, str]]:
        found = []
        for mode, actions in ACTIONS_BY_MODE.items():
            seen: dict[Key, str] = {}
            for action in actions:
                key = self.get(action)
                if key in seen:
                    found.append((mode, seen[key], action))
                else:
                    seen[key] = action
        return found

    @classmethod
    def from_dict(cls, data, warnings: list[str] | None = None) -> "Keybindings":
        """Overlay a nested dict of key chords on the default bindings.

        Invalid chords are skipped and reported in `warnings`. A table in
        which two actions of the same mode share a key falls back to the
        defaults.
        """
        warnings = warnings if warnings is not None else []
        defaults = cls()
        if not isinstance(data, dict):
            return defaults

        top = _overlay(defaults, data, "", warnings)
        for group in ("navigation", "peeking"):
            sub = data.get(group)
            if sub is None:
                continue
            if not isinstance(sub, dict):
                warnings.append(f"keybindings.{group} must be an object")
                continue
            top[group] = replace(
                getattr(defaults, group),
                **_overlay(getattr(defaults, group), sub, f"{group}.", warnings),
            )

        bindings = replace(defaults, **top)
        clashes = bindings.collisions()
        if clashes:
            for mode, first, second in clashes:
                msg = (
                    f"keybindings {first} and {second} share "
                    f"{repr_key(bindings.get(first))} in {mode} mode"
                )
                warnings.append(msg)
            log.warning("keybinding collisions, using defaults: %s", clashes)
            return defaults
        return bindings


def _overlay(target, data, prefix, warnings):
    values = {}
    for f in fields(target):
        if f.name in ("navigation", "peeking") or f.name not in data:
            continue
        chord = data[f.name]
        try:
            values[f.name] = parse_key(chord)
        except ValueError as exc:
            warnings.append(f"keybindings.{prefix}{f.name}: {exc}")
            log.warning("ignoring keybinding %s%s: %s", prefix, f.name, exc)
    return values


ACTIONS_BY_MODE = {
    Mode.NORMAL: (
        "quit",
        "insert",
        "peek",
        "navigation.up",
        "navigation.down",
        "navigation.left",
        "navigation.right",
    ),
    Mode.INSERT: ("normal",),
    Mode.PEEKING: (
        "quit",
        "normal",
        "peeking.all",
        "peeking.view",
        "peeking.under",
        "peeking.cell_path",
    ),
    Mode.BOTTOM: ("quit", "navigation.left", "peek"),
}
