import os
import time

from app_state import Mode
from keys import repr_key


def render_status(context, width):
    """
    context keys: status_msg, status_until, mode, cell_path, value_type, file_path
    """
    text = ""
    now = time.time()
    if context.get("status_msg") and now < context.get("status_until", 0):
        text = f" {context['status_msg']}"
    else:
        mode = context.get("mode", Mode.NORMAL)
        fname = context.get("file_path") or ""
        if fname:
            fname = os.path.basename(fname)
        parts = [f" {mode}", str(context.get("cell_path", "$"))]
        typ = context.get("value_type")
        if typ:
            parts.append(typ)
        if fname:
            parts.append(fname)
        text = " | ".join(parts)

    return text.ljust(width)[:width]


def render_hints(keybindings, mode, width):
    nav = keybindings.navigation
    peeking = keybindings.peeking
    if mode == Mode.INSERT:
        pairs = [(repr_key(keybindings.normal), "cancel"), ("<enter>", "commit")]
    elif mode == Mode.PEEKING:
        pairs = [
            (repr_key(peeking.all), "all"),
            (repr_key(peeking.view), "view"),
            (repr_key(peeking.under), "under"),
            (repr_key(peeking.cell_path), "cell path"),
            (repr_key(keybindings.normal), "back"),
        ]
    elif mode == Mode.BOTTOM:
        pairs = [
            (repr_key(nav.left), "back"),
            (repr_key(keybindings.peek), "peek"),
            (repr_key(keybindings.quit), "quit"),
        ]
    else:
        moves = "/".join(repr_key(k) for k in (nav.left, nav.down, nav.up, nav.right))
        pairs = [
            (moves, "move"),
            (repr_key(keybindings.insert), "edit"),
            (repr_key(keybindings.peek), "peek"),
            (repr_key(keybindings.quit), "quit"),
        ]
    text = " " + "  ".join(f"{key} {label}" for key, label in pairs)
    return text.ljust(width)[:width]
