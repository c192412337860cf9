import json
import logging
import os

from keybindings import Keybindings

log = logging.getLogger(__name__)

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "explore")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "explore.log")

# default settings
SHOW_HINTS_DEFAULT = True


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def load_config():
    """Read config.json, falling back to defaults for anything missing or bad.

    Problems are collected under WARNINGS rather than raised so a broken
    config file never keeps the explorer from starting.
    """
    warnings: list[str] = []
    cfg = {
        "KEYBINDINGS": Keybindings(),
        "SHOW_HINTS": SHOW_HINTS_DEFAULT,
        "WARNINGS": warnings,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        log.warning("could not read %s: %s", CONFIG_JSON, exc)
        warnings.append(f"Config ignored: {exc}")
        return cfg

    if not isinstance(data, dict):
        warnings.append("Config ignored: top level must be an object")
        return cfg

    bindings = data.get("keybindings")
    if bindings is not None:
        cfg["KEYBINDINGS"] = Keybindings.from_dict(bindings, warnings)

    show_hints = data.get("show_hints")
    if isinstance(show_hints, bool):
        cfg["SHOW_HINTS"] = show_hints
    elif show_hints is not None:
        warnings.append("show_hints must be true or false")

    return cfg
