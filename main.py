import curses
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")

import config_paths
from file_type_handler import FileTypeHandler, load_stream
from orchestrator import Orchestrator
from transitions import TransitionResult
from value_tree import to_output

try:
    __version__ = version("explore-tui")
except PackageNotFoundError:
    __version__ = "0.0.0"

log = logging.getLogger(__name__)

USAGE = (
    "explore - browse and edit structured data in the terminal\n\n"
    "Usage:\n  explore [path]\n  <command> | explore\n  explore -v\n"
)


def configure_logging():
    config_paths.ensure_config_dirs()
    level = os.environ.get("EXPLORE_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        filename=config_paths.LOG_PATH,
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_input(path):
    if path:
        return FileTypeHandler(path).load()
    return load_stream(sys.stdin)


def _reattach_tty():
    # data came through stdin, keys have to come from the terminal
    tty = os.open("/dev/tty", os.O_RDONLY)
    os.dup2(tty, 0)
    os.close(tty)


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv

    if "-v" in args or "-V" in args:
        print(__version__)
        return 0

    if "-h" in args:
        print(USAGE)
        return 0

    if len(args) > 1:
        print(USAGE, file=sys.stderr)
        return 2

    path = args[0] if args else None
    if path is None and sys.stdin.isatty():
        print(USAGE)
        return 0

    configure_logging()

    try:
        tree = load_input(path)
    except (OSError, ValueError) as exc:
        # json.JSONDecodeError is a ValueError
        print(f"Load failed: {exc}", file=sys.stderr)
        return 1

    if path is None:
        _reattach_tty()

    config = config_paths.load_config()
    for warning in config["WARNINGS"]:
        log.warning("config: %s", warning)

    def curses_main(stdscr):
        return Orchestrator(stdscr, tree, config, file_path=path).run()

    try:
        result = curses.wrapper(curses_main)
    except Exception:
        log.exception("session aborted")
        raise

    if result.kind == TransitionResult.RETURN:
        print(to_output(result.value))
    return 0


if __name__ == "__main__":
    sys.exit(main())
