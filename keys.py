import curses

# A key is a curses key code (ASCII byte, control byte or KEY_*) or, for text
# outside ASCII, the decoded character itself.
Key = int | str

NAMED_KEYS = {
    "esc": 27,
    "enter": 10,
    "tab": 9,
    "space": ord(" "),
    "backspace": curses.KEY_BACKSPACE,
    "delete": curses.KEY_DC,
    "up": curses.KEY_UP,
    "down": curses.KEY_DOWN,
    "left": curses.KEY_LEFT,
    "right": curses.KEY_RIGHT,
    "home": curses.KEY_HOME,
    "end": curses.KEY_END,
    "pageup": curses.KEY_PPAGE,
    "pagedown": curses.KEY_NPAGE,
}

_NAMES_BY_CODE = {code: name for name, code in NAMED_KEYS.items()}


def _utf8_length(lead: int) -> int:
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


def read_key(getch) -> Key:
    """Read one key press from `getch`, joining UTF-8 bytes into a character."""
    ch = getch()
    length = _utf8_length(ch)
    if not length:
        return ch

    raw = bytearray([ch])
    for _ in range(length - 1):
        nxt = getch()
        if not 0x80 <= nxt <= 0xBF:
            return nxt
        raw.append(nxt)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return ch


def parse_key(chord: str) -> Key:
    """Turn a chord such as "q", "<esc>" or "<c-x>" into a key."""
    if not isinstance(chord, str) or not chord:
        raise ValueError(f"invalid key chord: {chord!r}")
    if len(chord) == 1:
        return ord(chord) if ord(chord) < 0x80 else chord

    if not (chord.startswith("<") and chord.endswith(">")):
        raise ValueError(f"invalid key chord: {chord!r}")
    name = chord[1:-1].lower()
    if name in NAMED_KEYS:
        return NAMED_KEYS[name]
    if name.startswith("c-") and len(name) == 3 and "a" <= name[2] <= "z":
        return ord(name[2]) - ord("a") + 1
    raise ValueError(f"unknown key: {chord!r}")


def repr_key(key: Key) -> str:
    if isinstance(key, str):
        return key
    if key in _NAMES_BY_CODE:
        return f"<{_NAMES_BY_CODE[key]}>"
    if 1 <= key <= 26:
        return f"<c-{chr(key - 1 + ord('a'))}>"
    if 32 < key < 127:
        return chr(key)
    return f"<{key}>"
