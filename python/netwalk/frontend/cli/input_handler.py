"""Single-keypress reader for the terminal frontends.

Arrow keys and WASD move the focus cursor, Space/Enter turn the focused tile.
Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable


# -- key mapping ----------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    " ": "rotate",
    "e": "rotate",
    "\r": "enter",
    "\n": "enter",
    "z": "rotate_back",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "restart",
    "t": "toggle",
    "n": "hint",
    "v": "solve",
    "h": "help",
    "?": "help",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    action = _KEY_MAP.get(ch) or _KEY_MAP.get(ch.lower())
    if action:
        return action
    return ch if ch.isprintable() else ""


def _decode_escape(read_next: Callable[[], str | None]) -> str:
    """Finish an ESC sequence; ``read_next`` returns None when input runs dry."""
    ch2 = read_next()
    if ch2 != "[":
        return "quit"  # bare Escape
    ch3 = read_next()
    if ch3 is None:
        return ""
    return _ARROW_MAP.get(ch3, "")


# -- platform readers -----------------------------------------------------------


def _getch_unix() -> str:
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
    return ch


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    return msvcrt.getch().decode("utf-8", errors="ignore")


_getch = _getch_windows if os.name == "nt" else _getch_unix


# -- public API -------------------------------------------------------------------


def get_key() -> str:
    """Block for one keypress and return a normalised action string.

    Possible return values:
        "up", "down", "left", "right"  — move the focus cursor
        "rotate", "enter"              — turn the focused tile clockwise
        "rotate_back"                  — turn it counter-clockwise
        "hint", "solve"                — n / v
        "restart", "toggle"            — r (new game) / t (wrap edges)
        "quit", "help"                 — q, Ctrl-C, Escape / h, ?
        "<char>"                       — unmapped printable char
        ""                             — unrecognised key
    """
    ch = _getch()
    if ch == "\x1b":
        return _decode_escape(_getch)
    return _resolve(ch)


def get_key_timeout(timeout: float) -> str | None:
    """Like ``get_key`` but gives up after *timeout* seconds, returning None.

    Reads with ``os.read`` so that ``select`` sees the remaining bytes of a
    multi-byte arrow-key sequence.
    """
    if os.name == "nt":
        import msvcrt  # type: ignore[import-not-found]
        import time

        end = time.monotonic() + timeout
        while time.monotonic() < end:
            if msvcrt.kbhit():
                return get_key()
            time.sleep(0.02)
        return None

    import select
    import termios
    import tty

    fd = sys.stdin.fileno()

    def read_ready(wait: float) -> str | None:
        ready, _, _ = select.select([fd], [], [], wait)
        if not ready:
            return None
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = read_ready(timeout)
        if ch is None:
            return None
        if ch == "\x1b":
            return _decode_escape(lambda: read_ready(0.1))
        return _resolve(ch)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
