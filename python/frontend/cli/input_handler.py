"""Single-keypress reader for the terminal frontend.

Maps arrow keys, WASD, and letter commands to action strings without
requiring Enter.  Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
import time

# -- shared key mapping --------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "r": "shuffle",
    "v": "solve",
    "x": "solve_direct",
    "f": "place",
    "c": "cancel",
    "n": "new",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def resolve(ch: str) -> str:
    """Map a raw character to its action string (``""`` if unmapped)."""
    return _KEY_MAP.get(ch.lower() if ch.isalpha() else ch, "")


# -- platform readers ----------------------------------------------------------


def _read_windows(timeout: float) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    end = time.monotonic() + timeout
    while time.monotonic() < end:
        if msvcrt.kbhit():
            ch = msvcrt.getwch()
            if ch in ("\x00", "\xe0"):
                return {"H": "up", "P": "down", "K": "left", "M": "right"}.get(
                    msvcrt.getwch(), ""
                )
            return "quit" if ch == "\x1b" else resolve(ch)
        time.sleep(0.02)
    return None


def _read_unix(timeout: float) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()

    def pending(wait: float) -> str | None:
        ready, _, _ = select.select([fd], [], [], wait)
        if not ready:
            return None
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = pending(timeout)
        if ch is None:
            return None
        if ch != "\x1b":
            return resolve(ch)
        # Arrow keys arrive as ESC [ A/B/C/D; a bare Escape quits.
        if pending(0.1) != "[":
            return "quit"
        return _ARROW_MAP.get(pending(0.1) or "", "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


# -- public API ----------------------------------------------------------------


def get_key_timeout(timeout: float) -> str | None:
    """Read one keypress, waiting at most *timeout* seconds.

    Returns ``None`` on timeout, otherwise one of:
        "up", "down", "left", "right"  slide a tile into the blank
        "shuffle", "solve", "solve_direct", "place", "cancel", "new", "quit"
        ""                             unrecognised key

    Reads are unbuffered (``os.read``) so ``select`` sees the remaining
    bytes of multi-byte escape sequences.
    """
    if os.name == "nt":
        return _read_windows(timeout)
    return _read_unix(timeout)
