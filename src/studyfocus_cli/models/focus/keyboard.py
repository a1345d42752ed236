"""Non-blocking terminal input: key presses and terminal focus events.

Terminals that support xterm focus reporting send ``ESC [ I`` when the
window gains focus and ``ESC [ O`` when it loses it, once the mode is
switched on with ``ESC [ ? 1004 h``.
"""

import os
import select
import sys
import termios
import tty

FOCUS_IN = "focus_in"
FOCUS_OUT = "focus_out"

ENABLE_FOCUS_REPORTING = "\x1b[?1004h"
DISABLE_FOCUS_REPORTING = "\x1b[?1004l"

_ESCAPES = {"\x1b[I": FOCUS_IN, "\x1b[O": FOCUS_OUT}


def parse_input(data: str) -> list[str]:
    """Split raw terminal input into events.

    Focus escape sequences become :data:`FOCUS_IN` / :data:`FOCUS_OUT`;
    other escape sequences (arrow keys and the like) are dropped; printable
    characters are returned lower-cased, one event each.
    """
    events: list[str] = []
    i = 0
    while i < len(data):
        if data.startswith("\x1b[", i):
            seq = data[i : i + 3]
            if seq in _ESCAPES:
                events.append(_ESCAPES[seq])
                i += 3
                continue
            # skip an unknown CSI sequence up to its final byte
            j = i + 2
            while j < len(data) and not ("@" <= data[j] <= "~"):
                j += 1
            i = j + 1
            continue
        char = data[i]
        if char != "\x1b":
            events.append(char.lower())
        i += 1
    return events


def split_pending(data: str) -> tuple[str, str]:
    """Split off a trailing escape sequence that has not fully arrived yet.

    Returns ``(complete, pending)``; ``pending`` is a lone ``ESC`` or a CSI
    still missing its final byte, to be prepended to the next read.
    """
    start = data.rfind("\x1b")
    if start == -1:
        return data, ""
    tail = data[start:]
    if tail == "\x1b" or (
        tail.startswith("\x1b[") and not any("@" <= c <= "~" for c in tail[2:])
    ):
        return data[:start], tail
    return data, ""


class KeyboardHandler:
    """Reads stdin without blocking while the terminal is in cbreak mode."""

    def __init__(self, focus_reporting: bool = True):
        try:
            self.fd = sys.stdin.fileno()
        except (OSError, ValueError):
            # stdin replaced by a non-file stream
            self.fd = None
        self.focus_reporting = focus_reporting
        self.old_settings = None
        self._pending = ""
        self._setup()

    def _setup(self):
        """Setup terminal for non-blocking input."""
        if self.fd is None:
            return
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except termios.error:
            # not a tty
            self.old_settings = None
        if self.focus_reporting and self.old_settings is not None:
            sys.stdout.write(ENABLE_FOCUS_REPORTING)
            sys.stdout.flush()

    def get_events(self) -> list[str]:
        """Return all input events available right now."""
        if self.old_settings is None:
            return []
        if not select.select([self.fd], [], [], 0)[0]:
            return []
        data = self._pending + os.read(self.fd, 64).decode("utf-8", errors="ignore")
        data, self._pending = split_pending(data)
        return parse_input(data)

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings is None:
            return
        if self.focus_reporting:
            sys.stdout.write(DISABLE_FOCUS_REPORTING)
            sys.stdout.flush()
        termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
        self.old_settings = None

    def __enter__(self) -> "KeyboardHandler":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
