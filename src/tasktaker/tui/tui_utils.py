"""TUI utility functions for terminal input and display helpers."""

from __future__ import annotations

import codecs
import os
import select
import shutil
import sys
import termios
import tty
from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO, TextIO

ESCAPE_SEQUENCES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1b[3~": "delete",
    "\x1bOP": "f1",
    "\x1b[11~": "f1",
    "\x1b[H": "home",
    "\x1b[F": "end",
}

CONTROL_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\t": "tab",
    "\x04": "ctrl+d",
    "\x05": "ctrl+e",
    "\x07": "ctrl+g",
    "\x11": "ctrl+q",
    "\x15": "ctrl+u",
}


def truncate_text(text: str, max_len: int) -> str:
    """
    Truncate text to max length, adding ellipsis if needed.

    Args:
        text: Text to truncate
        max_len: Maximum length including ellipsis

    Returns:
        Truncated text with "..." suffix if text exceeds max_len

    Examples:
        >>> truncate_text("short", 10)
        'short'
        >>> truncate_text("this is a long text", 10)
        'this is...'
    """
    if len(text) <= max_len:
        return text

    if max_len <= 3:
        return "..."[:max_len]

    return text[: max_len - 3] + "..."


def get_terminal_size() -> tuple[int, int]:
    """
    Get terminal size as (columns, rows) tuple.

    Returns:
        Tuple of (columns, rows), defaults to (80, 24) if unavailable
    """
    size = shutil.get_terminal_size(fallback=(80, 24))
    return (size.columns, size.lines)


def parse_keys(data: str) -> list[str]:
    """
    Split raw terminal input into key names.

    Escape sequences become names like "up" or "delete", control characters
    become names like "enter" or "ctrl+e", and printable characters are
    returned unchanged. Unknown escape sequences collapse to "escape".

    Examples:
        >>> parse_keys("hi\\r")
        ['h', 'i', 'enter']
        >>> parse_keys("\\x1b[A\\x05")
        ['up', 'ctrl+e']
    """
    keys: list[str] = []
    index = 0
    while index < len(data):
        char = data[index]

        if char == "\x1b":
            for sequence, name in ESCAPE_SEQUENCES.items():
                if data.startswith(sequence, index):
                    keys.append(name)
                    index += len(sequence)
                    break
            else:
                keys.append("escape")
                index += 1
                # Skip the remainder of an unrecognized CSI sequence
                if data.startswith("[", index):
                    index += 1
                    while index < len(data) and not ("@" <= data[index] <= "~"):
                        index += 1
                    index += 1
            continue

        if char in CONTROL_KEYS:
            keys.append(CONTROL_KEYS[char])
        elif char.isprintable():
            keys.append(char)
        index += 1

    return keys


def split_incomplete_escape(data: str) -> tuple[str, str]:
    """
    Split off a trailing escape sequence that may still be arriving.

    Returns:
        Tuple of (complete, tail) where tail is a prefix of a known escape
        sequence or an unterminated CSI sequence, and complete is the rest

    Examples:
        >>> split_incomplete_escape("ab\\x1b[")
        ('ab', '\\x1b[')
        >>> split_incomplete_escape("ab\\x1b[A")
        ('ab\\x1b[A', '')
    """
    start = data.rfind("\x1b")
    if start == -1:
        return data, ""

    tail = data[start:]
    if any(seq.startswith(tail) and seq != tail for seq in ESCAPE_SEQUENCES):
        return data[:start], tail
    if tail.startswith("\x1b[") and not any("@" <= char <= "~" for char in tail[2:]):
        return data[:start], tail
    return data, ""


@contextmanager
def cbreak_terminal(stream: TextIO | BinaryIO | None = None) -> Iterator[None]:
    """Put the terminal in cbreak mode with flow control off for the block.

    Disabling IXON lets Ctrl+Q and Ctrl+S reach the application instead of
    being consumed as XON/XOFF. Does nothing when the stream is not a terminal.
    """
    stream = stream or sys.stdin
    if not stream.isatty():
        yield
        return

    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        attrs = termios.tcgetattr(fd)
        attrs[0] &= ~termios.IXON
        termios.tcsetattr(fd, termios.TCSANOW, attrs)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


class KeyReader:
    """Reads key names from a terminal stream without losing split input.

    Bytes of a multi-byte character, or of an escape sequence, that arrive in
    separate reads are held until the rest comes in. A held escape prefix is
    released as-is once a poll finds no further input.
    """

    def __init__(self, stream: TextIO | BinaryIO | None = None):
        self.stream = stream or sys.stdin
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")
        self._pending = ""

    def read(self, timeout: float = 0.1) -> list[str]:
        """Return keys available within timeout."""
        ready, _, _ = select.select([self.stream], [], [], timeout)
        if not ready:
            if not self._pending:
                return []
            pending, self._pending = self._pending, ""
            return parse_keys(pending)

        data = os.read(self.stream.fileno(), 1024)
        text = self._pending + self._decoder.decode(data)
        complete, self._pending = split_incomplete_escape(text)
        return parse_keys(complete)
