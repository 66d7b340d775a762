"""Key events and the terminal key-event source.

A :class:`KeyEvent` is a logical key code plus a modifier set.  Raw terminal
input is decoded by :func:`parse_key_event`, which understands legacy VT/xterm
escape sequences (with ``CSI 1;<mod>`` modifier encoding), control bytes, and
ESC-prefixed Alt combinations.  :class:`TerminalEvents` is the blocking,
pull-based source the prompt runner consumes.
"""

from __future__ import annotations

import codecs
import enum
import logging
import os
import re
import select
import sys
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from discourse.ui.backend import TerminalBackend

logger = logging.getLogger(__name__)

ESC = "\x1b"

# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------


class KeyCode(enum.Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    ENTER = "enter"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "pageUp"
    PAGE_DOWN = "pageDown"
    TAB = "tab"
    BACK_TAB = "backTab"
    DELETE = "delete"
    INSERT = "insert"
    ESC = "escape"
    # The event source has no more input.
    NULL = "null"


class KeyModifiers(enum.Flag):
    NONE = 0
    SHIFT = 1
    ALT = 2
    CONTROL = 4


@dataclass(frozen=True)
class KeyEvent:
    """A key press.  ``char`` is only set when ``code`` is ``KeyCode.CHAR``."""

    code: KeyCode
    modifiers: KeyModifiers = KeyModifiers.NONE
    char: str = ""

    @classmethod
    def from_char(
        cls, char: str, modifiers: KeyModifiers = KeyModifiers.NONE
    ) -> KeyEvent:
        return cls(KeyCode.CHAR, modifiers, char)

    def is_ctrl(self, char: str) -> bool:
        """Return ``True`` for Ctrl+*char* (case-insensitive)."""
        return (
            self.code is KeyCode.CHAR
            and KeyModifiers.CONTROL in self.modifiers
            and self.char.lower() == char.lower()
        )

    @property
    def is_plain_char(self) -> bool:
        """A character typed without Ctrl or Alt."""
        return self.code is KeyCode.CHAR and not (
            self.modifiers & (KeyModifiers.CONTROL | KeyModifiers.ALT)
        )


# ---------------------------------------------------------------------------
# Escape-sequence tables
# ---------------------------------------------------------------------------

LEGACY_KEY_SEQUENCES: dict[str, KeyCode] = {
    "\x1b[A": KeyCode.UP,
    "\x1b[B": KeyCode.DOWN,
    "\x1b[C": KeyCode.RIGHT,
    "\x1b[D": KeyCode.LEFT,
    "\x1b[H": KeyCode.HOME,
    "\x1b[F": KeyCode.END,
    "\x1bOA": KeyCode.UP,
    "\x1bOB": KeyCode.DOWN,
    "\x1bOC": KeyCode.RIGHT,
    "\x1bOD": KeyCode.LEFT,
    "\x1bOH": KeyCode.HOME,
    "\x1bOF": KeyCode.END,
    "\x1b[1~": KeyCode.HOME,
    "\x1b[2~": KeyCode.INSERT,
    "\x1b[3~": KeyCode.DELETE,
    "\x1b[4~": KeyCode.END,
    "\x1b[5~": KeyCode.PAGE_UP,
    "\x1b[6~": KeyCode.PAGE_DOWN,
    "\x1b[7~": KeyCode.HOME,
    "\x1b[8~": KeyCode.END,
    "\x1b[Z": KeyCode.BACK_TAB,
}

_LETTER_KEYS: dict[str, KeyCode] = {
    "A": KeyCode.UP,
    "B": KeyCode.DOWN,
    "C": KeyCode.RIGHT,
    "D": KeyCode.LEFT,
    "H": KeyCode.HOME,
    "F": KeyCode.END,
}

_TILDE_KEYS: dict[int, KeyCode] = {
    1: KeyCode.HOME,
    2: KeyCode.INSERT,
    3: KeyCode.DELETE,
    4: KeyCode.END,
    5: KeyCode.PAGE_UP,
    6: KeyCode.PAGE_DOWN,
    7: KeyCode.HOME,
    8: KeyCode.END,
}

# CSI 1;<mod> <letter>  e.g. ESC[1;5A for Ctrl+Up
_MODIFIED_LETTER_RE = re.compile(r"^\x1b\[1;(\d+)([ABCDHF])$")
# CSI <n>;<mod> ~  e.g. ESC[3;3~ for Alt+Delete
_MODIFIED_TILDE_RE = re.compile(r"^\x1b\[(\d+);(\d+)~$")


def _decode_modifier(param: int) -> KeyModifiers:
    bits = max(param - 1, 0)
    mods = KeyModifiers.NONE
    if bits & 1:
        mods |= KeyModifiers.SHIFT
    if bits & 2:
        mods |= KeyModifiers.ALT
    if bits & 4:
        mods |= KeyModifiers.CONTROL
    return mods


# ---------------------------------------------------------------------------
# parse_key_event
# ---------------------------------------------------------------------------


def parse_key_event(data: str) -> KeyEvent | None:  # noqa: C901
    """Decode one complete input sequence into a :class:`KeyEvent`.

    Returns ``None`` for sequences that don't correspond to a key (terminal
    reports, unsupported function keys).
    """
    if not data:
        return None

    code = LEGACY_KEY_SEQUENCES.get(data)
    if code is not None:
        return KeyEvent(code)

    m = _MODIFIED_LETTER_RE.match(data)
    if m:
        return KeyEvent(_LETTER_KEYS[m.group(2)], _decode_modifier(int(m.group(1))))

    m = _MODIFIED_TILDE_RE.match(data)
    if m:
        code = _TILDE_KEYS.get(int(m.group(1)))
        if code is None:
            return None
        return KeyEvent(code, _decode_modifier(int(m.group(2))))

    if data == ESC:
        return KeyEvent(KeyCode.ESC)
    if data in ("\r", "\n"):
        return KeyEvent(KeyCode.ENTER)
    if data == "\t":
        return KeyEvent(KeyCode.TAB)
    if data in ("\x7f", "\x08"):
        return KeyEvent(KeyCode.BACKSPACE)
    if data == "\x00":
        return KeyEvent.from_char(" ", KeyModifiers.CONTROL)

    # Ctrl + letter (0x01 - 0x1a)
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return KeyEvent.from_char(chr(ord(data) + ord("a") - 1), KeyModifiers.CONTROL)

    # Alt + key (ESC prefix)
    if len(data) == 2 and data[0] == ESC:
        inner = parse_key_event(data[1])
        if inner is None:
            return None
        return KeyEvent(inner.code, inner.modifiers | KeyModifiers.ALT, inner.char)

    if data.isprintable():
        return KeyEvent.from_char(data)

    return None


# ---------------------------------------------------------------------------
# Sequence splitting
# ---------------------------------------------------------------------------


def _is_complete_sequence(data: str) -> bool:
    """Whether *data* (starting with ESC) is a complete escape sequence."""
    if len(data) == 1:
        return False

    after_esc = data[1:]

    # CSI: ESC [ <params> <final byte 0x40-0x7e>
    if after_esc.startswith("["):
        if len(data) < 3:
            return False
        return 0x40 <= ord(data[-1]) <= 0x7E

    # SS3: ESC O <char>
    if after_esc.startswith("O"):
        return len(after_esc) >= 2

    # Meta key: ESC <char>
    return True


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete key sequences.

    Returns ``(sequences, remainder)`` where *remainder* is a trailing escape
    sequence that may still be waiting for more bytes.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue

        end = pos + 1
        while end <= len(buffer):
            if _is_complete_sequence(buffer[pos:end]):
                break
            end += 1
        else:
            return sequences, buffer[pos:]

        sequences.append(buffer[pos:end])
        pos = end

    return sequences, ""


# ---------------------------------------------------------------------------
# TerminalEvents
# ---------------------------------------------------------------------------


class TerminalEvents(Iterator[KeyEvent]):
    """Blocking iterator of key events read from the terminal.

    Escape sequences split across reads are reassembled; a lone ESC that is
    not followed by more bytes within *escape_timeout* seconds is reported as
    the Escape key.  End of input yields a ``KeyCode.NULL`` event.  Read
    failures raise :class:`OSError`.

    When *backend* is given, input it consumed while waiting for a cursor
    position report is delivered before anything read from *fd*.
    """

    def __init__(
        self,
        fd: int | None = None,
        *,
        backend: TerminalBackend | None = None,
        escape_timeout: float = 0.01,
        read_size: int = 4096,
    ) -> None:
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._backend = backend
        self._escape_timeout = escape_timeout
        self._read_size = read_size
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._pending: deque[KeyEvent] = deque()
        self._eof = False

    def __next__(self) -> KeyEvent:
        while not self._pending:
            if self._eof:
                return KeyEvent(KeyCode.NULL)
            if self._buffer:
                self._resolve_partial()
            else:
                self._fill(self._read())
        return self._pending.popleft()

    def _read(self) -> bytes:
        if self._backend is not None:
            unread = self._backend.take_unread_input()
            if unread:
                return unread
        return os.read(self._fd, self._read_size)

    def _fill(self, raw: bytes) -> None:
        if not raw:
            logger.debug("terminal input reached end of file")
            self._eof = True
            buffered, self._buffer = self._buffer, ""
            self._feed(buffered, flush=True)
            return
        self._feed(self._buffer + self._decoder.decode(raw), flush=False)

    def _resolve_partial(self) -> None:
        # A partial escape sequence that is not completed in time is most
        # likely a bare ESC press.
        if self._backend is not None:
            unread = self._backend.take_unread_input()
            if unread:
                self._fill(unread)
                return
        readable, _, _ = select.select([self._fd], [], [], self._escape_timeout)
        if not readable:
            buffered, self._buffer = self._buffer, ""
            self._feed(buffered, flush=True)
            return
        self._fill(os.read(self._fd, self._read_size))

    def _feed(self, data: str, *, flush: bool) -> None:
        sequences, remainder = split_sequences(data)
        if flush and remainder:
            # Give up on the partial sequence: ESC and what follows are keys.
            sequences.extend(remainder)
            remainder = ""
        self._buffer = remainder

        for sequence in sequences:
            event = parse_key_event(sequence)
            if event is None:
                logger.debug("ignoring unrecognised input %r", sequence)
                continue
            self._pending.append(event)
