"""Backend abstraction over a real terminal.

Provides the ``Backend`` protocol every widget and the prompt runner write
through, and ``TerminalBackend``, a concrete implementation that drives a
terminal with ANSI escape sequences and toggles raw mode with :mod:`termios`
and :mod:`tty`.

Every operation may raise :class:`OSError` when the terminal is unavailable;
callers propagate it.
"""

from __future__ import annotations

import enum
import logging
import os
import re
import select
import sys
import termios
import tty
from typing import NamedTuple, Protocol, TextIO

from discourse.ui.config import get_config
from discourse.ui.style import Color, Styled

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_MOVE_TO_FMT = "\x1b[{};{}H"
_CURSOR_UP_FMT = "\x1b[{}A"
_CURSOR_DOWN_FMT = "\x1b[{}B"
_CURSOR_RIGHT_FMT = "\x1b[{}C"
_CURSOR_LEFT_FMT = "\x1b[{}D"
_SCROLL_UP_FMT = "\x1b[{}S"
_SCROLL_DOWN_FMT = "\x1b[{}T"
_SGR_FMT = "\x1b[{}m"
_SGR_RESET = "\x1b[0m"
_QUERY_CURSOR = "\x1b[6n"

_CURSOR_REPORT_RE = re.compile(rb"\x1b\[(\d+);(\d+)R")


class ClearType(enum.Enum):
    ALL = "\x1b[2J"
    FROM_CURSOR_DOWN = "\x1b[J"
    FROM_CURSOR_UP = "\x1b[1J"
    CURRENT_LINE = "\x1b[2K"
    UNTIL_NEW_LINE = "\x1b[K"


class MoveDirection(enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class Size(NamedTuple):
    width: int
    height: int


# ---------------------------------------------------------------------------
# Backend protocol
# ---------------------------------------------------------------------------


class Backend(Protocol):
    """Capabilities of a terminal device.  Coordinates are 0-indexed."""

    def size(self) -> Size: ...

    def get_cursor_pos(self) -> tuple[int, int]:
        """Return the cursor position as ``(column, row)``."""
        ...

    def move_cursor_to(self, x: int, y: int) -> None: ...

    def move_cursor(self, direction: MoveDirection, n: int = 1) -> None: ...

    def move_cursor_up(self, n: int = 1) -> None: ...

    def move_cursor_down(self, n: int = 1) -> None: ...

    def clear(self, clear_type: ClearType) -> None: ...

    def scroll(self, lines: int) -> None:
        """Scroll the visible region; negative moves content up."""
        ...

    def enable_raw_mode(self) -> None: ...

    def disable_raw_mode(self) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def set_fg(self, color: Color) -> None: ...

    def set_bg(self, color: Color) -> None: ...

    def write(self, text: str) -> None: ...

    def write_styled(self, styled: Styled) -> None: ...

    def flush(self) -> None: ...


# ---------------------------------------------------------------------------
# TerminalBackend implementation
# ---------------------------------------------------------------------------


class TerminalBackend:
    """Backend writing ANSI sequences to *output* and reading from *input_fd*.

    Output is buffered until :meth:`flush`.  Raw mode saves the original
    ``termios`` attributes and restores them on :meth:`disable_raw_mode`.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        input_fd: int | None = None,
        *,
        write_log_path: str | None = None,
        cursor_report_timeout: float = 1.0,
    ) -> None:
        self._output = sys.stdout if output is None else output
        self._input_fd = sys.stdin.fileno() if input_fd is None else input_fd
        self._buffer: list[str] = []
        self._unread = bytearray()
        self._original_termios: list | None = None
        self._cursor_report_timeout = cursor_report_timeout
        self._write_log_path = (
            get_config().write_log_path if write_log_path is None else write_log_path
        )

    # -- size / cursor queries ---------------------------------------------

    def size(self) -> Size:
        try:
            ts = os.get_terminal_size(self._output.fileno())
        except (ValueError, OSError):
            return Size(80, 24)
        return Size(ts.columns, ts.lines)

    def get_cursor_pos(self) -> tuple[int, int]:
        """Ask the terminal for the cursor position (needs raw mode)."""
        self.flush()
        self._raw_write(_QUERY_CURSOR)

        response = b""
        while True:
            readable, _, _ = select.select(
                [self._input_fd], [], [], self._cursor_report_timeout
            )
            if not readable:
                self._unread += response
                raise OSError("terminal did not report the cursor position")
            chunk = os.read(self._input_fd, 64)
            if not chunk:
                raise OSError("input closed while waiting for the cursor position")
            response += chunk
            m = _CURSOR_REPORT_RE.search(response)
            if m:
                # Keys typed around the report still belong to the user.
                self._unread += response[: m.start()] + response[m.end() :]
                row, col = int(m.group(1)), int(m.group(2))
                return col - 1, row - 1

    def take_unread_input(self) -> bytes:
        """Return and forget input read while waiting for a cursor report."""
        data = bytes(self._unread)
        self._unread.clear()
        return data

    # -- cursor movement ----------------------------------------------------

    def move_cursor_to(self, x: int, y: int) -> None:
        self.write(_MOVE_TO_FMT.format(y + 1, x + 1))

    def move_cursor(self, direction: MoveDirection, n: int = 1) -> None:
        if n <= 0:
            return
        fmt = {
            MoveDirection.UP: _CURSOR_UP_FMT,
            MoveDirection.DOWN: _CURSOR_DOWN_FMT,
            MoveDirection.RIGHT: _CURSOR_RIGHT_FMT,
            MoveDirection.LEFT: _CURSOR_LEFT_FMT,
        }[direction]
        self.write(fmt.format(n))

    def move_cursor_up(self, n: int = 1) -> None:
        self.move_cursor(MoveDirection.UP, n)

    def move_cursor_down(self, n: int = 1) -> None:
        self.move_cursor(MoveDirection.DOWN, n)

    # -- screen manipulation ------------------------------------------------

    def clear(self, clear_type: ClearType) -> None:
        self.write(clear_type.value)

    def scroll(self, lines: int) -> None:
        if lines < 0:
            self.write(_SCROLL_UP_FMT.format(-lines))
        elif lines > 0:
            self.write(_SCROLL_DOWN_FMT.format(lines))

    # -- modes --------------------------------------------------------------

    def enable_raw_mode(self) -> None:
        if self._original_termios is not None:
            return
        try:
            self._original_termios = termios.tcgetattr(self._input_fd)
            tty.setraw(self._input_fd)
        except termios.error as e:
            raise OSError(f"cannot enable raw mode: {e}") from e

    def disable_raw_mode(self) -> None:
        if self._original_termios is None:
            return
        attrs, self._original_termios = self._original_termios, None
        try:
            termios.tcsetattr(self._input_fd, termios.TCSADRAIN, attrs)
        except termios.error as e:
            raise OSError(f"cannot restore terminal mode: {e}") from e

    def hide_cursor(self) -> None:
        self.write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(_SHOW_CURSOR)

    # -- output -------------------------------------------------------------

    def set_fg(self, color: Color) -> None:
        self.write(_SGR_FMT.format(color.fg_code))

    def set_bg(self, color: Color) -> None:
        self.write(_SGR_FMT.format(color.bg_code))

    def write(self, text: str) -> None:
        self._buffer.append(text)

    def write_styled(self, styled: Styled) -> None:
        sgr = styled.sgr()
        if sgr:
            self.write(sgr + styled.text + _SGR_RESET)
        else:
            self.write(styled.text)

    def flush(self) -> None:
        if not self._buffer:
            return
        data = "".join(self._buffer)
        self._buffer.clear()
        self._raw_write(data)

    # -- private ------------------------------------------------------------

    def _raw_write(self, data: str) -> None:
        self._output.write(data)
        self._output.flush()

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a", encoding="utf-8") as f:
                    f.write(data)
            except OSError as e:
                logger.debug("cannot append to write log %s: %s", self._write_log_path, e)
