"""Guard that puts the terminal into prompt mode and always puts it back."""

from __future__ import annotations

import logging
from types import TracebackType

from discourse.ui.backend import Backend, ClearType, MoveDirection, Size
from discourse.ui.style import Color, Styled

logger = logging.getLogger(__name__)


class TerminalState:
    """Owns a backend for the length of a prompt session.

    :meth:`acquire` enables raw mode (and hides the cursor when asked to);
    :meth:`release` undoes exactly that and is safe to call any number of
    times.  Used as a context manager the terminal is restored on every exit
    path, and a guard that is garbage collected while still enabled restores
    it too.

    All :class:`Backend` operations are forwarded, so the guard can be passed
    wherever a backend is expected.
    """

    def __init__(self, backend: Backend, hide_cursor: bool = False) -> None:
        self.backend = backend
        self.hide_cursor_on_enter = hide_cursor
        self.enabled = False

    # -- lifecycle ----------------------------------------------------------

    def acquire(self) -> None:
        if self.enabled:
            return
        self.enabled = True
        if self.hide_cursor_on_enter:
            self.backend.hide_cursor()
        self.backend.enable_raw_mode()
        logger.debug("terminal acquired (hide_cursor=%s)", self.hide_cursor_on_enter)

    def release(self) -> None:
        if not self.enabled:
            return
        self.backend.disable_raw_mode()
        if self.hide_cursor_on_enter:
            self.backend.show_cursor()
        self.backend.flush()
        self.enabled = False
        logger.debug("terminal released")

    init = acquire
    reset = release

    def __enter__(self) -> TerminalState:
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._release_quietly()

    def __del__(self) -> None:
        self._release_quietly()

    def _release_quietly(self) -> None:
        try:
            self.release()
        except Exception as e:
            # The original error (if any) is the interesting one.
            logger.debug("error while restoring the terminal: %s", e)

    # -- Backend forwarding -------------------------------------------------

    def size(self) -> Size:
        return self.backend.size()

    def get_cursor_pos(self) -> tuple[int, int]:
        return self.backend.get_cursor_pos()

    def move_cursor_to(self, x: int, y: int) -> None:
        self.backend.move_cursor_to(x, y)

    def move_cursor(self, direction: MoveDirection, n: int = 1) -> None:
        self.backend.move_cursor(direction, n)

    def move_cursor_up(self, n: int = 1) -> None:
        self.backend.move_cursor(MoveDirection.UP, n)

    def move_cursor_down(self, n: int = 1) -> None:
        self.backend.move_cursor(MoveDirection.DOWN, n)

    def clear(self, clear_type: ClearType) -> None:
        self.backend.clear(clear_type)

    def scroll(self, lines: int) -> None:
        self.backend.scroll(lines)

    def enable_raw_mode(self) -> None:
        self.backend.enable_raw_mode()

    def disable_raw_mode(self) -> None:
        self.backend.disable_raw_mode()

    def hide_cursor(self) -> None:
        self.backend.hide_cursor()

    def show_cursor(self) -> None:
        self.backend.show_cursor()

    def set_fg(self, color: Color) -> None:
        self.backend.set_fg(color)

    def set_bg(self, color: Color) -> None:
        self.backend.set_bg(color)

    def write(self, text: str) -> None:
        self.backend.write(text)

    def write_styled(self, styled: Styled) -> None:
        self.backend.write_styled(styled)

    def flush(self) -> None:
        self.backend.flush()
