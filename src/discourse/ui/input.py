"""Input - the runner that drives a prompt until it produces an answer.

The runner owns the terminal for the length of a session.  It remembers the
row the prompt starts on (``base_row``), scrolls the terminal when the prompt
would run past the bottom edge, and redraws the prompt from that row after
every key that changed it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

from discourse.ui import symbols
from discourse.ui.backend import Backend, ClearType, Size
from discourse.ui.config import UiConfig, get_config
from discourse.ui.errors import EndOfInput, Interrupted, ValidationError
from discourse.ui.events import KeyCode, KeyEvent
from discourse.ui.layout import Layout
from discourse.ui.prompt import Prompt, Validation
from discourse.ui.style import red
from discourse.ui.terminal_state import TerminalState
from discourse.ui.widget import Widget
from discourse.ui.widgets.text import Text

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Columns taken by the error glyph and the space after it.
_ERROR_INDENT = 2


class Input(Generic[T]):
    """Runs *prompt* against *backend*.

    Call :meth:`run` with an iterable of key events.  It returns the prompt's
    answer, or raises :class:`Interrupted` (Ctrl-C) or :class:`EndOfInput`.
    Errors from the backend or the event source propagate as they are, after
    the terminal has been restored.
    """

    def __init__(
        self,
        prompt: Prompt[T],
        backend: Backend,
        config: UiConfig | None = None,
    ) -> None:
        config = get_config() if config is None else config
        self.prompt = prompt
        self.backend = TerminalState(backend, hide_cursor=config.hide_cursor)
        self.base_row = 0
        self.size = Size(0, 0)

    def hide_cursor(self) -> Input[T]:
        """Keep the cursor hidden while the prompt is running."""
        self.backend.hide_cursor_on_enter = True
        return self

    # -- public -------------------------------------------------------------

    def run(self, events: Iterable[KeyEvent]) -> T:
        keys: Iterator[KeyEvent] = iter(events)

        with self.backend:
            self.base_row = self.backend.get_cursor_pos()[1]
            logger.debug("prompt started at row %d", self.base_row)
            self._render()

            while True:
                key = next(keys, None)
                if key is None:
                    key = KeyEvent(KeyCode.NULL)

                if key.is_ctrl("c"):
                    self._exit()
                    logger.debug("prompt interrupted")
                    raise Interrupted()

                if key.code is KeyCode.NULL:
                    self._exit()
                    logger.debug("prompt ran out of input")
                    raise EndOfInput()

                if key.code is KeyCode.ESC and self.prompt.has_default():
                    self._finish()
                    return self.prompt.finish_default()

                if key.code is KeyCode.ENTER:
                    try:
                        validation = self.prompt.validate()
                    except ValidationError as e:
                        logger.debug("validation failed: %s", e)
                        self._print_error(e.error)
                        continue
                    if validation is Validation.FINISH:
                        self._finish()
                        return self.prompt.finish()
                    handled = True
                else:
                    handled = self.prompt.handle_key(key)

                if handled:
                    self._render()

    # -- row bookkeeping ----------------------------------------------------

    def _layout(self) -> Layout:
        return Layout(self.size.width, self.size.height, offset_y=self.base_row)

    def _adjust_scrollback(self, height: int) -> None:
        """Scroll so *height* rows starting at ``base_row`` fit on screen."""
        overflow = self.base_row + height - self.size.height
        if overflow <= 0:
            return

        distance = min(overflow + 1, self.base_row)
        if distance <= 0:
            return
        self.backend.scroll(-distance)
        self.backend.move_cursor_up(distance)
        self.base_row -= distance
        logger.debug("scrolled up %d rows, prompt now at row %d", distance, self.base_row)

    def _clear(self) -> None:
        self.backend.move_cursor_to(0, self.base_row)
        self.backend.clear(ClearType.FROM_CURSOR_DOWN)

    def _place_cursor(self) -> None:
        if not self.backend.hide_cursor_on_enter:
            col, row = self.prompt.cursor_pos(self._layout())
            self.backend.move_cursor_to(col, self.base_row + row)
        self.backend.flush()

    # -- drawing ------------------------------------------------------------

    def _render(self) -> None:
        self.size = self.backend.size()
        height = self.prompt.height(self._layout())
        self._adjust_scrollback(height)
        self._clear()
        self.prompt.render(self._layout(), self.backend)
        self._place_cursor()

    def _print_error(self, error: str | Widget) -> None:
        widget: Widget = Text(error) if isinstance(error, str) else error

        self.size = self.backend.size()
        height = self.prompt.height(self._layout())
        error_height = widget.height(self._error_layout(height))
        self._adjust_scrollback(height + error_height)

        self.backend.move_cursor_to(0, self.base_row + height)
        self.backend.clear(ClearType.FROM_CURSOR_DOWN)
        self.backend.write_styled(red(symbols.CROSS))
        self.backend.write(" ")
        widget.render(self._error_layout(height), self.backend)
        self._place_cursor()

    def _error_layout(self, prompt_height: int) -> Layout:
        return Layout(
            self.size.width,
            self.size.height,
            offset_y=self.base_row + prompt_height,
            line_offset=_ERROR_INDENT,
        )

    # -- leaving ------------------------------------------------------------

    def _exit(self) -> None:
        """Leave the prompt on screen and put the cursor on the row below it."""
        self.size = self.backend.size()
        height = self.prompt.height(self._layout())
        self._adjust_scrollback(height + 1)
        self.backend.move_cursor_to(0, self.base_row + height)
        self.backend.clear(ClearType.FROM_CURSOR_DOWN)
        self.backend.release()

    def _finish(self) -> None:
        self._clear()
        self.backend.release()
        logger.debug("prompt finished")

