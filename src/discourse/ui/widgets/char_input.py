"""Input holding at most one character."""

from __future__ import annotations

from typing import Callable

from discourse.ui.backend import Backend
from discourse.ui.events import KeyCode, KeyEvent
from discourse.ui.layout import Layout
from discourse.ui.utils import grapheme_width, hard_wrap
from discourse.ui.widget import end_of


class CharInput:
    """A single character answer, drawn inline.

    Typing replaces the current character; Backspace and Delete clear it.
    *filter_map* follows the :class:`StringInput` convention: it returns the
    character to keep, or ``None`` to drop the key.
    """

    def __init__(self, filter_map: Callable[[str], str | None] | None = None) -> None:
        self._value: str | None = None
        self._filter_map = filter_map

    @property
    def value(self) -> str | None:
        return self._value

    def set_value(self, value: str | None) -> None:
        self._value = value or None

    def has_value(self) -> bool:
        return self._value is not None

    def finish(self) -> str | None:
        """Return the character and clear the input."""
        value, self._value = self._value, None
        return value

    def handle_key(self, key: KeyEvent) -> bool:
        if key.code is KeyCode.CHAR and key.is_plain_char:
            char = key.char
            if self._filter_map is not None:
                char = self._filter_map(char)
            if not char:
                return False
            self._value = char
            return True

        if key.code in (KeyCode.BACKSPACE, KeyCode.DELETE):
            if self._value is None:
                return False
            self._value = None
            return True

        return False

    def _rows(self, layout: Layout) -> list[list[str]]:
        return hard_wrap(
            self._value or "",
            layout.line_width(),
            layout.available_width(),
            cursor_room=True,
        )

    def render(self, layout: Layout, backend: Backend) -> None:
        for i, row in enumerate(self._rows(layout)):
            if i:
                layout.next_line(backend)
            backend.write("".join(row))
            layout.line_offset += sum(grapheme_width(g) for g in row)

    def height(self, layout: Layout) -> int:
        rows = self._rows(layout)
        for i, row in enumerate(rows):
            if i:
                layout.next_line()
            layout.line_offset += sum(grapheme_width(g) for g in row)
        return len(rows)

    def cursor_pos(self, layout: Layout) -> tuple[int, int]:
        return end_of(self, layout)
