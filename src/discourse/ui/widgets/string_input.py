"""Single-line text input with readline-style editing."""

from __future__ import annotations

from typing import Callable

from discourse.ui.backend import Backend
from discourse.ui.events import KeyCode, KeyEvent, KeyModifiers
from discourse.ui.layout import Layout
from discourse.ui.utils import (
    grapheme_width,
    hard_wrap,
    is_punctuation_char,
    is_whitespace_char,
    split_graphemes,
)

_WORD_MODIFIERS = KeyModifiers.CONTROL | KeyModifiers.ALT


class StringInput:
    """Editable value with a cursor, drawn inline and hard-wrapped.

    The cursor is a string index that always sits on a grapheme boundary.

    *filter_map* is applied to every typed character: it returns the text to
    insert, or ``None`` to drop the key.  *mask* replaces every grapheme on
    screen (password entry).
    """

    def __init__(
        self,
        value: str = "",
        *,
        filter_map: Callable[[str], str | None] | None = None,
        mask: str | None = None,
    ) -> None:
        self._value = value
        self._cursor = len(value)
        self._filter_map = filter_map
        self._mask = mask

    # -- value access -------------------------------------------------------

    @property
    def value(self) -> str:
        return self._value

    def set_value(self, value: str) -> None:
        self._value = value
        self._cursor = len(value)

    @property
    def cursor(self) -> int:
        return self._cursor

    def has_value(self) -> bool:
        return bool(self._value)

    def finish(self) -> str:
        """Return the value and reset the input."""
        value, self._value, self._cursor = self._value, "", 0
        return value

    # -- key handling -------------------------------------------------------

    def handle_key(self, key: KeyEvent) -> bool:  # noqa: C901
        if key.is_ctrl("a"):
            return self._move_to(0)
        if key.is_ctrl("e"):
            return self._move_to(len(self._value))
        if key.is_ctrl("u"):
            return self._delete_range(0, self._cursor)
        if key.is_ctrl("k"):
            return self._delete_range(self._cursor, len(self._value))
        if key.is_ctrl("w"):
            return self._delete_range(self._word_start(), self._cursor)

        code = key.code
        word = bool(key.modifiers & _WORD_MODIFIERS)

        if code is KeyCode.CHAR and key.modifiers & KeyModifiers.ALT:
            if key.char == "b":
                return self._move_to(self._word_start())
            if key.char == "f":
                return self._move_to(self._word_end())
            if key.char == "d":
                return self._delete_range(self._cursor, self._word_end())
            return False

        if code is KeyCode.CHAR and key.is_plain_char:
            return self._insert(key.char)

        if code is KeyCode.BACKSPACE:
            if word:
                return self._delete_range(self._word_start(), self._cursor)
            return self._delete_range(self._prev_boundary(), self._cursor)
        if code is KeyCode.DELETE:
            if word:
                return self._delete_range(self._cursor, self._word_end())
            return self._delete_range(self._cursor, self._next_boundary())
        if code is KeyCode.LEFT:
            return self._move_to(self._word_start() if word else self._prev_boundary())
        if code is KeyCode.RIGHT:
            return self._move_to(self._word_end() if word else self._next_boundary())
        if code is KeyCode.HOME:
            return self._move_to(0)
        if code is KeyCode.END:
            return self._move_to(len(self._value))

        return False

    def _insert(self, char: str) -> bool:
        if self._filter_map is not None:
            mapped = self._filter_map(char)
            if mapped is None:
                return False
            char = mapped
        if not char:
            return False

        before = self._value[: self._cursor] + char
        self._value = before + self._value[self._cursor :]
        # A combining mark joins the grapheme before it; keep the cursor
        # after the whole cluster.
        clusters = split_graphemes(self._value)[: len(split_graphemes(before))]
        self._cursor = len("".join(clusters))
        return True

    def _move_to(self, cursor: int) -> bool:
        if cursor == self._cursor:
            return False
        self._cursor = cursor
        return True

    def _delete_range(self, start: int, end: int) -> bool:
        if start >= end:
            return False
        self._value = self._value[:start] + self._value[end:]
        self._cursor = start
        return True

    def _prev_boundary(self) -> int:
        if self._cursor == 0:
            return 0
        graphemes = split_graphemes(self._value[: self._cursor])
        return self._cursor - len(graphemes[-1])

    def _next_boundary(self) -> int:
        if self._cursor >= len(self._value):
            return len(self._value)
        graphemes = split_graphemes(self._value[self._cursor :])
        return self._cursor + len(graphemes[0])

    def _word_start(self) -> int:
        pos = self._cursor
        graphemes = split_graphemes(self._value[:pos])

        while graphemes and is_whitespace_char(graphemes[-1]):
            pos -= len(graphemes.pop())

        if graphemes and is_punctuation_char(graphemes[-1]):
            while graphemes and is_punctuation_char(graphemes[-1]):
                pos -= len(graphemes.pop())
        else:
            while (
                graphemes
                and not is_whitespace_char(graphemes[-1])
                and not is_punctuation_char(graphemes[-1])
            ):
                pos -= len(graphemes.pop())
        return pos

    def _word_end(self) -> int:
        pos = self._cursor
        graphemes = split_graphemes(self._value[pos:])
        idx = 0

        while idx < len(graphemes) and is_whitespace_char(graphemes[idx]):
            pos += len(graphemes[idx])
            idx += 1

        if idx < len(graphemes) and is_punctuation_char(graphemes[idx]):
            while idx < len(graphemes) and is_punctuation_char(graphemes[idx]):
                pos += len(graphemes[idx])
                idx += 1
        else:
            while (
                idx < len(graphemes)
                and not is_whitespace_char(graphemes[idx])
                and not is_punctuation_char(graphemes[idx])
            ):
                pos += len(graphemes[idx])
                idx += 1
        return pos

    # -- drawing ------------------------------------------------------------

    def _display(self, text: str) -> str:
        if self._mask is None:
            return text
        return self._mask * len(split_graphemes(text))

    def _rows(self, layout: Layout) -> list[list[str]]:
        return hard_wrap(
            self._display(self._value),
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
        rows = self._rows(layout)
        remaining = len(split_graphemes(self._value[: self._cursor]))

        for i, row in enumerate(rows):
            start = layout.offset_x + (layout.line_offset if i == 0 else 0)
            # A cursor at a row boundary belongs to the start of the next row.
            if remaining < len(row) or i == len(rows) - 1:
                col = start + sum(grapheme_width(g) for g in row[:remaining])
                return col, i
            remaining -= len(row)

        return layout.offset_x + layout.line_offset, 0
