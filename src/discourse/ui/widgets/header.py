"""The ``? message hint ›`` line prompts start with."""

from __future__ import annotations

from dataclasses import replace
from itertools import groupby

from discourse.ui import symbols
from discourse.ui.backend import Backend
from discourse.ui.events import KeyEvent
from discourse.ui.layout import Layout
from discourse.ui.style import Color, Styled, bold, dark_grey
from discourse.ui.utils import grapheme_width, hard_wrap, split_graphemes
from discourse.ui.widget import end_of


class PromptHeader:
    """Question mark, message, optional hint and delimiter.

    Stays inline: the widget that follows continues on the same row.  A
    message with line breaks starts a new row for each of them.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        delimiter: str = symbols.SMALL_ARROW,
    ) -> None:
        self.message = message
        self.hint = hint
        self.delimiter = delimiter

    def spans(self) -> list[Styled]:
        spans = [Styled("?", fg=Color.LIGHT_GREEN), Styled(" "), bold(self.message), Styled(" ")]
        if self.hint:
            spans += [dark_grey(self.hint), Styled(" ")]
        if self.delimiter:
            spans += [dark_grey(self.delimiter), Styled(" ")]
        return spans

    def _lines(self) -> list[list[tuple[str, Styled]]]:
        """Styled graphemes, one list per line of the text."""
        lines: list[list[tuple[str, Styled]]] = [[]]
        for span in self.spans():
            for g in split_graphemes(span.text):
                if g in ("\n", "\r\n"):
                    lines.append([])
                else:
                    lines[-1].append((g, span))
        return lines

    def _rows(self, layout: Layout) -> list[list[tuple[str, Styled]]]:
        rows: list[list[tuple[str, Styled]]] = []
        first_width = layout.line_width()
        for line in self._lines():
            cells = iter(line)
            text = "".join(g for g, _ in line)
            for row in hard_wrap(text, first_width, layout.available_width()):
                rows.append([next(cells) for _ in row])
            # Every line after the first starts on a row of its own.
            first_width = layout.available_width()
        return rows

    def render(self, layout: Layout, backend: Backend) -> None:
        for i, row in enumerate(self._rows(layout)):
            if i:
                layout.next_line(backend)
            for span, run in groupby(row, key=lambda cell: cell[1]):
                backend.write_styled(replace(span, text="".join(g for g, _ in run)))
            layout.line_offset += sum(grapheme_width(g) for g, _ in row)

    def height(self, layout: Layout) -> int:
        rows = self._rows(layout)
        for i, row in enumerate(rows):
            if i:
                layout.next_line()
            layout.line_offset += sum(grapheme_width(g) for g, _ in row)
        return len(rows)

    def cursor_pos(self, layout: Layout) -> tuple[int, int]:
        return end_of(self, layout)

    def handle_key(self, key: KeyEvent) -> bool:
        return False
