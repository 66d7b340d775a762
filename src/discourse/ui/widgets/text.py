"""Text widget - word-wrapped, read-only text."""

from __future__ import annotations

from discourse.ui.backend import Backend
from discourse.ui.events import KeyEvent
from discourse.ui.layout import Layout
from discourse.ui.utils import visible_width, wrap_text
from discourse.ui.widget import end_of


class Text:
    """Text that continues from the cursor and wraps at word boundaries.

    Wrapped rows start at the layout's indent, and embedded newlines start a
    new row.
    """

    def __init__(self, text: str = "") -> None:
        self.text = text

    def set_text(self, text: str) -> None:
        self.text = text

    def _rows(self, layout: Layout) -> list[str]:
        return wrap_text(self.text, layout.line_width(), layout.available_width())

    def render(self, layout: Layout, backend: Backend) -> None:
        for i, row in enumerate(self._rows(layout)):
            if i:
                layout.next_line(backend)
            backend.write(row)
            layout.line_offset += visible_width(row)

    def height(self, layout: Layout) -> int:
        rows = self._rows(layout)
        for i, row in enumerate(rows):
            if i:
                layout.next_line()
            layout.line_offset += visible_width(row)
        return len(rows)

    def cursor_pos(self, layout: Layout) -> tuple[int, int]:
        return end_of(self, layout)

    def handle_key(self, key: KeyEvent) -> bool:
        return False

    def __repr__(self) -> str:
        return f"Text({self.text!r})"
