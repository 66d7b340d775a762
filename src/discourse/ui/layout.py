"""Layout: the region a widget may draw in and how much of it is used.

A widget starts writing at the cursor, which sits on row ``offset_y`` at
column ``offset_x + line_offset``, and leaves the cursor at the end of its
last row.  ``render`` and ``height`` both advance ``offset_y`` and
``line_offset`` the same way, so the caller can chain siblings on one layout
or hand each of them a copy.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from discourse.ui.backend import Backend


@dataclass
class Layout:
    width: int
    height: int
    offset_x: int = 0
    offset_y: int = 0
    # Columns already used on the current row, relative to offset_x.
    line_offset: int = 0

    def copy(self) -> Layout:
        return dataclasses.replace(self)

    def with_line_offset(self, line_offset: int) -> Layout:
        return dataclasses.replace(self, line_offset=line_offset)

    def with_offset(self, offset_x: int, offset_y: int) -> Layout:
        """Return a copy indented by *offset_x* more columns, starting at row *offset_y*."""
        return dataclasses.replace(
            self, offset_x=self.offset_x + offset_x, offset_y=offset_y
        )

    def line_width(self) -> int:
        """Columns left on the current row."""
        return max(self.width - self.offset_x - self.line_offset, 0)

    def available_width(self) -> int:
        """Columns of a fresh row."""
        return max(self.width - self.offset_x, 0)

    def next_line(self, backend: Backend | None = None) -> None:
        """Move to the start of the next row, moving the real cursor if *backend* is given."""
        self.offset_y += 1
        self.line_offset = 0
        if backend is not None:
            backend.move_cursor_to(self.offset_x, self.offset_y)
