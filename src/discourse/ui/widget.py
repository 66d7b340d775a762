"""The interface every renderable part of a prompt implements."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from discourse.ui.backend import Backend
from discourse.ui.events import KeyEvent
from discourse.ui.layout import Layout


@runtime_checkable
class Widget(Protocol):
    """Something that can be drawn into a :class:`Layout`.

    ``render`` writes through *backend* only and must consume exactly the
    rows ``height`` reports for the same layout.  Both advance the layout.
    ``cursor_pos`` returns ``(column, row)`` where the column is absolute and
    the row is relative to ``layout.offset_y``; it must not mutate *layout*.
    ``handle_key`` returns ``True`` when the widget changed and needs to be
    drawn again.
    """

    def render(self, layout: Layout, backend: Backend) -> None: ...

    def height(self, layout: Layout) -> int: ...

    def cursor_pos(self, layout: Layout) -> tuple[int, int]: ...

    def handle_key(self, key: KeyEvent) -> bool: ...


def end_of(widget: Widget, layout: Layout) -> tuple[int, int]:
    """Where the cursor ends up after drawing *widget*, in ``cursor_pos`` terms."""
    measured = layout.copy()
    widget.height(measured)
    return measured.offset_x + measured.line_offset, measured.offset_y - layout.offset_y
