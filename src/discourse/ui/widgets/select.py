"""Select - hover, paging and a scrolling window over any list of items.

The engine knows nothing about what the items look like.  It talks to a
:class:`ListSource`, which draws and measures single items and says which of
them can be selected.
"""

from __future__ import annotations

import logging
from typing import Generic, Protocol, TypeVar

from discourse.ui import symbols
from discourse.ui.backend import Backend
from discourse.ui.events import KeyCode, KeyEvent
from discourse.ui.layout import Layout
from discourse.ui.style import cyan

logger = logging.getLogger(__name__)

MARKER_WIDTH = 2


class ListSource(Protocol):
    """What :class:`Select` needs from a list.

    ``render_item`` and ``height_at`` follow the widget row convention: they
    start at the cursor and advance *layout* past the item.
    """

    def render_item(
        self, index: int, hovered: bool, layout: Layout, backend: Backend
    ) -> None: ...

    def is_selectable(self, index: int) -> bool: ...

    def page_size(self) -> int: ...

    def should_loop(self) -> bool: ...

    def height_at(self, index: int, layout: Layout) -> int: ...

    def __len__(self) -> int: ...


L = TypeVar("L", bound=ListSource)


class Select(Generic[L]):
    """A vertical list with one hovered item.

    Every item starts on its own row, so the widget must be placed at the
    start of a row.  Items are drawn indented by two columns, behind the hover
    marker.

    *at* seeds the hovered index; it defaults to the first selectable item and
    is moved forward when it points at something that can't be selected.
    """

    def __init__(self, items: L, at: int | None = None) -> None:
        self.list = items
        self.at = 0
        self._item_layout = Layout(80, 24, MARKER_WIDTH)
        self.set_at(0 if at is None else at)

    # -- hover position -----------------------------------------------------

    def get_at(self) -> int:
        return self.at

    def set_at(self, at: int) -> None:
        """Hover *at*, or the nearest selectable item after (or before) it."""
        snapped = self._snap(at)
        self.at = at if snapped is None else snapped

    def _first_selectable(self) -> int | None:
        return next((i for i in range(len(self.list)) if self.list.is_selectable(i)), None)

    def _last_selectable(self) -> int | None:
        return next(
            (i for i in reversed(range(len(self.list))) if self.list.is_selectable(i)),
            None,
        )

    def _snap(self, index: int) -> int | None:
        n = len(self.list)
        if n == 0:
            return None
        index = min(max(index, 0), n - 1)
        for i in range(index, n):
            if self.list.is_selectable(i):
                return i
        for i in range(index - 1, -1, -1):
            if self.list.is_selectable(i):
                return i
        return None

    def _step(self, forward: bool) -> int | None:
        """The next selectable index in one direction, or ``None`` at a hard boundary."""
        n = len(self.list)
        i = self.at
        for _ in range(n - 1):
            i += 1 if forward else -1
            if not 0 <= i < n:
                if not self.list.should_loop():
                    return None
                i %= n
            if self.list.is_selectable(i):
                return i
        return None

    def _page(self, forward: bool) -> int | None:
        n = len(self.list)
        page = self.list.page_size()
        target = self.at
        rows = 0
        if forward:
            while target < n - 1 and rows < page:
                rows += self._item_height(target)
                target += 1
        else:
            while target > 0 and rows < page:
                target -= 1
                rows += self._item_height(target)
        return self._snap(target)

    def _move(self, target: int | None) -> bool:
        if target is None or target == self.at:
            return False
        self.at = target
        return True

    def handle_key(self, key: KeyEvent) -> bool:
        if not len(self.list):
            return False

        if key.code is KeyCode.UP or key.is_ctrl("p"):
            return self._move(self._step(forward=False))
        if key.code is KeyCode.DOWN or key.is_ctrl("n"):
            return self._move(self._step(forward=True))
        if key.code is KeyCode.PAGE_UP:
            return self._move(self._page(forward=False))
        if key.code is KeyCode.PAGE_DOWN:
            return self._move(self._page(forward=True))
        if key.code is KeyCode.HOME:
            return self._move(self._first_selectable())
        if key.code is KeyCode.END:
            return self._move(self._last_selectable())
        return False

    # -- window -------------------------------------------------------------

    def _items_layout(self, layout: Layout) -> Layout:
        return layout.with_offset(MARKER_WIDTH, layout.offset_y).with_line_offset(0)

    def _item_height(self, index: int, layout: Layout | None = None) -> int:
        measured = (self._item_layout if layout is None else layout).copy()
        return max(self.list.height_at(index, measured), 1)

    def _window(self, layout: Layout) -> tuple[int, int]:
        """Half-open range of the items to draw.

        The hovered item stays in the middle of the page, except near the ends
        of the list where the page is filled from the other side.
        """
        item_layout = self._items_layout(layout)
        self._item_layout = item_layout
        n = len(self.list)
        page = self.list.page_size()
        heights = [self._item_height(i, item_layout) for i in range(n)]

        if sum(heights) <= page:
            return 0, n

        used = heights[self.at]
        above = max(page - used, 0) // 2
        start, end = self.at, self.at + 1

        while start > 0 and used + heights[start - 1] <= heights[self.at] + above:
            start -= 1
            used += heights[start]
        while end < n and used + heights[end] <= page:
            used += heights[end]
            end += 1
        while start > 0 and used + heights[start - 1] <= page:
            start -= 1
            used += heights[start]

        return start, end

    # -- drawing ------------------------------------------------------------

    def render(self, layout: Layout, backend: Backend) -> None:
        if not len(self.list):
            return
        start, end = self._window(layout)

        for i in range(start, end):
            if i != start:
                layout.next_line(backend)
            hovered = i == self.at
            if hovered:
                backend.write_styled(cyan(symbols.ARROW + " "))
            else:
                backend.write(" " * MARKER_WIDTH)

            item_layout = self._items_layout(layout)
            self.list.render_item(i, hovered, item_layout, backend)
            layout.offset_y = item_layout.offset_y
            layout.line_offset = item_layout.line_offset + MARKER_WIDTH

    def height(self, layout: Layout) -> int:
        if not len(self.list):
            return 1
        start, end = self._window(layout)
        first_row = layout.offset_y

        for i in range(start, end):
            if i != start:
                layout.next_line()
            item_layout = self._items_layout(layout)
            self.list.height_at(i, item_layout)
            layout.offset_y = item_layout.offset_y
            layout.line_offset = item_layout.line_offset + MARKER_WIDTH

        return layout.offset_y - first_row + 1

    def cursor_pos(self, layout: Layout) -> tuple[int, int]:
        if not len(self.list):
            return layout.offset_x, 0
        start, _ = self._window(layout)
        item_layout = self._items_layout(layout)
        row = sum(self._item_height(i, item_layout) for i in range(start, self.at))
        return layout.offset_x, row
