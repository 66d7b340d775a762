"""Choices and choice lists for selection prompts."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from discourse.ui import symbols
from discourse.ui.backend import Backend
from discourse.ui.config import MIN_PAGE_SIZE, get_config
from discourse.ui.layout import Layout
from discourse.ui.style import Color, dark_grey
from discourse.ui.utils import first_line, truncate_to_width, visible_width
from discourse.ui.widget import Widget
from discourse.ui.widgets.text import Text

T = TypeVar("T")
U = TypeVar("U")

# ---------------------------------------------------------------------------
# Choice variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Item(Generic[T]):
    """A selectable entry."""

    value: T

    def is_separator(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> Item[U]:
        return Item(fn(self.value))

    def unwrap_item(self) -> T:
        return self.value


@dataclass(frozen=True)
class Separator:
    """A line of text between items.  Never selectable, always one row."""

    text: str

    def is_separator(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], Any]) -> Separator:
        return self

    def unwrap_item(self) -> Any:
        raise ValueError(f"{self!r} is not an item")


@dataclass(frozen=True)
class DefaultSeparator:
    """A plain horizontal rule."""

    @property
    def text(self) -> str:
        return symbols.SEPARATOR_RULE

    def is_separator(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], Any]) -> DefaultSeparator:
        return self

    def unwrap_item(self) -> Any:
        raise ValueError(f"{self!r} is not an item")


Choice = Union[Item[T], Separator, DefaultSeparator]


def as_choice(value: Choice[T] | T) -> Choice[T]:
    """Wrap a plain value in :class:`Item`; choices pass through unchanged."""
    if isinstance(value, (Item, Separator, DefaultSeparator)):
        return value
    return Item(value)


def item_widget(value: object) -> Widget:
    """The widget an item's value is drawn with: itself, or its ``str`` as text."""
    if hasattr(value, "render") and hasattr(value, "height"):
        return value  # type: ignore[return-value]
    return Text(str(value))


# ---------------------------------------------------------------------------
# ChoiceList
# ---------------------------------------------------------------------------


class ChoiceList(Generic[T]):
    """Ordered items and separators, with paging and looping settings.

    Built up front with the chaining builder methods and left alone while a
    prompt is running.  Implements :class:`~discourse.ui.widgets.select.ListSource`.
    """

    def __init__(
        self,
        choices: Iterable[Choice[T] | T] = (),
        *,
        page_size: int | None = None,
        should_loop: bool = True,
        default: int | None = None,
    ) -> None:
        self.choices: list[Choice[T]] = [as_choice(c) for c in choices]
        self.default = default
        self._should_loop = should_loop
        self._page_size = get_config().page_size
        if page_size is not None:
            self.set_page_size(page_size)

    # -- builder ------------------------------------------------------------

    def choice(self, value: T) -> ChoiceList[T]:
        self.choices.append(Item(value))
        return self

    def separator(self, text: str) -> ChoiceList[T]:
        self.choices.append(Separator(text))
        return self

    def default_separator(self) -> ChoiceList[T]:
        self.choices.append(DefaultSeparator())
        return self

    def extend(self, choices: Iterable[Choice[T] | T]) -> ChoiceList[T]:
        self.choices.extend(as_choice(c) for c in choices)
        return self

    def set_default(self, index: int | None) -> ChoiceList[T]:
        self.default = index
        return self

    def set_page_size(self, page_size: int) -> ChoiceList[T]:
        if page_size < MIN_PAGE_SIZE:
            raise ValueError(f"page size must be at least {MIN_PAGE_SIZE}, got {page_size}")
        self._page_size = page_size
        return self

    def set_should_loop(self, should_loop: bool) -> ChoiceList[T]:
        self._should_loop = should_loop
        return self

    # -- sequence -----------------------------------------------------------

    def __len__(self) -> int:
        return len(self.choices)

    def __getitem__(self, index: int) -> Choice[T]:
        return self.choices[index]

    def __iter__(self) -> Iterator[Choice[T]]:
        return iter(self.choices)

    def has_default(self) -> bool:
        return self.default is not None

    def selectable_count(self) -> int:
        return sum(1 for c in self.choices if not c.is_separator())

    # -- ListSource ---------------------------------------------------------

    def is_selectable(self, index: int) -> bool:
        return not self.choices[index].is_separator()

    def page_size(self) -> int:
        return self._page_size

    def should_loop(self) -> bool:
        return self._should_loop

    def _separator_text(self, choice: Separator | DefaultSeparator, layout: Layout) -> str:
        return truncate_to_width(first_line(choice.text), layout.line_width())

    def render_item(
        self, index: int, hovered: bool, layout: Layout, backend: Backend
    ) -> None:
        choice = self.choices[index]
        if isinstance(choice, Item):
            if hovered:
                backend.set_fg(Color.CYAN)
            item_widget(choice.value).render(layout, backend)
            if hovered:
                backend.set_fg(Color.RESET)
            return

        text = self._separator_text(choice, layout)
        backend.write_styled(dark_grey(text))
        layout.line_offset += visible_width(text)

    def height_at(self, index: int, layout: Layout) -> int:
        choice = self.choices[index]
        if isinstance(choice, Item):
            return item_widget(choice.value).height(layout)
        layout.line_offset += visible_width(self._separator_text(choice, layout))
        return 1
