"""Ready-made prompts built from the shipped widgets.

Each one is a :class:`~discourse.ui.prompt.Prompt` that can be handed to
:class:`~discourse.ui.input.Input`::

    backend = TerminalBackend()
    answer = Input(InputPrompt("Project name", default="demo"), backend).run(
        TerminalEvents(backend=backend)
    )
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from discourse.ui.backend import Backend
from discourse.ui.choice import Choice, ChoiceList, Item, item_widget
from discourse.ui.errors import ValidationError
from discourse.ui.events import KeyEvent
from discourse.ui.layout import Layout
from discourse.ui.prompt import Validation
from discourse.ui.style import Color
from discourse.ui.widgets.header import PromptHeader
from discourse.ui.widgets.select import Select
from discourse.ui.widgets.string_input import StringInput

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ListItem:
    """The answer of a list prompt: position in the choice list and its text."""

    index: int
    text: str


def _check_default(choices: ChoiceList) -> None:
    default = choices.default
    if default is None:
        return
    if not 0 <= default < len(choices):
        raise ValueError(f"default index {default} is out of range")
    if not choices.is_selectable(default):
        raise ValueError(f"default index {default} points at a separator")


def _item_text(choice: Choice) -> str:
    return str(choice.unwrap_item())


# ---------------------------------------------------------------------------
# InputPrompt
# ---------------------------------------------------------------------------


class InputPrompt:
    """``? message (default) › value`` - free text on the same row as the question.

    *validate* receives the typed value and returns an error message, or
    ``None`` when the value is acceptable.  An empty answer falls back to
    *default* without being validated.
    """

    def __init__(
        self,
        message: str,
        default: str | None = None,
        validate: Callable[[str], str | None] | None = None,
        mask: str | None = None,
    ) -> None:
        hint = f"({default})" if default is not None else None
        self.header = PromptHeader(message, hint)
        self.input = StringInput(mask=mask)
        self.default = default
        self._validate = validate

    def render(self, layout: Layout, backend: Backend) -> None:
        self.header.render(layout, backend)
        self.input.render(layout, backend)

    def height(self, layout: Layout) -> int:
        first_row = layout.offset_y
        self.header.height(layout)
        self.input.height(layout)
        return layout.offset_y - first_row + 1

    def cursor_pos(self, layout: Layout) -> tuple[int, int]:
        measured = layout.copy()
        self.header.height(measured)
        col, row = self.input.cursor_pos(measured)
        return col, measured.offset_y - layout.offset_y + row

    def handle_key(self, key: KeyEvent) -> bool:
        return self.input.handle_key(key)

    def validate(self) -> Validation:
        value = self.input.value
        if not value and self.default is not None:
            return Validation.FINISH
        if self._validate is not None:
            error = self._validate(value)
            if error is not None:
                raise ValidationError(error)
        return Validation.FINISH

    def finish(self) -> str:
        value = self.input.finish()
        if not value and self.default is not None:
            return self.default
        return value

    def has_default(self) -> bool:
        return self.default is not None

    def finish_default(self) -> str:
        if self.default is None:
            raise RuntimeError("input prompt has no default answer")
        return self.default


# ---------------------------------------------------------------------------
# SelectPrompt
# ---------------------------------------------------------------------------


class SelectPrompt(Generic[T]):
    """A question followed by a list to pick one item from with the arrow keys."""

    HINT = "(Use arrow keys)"

    def __init__(self, message: str, choices: ChoiceList[T] | Iterable[T]) -> None:
        if not isinstance(choices, ChoiceList):
            choices = ChoiceList(choices)
        _check_default(choices)
        self.header = PromptHeader(message, self.HINT, delimiter="")
        self.select: Select[ChoiceList[T]] = Select(choices, choices.default)

    @property
    def choices(self) -> ChoiceList[T]:
        return self.select.list

    def render(self, layout: Layout, backend: Backend) -> None:
        self.header.render(layout, backend)
        layout.next_line(backend)
        self.select.render(layout, backend)

    def height(self, layout: Layout) -> int:
        first_row = layout.offset_y
        self.header.height(layout)
        layout.next_line()
        self.select.height(layout)
        return layout.offset_y - first_row + 1

    def cursor_pos(self, layout: Layout) -> tuple[int, int]:
        measured = layout.copy()
        self.header.height(measured)
        measured.next_line()
        col, row = self.select.cursor_pos(measured)
        return col, measured.offset_y - layout.offset_y + row

    def handle_key(self, key: KeyEvent) -> bool:
        return self.select.handle_key(key)

    def validate(self) -> Validation:
        if not self.choices.selectable_count():
            raise ValidationError("There is nothing to select")
        return Validation.FINISH

    def finish(self) -> ListItem:
        at = self.select.get_at()
        return ListItem(at, _item_text(self.choices[at]))

    def has_default(self) -> bool:
        return False

    def finish_default(self) -> ListItem:
        raise RuntimeError("select prompts have no default answer")


# ---------------------------------------------------------------------------
# RawSelectPrompt
# ---------------------------------------------------------------------------


class _NumberedChoices(Generic[T]):
    """A choice list drawn as ``1) first``, ``2) second``, ..."""

    def __init__(self, choices: ChoiceList[T]) -> None:
        self.choices = choices
        self.numbers: dict[int, int] = {}
        self.indices: dict[int, int] = {}
        number = 0
        for index, choice in enumerate(choices):
            if isinstance(choice, Item):
                number += 1
                self.numbers[index] = number
                self.indices[number] = index

    def _prefix(self, index: int) -> str:
        return f"{self.numbers[index]}) "

    def _item_layout(self, index: int, layout: Layout) -> Layout:
        return layout.with_offset(len(self._prefix(index)), layout.offset_y)

    def render_item(
        self, index: int, hovered: bool, layout: Layout, backend: Backend
    ) -> None:
        if index not in self.numbers:
            self.choices.render_item(index, hovered, layout, backend)
            return

        prefix = self._prefix(index)
        if hovered:
            backend.set_fg(Color.CYAN)
        backend.write(prefix)
        item_layout = self._item_layout(index, layout)
        item_widget(self.choices[index].unwrap_item()).render(item_layout, backend)
        if hovered:
            backend.set_fg(Color.RESET)
        layout.offset_y = item_layout.offset_y
        layout.line_offset = item_layout.line_offset + len(prefix)

    def height_at(self, index: int, layout: Layout) -> int:
        if index not in self.numbers:
            return self.choices.height_at(index, layout)

        first_row = layout.offset_y
        item_layout = self._item_layout(index, layout)
        item_widget(self.choices[index].unwrap_item()).height(item_layout)
        layout.offset_y = item_layout.offset_y
        layout.line_offset = item_layout.line_offset + len(self._prefix(index))
        return layout.offset_y - first_row + 1

    def is_selectable(self, index: int) -> bool:
        return self.choices.is_selectable(index)

    def page_size(self) -> int:
        return self.choices.page_size()

    def should_loop(self) -> bool:
        return self.choices.should_loop()

    def __len__(self) -> int:
        return len(self.choices)


class RawSelectPrompt(Generic[T]):
    """A numbered list answered by typing the item's number.

    The arrow keys still move through the list and fill in the number.
    """

    ANSWER_PROMPT = "  Answer: "

    def __init__(self, message: str, choices: ChoiceList[T] | Iterable[T]) -> None:
        if not isinstance(choices, ChoiceList):
            choices = ChoiceList(choices)
        _check_default(choices)
        self.header = PromptHeader(message)
        self.numbered = _NumberedChoices(choices)
        self.select: Select[_NumberedChoices[T]] = Select(self.numbered, choices.default)
        self.input = StringInput(filter_map=lambda c: c if c.isdigit() else None)
        self._valid = bool(self.numbered.numbers)

    @property
    def choices(self) -> ChoiceList[T]:
        return self.numbered.choices

    def _walk(self, layout: Layout, backend: Backend | None = None) -> None:
        if backend is None:
            self.header.height(layout)
            layout.next_line()
            self.select.height(layout)
            layout.next_line()
        else:
            self.header.render(layout, backend)
            layout.next_line(backend)
            self.select.render(layout, backend)
            layout.next_line(backend)
            backend.write(self.ANSWER_PROMPT)
        layout.line_offset += len(self.ANSWER_PROMPT)

    def render(self, layout: Layout, backend: Backend) -> None:
        self._walk(layout, backend)
        self.input.render(layout, backend)

    def height(self, layout: Layout) -> int:
        first_row = layout.offset_y
        self._walk(layout)
        self.input.height(layout)
        return layout.offset_y - first_row + 1

    def cursor_pos(self, layout: Layout) -> tuple[int, int]:
        measured = layout.copy()
        self._walk(measured)
        col, row = self.input.cursor_pos(measured)
        return col, measured.offset_y - layout.offset_y + row

    def handle_key(self, key: KeyEvent) -> bool:
        if self.input.handle_key(key):
            number = int(self.input.value) if self.input.value else 0
            index = self.numbered.indices.get(number)
            self._valid = index is not None
            if index is not None:
                self.select.set_at(index)
            return True

        if self.select.handle_key(key):
            self.input.set_value(str(self.numbered.numbers[self.select.get_at()]))
            self._valid = True
            return True

        return False

    def validate(self) -> Validation:
        if not self._valid:
            logger.debug("no choice numbered %r", self.input.value)
            raise ValidationError("Please enter a valid choice")
        return Validation.FINISH

    def finish(self) -> ListItem:
        at = self.select.get_at()
        return ListItem(at, _item_text(self.choices[at]))

    def has_default(self) -> bool:
        return False

    def finish_default(self) -> ListItem:
        raise RuntimeError("raw select prompts have no default answer")
