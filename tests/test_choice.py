"""Tests for choices and ChoiceList."""

from __future__ import annotations

import pytest

from discourse.ui.choice import (
    ChoiceList,
    DefaultSeparator,
    Item,
    Separator,
    as_choice,
    item_widget,
)
from discourse.ui.config import UiConfig, set_config
from discourse.ui.layout import Layout
from discourse.ui.symbols import SEPARATOR_RULE
from discourse.ui.widgets.text import Text


class TestChoice:
    def test_as_choice_wraps_plain_values(self) -> None:
        assert as_choice("a") == Item("a")
        assert as_choice(3) == Item(3)

    def test_as_choice_keeps_choices(self) -> None:
        sep = Separator("--")
        assert as_choice(sep) is sep
        assert as_choice(Item("a")) == Item("a")

    def test_map(self) -> None:
        assert Item(2).map(lambda v: v * 10) == Item(20)
        sep = Separator("--")
        assert sep.map(str) is sep
        assert DefaultSeparator().map(str) == DefaultSeparator()

    def test_unwrap(self) -> None:
        assert Item("a").unwrap_item() == "a"
        with pytest.raises(ValueError):
            Separator("--").unwrap_item()
        with pytest.raises(ValueError):
            DefaultSeparator().unwrap_item()

    def test_is_separator(self) -> None:
        assert not Item("a").is_separator()
        assert Separator("x").is_separator()
        assert DefaultSeparator().is_separator()

    def test_default_separator_text(self) -> None:
        assert DefaultSeparator().text == SEPARATOR_RULE

    def test_item_widget(self) -> None:
        text = Text("hi")
        assert item_widget(text) is text
        widget = item_widget(42)
        assert isinstance(widget, Text)
        assert widget.text == "42"


class TestChoiceListBuilder:
    def test_chaining(self) -> None:
        choices = (
            ChoiceList[str]()
            .choice("a")
            .separator("group")
            .default_separator()
            .extend(["b", Separator("x")])
            .set_default(4)
            .set_should_loop(False)
        )
        assert list(choices) == [
            Item("a"),
            Separator("group"),
            DefaultSeparator(),
            Item("b"),
            Separator("x"),
        ]
        assert len(choices) == 5
        assert choices[3] == Item("b")
        assert choices.has_default()
        assert not choices.should_loop()
        assert choices.selectable_count() == 2

    def test_is_selectable(self) -> None:
        choices = ChoiceList(["a", DefaultSeparator()])
        assert choices.is_selectable(0)
        assert not choices.is_selectable(1)

    def test_no_default(self) -> None:
        assert not ChoiceList(["a"]).has_default()


class TestPageSize:
    def test_page_size_from_config(self) -> None:
        set_config(UiConfig(page_size=7))
        assert ChoiceList(["a"]).page_size() == 7

    def test_default_page_size(self) -> None:
        assert ChoiceList().page_size() == 15

    def test_explicit_page_size(self) -> None:
        assert ChoiceList(page_size=5).page_size() == 5
        assert ChoiceList().set_page_size(20).page_size() == 20

    @pytest.mark.parametrize("size", [0, 1, 4])
    def test_small_page_size_is_rejected(self, size: int) -> None:
        with pytest.raises(ValueError, match="at least 5"):
            ChoiceList(page_size=size)
        with pytest.raises(ValueError):
            ChoiceList().set_page_size(size)


class TestMeasuring:
    def test_separator_is_one_row(self) -> None:
        choices = ChoiceList([Separator("one\ntwo\nthree")])
        layout = Layout(40, 10)
        assert choices.height_at(0, layout) == 1
        assert layout.line_offset == 3

    def test_item_height(self) -> None:
        choices = ChoiceList(["one\ntwo"])
        layout = Layout(40, 10)
        assert choices.height_at(0, layout) == 2
        assert layout.offset_y == 1
