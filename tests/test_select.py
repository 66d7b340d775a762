"""Tests for the Select list engine."""

from __future__ import annotations

import pytest

from discourse.ui.choice import ChoiceList, DefaultSeparator, Separator
from discourse.ui.events import KeyCode, KeyEvent, KeyModifiers
from discourse.ui.layout import Layout
from discourse.ui.style import Color
from discourse.ui.widgets.select import Select

from .virtual_backend import VirtualBackend

UP = KeyEvent(KeyCode.UP)
DOWN = KeyEvent(KeyCode.DOWN)
PAGE_UP = KeyEvent(KeyCode.PAGE_UP)
PAGE_DOWN = KeyEvent(KeyCode.PAGE_DOWN)
HOME = KeyEvent(KeyCode.HOME)
END = KeyEvent(KeyCode.END)


def numbered(n: int, page_size: int = 5, should_loop: bool = True) -> ChoiceList[str]:
    return ChoiceList(
        [f"i{i}" for i in range(n)], page_size=page_size, should_loop=should_loop
    )


def draw(select: Select, width: int = 40, height: int = 30) -> VirtualBackend:
    backend = VirtualBackend(width=width, height=height)
    select.render(Layout(width, height), backend)
    return backend


class TestInitialHover:
    def test_first_item(self) -> None:
        assert Select(numbered(3)).get_at() == 0

    def test_skips_leading_separators(self) -> None:
        choices = ChoiceList([DefaultSeparator(), Separator("group"), "a", "b"])
        assert Select(choices).get_at() == 2

    def test_seeded_index(self) -> None:
        assert Select(numbered(6), 4).get_at() == 4

    def test_set_at_snaps_forward(self) -> None:
        select = Select(ChoiceList(["a", DefaultSeparator(), "b"]))
        select.set_at(1)
        assert select.get_at() == 2

    def test_set_at_falls_back_backward(self) -> None:
        select = Select(ChoiceList(["a", DefaultSeparator()]))
        select.set_at(1)
        assert select.get_at() == 0


class TestArrowKeys:
    def test_down_and_up(self) -> None:
        select = Select(numbered(3))
        assert select.handle_key(DOWN)
        assert select.get_at() == 1
        assert select.handle_key(UP)
        assert select.get_at() == 0

    def test_emacs_keys(self) -> None:
        select = Select(numbered(3))
        assert select.handle_key(KeyEvent.from_char("n", KeyModifiers.CONTROL))
        assert select.get_at() == 1
        assert select.handle_key(KeyEvent.from_char("p", KeyModifiers.CONTROL))
        assert select.get_at() == 0

    def test_wraps_past_separator(self) -> None:
        choices = ChoiceList(["a", DefaultSeparator(), "b", "c"], should_loop=True)
        select = Select(choices)

        assert select.handle_key(UP)
        assert select.get_at() == 3
        assert select.handle_key(DOWN)
        assert select.get_at() == 0

    def test_skips_separators_in_the_middle(self) -> None:
        select = Select(ChoiceList(["a", DefaultSeparator(), Separator("x"), "b"]))
        select.handle_key(DOWN)
        assert select.get_at() == 3
        select.handle_key(UP)
        assert select.get_at() == 0

    @pytest.mark.parametrize("start", range(6))
    def test_looping_list_returns_to_start(self, start: int) -> None:
        select = Select(numbered(6), start)
        for _ in range(6):
            select.handle_key(DOWN)
        assert select.get_at() == start

    def test_non_looping_list_stays_at_end(self) -> None:
        select = Select(numbered(6, should_loop=False), 5)
        for _ in range(6):
            assert not select.handle_key(DOWN)
        assert select.get_at() == 5

    def test_non_looping_list_stays_at_start(self) -> None:
        select = Select(numbered(6, should_loop=False))
        assert not select.handle_key(UP)
        assert select.get_at() == 0

    def test_single_item_is_unhandled(self) -> None:
        select = Select(ChoiceList(["only", DefaultSeparator()]))
        assert not select.handle_key(DOWN)
        assert not select.handle_key(UP)

    def test_other_keys_are_unhandled(self) -> None:
        select = Select(numbered(3))
        assert not select.handle_key(KeyEvent.from_char("x"))
        assert not select.handle_key(KeyEvent(KeyCode.LEFT))


class TestPaging:
    def test_page_down_moves_one_page_of_rows(self) -> None:
        select = Select(numbered(30, page_size=10))
        assert select.handle_key(PAGE_DOWN)
        assert select.get_at() == 10
        assert select.handle_key(PAGE_UP)
        assert select.get_at() == 0

    def test_page_down_stops_at_last_item(self) -> None:
        select = Select(numbered(30, page_size=10), 25)
        select.handle_key(PAGE_DOWN)
        assert select.get_at() == 29
        assert not select.handle_key(PAGE_DOWN)

    def test_page_up_stops_at_first_item(self) -> None:
        select = Select(numbered(30, page_size=10), 4)
        select.handle_key(PAGE_UP)
        assert select.get_at() == 0

    def test_page_counts_rows_not_items(self) -> None:
        choices = ChoiceList(["two\nrows"] * 10, page_size=6)
        select = Select(choices)
        select.handle_key(PAGE_DOWN)
        assert select.get_at() == 3

    def test_landing_on_separator_snaps_forward(self) -> None:
        choices = ChoiceList([f"i{i}" for i in range(10)], page_size=10)
        choices.default_separator().choice("after")
        select = Select(choices)
        select.handle_key(PAGE_DOWN)
        assert select.get_at() == 11

    def test_snaps_backward_without_items_ahead(self) -> None:
        choices = ChoiceList([f"i{i}" for i in range(8)], page_size=5)
        choices.separator("x").separator("y").separator("z")
        select = Select(choices, 3)
        select.handle_key(PAGE_DOWN)
        assert select.get_at() == 7

    def test_home_and_end(self) -> None:
        choices = ChoiceList([DefaultSeparator(), "a", "b", "c", DefaultSeparator()])
        select = Select(choices, 2)
        assert select.handle_key(END)
        assert select.get_at() == 3
        assert select.handle_key(HOME)
        assert select.get_at() == 1
        assert not select.handle_key(HOME)


class TestWindow:
    def test_short_list_shows_everything(self) -> None:
        select = Select(numbered(3))
        backend = draw(select)
        assert backend.screen_lines()[:4] == ["❯ i0", "  i1", "  i2", ""]
        assert select.height(Layout(40, 30)) == 3

    def test_top_of_long_list(self) -> None:
        select = Select(numbered(20))
        backend = draw(select)
        assert backend.screen_lines()[:6] == ["❯ i0", "  i1", "  i2", "  i3", "  i4", ""]
        assert select.height(Layout(40, 30)) == 5

    def test_hovered_item_is_centred(self) -> None:
        select = Select(numbered(20), 10)
        backend = draw(select)
        assert backend.screen_lines()[:5] == ["  i8", "  i9", "❯ i10", "  i11", "  i12"]
        assert select.cursor_pos(Layout(40, 30)) == (0, 2)

    def test_bottom_of_long_list(self) -> None:
        select = Select(numbered(20), 19)
        backend = draw(select)
        assert backend.screen_lines()[:5] == ["  i15", "  i16", "  i17", "  i18", "❯ i19"]
        assert select.cursor_pos(Layout(40, 30)) == (0, 4)

    def test_window_follows_navigation(self) -> None:
        select = Select(numbered(20))
        for _ in range(7):
            select.handle_key(DOWN)
        backend = draw(select)
        assert "❯ i7" in backend.screen_lines()
        assert select.height(Layout(40, 30)) == 5

    def test_multi_row_items(self) -> None:
        select = Select(ChoiceList(["one\ntwo", "three"]))
        backend = draw(select)
        assert backend.screen_lines()[:3] == ["❯ one", "  two", "  three"]
        assert select.height(Layout(40, 30)) == 3
        select.handle_key(DOWN)
        assert select.cursor_pos(Layout(40, 30)) == (0, 2)

    def test_separators(self) -> None:
        select = Select(ChoiceList(["a", DefaultSeparator(), Separator("group\nignored")]))
        backend = draw(select)
        assert backend.screen_lines()[:3] == ["❯ a", "  ──────────────", "  group"]

    def test_long_separator_is_cut(self) -> None:
        select = Select(ChoiceList(["a", Separator("x" * 30)]))
        backend = draw(select, width=12)
        assert backend.line(1) == "  " + "x" * 10
        assert select.height(Layout(12, 30)) == 2

    def test_indented_layout(self) -> None:
        select = Select(numbered(2))
        backend = VirtualBackend(cursor=(4, 3))
        select.render(Layout(40, 30, offset_x=4, offset_y=3), backend)
        assert backend.line(3) == "    ❯ i0"
        assert backend.line(4) == "      i1"
        assert select.cursor_pos(Layout(40, 30, offset_x=4, offset_y=3)) == (4, 0)


class TestStyling:
    def test_hovered_item_is_cyan(self) -> None:
        select = Select(numbered(2))
        backend = draw(select)
        markers = [c for c in backend.calls if c[0] == "write_styled" and "❯" in c[1].text]
        assert len(markers) == 1
        assert markers[0][1].fg is Color.CYAN
        assert ("set_fg", Color.CYAN) in backend.calls
        assert backend.fg is Color.RESET

    def test_separator_is_dark_grey(self) -> None:
        select = Select(ChoiceList(["a", Separator("--")]))
        backend = draw(select)
        styled = [c[1] for c in backend.calls if c[0] == "write_styled" and c[1].text == "--"]
        assert styled and styled[0].fg is Color.DARK_GREY


class TestEmptyList:
    def test_empty_list(self) -> None:
        select = Select(ChoiceList([]))
        backend = draw(select)
        assert select.height(Layout(40, 30)) == 1
        assert backend.count("write") == 0
        assert not select.handle_key(DOWN)
        assert select.cursor_pos(Layout(40, 30)) == (0, 0)
