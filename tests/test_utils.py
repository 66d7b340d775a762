"""Tests for text measurement and wrapping."""

from __future__ import annotations

from discourse.ui.utils import (
    first_line,
    grapheme_width,
    hard_wrap,
    is_punctuation_char,
    is_whitespace_char,
    split_graphemes,
    truncate_to_width,
    visible_width,
    wrap_text,
)


class TestVisibleWidth:
    def test_ascii(self) -> None:
        assert visible_width("hello") == 5
        assert visible_width("") == 0

    def test_wide_characters(self) -> None:
        assert visible_width("日本") == 4

    def test_combining_marks(self) -> None:
        assert visible_width("é") == 1

    def test_ansi_is_ignored(self) -> None:
        assert visible_width("\x1b[31mred\x1b[0m") == 3

    def test_tabs_count_as_three(self) -> None:
        assert visible_width("\t") == 3


class TestGraphemes:
    def test_split_keeps_clusters(self) -> None:
        assert split_graphemes("aéb") == ["a", "é", "b"]

    def test_control_characters_have_no_width(self) -> None:
        assert grapheme_width("\x07") == 0


class TestTruncateToWidth:
    def test_fits(self) -> None:
        assert truncate_to_width("hello", 10) == "hello"

    def test_cut(self) -> None:
        assert truncate_to_width("hello world", 5) == "hello"

    def test_cut_with_ellipsis(self) -> None:
        assert truncate_to_width("hello world", 5, "…") == "hell…"

    def test_wide_character_is_not_split(self) -> None:
        assert truncate_to_width("日本語", 5) == "日本"

    def test_zero_width(self) -> None:
        assert truncate_to_width("hello", 0) == ""


class TestFirstLine:
    def test_first_line(self) -> None:
        assert first_line("one\ntwo") == "one"
        assert first_line("one\r\ntwo") == "one"
        assert first_line("single") == "single"


class TestHardWrap:
    def test_fits_on_first_row(self) -> None:
        assert hard_wrap("abc", 10, 10) == [["a", "b", "c"]]

    def test_breaks_at_width(self) -> None:
        rows = hard_wrap("abcdef", 4, 4)
        assert rows == [["a", "b", "c", "d"], ["e", "f"]]

    def test_first_row_can_be_narrower(self) -> None:
        rows = hard_wrap("abcdef", 2, 4)
        assert rows == [["a", "b"], ["c", "d", "e", "f"]]

    def test_no_room_on_first_row(self) -> None:
        assert hard_wrap("ab", 0, 4) == [[], ["a", "b"]]

    def test_cursor_room_adds_row_when_full(self) -> None:
        assert hard_wrap("abcd", 4, 4, cursor_room=True) == [["a", "b", "c", "d"], []]
        assert hard_wrap("abc", 4, 4, cursor_room=True) == [["a", "b", "c"]]

    def test_empty_text(self) -> None:
        assert hard_wrap("", 4, 4) == [[]]
        assert hard_wrap("", 0, 4, cursor_room=True) == [[], []]

    def test_wide_character_moves_to_next_row(self) -> None:
        assert hard_wrap("a日", 2, 4) == [["a"], ["日"]]


class TestWrapText:
    def test_word_wrap(self) -> None:
        assert wrap_text("hello world foo bar baz", 20, 20) == [
            "hello world foo bar",
            "baz",
        ]

    def test_first_row_offset(self) -> None:
        assert wrap_text("hello world foo bar baz", 5, 20) == [
            "hello",
            "world foo bar baz",
        ]

    def test_word_that_does_not_fit_on_first_row(self) -> None:
        assert wrap_text("hello", 3, 10) == ["", "hello"]

    def test_long_word_is_broken(self) -> None:
        assert wrap_text("abcdefghij", 4, 4) == ["abcd", "efgh", "ij"]

    def test_newlines(self) -> None:
        assert wrap_text("one\ntwo", 10, 10) == ["one", "two"]

    def test_empty(self) -> None:
        assert wrap_text("", 10, 10) == [""]


class TestCharClasses:
    def test_whitespace(self) -> None:
        assert is_whitespace_char(" ")
        assert not is_whitespace_char("a")

    def test_punctuation(self) -> None:
        assert is_punctuation_char(".")
        assert is_punctuation_char("-")
        assert not is_punctuation_char("a")
