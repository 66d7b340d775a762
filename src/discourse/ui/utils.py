"""Text measurement and wrapping for fixed-width terminals.

Widths are measured per grapheme cluster using ``wcwidth``, so wide CJK
characters and emoji take two columns and combining marks take none.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# CSI sequences: ESC[ <params> <final byte>
_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

_PUNCTUATION_RE = re.compile(r"[(){}\[\]<>.,;:'\"!?\+\-=*/\\|&%\^$#@~`]")

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def split_graphemes(text: str) -> list[str]:
    """Split *text* into user-perceived characters."""
    return list(grapheme.graphemes(text))


def grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    1. Control characters and lone combining marks -> 0
    2. Emoji clusters (VS16, ZWJ, skin tones, flags) -> 2
    3. Otherwise ``wcwidth`` of the first codepoint.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    if ord(g[0]) >= 0x1F000:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


def visible_width(text: str) -> int:
    """Calculate the number of columns *text* occupies.

    ANSI escape sequences are ignored and tabs count as 3 columns.
    """
    if not text:
        return 0

    stripped = _ANSI_RE.sub("", text).replace("\t", "   ")
    if not stripped:
        return 0

    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)


# ---------------------------------------------------------------------------
# Truncation
# ---------------------------------------------------------------------------


def truncate_to_width(text: str, max_width: int, ellipsis: str = "") -> str:
    """Cut *text* so it fits in *max_width* columns.

    When the text is cut, *ellipsis* is appended and counts towards the width.
    """
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text

    target = max_width - visible_width(ellipsis)
    if target <= 0:
        return _take_columns(ellipsis, max_width)
    return _take_columns(text, target) + ellipsis


def _take_columns(text: str, max_cols: int) -> str:
    result: list[str] = []
    cols = 0
    for g in grapheme.graphemes(text):
        w = grapheme_width(g)
        if cols + w > max_cols:
            break
        result.append(g)
        cols += w
    return "".join(result)


def first_line(text: str) -> str:
    """Return *text* up to its first line break."""
    return text.split("\n", 1)[0].rstrip("\r")


# ---------------------------------------------------------------------------
# Wrapping
# ---------------------------------------------------------------------------


def hard_wrap(
    text: str,
    first_width: int,
    width: int,
    *,
    cursor_room: bool = False,
) -> list[list[str]]:
    """Break *text* into rows of graphemes without looking for word boundaries.

    The first row has *first_width* columns available (it may be 0, in which
    case the first row stays empty), every following row *width* columns.
    With *cursor_room*, a trailing empty row is added when the last row is
    full so a cursor placed after the text still lands on a rendered row.
    """
    width = max(width, 1)
    rows: list[list[str]] = [[]]
    avail = max(first_width, 0)
    used = 0

    for g in grapheme.graphemes(text):
        w = grapheme_width(g)
        if used + w > avail and (used > 0 or avail < width):
            rows.append([])
            avail = width
            used = 0
        rows[-1].append(g)
        used += w

    if cursor_room and used >= avail:
        rows.append([])

    return rows


def wrap_text(text: str, first_width: int, width: int) -> list[str]:
    """Word-wrap *text* into rows.

    Embedded newlines start new rows.  The first row has *first_width*
    columns, the rest *width*.  Words longer than a row are broken.
    """
    width = max(width, 1)
    result: list[str] = []
    avail = max(first_width, 0)

    for physical in text.replace("\t", "   ").split("\n"):
        rows = _wrap_single_line(physical, avail, width)
        result.extend(rows)
        avail = width

    return result


def _wrap_single_line(line: str, first_width: int, width: int) -> list[str]:
    if not line:
        return [""]

    rows: list[str] = []
    current = ""
    current_width = 0
    avail = first_width

    for word in re.findall(r"\S+|\s+", line):
        word_width = visible_width(word)

        if current_width + word_width <= avail:
            current += word
            current_width += word_width
            continue

        if word.isspace():
            # Whitespace at a break point is dropped.
            rows.append(current)
            current, current_width, avail = "", 0, width
            continue

        if current_width > 0 or avail < width:
            rows.append(current.rstrip())
            current, current_width, avail = "", 0, width

        # Break words that don't fit on an empty row.
        for g in grapheme.graphemes(word):
            w = grapheme_width(g)
            if current_width + w > avail and current_width > 0:
                rows.append(current)
                current, current_width, avail = "", 0, width
            current += g
            current_width += w

    rows.append(current)
    return rows


# ---------------------------------------------------------------------------
# Character classes
# ---------------------------------------------------------------------------


def is_whitespace_char(char: str) -> bool:
    return char in (" ", "\t", "\n", "\r", "\f", "\v")


def is_punctuation_char(char: str) -> bool:
    return bool(_PUNCTUATION_RE.match(char))
