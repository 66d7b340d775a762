"""Colours and styled text written through ``Backend.write_styled``."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Color(Enum):
    """Terminal colours, valued by their SGR foreground code."""

    RESET = 39
    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    GREY = 37
    DARK_GREY = 90
    LIGHT_RED = 91
    LIGHT_GREEN = 92
    LIGHT_YELLOW = 93
    LIGHT_BLUE = 94
    LIGHT_MAGENTA = 95
    LIGHT_CYAN = 96
    WHITE = 97

    @property
    def fg_code(self) -> int:
        return self.value

    @property
    def bg_code(self) -> int:
        return self.value + 10


@dataclass(frozen=True)
class Styled:
    """A run of text with a foreground/background colour and attributes."""

    text: str
    fg: Color | None = None
    bg: Color | None = None
    bold: bool = False
    dim: bool = False

    def sgr(self) -> str:
        """Return the SGR sequence that switches this style on."""
        params: list[str] = []
        if self.bold:
            params.append("1")
        if self.dim:
            params.append("2")
        if self.fg is not None:
            params.append(str(self.fg.fg_code))
        if self.bg is not None:
            params.append(str(self.bg.bg_code))
        if not params:
            return ""
        return f"\x1b[{';'.join(params)}m"


def cyan(text: str) -> Styled:
    return Styled(text, fg=Color.CYAN)


def red(text: str) -> Styled:
    return Styled(text, fg=Color.RED)


def dark_grey(text: str) -> Styled:
    return Styled(text, fg=Color.DARK_GREY)


def bold(text: str) -> Styled:
    return Styled(text, bold=True)
