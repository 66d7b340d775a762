"""Widgets shipped with discourse-ui."""

from discourse.ui.widgets.char_input import CharInput
from discourse.ui.widgets.header import PromptHeader
from discourse.ui.widgets.select import ListSource, Select
from discourse.ui.widgets.string_input import StringInput
from discourse.ui.widgets.text import Text

__all__ = [
    "CharInput",
    "ListSource",
    "PromptHeader",
    "Select",
    "StringInput",
    "Text",
]
