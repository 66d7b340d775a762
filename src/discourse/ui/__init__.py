"""discourse-ui: scroll-stable interactive prompts for line-oriented terminals."""

# Terminal backends
from discourse.ui.backend import Backend, ClearType, MoveDirection, Size, TerminalBackend
from discourse.ui.terminal_state import TerminalState

# Choices
from discourse.ui.choice import (
    Choice,
    ChoiceList,
    DefaultSeparator,
    Item,
    Separator,
    as_choice,
)

# Configuration
from discourse.ui.config import UiConfig, get_config, set_config

# Errors
from discourse.ui.errors import EndOfInput, Interrupted, PromptError, ValidationError

# Key events
from discourse.ui.events import (
    KeyCode,
    KeyEvent,
    KeyModifiers,
    TerminalEvents,
    parse_key_event,
)

# Runner
from discourse.ui.input import Input

# Layout and contracts
from discourse.ui.layout import Layout
from discourse.ui.prompt import Prompt, Validation
from discourse.ui.widget import Widget

# Shipped prompts
from discourse.ui.prompts import InputPrompt, ListItem, RawSelectPrompt, SelectPrompt

# Styling
from discourse.ui.style import Color, Styled

# Widgets
from discourse.ui.widgets import (
    CharInput,
    ListSource,
    PromptHeader,
    Select,
    StringInput,
    Text,
)

__all__ = [
    # Terminal backends
    "Backend",
    "ClearType",
    "MoveDirection",
    "Size",
    "TerminalBackend",
    "TerminalState",
    # Choices
    "Choice",
    "ChoiceList",
    "DefaultSeparator",
    "Item",
    "Separator",
    "as_choice",
    # Configuration
    "UiConfig",
    "get_config",
    "set_config",
    # Errors
    "EndOfInput",
    "Interrupted",
    "PromptError",
    "ValidationError",
    # Key events
    "KeyCode",
    "KeyEvent",
    "KeyModifiers",
    "TerminalEvents",
    "parse_key_event",
    # Runner
    "Input",
    # Layout and contracts
    "Layout",
    "Prompt",
    "Validation",
    "Widget",
    # Shipped prompts
    "InputPrompt",
    "ListItem",
    "RawSelectPrompt",
    "SelectPrompt",
    # Styling
    "Color",
    "Styled",
    # Widgets
    "CharInput",
    "ListSource",
    "PromptHeader",
    "Select",
    "StringInput",
    "Text",
]
