"""Exceptions raised by the prompt runner.

Terminal I/O failures are not wrapped: they surface as :class:`OSError`
straight from the backend or the event source, after the terminal state has
been restored.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from discourse.ui.widget import Widget


class PromptError(Exception):
    """Base class for the ways a prompt session can end without an answer."""


class Interrupted(PromptError):
    """The user pressed Ctrl-C."""

    def __init__(self, message: str = "prompt interrupted") -> None:
        super().__init__(message)


class EndOfInput(PromptError):
    """The key-event source ran out of input."""

    def __init__(self, message: str = "end of input") -> None:
        super().__init__(message)


class ValidationError(Exception):
    """Raised by ``Prompt.validate`` when the current state cannot be submitted.

    *error* is either a plain string or a widget; either way it must render on
    a single line.  The runner shows it beneath the prompt and keeps running.
    """

    def __init__(self, error: Union[str, Widget]) -> None:
        super().__init__(error if isinstance(error, str) else repr(error))
        self.error = error
