"""The interface the input runner drives."""

from __future__ import annotations

import enum
from typing import Protocol, TypeVar

from discourse.ui.widget import Widget

T_co = TypeVar("T_co", covariant=True)


class Validation(enum.Enum):
    # Submit the answer.
    FINISH = "finish"
    # Keep the prompt running and draw it again.
    CONTINUE = "continue"


class Prompt(Widget, Protocol[T_co]):
    """A widget that produces an answer.

    ``validate`` is called on Enter.  It returns :class:`Validation` or raises
    :class:`~discourse.ui.errors.ValidationError`, which the runner shows
    beneath the prompt before carrying on.
    """

    def validate(self) -> Validation: ...

    def finish(self) -> T_co: ...

    def has_default(self) -> bool: ...

    def finish_default(self) -> T_co: ...
