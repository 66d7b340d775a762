"""Environment-driven settings for the prompt runner and terminal backend."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

MIN_PAGE_SIZE = 5
DEFAULT_PAGE_SIZE = 15

_ENV_HIDE_CURSOR = "DISCOURSE_UI_HIDE_CURSOR"
_ENV_WRITE_LOG = "DISCOURSE_UI_WRITE_LOG"
_ENV_PAGE_SIZE = "DISCOURSE_UI_PAGE_SIZE"


@dataclass
class UiConfig:
    """Runtime switches.

    ``hide_cursor``
        Default for :meth:`Input.hide_cursor`; prompts can still opt in
        individually.
    ``write_log_path``
        When set, every byte written to the terminal is appended to this file.
    ``page_size``
        Default page size for new choice lists.
    """

    hide_cursor: bool = False
    write_log_path: str = ""
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> UiConfig:
        env = os.environ if environ is None else environ

        page_size = DEFAULT_PAGE_SIZE
        raw_page_size = env.get(_ENV_PAGE_SIZE, "").strip()
        if raw_page_size:
            try:
                page_size = int(raw_page_size)
            except ValueError:
                raise ValueError(
                    f"{_ENV_PAGE_SIZE} must be an integer, got {raw_page_size!r}"
                ) from None
            if page_size < MIN_PAGE_SIZE:
                raise ValueError(
                    f"{_ENV_PAGE_SIZE} must be at least {MIN_PAGE_SIZE}, got {page_size}"
                )

        return cls(
            hide_cursor=env.get(_ENV_HIDE_CURSOR) == "1",
            write_log_path=env.get(_ENV_WRITE_LOG, ""),
            page_size=page_size,
        )


_config: UiConfig | None = None


def get_config() -> UiConfig:
    """Return the process-wide config, reading the environment on first use."""
    global _config
    if _config is None:
        _config = UiConfig.from_env()
    return _config


def set_config(config: UiConfig | None) -> None:
    """Replace the process-wide config; ``None`` re-reads the environment lazily."""
    global _config
    _config = config
