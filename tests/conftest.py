from __future__ import annotations

import pytest

from discourse.ui.config import UiConfig, set_config


@pytest.fixture(autouse=True)
def _default_config():
    """Isolate tests from DISCOURSE_UI_* variables in the environment."""
    set_config(UiConfig())
    yield
    set_config(None)
