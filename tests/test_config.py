"""Tests for environment-driven configuration."""

from __future__ import annotations

import pytest

from discourse.ui.config import (
    DEFAULT_PAGE_SIZE,
    UiConfig,
    get_config,
    set_config,
)


class TestFromEnv:
    def test_defaults(self) -> None:
        config = UiConfig.from_env({})
        assert config == UiConfig(hide_cursor=False, write_log_path="", page_size=DEFAULT_PAGE_SIZE)

    def test_all_settings(self) -> None:
        config = UiConfig.from_env(
            {
                "DISCOURSE_UI_HIDE_CURSOR": "1",
                "DISCOURSE_UI_WRITE_LOG": "/tmp/out.log",
                "DISCOURSE_UI_PAGE_SIZE": " 9 ",
            }
        )
        assert config.hide_cursor
        assert config.write_log_path == "/tmp/out.log"
        assert config.page_size == 9

    def test_hide_cursor_needs_one(self) -> None:
        assert not UiConfig.from_env({"DISCOURSE_UI_HIDE_CURSOR": "yes"}).hide_cursor

    def test_empty_page_size_uses_default(self) -> None:
        assert UiConfig.from_env({"DISCOURSE_UI_PAGE_SIZE": ""}).page_size == DEFAULT_PAGE_SIZE

    def test_page_size_must_be_an_integer(self) -> None:
        with pytest.raises(ValueError, match="must be an integer"):
            UiConfig.from_env({"DISCOURSE_UI_PAGE_SIZE": "many"})

    def test_page_size_minimum(self) -> None:
        with pytest.raises(ValueError, match="at least 5"):
            UiConfig.from_env({"DISCOURSE_UI_PAGE_SIZE": "3"})


class TestGlobalConfig:
    def test_set_and_get(self) -> None:
        config = UiConfig(page_size=30)
        set_config(config)
        assert get_config() is config

    def test_reset_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISCOURSE_UI_PAGE_SIZE", "12")
        set_config(None)
        assert get_config().page_size == 12
        assert get_config() is get_config()
