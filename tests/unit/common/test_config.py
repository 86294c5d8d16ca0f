"""Tests for common.config module."""

from pathlib import Path

import pytest

from common.config import (
    ConfigSingleton,
    PipelineConfig,
    find_config_path,
    load_config,
    parse_config,
)


class TestParseConfig:
    def test_empty_gives_defaults(self) -> None:
        config = parse_config({})
        assert config == PipelineConfig()
        assert config.publish.breaking_window_minutes == 15
        assert config.publish.item_delay_seconds == 2.0
        assert config.feeds.parser == "feedparser"

    def test_sections_override_defaults(self) -> None:
        config = parse_config({
            "feeds": {"parser": "regex", "item_cap": 2},
            "publish": {"breaking_window_minutes": 30},
        })
        assert config.feeds.parser == "regex"
        assert config.feeds.item_cap == 2
        assert config.feeds.preferred_item_cap == 5
        assert config.publish.breaking_window_minutes == 30

    def test_unknown_keys_ignored(self) -> None:
        config = parse_config({"images": {"timeout_seconds": 5, "size": "big"}, "extra": {}})
        assert config.images.timeout_seconds == 5


class TestSecrets:
    def test_api_key_read_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AI_GATEWAY_API_KEY", "abc")
        assert PipelineConfig().ai.api_key == "abc"

    def test_service_key_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SERVICE_ROLE_KEY", raising=False)
        assert PipelineConfig().auth.service_key is None


class TestFindConfigPath:
    def test_env_selects_config(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        (tmp_path / "staging.yaml").write_text("publish:\n  breaking_window_minutes: 5\n")
        monkeypatch.setenv("NEWSROOM_CONFIG", "staging")
        monkeypatch.setenv("NEWSROOM_CONFIG_DIR", str(tmp_path))

        assert find_config_path(None) == tmp_path / "staging.yaml"
        assert load_config().publish.breaking_window_minutes == 5

    def test_missing_file_raises(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("NEWSROOM_CONFIG_DIR", str(tmp_path))
        with pytest.raises(FileNotFoundError):
            find_config_path("nope")

    def test_repository_configs_load(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NEWSROOM_CONFIG_DIR", raising=False)
        assert load_config("prod").publish.breaking_window_minutes == 15
        assert load_config("local").feeds.parser == "regex"


class TestConfigSingleton:
    def test_loads_lazily_once(self) -> None:
        calls = []

        def loader() -> PipelineConfig:
            calls.append(1)
            return PipelineConfig()

        manager = ConfigSingleton(loader)
        first = manager.get()
        assert manager.get() is first
        assert len(calls) == 1

    def test_set_and_reset(self) -> None:
        manager = ConfigSingleton(PipelineConfig)
        custom = parse_config({"publish": {"max_count": 3}})
        manager.set(custom)
        assert manager.get() is custom
        manager.reset()
        assert manager.get() is not custom

    def test_no_loader_raises(self) -> None:
        with pytest.raises(RuntimeError):
            ConfigSingleton().get()
