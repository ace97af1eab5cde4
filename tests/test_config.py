"""Tests for configuration loading, merging and env overrides."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from music_journal.config import (
    AppConfig,
    RecommendationsConfig,
    StatsConfig,
    _deep_merge,
    load_config,
)


def _write_toml(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:
    def test_default_config_loads(self, monkeypatch):
        monkeypatch.delenv("MUSIC_JOURNAL_DB_PATH", raising=False)
        monkeypatch.delenv("MUSIC_JOURNAL_LOG_LEVEL", raising=False)
        monkeypatch.delenv("MUSIC_JOURNAL_DEBUG", raising=False)
        config = load_config()
        assert isinstance(config, AppConfig)
        assert config.database.db_path == "data/db/music_journal.db"
        assert config.recommendations.like_threshold == 4
        assert config.stats.top_genres_limit == 5

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_local_toml_is_merged(self, tmp_path, monkeypatch):
        monkeypatch.delenv("MUSIC_JOURNAL_DB_PATH", raising=False)
        base = _write_toml(
            tmp_path / "cfg" / "default.toml",
            '[database]\ndb_path = "a.db"\nwal_mode = true\n[stats]\ntop_rated_limit = 10\n',
        )
        _write_toml(tmp_path / "cfg" / "local.toml", "[stats]\ntop_rated_limit = 3\n")

        config = load_config(base)
        assert config.database.db_path == "a.db"
        assert config.database.wal_mode is True
        assert config.stats.top_rated_limit == 3

    def test_env_overrides(self, tmp_path, monkeypatch):
        base = _write_toml(tmp_path / "default.toml", '[database]\ndb_path = "a.db"\n')
        monkeypatch.setenv("MUSIC_JOURNAL_DB_PATH", "/tmp/override.db")
        monkeypatch.setenv("MUSIC_JOURNAL_LOG_LEVEL", "debug")
        monkeypatch.setenv("MUSIC_JOURNAL_DEBUG", "true")

        config = load_config(base)
        assert config.database.db_path == "/tmp/override.db"
        assert config.logging.level == "DEBUG"
        assert config.debug is True

    def test_invalid_value_raises(self, tmp_path):
        base = _write_toml(tmp_path / "default.toml", "[recommendations]\nlike_threshold = 7\n")
        with pytest.raises(ValidationError):
            load_config(base)


class TestSubConfigs:
    def test_frozen(self):
        with pytest.raises(ValidationError):
            AppConfig().debug = True

    def test_negative_genre_cap_rejected(self):
        with pytest.raises(ValidationError):
            RecommendationsConfig(max_genre_suggestions=-1)

    def test_zero_stats_limit_rejected(self):
        with pytest.raises(ValidationError):
            StatsConfig(top_rated_limit=0)


class TestDeepMerge:
    def test_nested_merge_does_not_mutate(self):
        base = {"a": {"x": 1, "y": 2}, "b": 1}
        merged = _deep_merge(base, {"a": {"y": 3}, "c": 4})
        assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}
        assert base["a"]["y"] == 2
