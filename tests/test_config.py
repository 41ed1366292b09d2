"""Tests for the global configuration file."""

import logging
from datetime import date

import pytest
from pydantic import ValidationError

from burndown.domain.types import DateAxis
from burndown.global_config import (
    SprintConfig,
    get_config_dir,
    get_data_file,
    get_global_config,
    save_global_config,
)


@pytest.fixture(autouse=True)
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("BURNDOWN_HOME", str(tmp_path / "home"))
    return tmp_path / "home"


class TestSprintConfig:
    def test_defaults(self):
        config = SprintConfig()
        assert config.axis_start is None
        assert config.axis_days == 14
        assert config.data_file is None

    def test_axis_follows_today_when_unset(self):
        assert SprintConfig(axis_days=3).axis(date(2025, 9, 17)) == DateAxis(start=date(2025, 9, 17), days=3)

    def test_fixed_start(self):
        config = SprintConfig(axis_start=date(2025, 9, 1))
        assert config.axis(date(2025, 9, 17)).start == date(2025, 9, 1)

    def test_days_must_be_positive(self):
        with pytest.raises(ValidationError):
            SprintConfig(axis_days=0)


class TestConfigFile:
    """Tests for loading and saving config.json."""

    def test_config_dir_is_created(self, home):
        assert get_config_dir() == home
        assert home.is_dir()

    def test_missing_file_gives_defaults(self):
        assert get_global_config() == SprintConfig()

    def test_save_and_load(self):
        config = SprintConfig(axis_start=date(2025, 9, 1), axis_days=10)
        save_global_config(config)
        assert get_global_config() == config

    def test_unreadable_file_falls_back(self, home, caplog):
        home.mkdir(parents=True)
        (home / "config.json").write_text('{"axis_days": 0}', encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="burndown"):
            assert get_global_config() == SprintConfig()
        assert "Ignoring unreadable config" in caplog.text

    def test_data_file(self, home, tmp_path):
        assert get_data_file(SprintConfig()) == home / "tasks.json"
        custom = tmp_path / "elsewhere.json"
        assert get_data_file(SprintConfig(data_file=str(custom))) == custom
