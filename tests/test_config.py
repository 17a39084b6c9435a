"""Tests covering environment-driven settings."""

import importlib
import os
from typing import Dict

import pytest

import config as config_module

_ENV_VARS = [
    "MATCHUP_PREVIEW_SCALE",
    "MATCHUP_HTTP_TIMEOUT",
    "MATCHUP_LOGO_TIMEOUT",
    "MATCHUP_LEAGUE_LIMIT",
]


@pytest.fixture
def reload_config(monkeypatch):
    """Reload ``config`` with the provided environment overrides."""

    def _reload(overrides: Dict[str, str]):
        for key in _ENV_VARS:
            monkeypatch.delenv(key, raising=False)
        for key, value in overrides.items():
            monkeypatch.setenv(key, value)
        return importlib.reload(config_module)

    yield _reload

    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    importlib.reload(config_module)


def test_defaults(reload_config):
    config = reload_config({})

    assert (config.CANVAS_WIDTH, config.CANVAS_HEIGHT) == (1200, 800)
    assert config.PREVIEW_SCALE == 0.5
    assert config.LOGO_TIMEOUT == 10
    assert config.LEAGUE_LIMIT == 25


def test_overrides_are_applied(reload_config):
    config = reload_config(
        {"MATCHUP_PREVIEW_SCALE": "0.25", "MATCHUP_LOGO_TIMEOUT": "3", "MATCHUP_LEAGUE_LIMIT": "5"}
    )

    assert config.PREVIEW_SCALE == 0.25
    assert config.LOGO_TIMEOUT == 3
    assert config.LEAGUE_LIMIT == 5


@pytest.mark.parametrize("value", ["abc", "0", "-2", "1.5"])
def test_invalid_preview_scale_falls_back(reload_config, value):
    config = reload_config({"MATCHUP_PREVIEW_SCALE": value})

    assert config.PREVIEW_SCALE == 0.5


def test_invalid_timeout_falls_back(reload_config, caplog):
    config = reload_config({"MATCHUP_HTTP_TIMEOUT": "soon"})

    assert config.HTTP_TIMEOUT == 10
    assert "Invalid MATCHUP_HTTP_TIMEOUT" in caplog.text


def test_env_file_values_do_not_override_environment(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text('# comment\nMATCHUP_TEST_A="quoted"\nMATCHUP_TEST_B=from-file\n')
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MATCHUP_TEST_B", "existing")
    monkeypatch.delenv("MATCHUP_TEST_A", raising=False)
    monkeypatch.delenv("PYTEST_CURRENT_TEST", raising=False)
    monkeypatch.setattr(config_module, "_ENV_LOADED", False)

    assert tmp_path / ".env" in config_module._env_files()

    config_module.load_environment()

    assert os.environ["MATCHUP_TEST_A"] == "quoted"
    assert os.environ["MATCHUP_TEST_B"] == "existing"
    monkeypatch.delenv("MATCHUP_TEST_A")


def test_skip_flag_disables_env_files(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("MATCHUP_TEST_C=set\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MATCHUP_SKIP_DOTENV", "1")
    monkeypatch.delenv("MATCHUP_TEST_C", raising=False)
    monkeypatch.setattr(config_module, "_ENV_LOADED", False)

    config_module.load_environment()

    assert "MATCHUP_TEST_C" not in os.environ
