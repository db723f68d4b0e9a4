"""Tests for reading and writing config.json."""

import json
from pathlib import Path

import pytest

from infixcalc import config_manager


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_manager, "config_json", path)
    return path


def test_missing_file_gives_defaults(config_file):
    assert config_manager.load_setting_value("all") == {}
    assert config_manager.load_settings() == config_manager.DEFAULT_SETTINGS


def test_broken_file_gives_defaults(config_file):
    config_file.write_text("{ not json", encoding="utf-8")
    assert config_manager.load_setting_value("precision") == {}
    assert config_manager.load_settings()["precision"] == 50


def test_save_and_load(config_file):
    config_manager.save_setting({"precision": 30, "use_degrees": True})

    assert json.loads(config_file.read_text(encoding="utf-8"))["precision"] == 30
    assert config_manager.load_setting_value("precision") == 30
    assert config_manager.load_setting_value("decimal_places") == 10

    settings = config_manager.load_settings()
    assert settings["precision"] == 30
    assert settings["use_degrees"] is True
    assert settings["fractions"] is False


def test_overrides_win(config_file):
    config_manager.save_setting({"precision": 30})
    assert config_manager.load_settings({"precision": 12})["precision"] == 12


@pytest.mark.parametrize("given, expected", [(0, 1), (-5, 1), (10, 10), (10000, config_manager.NESTING_LIMIT)])
def test_nesting_depth_is_clamped(config_file, given, expected):
    assert config_manager.load_settings({"max_nesting_depth": given})["max_nesting_depth"] == expected


def test_precision_has_a_floor(config_file):
    assert config_manager.load_settings({"precision": 0})["precision"] == 2


def test_save_failure_returns_empty(tmp_path, monkeypatch):
    monkeypatch.setattr(config_manager, "config_json", tmp_path / "missing" / "config.json")
    assert config_manager.save_setting({"precision": 30}) == {}


def test_shipped_files_cover_every_setting():
    package = Path(config_manager.__file__).parent
    shipped = json.loads((package / "config.json").read_text(encoding="utf-8"))
    strings = json.loads((package / "ui_strings.json").read_text(encoding="utf-8"))

    assert set(shipped) == set(config_manager.DEFAULT_SETTINGS)
    assert set(config_manager.DEFAULT_SETTINGS) <= set(strings)
    assert config_manager.load_setting_description("precision") == strings["precision"]
