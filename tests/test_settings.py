from __future__ import annotations

import importlib
import json
from pathlib import Path

import pytest

from architect.config.paths import ArchitectPaths, get_paths, reset_paths
from architect.config.settings import Settings, settings


def test_settings_do_not_write_to_disk(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    settings_path = tmp_path / "settings.json"
    settings_module = importlib.import_module("architect.config.settings")
    monkeypatch.setattr(settings_module, "get_settings_path", lambda: settings_path)

    settings.theme = "textual-light"

    assert settings.get("theme") == "textual-light"
    assert not settings_path.exists()


def test_defaults() -> None:
    settings._data = {}
    assert settings.llm_provider == "anthropic"
    assert settings.llm_model == "claude-sonnet-4-5"
    assert settings.temperature == pytest.approx(0.3)
    assert settings.max_tokens == 8192
    assert settings.plan_language == "English"
    assert settings.use_web_auth is True


def test_provider_round_trip_and_validation() -> None:
    settings.llm_provider = " OpenAI "
    assert settings.llm_provider == "openai"
    assert settings.llm_model == "gpt-4o"

    with pytest.raises(ValueError):
        settings.llm_provider = "mystery"


def test_unknown_provider_on_disk_falls_back() -> None:
    settings._data = {"llm": {"provider": "mystery"}}
    assert settings.llm_provider == "anthropic"


def test_temperature_is_clamped() -> None:
    settings.temperature = 4
    assert settings.temperature == 1.0
    settings._data["llm"]["temperature"] = -2
    assert settings.temperature == 0.0
    settings._data["llm"]["temperature"] = "warm"
    assert settings.temperature == pytest.approx(0.3)


def test_max_tokens_invalid_data_is_ignored() -> None:
    settings._data = {"llm": {"max_tokens": "lots"}}
    assert settings.max_tokens == 8192
    settings._data = {"llm": {"max_tokens": 0}}
    assert settings.max_tokens == 8192


def test_api_keys_prefer_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
    settings._data = {}
    assert settings.anthropic_api_key == "sk-env"
    settings.anthropic_api_key = "sk-file"
    assert settings.anthropic_api_key == "sk-file"
    settings.anthropic_api_key = None
    assert "anthropic_api_key" not in settings._data["llm"]


def test_theme_detected_from_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    settings._data = {}
    monkeypatch.setenv("COLORFGBG", "0;15")
    assert settings.theme == "textual-light"
    monkeypatch.setenv("COLORFGBG", "15;0")
    assert settings.theme == "textual-dark"


def test_load_reads_file_and_survives_corruption(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    settings_path = tmp_path / "settings.json"
    settings_module = importlib.import_module("architect.config.settings")
    monkeypatch.setattr(settings_module, "get_settings_path", lambda: settings_path)

    settings_path.write_text(json.dumps({"plan_language": "French"}))
    assert Settings().plan_language == "French"

    settings_path.write_text("{broken")
    assert Settings().plan_language == "English"


def test_paths_honor_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("ARCHITECT_CONFIG_DIR", raising=False)
    paths = ArchitectPaths(_config_home=tmp_path / "cfg", _state_home=tmp_path / "st")
    assert paths.settings_file == tmp_path / "cfg" / "architect" / "settings.json"
    assert paths.debug_log == tmp_path / "st" / "architect" / "debug.log"

    monkeypatch.setenv("ARCHITECT_CONFIG_DIR", str(tmp_path / "override"))
    assert paths.config_dir == tmp_path / "override"


def test_get_paths_is_cached_until_reset() -> None:
    first = get_paths()
    assert get_paths() is first
    reset_paths()
    assert get_paths() is not first
    reset_paths()
