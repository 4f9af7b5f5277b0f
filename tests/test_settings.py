from __future__ import annotations

import json
import logging

import pytest
from pydantic import ValidationError

from aes5 import settings


@pytest.fixture(autouse=True)
def _clear_settings_cache(monkeypatch):
    for name in ("AES5_CONFIG_PATH", "AES5_DEFAULT_TOLERANCE_PPM", "AES5_EVENTS_ENABLED"):
        monkeypatch.delenv(name, raising=False)
    settings.load_runtime_settings.cache_clear()
    settings.load_active_config.cache_clear()
    yield
    settings.load_runtime_settings.cache_clear()
    settings.load_active_config.cache_clear()


def test_defaults_without_environment() -> None:
    runtime = settings.load_runtime_settings()

    assert runtime.config_path is None
    assert runtime.default_tolerance_ppm is None
    assert runtime.events_enabled is True
    assert settings.load_active_config().tolerance.default_ppm == 100


def test_events_can_be_disabled(monkeypatch) -> None:
    monkeypatch.setenv("AES5_EVENTS_ENABLED", "off")

    assert settings.load_runtime_settings().events_enabled is False


def test_config_file_and_tolerance_override(monkeypatch, tmp_path) -> None:
    path = tmp_path / "validator.json"
    path.write_text(json.dumps({"tolerance": {"default_ppm": 500, "tight_ppm": 100}, "max_batch_size": 4}))
    monkeypatch.setenv("AES5_CONFIG_PATH", str(path))
    monkeypatch.setenv("AES5_DEFAULT_TOLERANCE_PPM", "750")

    config = settings.load_active_config()

    assert config.tolerance.default_ppm == 750
    assert config.tolerance.tight_ppm == 100
    assert config.max_batch_size == 4


def test_tolerance_override_below_tight_lowers_tight(monkeypatch, caplog) -> None:
    monkeypatch.setenv("AES5_DEFAULT_TOLERANCE_PPM", "10")

    with caplog.at_level(logging.WARNING, logger="aes5.settings"):
        config = settings.load_active_config()

    assert config.tolerance.default_ppm == 10
    assert config.tolerance.tight_ppm == 10
    assert "Tight tolerance lowered" in caplog.text


def test_non_positive_tolerance_override_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("AES5_DEFAULT_TOLERANCE_PPM", "-5")

    with pytest.raises(ValidationError):
        settings.load_active_config()


def test_settings_are_cached(monkeypatch) -> None:
    first = settings.load_runtime_settings()
    monkeypatch.setenv("AES5_EVENTS_ENABLED", "false")

    assert settings.load_runtime_settings() is first
