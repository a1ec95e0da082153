"""Tests for settings loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from secure_store.backends import MemoryBackend, SecretServiceBackend
from secure_store.core.config import Settings
from secure_store.dependencies import create_backend


def test_defaults_without_file(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("USEC_BACKEND")
    settings = Settings.from_yaml()
    assert settings.namespace == ""
    assert settings.backend == "secret_service"
    assert settings.collection == "default"
    assert settings.label == "UserSecure"


def test_yaml_sections_map_to_fields(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("USEC_BACKEND")
    config = tmp_path / "config.yaml"
    config.write_text(
        "store:\n"
        "  namespace: com.example.app\n"
        "secret_service:\n"
        "  collection: session\n"
        "  label: Tokens\n"
        "logging:\n"
        "  level: debug\n"
        "  json: false\n",
        encoding="utf-8",
    )
    settings = Settings.from_yaml(config)
    assert settings.namespace == "com.example.app"
    assert settings.collection == "session"
    assert settings.label == "Tokens"
    assert settings.log_level == "DEBUG"
    assert settings.log_json is False


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("store:\n  namespace: from-file\n", encoding="utf-8")
    monkeypatch.setenv("USEC_CONFIG", str(config))
    monkeypatch.setenv("USEC_NAMESPACE", "from-env")
    settings = Settings.from_yaml()
    assert settings.namespace == "from-env"
    assert settings.backend == "memory"


def test_unknown_backend_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("USEC_BACKEND", "plaintext")
    with pytest.raises(ValidationError):
        Settings.from_yaml()


def test_create_backend_follows_settings() -> None:
    assert isinstance(create_backend(Settings(backend="memory")), MemoryBackend)
    backend = create_backend(Settings(collection="session"))
    assert isinstance(backend, SecretServiceBackend)
    assert backend.default_collection == "session"


def test_padded_namespace_is_kept_as_written(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="secure_store.core.config"):
        settings = Settings(namespace=" com.example.app ")
    assert settings.namespace == " com.example.app "
    assert "surrounding whitespace" in caplog.text


def test_blank_namespace_counts_as_unset() -> None:
    assert Settings(namespace="   ").namespace == ""
    assert Settings(namespace=None).namespace == ""


def test_top_level_field_keys_are_accepted(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("namespace: com.example.flat\nunknown: 1\nstore:\n  unknown: 2\n", encoding="utf-8")
    assert Settings.from_yaml(config).namespace == "com.example.flat"


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("- not\n- a mapping\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        Settings.from_yaml(config)
