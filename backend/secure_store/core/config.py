"""Application configuration handling.

Settings come from three layers, later ones winning: field defaults, a YAML
file, then ``USEC_*`` environment variables. The YAML file is sectioned::

    store:
      namespace: com.example.app
      backend: secret_service
    secret_service:
      collection: default
      label: UserSecure
    logging:
      level: INFO
      json: true

Top-level keys named after a field (``namespace: ...``) are accepted too.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Mapping

import yaml
from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "USEC_"
CONFIG_ENV = f"{ENV_PREFIX}CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/user-secure/config.yaml")

_SECTION_FIELDS: Mapping[tuple[str, str], str] = {
    ("store", "namespace"): "namespace",
    ("store", "backend"): "backend",
    ("secret_service", "collection"): "collection",
    ("secret_service", "label"): "label",
    ("logging", "level"): "log_level",
    ("logging", "json"): "log_json",
}


class Settings(BaseModel):
    """Runtime configuration of the store, its backend and logging."""

    namespace: str = ""
    backend: Literal["secret_service", "memory"] = "secret_service"
    collection: str = "default"
    label: str = "UserSecure"
    log_level: str = "INFO"
    log_json: bool = True

    model_config = {
        "validate_assignment": True,
        "extra": "ignore",
    }

    @field_validator("namespace", mode="before")
    @classmethod
    def _check_namespace(cls, value: Any) -> str:
        if value is None:
            return ""
        if not isinstance(value, str):
            raise TypeError("namespace must be a string")
        if not value.strip():
            # blank counts as unset, which disables the store
            return ""
        if value != value.strip():
            logger.warning("namespace %r has surrounding whitespace; it is used as written", value)
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> str:
        return str(value).upper()

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> "Settings":
        """Load ``path`` (or ``$USEC_CONFIG``, or the default file) and apply env overrides."""
        data: dict[str, Any] = {}
        config_path = _config_path(path)
        if config_path is not None:
            data.update(_read_config(config_path))
        data.update(_env_overrides(os.environ))
        return cls(**data)


def _config_path(explicit: Path | None) -> Path | None:
    """The config file to read, or None when it does not exist."""
    if explicit is None:
        env_path = os.environ.get(CONFIG_ENV)
        explicit = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
    resolved = explicit.expanduser()
    return resolved if resolved.is_file() else None


def _read_config(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"{path}: expected a mapping at the top level")
    data: dict[str, Any] = {}
    for section, options in raw.items():
        if not isinstance(options, Mapping):
            if section in Settings.model_fields:
                data[section] = options
            continue
        for option, value in options.items():
            field_name = _SECTION_FIELDS.get((section, option))
            if field_name is not None:
                data[field_name] = value
    return data


def _env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in environ.items():
        field_name = key[len(ENV_PREFIX) :].lower() if key.startswith(ENV_PREFIX) else None
        if field_name in Settings.model_fields:
            overrides[field_name] = value
    return overrides


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings accessor."""
    return Settings.from_yaml()


__all__ = ["Settings", "get_settings"]
