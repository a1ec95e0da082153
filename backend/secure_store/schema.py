"""Namespace-bound secret schema and record addressing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

# Attribute holding the app name a record was saved for.
APP_NAME_KEY = "auth_app_name"
# Every record carries this constant pair so that all records of a namespace
# can be matched (and removed) at once.
COMMON_KEY_ID = "common_key_id"
COMMON_KEY_VALUE = "common_key_value"
# libsecret stores the schema name under this attribute.
SCHEMA_NAME_ATTRIBUTE = "xdg:schema"
DEFAULT_LABEL = "UserSecure"


@dataclass(slots=True, frozen=True)
class SecretSchema:
    """Name and declared string attributes of a family of secret records."""

    name: str
    attributes: tuple[str, ...]

    def check(self, attributes: Mapping[str, str]) -> dict[str, str]:
        """Return ``attributes`` as a dict, rejecting names the schema does not declare."""
        unknown = sorted(set(attributes) - set(self.attributes))
        if unknown:
            raise ValueError(f"attributes {unknown} are not declared by schema {self.name!r}")
        return dict(attributes)

    def qualify(self, attributes: Mapping[str, str]) -> dict[str, str]:
        """Checked attributes plus the schema name, as written to the Secret Service."""
        qualified = self.check(attributes)
        qualified[SCHEMA_NAME_ATTRIBUTE] = self.name
        return qualified


def build_schema(namespace: str) -> SecretSchema:
    return SecretSchema(name=namespace, attributes=(APP_NAME_KEY, COMMON_KEY_ID))


def record_attributes(app_name: str) -> dict[str, str]:
    """Attributes identifying the single record written for ``app_name``."""
    return {APP_NAME_KEY: app_name, COMMON_KEY_ID: COMMON_KEY_VALUE}


def app_filter(app_name: str) -> dict[str, str]:
    return {APP_NAME_KEY: app_name}


def namespace_filter() -> dict[str, str]:
    return {COMMON_KEY_ID: COMMON_KEY_VALUE}


__all__ = [
    "APP_NAME_KEY",
    "COMMON_KEY_ID",
    "COMMON_KEY_VALUE",
    "DEFAULT_LABEL",
    "SCHEMA_NAME_ATTRIBUTE",
    "SecretSchema",
    "app_filter",
    "build_schema",
    "namespace_filter",
    "record_attributes",
]
