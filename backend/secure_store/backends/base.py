"""Secret backend protocol."""

from __future__ import annotations

from typing import Mapping, Protocol

from secure_store.models.results import LookupResult, WriteResult
from secure_store.schema import SecretSchema


class SecretBackend(Protocol):
    """Synchronous primitives of an attribute-addressed secret store.

    Attribute names must be declared by ``schema``; implementations raise
    ``ValueError`` otherwise. Storage failures are returned as
    ``BackendError`` values, never raised.
    """

    def lookup(self, schema: SecretSchema, attributes: Mapping[str, str]) -> LookupResult:
        """Return the secret of one record matching every attribute."""
        ...

    def store(
        self,
        schema: SecretSchema,
        collection: str,
        label: str,
        secret: str,
        attributes: Mapping[str, str],
    ) -> WriteResult:
        """Create the record, replacing one with exactly the same attributes."""
        ...

    def clear(self, schema: SecretSchema, attributes: Mapping[str, str]) -> WriteResult:
        """Remove every record matching all attributes. No match is success."""
        ...


__all__ = ["SecretBackend"]
