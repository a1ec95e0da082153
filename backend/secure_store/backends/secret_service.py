"""Secret Service (freedesktop.org) backend.

The collection is opened through keyring's Secret Service backend, which
connects over D-Bus and prompts to unlock a locked collection. Records are
then searched, created and deleted by attribute with secretstorage, since the
keyring API only knows (service, username) pairs.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping

import secretstorage
from jeepney import DBusErrorResponse
from keyring.backends.SecretService import Keyring as SecretServiceKeyring
from keyring.errors import KeyringError
from secretstorage.exceptions import SecretStorageException

from secure_store.models.results import BackendError, Done, Found, LookupResult, NotFound, WriteResult
from secure_store.schema import SecretSchema

logger = logging.getLogger(__name__)

ALIAS_PATH_PREFIX = "/org/freedesktop/secrets/aliases/"

_BACKEND_ERRORS = (SecretStorageException, KeyringError, DBusErrorResponse, OSError, UnicodeError)


def collection_path(collection: str) -> str:
    """Map a collection alias ("default", "session") or object path to an object path."""
    if collection.startswith("/"):
        return collection
    return ALIAS_PATH_PREFIX + collection


def _describe(exc: Exception) -> str:
    # the message of a codec error quotes the offending part of the secret
    if isinstance(exc, UnicodeError):
        return "value is not valid UTF-8 text"
    return str(exc) or type(exc).__name__


class SecretServiceBackend:
    """Attribute-addressed access to the user's Secret Service."""

    def __init__(
        self,
        collection: str = "default",
        keyring_factory: Callable[[], Any] = SecretServiceKeyring,
    ) -> None:
        self.default_collection = collection
        self._keyring_factory = keyring_factory
        self._collections: dict[str, secretstorage.Collection] = {}
        self._lock = threading.Lock()

    def _collection(self, collection: str | None = None) -> secretstorage.Collection:
        path = collection_path(collection or self.default_collection)
        with self._lock:
            cached = self._collections.get(path)
            if cached is not None:
                return cached
            keyring = self._keyring_factory()
            keyring.preferred_collection = path
            opened = keyring.get_preferred_collection()
            self._collections[path] = opened
            return opened

    def _connection(self) -> Any:
        return self._collection().connection

    def lookup(self, schema: SecretSchema, attributes: Mapping[str, str]) -> LookupResult:
        wanted = schema.qualify(attributes)
        try:
            for item in secretstorage.search_items(self._connection(), wanted):
                if item.is_locked():
                    item.unlock()
                return Found(item.get_secret().decode("utf-8"))
        except _BACKEND_ERRORS as exc:
            logger.debug("secret service lookup failed", exc_info=True)
            return BackendError("lookup", _describe(exc))
        return NotFound()

    def store(
        self,
        schema: SecretSchema,
        collection: str,
        label: str,
        secret: str,
        attributes: Mapping[str, str],
    ) -> WriteResult:
        wanted = schema.qualify(attributes)
        try:
            target = self._collection(collection)
            target.create_item(label, wanted, secret.encode("utf-8"), replace=True)
        except _BACKEND_ERRORS as exc:
            logger.debug("secret service store failed", exc_info=True)
            return BackendError("store", _describe(exc))
        return Done()

    def clear(self, schema: SecretSchema, attributes: Mapping[str, str]) -> WriteResult:
        wanted = schema.qualify(attributes)
        try:
            items = list(secretstorage.search_items(self._connection(), wanted))
            for item in items:
                item.delete()
        except _BACKEND_ERRORS as exc:
            logger.debug("secret service clear failed", exc_info=True)
            return BackendError("clear", _describe(exc))
        return Done()


__all__ = ["SecretServiceBackend", "collection_path"]
