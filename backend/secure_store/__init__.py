"""Per-application credential storage in the OS secret store."""

from secure_store.models.results import BackendError, Found, NotFound
from secure_store.store import UserSecureStore

__all__ = ["BackendError", "Found", "NotFound", "UserSecureStore"]
