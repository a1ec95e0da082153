"""Secret backends."""

from secure_store.backends.base import SecretBackend
from secure_store.backends.memory import MemoryBackend
from secure_store.backends.secret_service import SecretServiceBackend

__all__ = ["MemoryBackend", "SecretBackend", "SecretServiceBackend"]
