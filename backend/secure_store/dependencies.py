"""Shared accessors for settings, backend and stores."""

from __future__ import annotations

from functools import lru_cache

from secure_store.backends import MemoryBackend, SecretBackend, SecretServiceBackend
from secure_store.core.config import Settings, get_settings
from secure_store.store import UserSecureStore

_BACKEND: SecretBackend | None = None


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def create_backend(settings: Settings) -> SecretBackend:
    if settings.backend == "memory":
        return MemoryBackend()
    return SecretServiceBackend(collection=settings.collection)


def get_backend() -> SecretBackend:
    global _BACKEND
    if _BACKEND is None:
        _BACKEND = create_backend(get_app_settings())
    return _BACKEND


def get_store(namespace: str | None = None) -> UserSecureStore:
    """Open a store on the shared backend; ``namespace`` defaults to the configured one."""
    settings = get_app_settings()
    return UserSecureStore(
        settings.namespace if namespace is None else namespace,
        get_backend(),
        collection=settings.collection,
        label=settings.label,
    )


__all__ = ["create_backend", "get_app_settings", "get_backend", "get_store"]
