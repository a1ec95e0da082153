"""Test fixtures for the secure store."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture(autouse=True)
def reset_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset global singletons and environment between tests."""
    monkeypatch.setenv("USEC_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("USEC_BACKEND", "memory")
    monkeypatch.delenv("USEC_NAMESPACE", raising=False)

    from secure_store import dependencies as deps
    from secure_store.core.config import get_settings

    get_settings.cache_clear()
    deps.get_app_settings.cache_clear()
    deps._BACKEND = None
    yield
    get_settings.cache_clear()
    deps.get_app_settings.cache_clear()
    deps._BACKEND = None


@pytest.fixture
def backend():
    from secure_store.backends import MemoryBackend

    return MemoryBackend()


@pytest.fixture
def store(backend):
    from secure_store.store import UserSecureStore

    return UserSecureStore.open("com.example.app", backend=backend)
