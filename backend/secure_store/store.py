"""Per-application credential storage in the OS secret store."""

from __future__ import annotations

import logging
import time
from typing import Callable, Union

from secure_store.backends.base import SecretBackend
from secure_store.core.logging import log_context
from secure_store.core.metrics import BACKEND_CALLS, BACKEND_LATENCY
from secure_store.models.results import (
    Active,
    BackendError,
    Disabled,
    Done,
    Found,
    LookupResult,
    NotFound,
    StoreState,
)
from secure_store.schema import (
    DEFAULT_LABEL,
    app_filter,
    build_schema,
    namespace_filter,
    record_attributes,
)

logger = logging.getLogger(__name__)

_Result = Union[Found, NotFound, Done, BackendError]


class UserSecureStore:
    """Best-effort credential cache scoped to one namespace.

    Records are addressed by app name within the namespace, and every record
    also carries a constant common tag so that ``delete_all_data`` can match
    the whole namespace. An empty namespace produces a disabled store whose
    operations do nothing and never reach the backend.

    Nothing is raised to the caller. ``load`` returns ``""`` both when no
    record exists and when the backend failed; callers that must tell the two
    apart use ``lookup``.
    """

    def __init__(
        self,
        namespace: str,
        backend: SecretBackend,
        collection: str = "default",
        label: str = DEFAULT_LABEL,
    ) -> None:
        self.namespace = namespace
        self.collection = collection
        self.label = label
        self._backend = backend
        self._state: StoreState = Active(build_schema(namespace)) if namespace else Disabled()

    @classmethod
    def open(cls, namespace: str, backend: SecretBackend | None = None, **kwargs: str) -> "UserSecureStore":
        """Build a store for ``namespace``; never fails."""
        if backend is None:
            from secure_store.dependencies import get_backend

            backend = get_backend()
        return cls(namespace, backend, **kwargs)

    @property
    def enabled(self) -> bool:
        return isinstance(self._state, Active)

    def lookup(self, app_name: str) -> LookupResult:
        state = self._state
        if not isinstance(state, Active):
            return NotFound()
        result = self._call("lookup", app_name, lambda: self._backend.lookup(state.schema, app_filter(app_name)))
        if isinstance(result, NotFound):
            logger.debug("no stored data", extra=log_context(namespace=self.namespace, app_name=app_name))
        return result

    def load(self, app_name: str) -> str:
        result = self.lookup(app_name)
        if isinstance(result, Found):
            return result.value
        return ""

    def save(self, app_name: str, payload: str) -> None:
        state = self._state
        if not isinstance(state, Active):
            return
        self._call(
            "store",
            app_name,
            lambda: self._backend.store(
                state.schema, self.collection, self.label, payload, record_attributes(app_name)
            ),
        )

    def delete_user_data(self, app_name: str) -> None:
        state = self._state
        if not isinstance(state, Active):
            return
        self._call("clear", app_name, lambda: self._backend.clear(state.schema, app_filter(app_name)))

    def delete_all_data(self) -> None:
        state = self._state
        if not isinstance(state, Active):
            return
        self._call("clear_all", None, lambda: self._backend.clear(state.schema, namespace_filter()))

    def _call(self, operation: str, app_name: str | None, fn: Callable[[], _Result]) -> _Result:
        started = time.perf_counter()
        result = fn()
        BACKEND_LATENCY.labels(operation=operation).observe(time.perf_counter() - started)
        BACKEND_CALLS.labels(operation=operation, outcome=_outcome(result)).inc()
        if isinstance(result, BackendError):
            logger.warning(
                "secret backend %s failed: %s",
                result.operation,
                result.detail,
                extra=log_context(namespace=self.namespace, app_name=app_name, operation=operation),
            )
        return result


def _outcome(result: _Result) -> str:
    if isinstance(result, Found):
        return "found"
    if isinstance(result, NotFound):
        return "not_found"
    if isinstance(result, BackendError):
        return "error"
    return "ok"


__all__ = ["UserSecureStore"]
