"""Tagged values passed between the store and its backends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from secure_store.schema import SecretSchema


@dataclass(slots=True, frozen=True)
class Found:
    value: str


@dataclass(slots=True, frozen=True)
class NotFound:
    pass


@dataclass(slots=True, frozen=True)
class Done:
    pass


@dataclass(slots=True, frozen=True)
class BackendError:
    operation: str
    detail: str


LookupResult = Union[Found, NotFound, BackendError]
WriteResult = Union[Done, BackendError]


@dataclass(slots=True, frozen=True)
class Active:
    """Store bound to a usable namespace."""

    schema: SecretSchema


@dataclass(slots=True, frozen=True)
class Disabled:
    """Store opened with an empty namespace; every operation is a no-op."""


StoreState = Union[Active, Disabled]


__all__ = [
    "Active",
    "BackendError",
    "Disabled",
    "Done",
    "Found",
    "LookupResult",
    "NotFound",
    "StoreState",
    "WriteResult",
]
