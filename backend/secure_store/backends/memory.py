"""In-process secret backend."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Mapping

from secure_store.models.results import Done, Found, LookupResult, NotFound, WriteResult
from secure_store.schema import SecretSchema


@dataclass(slots=True)
class MemoryRecord:
    collection: str
    label: str
    attributes: dict[str, str]
    secret: str


class MemoryBackend:
    """Keeps records in a list and matches them the way the Secret Service does.

    Nothing survives the process. Every primitive call is appended to
    ``calls`` as ``(operation, attributes)``.
    """

    def __init__(self) -> None:
        self.records: list[MemoryRecord] = []
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._lock = threading.Lock()

    def lookup(self, schema: SecretSchema, attributes: Mapping[str, str]) -> LookupResult:
        wanted = schema.qualify(attributes)
        with self._lock:
            self.calls.append(("lookup", wanted))
            for record in self.records:
                if _matches(record, wanted):
                    return Found(record.secret)
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
        with self._lock:
            self.calls.append(("store", wanted))
            for record in self.records:
                if record.collection == collection and record.attributes == wanted:
                    record.label = label
                    record.secret = secret
                    return Done()
            self.records.append(MemoryRecord(collection, label, wanted, secret))
        return Done()

    def clear(self, schema: SecretSchema, attributes: Mapping[str, str]) -> WriteResult:
        wanted = schema.qualify(attributes)
        with self._lock:
            self.calls.append(("clear", wanted))
            self.records = [record for record in self.records if not _matches(record, wanted)]
        return Done()


def _matches(record: MemoryRecord, wanted: Mapping[str, str]) -> bool:
    return all(record.attributes.get(key) == value for key, value in wanted.items())


__all__ = ["MemoryBackend", "MemoryRecord"]
