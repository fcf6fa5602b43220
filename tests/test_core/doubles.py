"""Plain-Python collaborators for the permitter core tests (no database)."""
from __future__ import annotations

from dataclasses import dataclass

from permitter.core.errors import AccessDeniedError, NotFoundError


@dataclass
class Manager:
    id: int


@dataclass
class User:
    id: int


@dataclass
class Tag:
    id: int


class FakeRepository:
    def __init__(self, records=()):
        self._records = {(type(r), r.id): r for r in records}
        self.calls: list[tuple[str, type, object]] = []

    def find(self, model, record_id):
        self.calls.append(("find", model, record_id))
        record = self._records.get((model, record_id))
        if record is None:
            raise NotFoundError(model.__name__, record_id)
        return record

    def find_or_none(self, model, record_id):
        self.calls.append(("find_or_none", model, record_id))
        return self._records.get((model, record_id))


class FakeAuthorizer:
    """Allows everything except the (action, type name, id) triples in ``denied``."""

    def __init__(self, denied=()):
        self.denied = set(denied)
        self.checks: list[tuple[str, object]] = []

    def authorize(self, action, record):
        self.checks.append((action, record))
        key = (action, type(record).__name__, getattr(record, "id", None))
        if record is None or key in self.denied:
            raise AccessDeniedError(action, record)


