"""Collaborator interfaces consumed by the permitter core."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol


class Repository(Protocol):
    def find(self, model: type, record_id: Any) -> Any:
        """Return the record or raise ``NotFoundError``."""
        ...

    def find_or_none(self, model: type, record_id: Any) -> Any | None:
        ...


class Authorizer(Protocol):
    def authorize(self, action: str, record: Any) -> None:
        """Return normally when allowed, raise ``AccessDeniedError`` otherwise."""
        ...


# Built once per Permitter from the acting user, e.g. an Authorizer class.
AuthorizerFactory = Callable[[Any], Authorizer]
