from __future__ import annotations

from typing import Any


class PermitterError(Exception):
    """Base class for every error raised while permitting a payload."""


class MissingResourceError(PermitterError):
    """Raised when the payload lacks the required top-level resource key."""

    def __init__(self, resource_name: str, reason: str = "is missing") -> None:
        super().__init__(f"param {resource_name!r} {reason}")
        self.resource_name = resource_name


class PermitterConfigurationError(PermitterError):
    """Raised for declaration bugs, e.g. an authorized attribute with no resolvable type."""


class NotFoundError(PermitterError, LookupError):
    """Raised by a strict lookup when no record exists for the id."""

    def __init__(self, model_name: str, record_id: Any) -> None:
        super().__init__(f"{model_name} with id={record_id!r} not found")
        self.model_name = model_name
        self.record_id = record_id


class AccessDeniedError(PermitterError):
    """Raised by an authorizer when the actor may not perform `action` on `record`."""

    def __init__(self, action: str, record: Any, message: str | None = None) -> None:
        subject = type(record).__name__ if record is not None else "nothing"
        super().__init__(message or f"not authorized to {action} {subject}")
        self.action = action
        self.record = record
