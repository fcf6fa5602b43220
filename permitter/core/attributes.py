"""
Declarative attribute lists.

A resource author builds one ``PermitterDefinition`` per resource type:

    employee = PermitterDefinition("employee")
    employee.permit("first_name", "last_name")
    employee.permit("manager_id", authorize="read", as_="employee", dependent="nullify")
    with employee.scope("address") as address:
        address.permit("street", "city")

Nothing is validated here. Bad combinations (e.g. ``authorize`` on an attribute
whose type cannot be resolved) surface when a payload is permitted.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from permitter.core.config import PermitterConfig
    from permitter.core.contracts import Authorizer, Repository
    from permitter.core.permitter import Permitter


DEFAULT_ACTION = "read"


class Dependency(str, Enum):
    """Lookup mode for a referenced record. Unset or any other value means a strict lookup."""

    NULLIFY = "nullify"


@dataclass(frozen=True)
class AttributeOptions:
    scope: str | None = None
    authorize: str | bool | None = None
    as_: str | type | None = None
    dependent: Dependency | str | None = None

    @property
    def requires_authorization(self) -> bool:
        return self.authorize is not None and self.authorize is not False

    @property
    def action(self) -> str:
        if isinstance(self.authorize, str) and self.authorize:
            return self.authorize
        return DEFAULT_ACTION

    @property
    def tolerant_lookup(self) -> bool:
        return self.dependent == Dependency.NULLIFY


@dataclass(frozen=True)
class AttributeSpec:
    """One permitted payload key and its options."""

    name: str
    options: AttributeOptions

    @property
    def scope(self) -> str | None:
        return self.options.scope


AttributeList = tuple[AttributeSpec, ...]


class ScopedDeclaration:
    """Declarer handed out by ``PermitterDefinition.scope``."""

    def __init__(self, definition: PermitterDefinition, scope: str) -> None:
        self._definition = definition
        self.scope_name = scope

    def permit(self, *names: str, **options: Any) -> ScopedDeclaration:
        options["scope"] = self.scope_name
        self._definition.permit(*names, **options)
        return self


class PermitterDefinition:
    """
    Attribute list for one resource type.

    The list is append-only: ``permit`` adds entries, ``extend`` copies the list
    into a new definition that can keep appending without touching the parent.
    """

    def __init__(self, resource_name: str, attributes: Iterable[AttributeSpec] = ()) -> None:
        if not resource_name:
            raise ValueError("resource_name is required")
        self._resource_name = resource_name
        self._attributes: list[AttributeSpec] = list(attributes)

    def __repr__(self) -> str:
        return f"PermitterDefinition({self._resource_name!r}, attributes={len(self._attributes)})"

    @property
    def resource_name(self) -> str:
        return self._resource_name

    @property
    def attributes(self) -> AttributeList:
        return tuple(self._attributes)

    def permit(
        self,
        *names: str,
        scope: str | None = None,
        authorize: str | bool | None = None,
        as_: str | type | None = None,
        dependent: Dependency | str | None = None,
    ) -> PermitterDefinition:
        # One options object per call, shared by every name in it.
        options = AttributeOptions(
            scope=scope,
            authorize=authorize,
            as_=as_,
            dependent=dependent,
        )
        for name in names:
            self._attributes.append(AttributeSpec(name=name, options=options))
        return self

    @contextmanager
    def scope(self, name: str) -> Iterator[ScopedDeclaration]:
        yield ScopedDeclaration(self, name)

    def resource(self, name: str) -> PermitterDefinition:
        """Override the top-level key the payload must be nested under."""
        if not name:
            raise ValueError("resource name must not be empty")
        self._resource_name = name
        return self

    def extend(self, resource_name: str | None = None) -> PermitterDefinition:
        return PermitterDefinition(resource_name or self._resource_name, self._attributes)

    def permitter(
        self,
        params: Any,
        user: Any,
        repository: Repository,
        authorizer: Authorizer | None = None,
        config: PermitterConfig | None = None,
    ) -> Permitter:
        # Local import to avoid cycles.
        from permitter.core.permitter import Permitter

        return Permitter(self, params, user, repository, authorizer=authorizer, config=config)
