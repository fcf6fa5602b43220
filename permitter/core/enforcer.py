"""
Authorization pass over a filtered payload.

For every attribute declared with ``authorize``, each referenced id is looked
up and checked against the actor. The active ``Policy`` decides what a failure
does:

- REJECTION: the ``AccessDeniedError`` propagates and nothing is returned.
- PRESERVATION: the attribute is deleted from the payload.
- NILIFICATION: the attribute is kept with a ``None`` value.

Lookups and checks run sequentially, in declaration order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, MutableMapping
from typing import Any

from permitter.core.attributes import AttributeSpec
from permitter.core.contracts import Repository
from permitter.core.errors import AccessDeniedError
from permitter.core.policy import Policy
from permitter.core.registry import TypeRegistry

logger = logging.getLogger(__name__)

SELF_REFERENCE_ATTRIBUTE = "user_id"


def _wrap(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def collect_values(filtered: MutableMapping[str, Any], attribute: AttributeSpec) -> list[Any]:
    """Return the non-null ids an attribute references in the payload."""

    if not attribute.scope:
        return [v for v in _wrap(filtered.get(attribute.name)) if v is not None]

    values: list[Any] = []
    for entry in _wrap(filtered.get(attribute.scope)):
        if not isinstance(entry, MutableMapping):
            continue
        values.extend(v for v in _wrap(entry.get(attribute.name)) if v is not None)
    return values


def drop(filtered: MutableMapping[str, Any], attribute: AttributeSpec, *, nilify: bool = False) -> None:
    """Remove (or null out) an attribute wherever it was declared to live."""

    if attribute.scope:
        targets = [e for e in _wrap(filtered.get(attribute.scope)) if isinstance(e, MutableMapping)]
    else:
        targets = [filtered]

    for target in targets:
        if attribute.name not in target:
            continue
        if nilify:
            target[attribute.name] = None
        else:
            del target[attribute.name]


class AuthorizationEnforcer:
    def __init__(
        self,
        repository: Repository,
        registry: TypeRegistry,
        authorize: Callable[[str, Any], None],
        policy: Policy = Policy.REJECTION,
    ) -> None:
        self._repository = repository
        self._registry = registry
        self._authorize = authorize
        self._policy = policy
        # Attributes already set to None; a later pass leaves them as they are.
        self._nilified: set[AttributeSpec] = set()

    @property
    def policy(self) -> Policy:
        return self._policy

    def enforce(
        self,
        filtered: MutableMapping[str, Any],
        attributes: Iterable[AttributeSpec],
    ) -> MutableMapping[str, Any]:
        """Authorize every sensitive attribute in place and return ``filtered``."""

        for attribute in attributes:
            if not attribute.options.requires_authorization:
                continue

            values = collect_values(filtered, attribute)
            model = self._registry.target_for(attribute)

            if attribute.name == SELF_REFERENCE_ATTRIBUTE and not values:
                if attribute in self._nilified:
                    continue
                logger.debug("Dropping empty %s without authorization", attribute.name)
                drop(filtered, attribute)
                continue

            self._enforce_attribute(filtered, attribute, model, values)

        return filtered

    def _enforce_attribute(
        self,
        filtered: MutableMapping[str, Any],
        attribute: AttributeSpec,
        model: type,
        values: list[Any],
    ) -> None:
        action = attribute.options.action
        dropped = False

        for record_id in values:
            if attribute.options.tolerant_lookup:
                record = self._repository.find_or_none(model, record_id)
            else:
                record = self._repository.find(model, record_id)

            # Every id is still looked up so a missing strict reference raises.
            if dropped:
                continue

            if self._policy is Policy.REJECTION:
                try:
                    self._authorize(action, record)
                except AccessDeniedError:
                    logger.info(
                        "Authorization rejected attribute=%s action=%s model=%s id=%r",
                        attribute.name,
                        action,
                        model.__name__,
                        record_id,
                    )
                    raise
                continue

            if record is None:
                logger.debug("No %s id=%r; dropping %s", model.__name__, record_id, attribute.name)
                self._drop(filtered, attribute)
                dropped = True
                continue

            try:
                self._authorize(action, record)
            except AccessDeniedError:
                logger.debug(
                    "Not authorized to %s %s id=%r; dropping %s",
                    action,
                    model.__name__,
                    record_id,
                    attribute.name,
                )
                self._drop(filtered, attribute)
                dropped = True

    def _drop(self, filtered: MutableMapping[str, Any], attribute: AttributeSpec) -> None:
        nilify = self._policy is Policy.NILIFICATION
        drop(filtered, attribute, nilify=nilify)
        if nilify:
            self._nilified.add(attribute)
