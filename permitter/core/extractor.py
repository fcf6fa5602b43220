"""
Whitelist extraction for nested request payloads.

Given the decoded body and the declared keys, return a new mapping that holds
only those keys. Undeclared keys are dropped silently at every level.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from permitter.core.errors import MissingResourceError


def extract(
    payload: Any,
    required_key: str,
    unscoped: Iterable[str],
    scoped: Mapping[str, Iterable[str]],
) -> dict[str, Any]:
    """
    Require ``payload[required_key]`` and filter it.

    - ``unscoped`` keys are copied verbatim.
    - For each scope name, a mapping value is filtered to that scope's keys;
      a list value becomes a list of filtered mappings.

    Raises MissingResourceError when the resource key is absent or blank.
    """

    if not isinstance(payload, Mapping):
        raise MissingResourceError(required_key)

    resource = payload.get(required_key)
    if resource is None:
        raise MissingResourceError(required_key)
    if not isinstance(resource, Mapping):
        raise MissingResourceError(required_key, "must be an object")
    if not resource:
        raise MissingResourceError(required_key, "is empty")

    filtered: dict[str, Any] = {}
    for name in unscoped:
        if name in resource:
            filtered[name] = resource[name]

    for scope_name, names in scoped.items():
        if scope_name not in resource:
            continue
        value = _filter_scope(resource[scope_name], tuple(names))
        if value is not None:
            filtered[scope_name] = value

    return filtered


def _filter_scope(value: Any, names: tuple[str, ...]) -> dict[str, Any] | list[dict[str, Any]] | None:
    if isinstance(value, Mapping):
        return _pick(value, names)
    if isinstance(value, (list, tuple)):
        return [_pick(entry, names) for entry in value if isinstance(entry, Mapping)]
    # Scalars where an object was declared are not permitted.
    return None


def _pick(entry: Mapping[str, Any], names: tuple[str, ...]) -> dict[str, Any]:
    return {name: entry[name] for name in names if name in entry}
