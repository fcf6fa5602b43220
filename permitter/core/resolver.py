from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from permitter.core.attributes import AttributeSpec
from permitter.core.extractor import extract


@dataclass(frozen=True)
class PartitionedAttributes:
    """Attribute names split by placement, in declaration order."""

    unscoped: tuple[str, ...]
    scoped: Mapping[str, tuple[str, ...]]


def partition(attributes: Iterable[AttributeSpec]) -> PartitionedAttributes:
    unscoped: list[str] = []
    scoped: dict[str, list[str]] = {}

    for attribute in attributes:
        if attribute.scope:
            scoped.setdefault(attribute.scope, []).append(attribute.name)
        else:
            unscoped.append(attribute.name)

    return PartitionedAttributes(
        unscoped=tuple(unscoped),
        scoped={name: tuple(names) for name, names in scoped.items()},
    )


def resolve(raw_payload: Any, attributes: Iterable[AttributeSpec], resource_name: str) -> dict[str, Any]:
    """Return ``raw_payload[resource_name]`` filtered down to the declared attributes."""
    parts = partition(attributes)
    return extract(raw_payload, resource_name, parts.unscoped, parts.scoped)
