from __future__ import annotations

import logging
import re

from permitter.core.attributes import AttributeSpec
from permitter.core.errors import PermitterConfigurationError

logger = logging.getLogger(__name__)

_ID_SUFFIX_RE = re.compile(r"^(.+)_ids?$")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def normalize_hint(hint: str | type) -> str:
    """
    Turn a type hint into a registry key.

    Example:
        PerformanceReview -> performance_review
        "ReviewGoal"      -> review_goal
    """

    name = hint.__name__ if isinstance(hint, type) else str(hint)
    return _CAMEL_BOUNDARY_RE.sub("_", name.strip()).lower()


def derive_type_hint(attribute_name: str) -> str | None:
    """Strip a trailing ``_id``/``_ids``; None when the name has neither."""
    match = _ID_SUFFIX_RE.match(attribute_name)
    return match.group(1) if match else None


class TypeRegistry:
    """
    Maps type-hint identifiers to model types.

    Populated once at startup:
        registry.register(Employee)              # "employee"
        registry.register("manager", Employee)   # alias
    """

    def __init__(self) -> None:
        self._types: dict[str, type] = {}

    def __contains__(self, hint: str | type) -> bool:
        return normalize_hint(hint) in self._types

    def register(self, name_or_type: str | type, model: type | None = None) -> TypeRegistry:
        if model is None:
            if not isinstance(name_or_type, type):
                raise TypeError("register(name) needs a model: register(name, Model)")
            model = name_or_type
        key = normalize_hint(name_or_type)
        self._types[key] = model
        logger.debug("Registered type hint=%s model=%s", key, model.__name__)
        return self

    def resolve(self, hint: str | type) -> type:
        key = normalize_hint(hint)
        model = self._types.get(key)
        if model is None:
            raise PermitterConfigurationError(f"Type hint {hint!r} does not resolve to a registered type")
        return model

    def target_for(self, attribute: AttributeSpec) -> type:
        hint = attribute.options.as_ or derive_type_hint(attribute.name)
        if not hint:
            raise PermitterConfigurationError(
                f"Cannot permit {attribute.name!r} unless the attribute name ends in _id or _ids, "
                "or a type is given via as_ (e.g. as_='employee')"
            )
        return self.resolve(hint)
