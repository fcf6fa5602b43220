from __future__ import annotations

import logging
from typing import Any

from permitter.core.errors import AccessDeniedError
from permitter.core.registry import normalize_hint
from permitter.models.organization import Department, User
from permitter.security.abilities import AbilitiesConfig

logger = logging.getLogger(__name__)


def _record_department_id(record: Any) -> int | None:
    if isinstance(record, Department):
        return record.id
    return getattr(record, "department_id", None)


class Ability:
    """
    Role-based authorizer for one user.

    A missing record (``None``) is never authorized: strict lookups raise
    before reaching here, and a tolerant lookup that found nothing has no
    record the user could be allowed to act on.
    """

    def __init__(self, user: User, config: AbilitiesConfig) -> None:
        self._user = user
        self._rules = config.rules_for(user.role_names)

    def can(self, action: str, record: Any) -> bool:
        if record is None:
            return False

        action = action.lower()
        subject = normalize_hint(type(record))
        for rule in self._rules:
            if not rule.matches(action, subject):
                continue
            if rule.same_department and _record_department_id(record) != self._user.department_id:
                continue
            return True
        return False

    def authorize(self, action: str, record: Any) -> None:
        if self.can(action, record):
            return
        logger.info(
            "Access denied user_id=%s action=%s subject=%s",
            self._user.id,
            action,
            type(record).__name__ if record is not None else None,
        )
        raise AccessDeniedError(action, record)


class AbilityFactory:
    """Builds an ``Ability`` per acting user; plug into ``PermitterConfig.authorizer``."""

    def __init__(self, config: AbilitiesConfig) -> None:
        self._config = config

    def __call__(self, user: User) -> Ability:
        return Ability(user, self._config)
