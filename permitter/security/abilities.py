"""
Ability rules loaded from YAML.

Expected shape:

    abilities:
      roles:
        admin:
          - actions: [manage]
            subjects: [all]
        department_manager:
          - actions: [read, update]
            subjects: [employee]
            same_department: true

`manage` matches every action and `all` matches every subject. Subjects are the
snake_case model names (Employee -> employee, PerformanceReview -> performance_review).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

MANAGE = "manage"
ALL = "all"


class AbilitiesConfigError(ValueError):
    """Raised when the abilities YAML is missing or invalid."""


class AbilityRule(BaseModel):
    actions: list[str]
    subjects: list[str]
    same_department: bool = False

    @field_validator("actions", "subjects")
    @classmethod
    def _non_empty_lowercase(cls, value: list[str]) -> list[str]:
        normalized = [v.strip().lower() for v in value if v and v.strip()]
        if not normalized:
            raise ValueError("must list at least one entry")
        return normalized

    def matches(self, action: str, subject: str) -> bool:
        action_ok = MANAGE in self.actions or action in self.actions
        subject_ok = ALL in self.subjects or subject in self.subjects
        return action_ok and subject_ok


class AbilitiesConfig(BaseModel):
    roles: dict[str, list[AbilityRule]] = Field(default_factory=dict)

    def rules_for(self, role_names: frozenset[str]) -> list[AbilityRule]:
        rules: list[AbilityRule] = []
        for name in sorted(role_names):
            rules.extend(self.roles.get(name, []))
        return rules


def load_abilities_config(path: Path) -> AbilitiesConfig:
    raw_text = path.read_text(encoding="utf-8")
    raw: dict[str, Any] = yaml.safe_load(raw_text) or {}

    if "abilities" not in raw:
        raise AbilitiesConfigError(f"Missing top-level 'abilities' key in config: {path}")

    try:
        return AbilitiesConfig.model_validate(raw["abilities"] or {})
    except ValidationError as exc:
        raise AbilitiesConfigError(f"Invalid abilities config {path}: {exc}") from exc
