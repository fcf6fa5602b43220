"""Tests for loading ability rules from YAML."""
from __future__ import annotations

import pytest

from permitter.security.abilities import AbilitiesConfigError, AbilityRule, load_abilities_config


def test_load_shipped_config(abilities_path):
    config = load_abilities_config(abilities_path)

    assert set(config.roles) == {"admin", "hr_manager", "department_manager", "employee"}
    assert config.roles["admin"][0].matches("destroy", "anything")


def test_missing_top_level_key(tmp_path):
    path = tmp_path / "abilities.yaml"
    path.write_text("roles: {}\n", encoding="utf-8")

    with pytest.raises(AbilitiesConfigError, match="abilities"):
        load_abilities_config(path)


def test_invalid_rule(tmp_path):
    path = tmp_path / "abilities.yaml"
    path.write_text("abilities:\n  roles:\n    admin:\n      - actions: []\n        subjects: [all]\n", encoding="utf-8")

    with pytest.raises(AbilitiesConfigError):
        load_abilities_config(path)


def test_empty_abilities_section(tmp_path):
    path = tmp_path / "abilities.yaml"
    path.write_text("abilities:\n", encoding="utf-8")

    assert load_abilities_config(path).roles == {}


def test_rule_matching_is_case_insensitive():
    rule = AbilityRule(actions=["Read", " update "], subjects=["Employee"])

    assert rule.actions == ["read", "update"]
    assert rule.matches("update", "employee")
    assert not rule.matches("create", "employee")
    assert not rule.matches("read", "department")
