"""Tests for SqlAlchemyRepository lookups."""
from __future__ import annotations

import pytest

from permitter.core.errors import NotFoundError
from permitter.db.repository import SqlAlchemyRepository
from permitter.models.hr import Employee
from permitter.models.organization import Department


def test_find_returns_record(db_session, org):
    repository = SqlAlchemyRepository(db_session)
    ed = org["employees"]["ed"]

    assert repository.find(Employee, ed.id) is ed
    assert repository.find_or_none(Department, ed.department_id).code == "IT"


def test_find_raises_not_found(db_session, org):
    with pytest.raises(NotFoundError) as exc_info:
        SqlAlchemyRepository(db_session).find(Employee, 99999)
    assert exc_info.value.model_name == "Employee"
    assert exc_info.value.record_id == 99999


def test_find_or_none_returns_none(db_session, org):
    assert SqlAlchemyRepository(db_session).find_or_none(Employee, 99999) is None


def test_seed_links_manager(db_session, org):
    ed = org["employees"]["ed"]
    assert ed.manager is org["employees"]["mona"]
    assert len(ed.performance_reviews) == 1
    assert ed.performance_reviews[0].goals[0].title == "Mentor a new hire"
