"""
Pytest fixtures for the test suite.

Data-layer tests use an in-memory SQLite engine and a session that rolls back
after each test, so tests do not affect each other.
"""
from __future__ import annotations

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


TEST_DB_URL = "sqlite:///:memory:"


@pytest.fixture
def engine():
    """Create a fresh in-memory SQLite engine for each test."""
    return create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )


@pytest.fixture
def tables(engine):
    """Create all ORM tables on the test engine."""
    from permitter.db.base import Base
    from permitter.models import hr, organization  # noqa: F401  (register tables)

    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture
def db_session(tables):
    """
    Provide a Session bound to the test DB; roll back after each test.

    The transaction is rolled back so the next test gets a clean state.
    """
    connection = tables.connect()
    transaction = connection.begin()
    TestSession = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        class_=Session,
    )
    session = TestSession()
    yield session
    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def org(db_session):
    """Seed the demo organization and return a lookup of its users and employees."""
    from permitter.db.init_db import seed
    from permitter.models.hr import Employee
    from permitter.models.organization import Department, User

    seed(db_session)

    users = {u.username: u for u in db_session.scalars(select(User))}
    employees = {e.first_name.lower(): e for e in db_session.scalars(select(Employee))}
    departments = {d.code: d for d in db_session.scalars(select(Department))}
    return {"users": users, "employees": employees, "departments": departments}


@pytest.fixture
def abilities_path(tmp_path):
    from pathlib import Path

    source = Path(__file__).resolve().parents[1] / "config" / "abilities.yaml"
    target = tmp_path / "abilities.yaml"
    target.write_text(source.read_text(encoding="utf-8"), encoding="utf-8")
    return target
