from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from permitter.db.base import Base
from permitter.db.session import SessionLocal, engine
from permitter.models.hr import Employee, PerformanceReview, ReviewGoal
from permitter.models.organization import Department, Role, User


def init_db() -> None:
    """Create tables and seed demo data on first run."""

    Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        if _has_seed_data(db):
            return
        seed(db)
        db.commit()


def _has_seed_data(db: Session) -> bool:
    return db.execute(select(Department.id).limit(1)).first() is not None


def seed(db: Session) -> None:
    """Add the demo organization to ``db`` (flushed, not committed)."""

    hr = Department(name="Human Resources", code="HR")
    it = Department(name="Information Technology", code="IT")
    fin = Department(name="Finance", code="FIN")
    db.add_all([hr, it, fin])
    db.flush()

    admin = Role(name="admin", description="System administrator")
    hr_manager = Role(name="hr_manager", description="HR manager")
    dept_manager = Role(name="department_manager", description="Department manager")
    employee = Role(name="employee", description="Regular employee")
    db.add_all([admin, hr_manager, dept_manager, employee])
    db.flush()

    u1 = User(username="alice_admin", email="alice.admin@example.com", department_id=hr.id)
    u1.roles.append(admin)
    u2 = User(username="harry_hr", email="harry.hr@example.com", department_id=hr.id)
    u2.roles.append(hr_manager)
    u3 = User(username="mona_mgr_it", email="mona.itmgr@example.com", department_id=it.id)
    u3.roles.append(dept_manager)
    u4 = User(username="ed_it", email="ed.it@example.com", department_id=it.id)
    u4.roles.append(employee)
    u5 = User(username="fran_fin", email="fran.fin@example.com", department_id=fin.id)
    u5.roles.append(employee)
    db.add_all([u1, u2, u3, u4, u5])
    db.flush()

    mona = Employee(
        first_name="Mona",
        last_name="Manager",
        email="mona.manager@example.com",
        position="IT Manager",
        department_id=it.id,
        hire_date=date(2019, 3, 1),
        city="Springfield",
    )
    fran = Employee(
        first_name="Fran",
        last_name="Finance",
        email="fran.finance@example.com",
        position="Accountant",
        department_id=fin.id,
        hire_date=date(2021, 9, 10),
    )
    db.add_all([mona, fran])
    db.flush()

    ed = Employee(
        first_name="Ed",
        last_name="Engineer",
        email="ed.engineer@example.com",
        position="Software Engineer",
        department_id=it.id,
        manager_id=mona.id,
        hire_date=date(2022, 6, 1),
    )
    db.add(ed)
    db.flush()

    review = PerformanceReview(
        employee_id=ed.id,
        department_id=it.id,
        user_id=u3.id,
        review_date=date(2025, 12, 15),
        rating=5,
        comments="Excellent performance.",
    )
    review.goals.append(ReviewGoal(title="Mentor a new hire", owner_id=u4.id))
    db.add(review)
    db.flush()
