from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from permitter.core.config import PermitterConfig
from permitter.db.repository import SqlAlchemyRepository
from permitter.db.session import get_db
from permitter.models.hr import Employee
from permitter.models.organization import User
from permitter.permitters import employee_permitter, employee_update_permitter
from permitter.routers._params import flatten_scope, parse_attributes
from permitter.schemas.hr import EmployeeAttributes, EmployeeCreateAttributes, EmployeeOut
from permitter.schemas.organization import UserOut
from permitter.security.dependencies import get_current_user, get_permitter_config, get_repository

router = APIRouter(tags=["employees"])


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)) -> User:
    return user


@router.get("/employees", response_model=list[EmployeeOut])
def list_employees(db: Session = Depends(get_db), user: User = Depends(get_current_user)) -> list[Employee]:
    return list(db.scalars(select(Employee).order_by(Employee.id)).all())


@router.post("/employees", response_model=EmployeeOut, status_code=status.HTTP_201_CREATED)
def create_employee(
    body: dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    repository: SqlAlchemyRepository = Depends(get_repository),
    config: PermitterConfig = Depends(get_permitter_config),
) -> Employee:
    permitter = employee_permitter.permitter(body, user, repository, config=config)
    permitted = permitter.permitted_params()

    attrs = parse_attributes(EmployeeCreateAttributes, flatten_scope(permitted, "address"))
    employee = Employee(**attrs.model_dump(exclude_unset=True))
    permitter.authorize("create", employee)

    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@router.patch("/employees/{id}", response_model=EmployeeOut)
def update_employee(
    id: int,
    body: dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    repository: SqlAlchemyRepository = Depends(get_repository),
    config: PermitterConfig = Depends(get_permitter_config),
) -> Employee:
    employee = repository.find_or_none(Employee, id)
    if employee is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")

    permitter = employee_update_permitter.permitter(body, user, repository, config=config)
    permitter.authorize("update", employee)

    attrs = parse_attributes(EmployeeAttributes, flatten_scope(permitter.permitted_params(), "address"))
    for key, value in attrs.model_dump(exclude_unset=True).items():
        setattr(employee, key, value)

    db.commit()
    db.refresh(employee)
    return employee
