from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


class EmployeeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    position: str | None
    hire_date: date | None
    department_id: int
    manager_id: int | None
    street: str | None
    city: str | None
    postal_code: str | None
    created_at: datetime


class ReviewGoalOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    owner_id: int | None


class PerformanceReviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    department_id: int
    user_id: int
    reviewer_id: int | None
    review_date: date
    rating: int
    comments: str | None
    goals: list[ReviewGoalOut]
    created_at: datetime


class EmployeeAttributes(BaseModel):
    """Typed view of permitted employee params (address already flattened)."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    position: str | None = None
    hire_date: date | None = None
    department_id: int | None = None
    manager_id: int | None = None
    street: str | None = None
    city: str | None = None
    postal_code: str | None = None


class PerformanceReviewAttributes(BaseModel):
    employee_id: int
    user_id: int
    reviewer_id: int | None = None
    review_date: date
    rating: int
    comments: str | None = None


class EmployeeCreateAttributes(EmployeeAttributes):
    first_name: str
    last_name: str
    email: str
    department_id: int
