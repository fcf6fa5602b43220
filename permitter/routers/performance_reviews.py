from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from permitter.core.config import PermitterConfig
from permitter.db.repository import SqlAlchemyRepository
from permitter.db.session import get_db
from permitter.models.hr import Employee, PerformanceReview, ReviewGoal
from permitter.models.organization import User
from permitter.permitters import performance_review_permitter
from permitter.routers._params import parse_attributes
from permitter.schemas.hr import PerformanceReviewAttributes, PerformanceReviewOut
from permitter.security.dependencies import get_current_user, get_permitter_config, get_repository

router = APIRouter(tags=["performance_reviews"])


@router.get("/performance-reviews", response_model=list[PerformanceReviewOut])
def list_performance_reviews(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> list[PerformanceReview]:
    stmt = select(PerformanceReview).options(selectinload(PerformanceReview.goals)).order_by(PerformanceReview.id)
    return list(db.scalars(stmt).all())


@router.post("/performance-reviews", response_model=PerformanceReviewOut, status_code=status.HTTP_201_CREATED)
def create_performance_review(
    body: dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    repository: SqlAlchemyRepository = Depends(get_repository),
    config: PermitterConfig = Depends(get_permitter_config),
) -> PerformanceReview:
    permitter = performance_review_permitter.permitter(body, user, repository, config=config)
    permitted = dict(permitter.permitted_params())

    goals = permitted.pop("goals", None)
    # The author defaults to the acting user when absent or dropped.
    if permitted.get("user_id") is None:
        permitted["user_id"] = user.id

    attrs = parse_attributes(PerformanceReviewAttributes, permitted)
    employee = repository.find(Employee, attrs.employee_id)

    review = PerformanceReview(**attrs.model_dump(), department_id=employee.department_id)
    for entry in _goal_entries(goals):
        review.goals.append(ReviewGoal(title=str(entry["title"]), owner_id=entry.get("owner_id")))

    db.add(review)
    db.commit()
    db.refresh(review)
    return review


def _goal_entries(goals: Any) -> list[Mapping[str, Any]]:
    if isinstance(goals, Mapping):
        goals = [goals]
    if not isinstance(goals, list):
        return []
    return [g for g in goals if isinstance(g, Mapping) and g.get("title")]
