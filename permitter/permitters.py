"""
Permitted attributes for each writable resource.

Routes build a Permitter from these per request:

    permitter = employee_permitter.permitter(body, user, repository, config=config)
    attrs = permitter.permitted_params()
"""

from __future__ import annotations

from permitter.core.attributes import Dependency, PermitterDefinition
from permitter.core.registry import TypeRegistry
from permitter.models.hr import Employee, PerformanceReview, ReviewGoal
from permitter.models.organization import Department, User


employee_permitter = PermitterDefinition("employee")
employee_permitter.permit("first_name", "last_name", "email", "position", "hire_date")
# Employees can only be placed in departments the actor can see.
employee_permitter.permit("department_id", authorize="read")
# A manager that no longer exists is tolerated (the reference is cleared).
employee_permitter.permit("manager_id", authorize="read", as_="employee", dependent=Dependency.NULLIFY)
with employee_permitter.scope("address") as address:
    address.permit("street", "city", "postal_code")


# Updates may not move an employee between departments.
employee_update_permitter = PermitterDefinition("employee")
employee_update_permitter.permit("first_name", "last_name", "email", "position")
employee_update_permitter.permit("manager_id", authorize="read", as_="employee", dependent=Dependency.NULLIFY)
with employee_update_permitter.scope("address") as address:
    address.permit("street", "city", "postal_code")


performance_review_permitter = PermitterDefinition("performance_review")
performance_review_permitter.permit("review_date", "rating", "comments")
performance_review_permitter.permit("employee_id", authorize="update")
performance_review_permitter.permit("user_id", authorize=True)
performance_review_permitter.permit("reviewer_id", authorize="read", as_="user", dependent="nullify")
with performance_review_permitter.scope("goals") as goals:
    goals.permit("title")
    goals.permit("owner_id", authorize="read", as_=User)


def build_type_registry() -> TypeRegistry:
    registry = TypeRegistry()
    for model in (Department, User, Employee, PerformanceReview, ReviewGoal):
        registry.register(model)
    return registry
