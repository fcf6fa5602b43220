from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UserOut(BaseModel):
    """The acting user, as the ability rules see them."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    department_id: int
    role_names: frozenset[str]
