from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from permitter.core.errors import NotFoundError

logger = logging.getLogger(__name__)


class SqlAlchemyRepository:
    """Record lookups by primary key for the permitter, backed by one Session."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_or_none(self, model: type, record_id: Any) -> Any | None:
        return self._db.scalars(select(model).where(model.id == record_id)).first()

    def find(self, model: type, record_id: Any) -> Any:
        record = self.find_or_none(model, record_id)
        if record is None:
            logger.info("Lookup failed model=%s id=%r", model.__name__, record_id)
            raise NotFoundError(model.__name__, record_id)
        return record
