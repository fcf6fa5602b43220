from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from permitter.core.config import PermitterConfig
from permitter.db.repository import SqlAlchemyRepository
from permitter.db.session import get_db
from permitter.models.organization import User
from permitter.security.auth import extract_user_id, load_user
from permitter.settings import get_settings


def get_permitter_config(request: Request) -> PermitterConfig:
    config = getattr(request.app.state, "permitter_config", None)
    if config is None:
        raise RuntimeError("Permitter config not loaded. Did app startup run?")
    return config


def get_repository(db: Session = Depends(get_db)) -> SqlAlchemyRepository:
    return SqlAlchemyRepository(db)


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    settings = get_settings()
    user_id = extract_user_id(request, settings.authorization_header, settings.bearer_prefix)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return load_user(db, user_id)
