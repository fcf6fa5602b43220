from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from permitter.core.policy import Policy


class Settings(BaseSettings):
    """
    Service settings.

    Notes:
    - Defaults are local and deterministic (SQLite file next to the repo).
    - Every field can be overridden with a `PERMITTER_` env var, e.g.
      `PERMITTER_POLICY=preservation`.
    """

    model_config = SettingsConfigDict(env_prefix="PERMITTER_", extra="ignore")

    db_url: str | None = None
    abilities_config_path: str | None = None
    log_level: str = "INFO"

    policy: Policy = Policy.REJECTION
    # Dotted path to an authorizer factory; when unset the YAML abilities are used.
    authorizer: str | None = None

    authorization_header: str = "Authorization"
    bearer_prefix: str = "Bearer"

    def resolved_db_url(self) -> str:
        if self.db_url:
            return self.db_url

        repo_root = Path(__file__).resolve().parents[1]
        db_path = repo_root / "permitter.db"
        return f"sqlite:///{db_path}"

    def resolved_abilities_config_path(self) -> Path:
        if self.abilities_config_path:
            return Path(self.abilities_config_path)

        repo_root = Path(__file__).resolve().parents[1]
        return repo_root / "config" / "abilities.yaml"


@lru_cache
def get_settings() -> Settings:
    return Settings()
