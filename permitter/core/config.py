from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from typing import Any

from permitter.core.contracts import Authorizer, AuthorizerFactory
from permitter.core.errors import PermitterConfigurationError
from permitter.core.policy import Policy
from permitter.core.registry import TypeRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PermitterConfig:
    """
    Settings shared by every Permitter in the process.

    ``authorizer`` is either a factory called with the acting user, a dotted
    import path to one ("pkg.module:Name" or "pkg.module.Name"), or None to
    skip authorization checks entirely.
    """

    policy: Policy = Policy.REJECTION
    authorizer: AuthorizerFactory | str | None = None
    registry: TypeRegistry = field(default_factory=TypeRegistry)

    def authorizer_factory(self) -> AuthorizerFactory | None:
        if isinstance(self.authorizer, str):
            return load_authorizer_factory(self.authorizer)
        return self.authorizer

    def build_authorizer(self, user: Any) -> Authorizer | None:
        factory = self.authorizer_factory()
        if factory is None:
            return None
        return factory(user)


def load_authorizer_factory(path: str) -> AuthorizerFactory:
    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise PermitterConfigurationError(f"Invalid authorizer path {path!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise PermitterConfigurationError(f"Cannot import authorizer module {module_name!r}") from exc

    factory = getattr(module, attr, None)
    if factory is None or not callable(factory):
        raise PermitterConfigurationError(f"Authorizer {path!r} is not a callable in {module_name!r}")
    return factory


_default_config = PermitterConfig()


def get_default_config() -> PermitterConfig:
    return _default_config


def set_default_config(config: PermitterConfig) -> None:
    """Install the process-wide default. Call once at startup."""
    global _default_config
    _default_config = config
    logger.info("Permitter default config set policy=%s", config.policy.value)
