"""
Declarative attribute permission and per-attribute authorization.

This package has no dependency on the web, database or security packages.
Declare a ``PermitterDefinition``, then call ``permitted_params()`` on a
``Permitter`` built for each request.
"""

from .attributes import AttributeList, AttributeOptions, AttributeSpec, Dependency, PermitterDefinition
from .config import PermitterConfig, get_default_config, set_default_config
from .contracts import Authorizer, AuthorizerFactory, Repository
from .enforcer import AuthorizationEnforcer
from .errors import (
    AccessDeniedError,
    MissingResourceError,
    NotFoundError,
    PermitterConfigurationError,
    PermitterError,
)
from .permitter import Permitter
from .policy import Policy
from .registry import TypeRegistry
from .resolver import resolve

__all__ = [
    "AccessDeniedError",
    "AttributeList",
    "AttributeOptions",
    "AttributeSpec",
    "AuthorizationEnforcer",
    "Authorizer",
    "AuthorizerFactory",
    "Dependency",
    "MissingResourceError",
    "NotFoundError",
    "Permitter",
    "PermitterConfig",
    "PermitterConfigurationError",
    "PermitterDefinition",
    "PermitterError",
    "Policy",
    "Repository",
    "TypeRegistry",
    "get_default_config",
    "resolve",
    "set_default_config",
]
