from __future__ import annotations

from typing import TYPE_CHECKING, Any

from permitter.core.config import PermitterConfig, get_default_config
from permitter.core.contracts import Authorizer, Repository
from permitter.core.enforcer import AuthorizationEnforcer
from permitter.core.resolver import resolve

if TYPE_CHECKING:
    from permitter.core.attributes import PermitterDefinition


class Permitter:
    """
    Permits one request payload for one acting user.

    Create one per request and discard it afterwards. ``permitted_params()``
    filters the payload once and re-runs the authorization pass on the same
    object on every call.
    """

    def __init__(
        self,
        definition: PermitterDefinition,
        params: Any,
        user: Any,
        repository: Repository,
        authorizer: Authorizer | None = None,
        config: PermitterConfig | None = None,
    ) -> None:
        self._definition = definition
        self._params = params
        self._user = user
        self._repository = repository
        self._config = config or get_default_config()
        self._authorizer = authorizer
        self._authorizer_built = authorizer is not None
        self._filtered_params: dict[str, Any] | None = None
        self._enforcer: AuthorizationEnforcer | None = None

    @property
    def resource_name(self) -> str:
        return self._definition.resource_name

    @property
    def user(self) -> Any:
        return self._user

    @property
    def config(self) -> PermitterConfig:
        return self._config

    @property
    def authorizer(self) -> Authorizer | None:
        if not self._authorizer_built:
            self._authorizer = self._config.build_authorizer(self._user)
            self._authorizer_built = True
        return self._authorizer

    def authorize(self, action: str, record: Any) -> None:
        authorizer = self.authorizer
        if authorizer is None:
            return
        authorizer.authorize(action, record)

    def permitted_params(self) -> dict[str, Any]:
        attributes = self._definition.attributes

        if self._filtered_params is None:
            self._filtered_params = resolve(self._params, attributes, self.resource_name)
            self._enforcer = AuthorizationEnforcer(
                self._repository,
                self._config.registry,
                self.authorize,
                self._config.policy,
            )

        self._enforcer.enforce(self._filtered_params, attributes)
        return self._filtered_params
