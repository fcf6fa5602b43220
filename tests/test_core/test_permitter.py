"""End-to-end tests for Permitter.permitted_params()."""

from unittest.mock import MagicMock

import pytest

from doubles import FakeAuthorizer, FakeRepository, Manager
from permitter.core.attributes import PermitterDefinition
from permitter.core.config import PermitterConfig, get_default_config, set_default_config
from permitter.core.errors import AccessDeniedError, MissingResourceError
from permitter.core.permitter import Permitter
from permitter.core.policy import Policy


@pytest.fixture
def definition():
    definition = PermitterDefinition("resource")
    definition.permit("name")
    definition.permit("manager_id", authorize="update")
    return definition


@pytest.fixture
def payload():
    return {"resource": {"name": "Ann", "manager_id": 7, "extra": "x"}}


def _config(registry, policy=Policy.REJECTION, authorizer=None):
    return PermitterConfig(policy=policy, authorizer=authorizer, registry=registry)


def test_authorized_reference_is_kept(definition, payload, repository, registry):
    permitter = definition.permitter(payload, "ann", repository, authorizer=FakeAuthorizer(), config=_config(registry))
    assert permitter.permitted_params() == {"name": "Ann", "manager_id": 7}


def test_rejection_fails_whole_call(definition, payload, repository, registry):
    authorizer = FakeAuthorizer(denied={("update", "Manager", 7)})
    permitter = definition.permitter(payload, "ann", repository, authorizer=authorizer, config=_config(registry))

    with pytest.raises(AccessDeniedError):
        permitter.permitted_params()


def test_preservation_drops_unauthorized_reference(definition, payload, repository, registry):
    authorizer = FakeAuthorizer(denied={("update", "Manager", 7)})
    config = _config(registry, Policy.PRESERVATION)
    permitter = definition.permitter(payload, "ann", repository, authorizer=authorizer, config=config)

    assert permitter.permitted_params() == {"name": "Ann"}


def test_preservation_nullify_missing_record_is_dropped_without_error(repository, registry):
    definition = PermitterDefinition("resource").permit("manager_id", authorize=True, dependent="nullify")
    authorizer = FakeAuthorizer()
    config = _config(registry, Policy.PRESERVATION)
    permitter = definition.permitter({"resource": {"manager_id": 404}}, "ann", repository, authorizer, config)

    assert permitter.permitted_params() == {}
    assert authorizer.checks == []


def test_scoped_attribute_is_nested_only(repository, registry):
    definition = PermitterDefinition("resource").permit("city", scope="address")
    payload = {"resource": {"address": {"city": "X", "zip": "999"}}}
    permitter = definition.permitter(payload, "ann", repository, config=_config(registry))

    assert permitter.permitted_params() == {"address": {"city": "X"}}


def test_missing_resource(definition, repository, registry):
    permitter = definition.permitter({"other": {}}, "ann", repository, config=_config(registry))
    with pytest.raises(MissingResourceError):
        permitter.permitted_params()


def test_permitted_params_is_memoized(definition, payload, repository, registry):
    authorizer = FakeAuthorizer(denied={("update", "Manager", 7)})
    config = _config(registry, Policy.PRESERVATION)
    permitter = definition.permitter(payload, "ann", repository, authorizer=authorizer, config=config)

    first = permitter.permitted_params()
    payload["resource"]["name"] = "changed after resolution"
    second = permitter.permitted_params()

    assert second is first
    assert second == {"name": "Ann"}
    # The dropped manager_id is neither re-added nor checked again.
    assert len(authorizer.checks) == 1


def test_nilified_user_id_keeps_its_shape_across_calls(repository, registry):
    definition = PermitterDefinition("resource").permit("user_id", authorize=True)
    authorizer = FakeAuthorizer(denied={("read", "User", 1)})
    config = _config(registry, Policy.NILIFICATION)
    permitter = definition.permitter({"resource": {"user_id": 1}}, "ann", repository, authorizer, config)

    first = permitter.permitted_params()
    second = permitter.permitted_params()

    assert second is first
    assert second == {"user_id": None}
    assert len(authorizer.checks) == 1


def test_empty_user_id_is_dropped_under_nilification(repository, registry):
    definition = PermitterDefinition("resource").permit("user_id", authorize=True)
    config = _config(registry, Policy.NILIFICATION)
    permitter = definition.permitter({"resource": {"user_id": None}}, "ann", repository, FakeAuthorizer(), config)

    assert permitter.permitted_params() == {}
    assert permitter.permitted_params() == {}


def test_no_authorizer_configured_skips_checks(definition, payload, registry):
    repository = FakeRepository([Manager(7)])
    permitter = Permitter(definition, payload, "ann", repository, config=_config(registry))

    assert permitter.authorizer is None
    assert permitter.permitted_params() == {"name": "Ann", "manager_id": 7}
    assert repository.calls == [("find", Manager, 7)]


def test_authorizer_built_once_from_config_with_user(definition, payload, repository, registry):
    authorizer = FakeAuthorizer()
    factory = MagicMock(return_value=authorizer)
    permitter = definition.permitter(payload, "ann", repository, config=_config(registry, authorizer=factory))

    permitter.permitted_params()
    permitter.permitted_params()

    factory.assert_called_once_with("ann")
    assert permitter.authorizer is authorizer


def test_authorizer_override_wins_over_config(definition, payload, repository, registry):
    override = FakeAuthorizer()
    factory = MagicMock()
    permitter = definition.permitter(
        payload, "ann", repository, authorizer=override, config=_config(registry, authorizer=factory)
    )

    permitter.permitted_params()

    factory.assert_not_called()
    assert override.checks == [("update", Manager(7))]


def test_authorize_forwards_to_authorizer(definition, repository, registry):
    authorizer = FakeAuthorizer(denied={("destroy", "Manager", 7)})
    permitter = definition.permitter({}, "ann", repository, authorizer=authorizer, config=_config(registry))

    permitter.authorize("read", Manager(7))
    with pytest.raises(AccessDeniedError):
        permitter.authorize("destroy", Manager(7))


def test_default_config_used_when_none_given(definition, payload, repository, registry):
    def factory(user):
        return FakeAuthorizer(denied={("update", "Manager", 7)})

    previous = get_default_config()
    set_default_config(_config(registry, Policy.PRESERVATION, authorizer=factory))
    try:
        permitter = definition.permitter(payload, "ann", repository)
        assert permitter.config.policy is Policy.PRESERVATION
        assert permitter.permitted_params() == {"name": "Ann"}
    finally:
        set_default_config(previous)


def test_resource_name_comes_from_definition(definition, repository):
    assert Permitter(definition, {}, None, repository).resource_name == "resource"
