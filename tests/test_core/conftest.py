from __future__ import annotations

import pytest

from doubles import FakeRepository, Manager, Tag, User
from permitter.core.registry import TypeRegistry


@pytest.fixture
def registry():
    return TypeRegistry().register(Manager).register(User).register(Tag)


@pytest.fixture
def repository():
    return FakeRepository([Manager(7), Manager(8), User(1), Tag(1), Tag(2)])
