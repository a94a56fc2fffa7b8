"""Shared pytest fixtures for dicekit tests."""

import pytest

from dicekit.container import Container
from dicekit.lifetime import Lifetime


@pytest.fixture()
def container() -> Container:
    """Container with the default GRAPH lifetime."""
    return Container()


@pytest.fixture()
def transient_container() -> Container:
    """Container with lifetime transient as default."""
    return Container(default_lifetime=Lifetime.TRANSIENT)
