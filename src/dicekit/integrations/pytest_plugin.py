from __future__ import annotations

import pytest

from dicekit.container import Container


@pytest.fixture()
def dice_container() -> Container:
    """Create a per-test DI container.

    The fixture is function-scoped, so registrations are isolated between tests
    unless users override the fixture. Defaults come from ``DICE_*``
    environment variables.

    Returns:
        A new ``Container`` instance.

    """
    return Container.from_settings()
