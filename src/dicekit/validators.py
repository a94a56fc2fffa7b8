from __future__ import annotations

import inspect
from typing import Any

from dicekit.exceptions import DiceInvalidRegistrationError


class RegistrationValidator:
    """Validates registration arguments before bindings are created."""

    def validate_factory(self, dependency: Any, factory: object) -> None:
        """Validate that an explicit factory can be called with the container."""
        if not callable(factory):
            msg = f"Factory for {dependency!r} must be callable, got {factory!r}."
            raise DiceInvalidRegistrationError(msg)

    def validate_concrete_type(self, concrete_type: object) -> None:
        """Validate that a key registered without factory is instantiable."""
        if not inspect.isclass(concrete_type):
            msg = (
                f"A factory is required to register {concrete_type!r}: "
                "only classes can be registered without one."
            )
            raise DiceInvalidRegistrationError(msg)

        if inspect.isabstract(concrete_type):
            msg = f"Concrete provider '{concrete_type.__qualname__}' cannot be an abstract class."
            raise DiceInvalidRegistrationError(msg)
