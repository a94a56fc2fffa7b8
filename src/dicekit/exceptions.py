from __future__ import annotations

from collections.abc import Hashable
from typing import Any


class DiceError(Exception):
    """Represent a base class for all dicekit-specific failures.

    Catch this type when you want to handle any dicekit error path without
    matching each concrete exception class individually.
    """


class DiceInvalidRegistrationError(DiceError):
    """Signal invalid registration arguments.

    Raised by ``Container.register`` when no factory is given for a key that
    cannot be constructed without arguments (non-class keys, abstract classes),
    or when the factory is not callable. Also raised when an ``Injected`` member
    is declared on a class whose instances have no ``__dict__``.

    Typical fix is passing an explicit ``factory`` that receives the container.
    """


class DiceNotFoundError(DiceError):
    """Signal that a dependency has no binding.

    Raised by ``Container.resolve`` and during graph traversal when nothing was
    registered for the requested type.

    Typical fix is registering the dependency before resolving it.
    """

    def __init__(self, dependency: Any, qualifier: Hashable | None = None) -> None:
        self.dependency = dependency
        self.qualifier = qualifier
        if qualifier is None:
            msg = f"{_describe(dependency)} is not registered."
        else:
            msg = f"{_describe(dependency)} is not registered (qualifier {qualifier!r})."
        super().__init__(msg)


class DiceQualifierMismatchError(DiceError):
    """Signal that a dependency is registered only under other qualifiers.

    Raised at lookup time when the caller asks for a qualifier that none of the
    bindings for the requested type carries. ``registered`` lists the
    qualifiers that are available for the type.
    """

    def __init__(
        self,
        dependency: Any,
        qualifier: Hashable | None,
        registered: tuple[Hashable | None, ...],
    ) -> None:
        self.dependency = dependency
        self.qualifier = qualifier
        self.registered = registered
        available = ", ".join(repr(item) for item in registered)
        msg = (
            f"{_describe(dependency)} is not registered with qualifier {qualifier!r}; "
            f"registered qualifiers: {available}."
        )
        super().__init__(msg)


class DiceWeakReferenceError(DiceError):
    """Signal that a ``WEAK`` factory produced an object without weakref support.

    Builtins such as ``int``, ``str`` or ``tuple`` and classes declaring
    ``__slots__`` without ``__weakref__`` cannot be held weakly.

    Typical fixes include choosing another lifetime or adding ``__weakref__``
    to the class slots.
    """


class DiceMemberNotInjectedError(DiceError, AttributeError):
    """Signal a read of an ``Injected`` member that has not been populated yet.

    Members are populated by ``wire(instance, container)`` or by the graph
    traversal after construction.
    """


def _describe(dependency: Any) -> str:
    name = getattr(dependency, "__qualname__", None)
    if name is None:
        return repr(dependency)
    return f"'{name}'"
