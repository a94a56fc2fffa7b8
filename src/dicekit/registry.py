from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NamedTuple

from dicekit.exceptions import DiceNotFoundError, DiceQualifierMismatchError
from dicekit.lifetime import Lifetime

if TYPE_CHECKING:
    from dicekit.container import Container


class BindingKey(NamedTuple):
    """Identity of a binding inside the store and the container caches."""

    type: Any
    qualifier: Hashable | None = None


@dataclass(frozen=True, slots=True)
class Binding:
    """A registered ``(type, qualifier, lifetime, factory)`` tuple."""

    type: Any
    """The dependency type requested by callers."""
    factory: Callable[[Container], Any]
    """Builds an instance; receives the container to resolve its own dependencies."""
    lifetime: Lifetime
    """How the resolved instance is cached."""
    qualifier: Hashable | None = None
    """Optional token separating bindings registered for the same type."""

    @property
    def key(self) -> BindingKey:
        return BindingKey(self.type, self.qualifier)


class BindingStore:
    """Holds all bindings registered in a container.

    Bindings are grouped per type and keep registration order, so a lookup
    without qualifier can fall back to the latest registration for the type.
    """

    def __init__(self) -> None:
        self._bindings_by_type: dict[Any, dict[Hashable | None, Binding]] = {}

    def put(self, binding: Binding) -> Binding | None:
        """Insert ``binding`` and return the binding it replaced, if any."""
        qualified = self._bindings_by_type.setdefault(binding.type, {})
        # re-insert so the overwritten key moves to the end of registration order
        previous = qualified.pop(binding.qualifier, None)
        qualified[binding.qualifier] = binding
        return previous

    def get(self, dep_type: Any, qualifier: Hashable | None = None) -> Binding:
        """Return the binding for ``dep_type`` and ``qualifier``.

        Raises:
            DiceNotFoundError: Nothing is registered for ``dep_type``.
            DiceQualifierMismatchError: ``qualifier`` was given and ``dep_type``
                is registered only under other qualifiers.

        """
        qualified = self._bindings_by_type.get(dep_type)
        if not qualified:
            raise DiceNotFoundError(dep_type, qualifier)

        binding = qualified.get(qualifier)
        if binding is not None:
            return binding

        if qualifier is not None:
            raise DiceQualifierMismatchError(dep_type, qualifier, tuple(qualified))

        return next(reversed(qualified.values()))

    def find(self, dep_type: Any, qualifier: Hashable | None = None) -> Binding | None:
        """Return the binding for ``dep_type`` and ``qualifier``, or ``None``."""
        try:
            return self.get(dep_type, qualifier)
        except (DiceNotFoundError, DiceQualifierMismatchError):
            return None

    def contains(self, dep_type: Any, qualifier: Hashable | None = None) -> bool:
        return self.find(dep_type, qualifier) is not None

    def values(self) -> list[Binding]:
        """Get all bindings, grouped by type in first-registration order."""
        return [binding for qualified in self._bindings_by_type.values() for binding in qualified.values()]

    def __iter__(self) -> Iterator[Binding]:
        return iter(self.values())

    def __len__(self) -> int:
        return sum(len(qualified) for qualified in self._bindings_by_type.values())
