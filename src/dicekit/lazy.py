from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar, cast

T = TypeVar("T")

_UNSET = object()


class Lazy(Generic[T]):
    """Memoize a zero-argument factory.

    The factory runs on the first call and the result is returned on every
    later call for as long as this wrapper lives. Concurrent first calls from
    several threads may run the factory more than once.

    Examples:
        .. code-block:: python

            lazy_config = Lazy(load_config)
            assert lazy_config() is lazy_config()

    """

    __slots__ = ("_factory", "_value")

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._value: object = _UNSET

    @property
    def is_resolved(self) -> bool:
        """Return whether the factory has already produced a value."""
        return self._value is not _UNSET

    def resolve(self) -> T:
        """Return the cached value, running the factory on the first call."""
        if self._value is _UNSET:
            self._value = self._factory()
        return cast("T", self._value)

    def __call__(self) -> T:
        return self.resolve()

    def __repr__(self) -> str:
        state = "resolved" if self.is_resolved else "pending"
        return f"Lazy({self._factory!r}, {state})"
