from __future__ import annotations

import weakref
from typing import Any, Generic, TypeVar

from dicekit.exceptions import DiceWeakReferenceError

T = TypeVar("T")


class WeakHolder(Generic[T]):
    """Hold an instance without keeping it alive.

    ``value`` returns the referent while something else still references it
    and ``None`` once it has been collected.
    """

    __slots__ = ("_ref",)

    def __init__(self, value: T) -> None:
        try:
            self._ref: weakref.ReferenceType[Any] = weakref.ref(value)
        except TypeError as error:
            msg = (
                f"Cannot hold {type(value).__qualname__} instance weakly: "
                "the type does not support weak references."
            )
            raise DiceWeakReferenceError(msg) from error

    @property
    def value(self) -> T | None:
        """Return the referent, or ``None`` when it has been collected."""
        return self._ref()

    @property
    def is_alive(self) -> bool:
        """Return whether the referent is still reachable."""
        return self._ref() is not None

    def __repr__(self) -> str:
        return f"WeakHolder(alive={self.is_alive})"
