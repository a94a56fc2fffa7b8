from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import Any, Generic, NamedTuple, Protocol, TypeVar, cast, overload, runtime_checkable

from dicekit.exceptions import DiceInvalidRegistrationError, DiceMemberNotInjectedError

T = TypeVar("T")


class Dependency(NamedTuple):
    """A declared dependency: the requested type plus an optional qualifier."""

    type: Any
    qualifier: Hashable | None = None


@runtime_checkable
class SupportsInjection(Protocol):
    """Capability implemented by objects that declare their dependencies explicitly.

    The container reads ``injectable_dependencies`` after building a
    graph-scoped instance to share graph-scoped dependencies among siblings.

    Examples:
        .. code-block:: python

            class Report:
                def __init__(self, container: Container) -> None:
                    self.repository = container.resolve(Repository)

                def injectable_dependencies(self) -> list[Dependency]:
                    return [Dependency(Repository)]

    """

    def injectable_dependencies(self) -> Iterable[Dependency]: ...  # noqa: D102


class Injected(Generic[T]):
    """Declare an injected member on a class.

    Reading the member before it is populated raises
    ``DiceMemberNotInjectedError``. Members are populated by
    ``wire(instance, container)``, usually called from ``__init__``, or by the
    container while it traverses a graph-scoped instance.
    Values live in the instance ``__dict__``, so the owner class must not drop it
    with ``__slots__``; such owners raise ``DiceInvalidRegistrationError``.

    Examples:
        .. code-block:: python

            class Checkout:
                cart = Injected(Cart)
                payments = Injected(PaymentGateway, qualifier="stripe")

                def __init__(self, container: Container) -> None:
                    wire(self, container)

    """

    def __init__(self, dependency_type: type[T] | Any, *, qualifier: Hashable | None = None) -> None:
        self.dependency = Dependency(dependency_type, qualifier)
        self.name = ""

    def __set_name__(self, owner: type[Any], name: str) -> None:
        self.name = name

    @overload
    def __get__(self, instance: None, owner: type[Any]) -> Injected[T]: ...

    @overload
    def __get__(self, instance: object, owner: type[Any]) -> T: ...

    def __get__(self, instance: object | None, owner: type[Any]) -> Injected[T] | T:
        if instance is None:
            return self
        try:
            return cast("T", self._storage(instance)[self.name])
        except KeyError:
            msg = (
                f"'{type(instance).__qualname__}.{self.name}' has not been injected yet. "
                "Call wire(instance, container) or resolve the owner with the GRAPH lifetime."
            )
            raise DiceMemberNotInjectedError(msg) from None

    def __set__(self, instance: object, value: T) -> None:
        self._storage(instance)[self.name] = value

    def is_injected(self, instance: object) -> bool:
        """Return whether the member already holds a value on ``instance``."""
        return self.name in self._storage(instance)

    def _storage(self, instance: object) -> dict[str, Any]:
        try:
            return cast("dict[str, Any]", vars(instance))
        except TypeError:
            msg = (
                f"Injected member '{type(instance).__qualname__}.{self.name}' is stored in the instance "
                "__dict__, which the class does not have. Remove __slots__ from the class "
                "or add '__dict__' to them."
            )
            raise DiceInvalidRegistrationError(msg) from None

    def __repr__(self) -> str:
        return f"Injected({self.dependency.type!r}, qualifier={self.dependency.qualifier!r})"
