from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from pydantic_settings import BaseSettings

from dicekit.lifetime import Lifetime

if TYPE_CHECKING:
    from dicekit.container import BindingHandle, Container

S = TypeVar("S", bound=BaseSettings)

SETTINGS_BASES: tuple[type[Any], ...] = (BaseSettings,)


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return whether a class is a Pydantic settings model.

    The container registers settings subclasses that come without a factory
    through a zero-argument constructor with the ``SINGLETON`` lifetime, so
    the environment is read once, at registration time.

    Args:
        candidate: Object to test.

    Returns:
        ``True`` when ``candidate`` is a class that subclasses
        ``pydantic_settings.BaseSettings``; otherwise ``False``.

    """
    if not isinstance(candidate, type):
        return False
    try:
        return any(issubclass(candidate, base) for base in SETTINGS_BASES)
    except TypeError:
        return False


def register_settings(
    container: Container,
    settings_type: type[S],
    *,
    qualifier: Any = None,
    **overrides: Any,
) -> BindingHandle[S]:
    """Register a settings model as a singleton built with ``overrides``."""
    return container.register(
        settings_type,
        lambda _: settings_type(**overrides),
        qualifier=qualifier,
        lifetime=Lifetime.SINGLETON,
    )


__all__ = [
    "SETTINGS_BASES",
    "is_pydantic_settings_subclass",
    "register_settings",
]
