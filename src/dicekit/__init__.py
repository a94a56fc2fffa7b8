from dicekit.container import BindingHandle, Container
from dicekit.exceptions import (
    DiceError,
    DiceInvalidRegistrationError,
    DiceMemberNotInjectedError,
    DiceNotFoundError,
    DiceQualifierMismatchError,
    DiceWeakReferenceError,
)
from dicekit.injection import InjectableMember, injectable_members, wire
from dicekit.lazy import Lazy
from dicekit.lifetime import Lifetime
from dicekit.markers import Dependency, Injected, SupportsInjection
from dicekit.registry import Binding, BindingKey
from dicekit.weak import WeakHolder

__all__ = [
    "Binding",
    "BindingHandle",
    "BindingKey",
    "Container",
    "Dependency",
    "DiceError",
    "DiceInvalidRegistrationError",
    "DiceMemberNotInjectedError",
    "DiceNotFoundError",
    "DiceQualifierMismatchError",
    "DiceWeakReferenceError",
    "InjectableMember",
    "Injected",
    "Lazy",
    "Lifetime",
    "SupportsInjection",
    "WeakHolder",
    "injectable_members",
    "wire",
]
