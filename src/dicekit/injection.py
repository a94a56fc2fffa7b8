from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from dicekit.markers import Dependency, Injected, SupportsInjection

if TYPE_CHECKING:
    from dicekit.container import Container


@dataclass(frozen=True, slots=True)
class InjectableMember:
    """One injectable member found on an instance."""

    dependency: Dependency
    descriptor: Injected[Any] | None = None
    """The declaring descriptor, ``None`` for dependencies listed via ``SupportsInjection``."""

    @property
    def name(self) -> str | None:
        return self.descriptor.name if self.descriptor is not None else None

    def needs_value(self, instance: object) -> bool:
        """Return whether the member is declared on ``instance`` but still empty."""
        return self.descriptor is not None and not self.descriptor.is_injected(instance)

    def populate(self, instance: object, value: Any) -> None:
        if self.descriptor is not None:
            self.descriptor.__set__(instance, value)


@dataclass(slots=True)
class InjectableMembersInspector:
    """Collect injectable members of instances, caching descriptor lookups per class.

    The cache holds classes weakly, so classes created at runtime are released
    once nothing else references them.
    """

    _descriptors_by_class: weakref.WeakKeyDictionary[type[Any], tuple[Injected[Any], ...]] = field(
        default_factory=weakref.WeakKeyDictionary,
    )

    def inspect(self, instance: object) -> tuple[InjectableMember, ...]:
        """Return the members declared by ``instance``.

        ``Injected`` descriptors come first, in class definition order with base
        classes before subclasses, followed by ``injectable_dependencies()``.
        """
        members = [
            InjectableMember(descriptor.dependency, descriptor)
            for descriptor in self._descriptors(type(instance))
        ]
        if isinstance(instance, SupportsInjection):
            members.extend(
                InjectableMember(Dependency(*dependency))
                for dependency in instance.injectable_dependencies()
            )
        return tuple(members)

    def _descriptors(self, cls: type[Any]) -> tuple[Injected[Any], ...]:
        cached = self._descriptors_by_class.get(cls)
        if cached is not None:
            return cached

        by_name: dict[str, Injected[Any]] = {}
        for klass in reversed(cls.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, Injected):
                    by_name[name] = value

        # a subclass may shadow a member with a plain attribute
        result = tuple(
            descriptor for name, descriptor in by_name.items() if getattr(cls, name, None) is descriptor
        )
        self._descriptors_by_class[cls] = result
        return result


_INSPECTOR = InjectableMembersInspector()


def injectable_members(instance: object) -> tuple[InjectableMember, ...]:
    """Return the injectable members declared by ``instance``."""
    return _INSPECTOR.inspect(instance)


def wire(instance: object, container: Container) -> None:
    """Resolve every ``Injected`` member of ``instance`` that is still empty.

    Call it from ``__init__`` to inject at construction time. Members that the
    caller already assigned are left untouched.
    """
    for member in injectable_members(instance):
        if member.needs_value(instance):
            member.populate(
                instance,
                container.resolve(member.dependency.type, member.dependency.qualifier),
            )
