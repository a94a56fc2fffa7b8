from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from typing import Any, Generic, TypeVar, cast, overload

from dicekit.exceptions import DiceNotFoundError
from dicekit.injection import injectable_members
from dicekit.integrations.pydantic_settings import is_pydantic_settings_subclass
from dicekit.lazy import Lazy
from dicekit.lifetime import Lifetime
from dicekit.registry import Binding, BindingKey, BindingStore
from dicekit.settings import DiceSettings
from dicekit.validators import RegistrationValidator
from dicekit.weak import WeakHolder

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BindingHandle(Generic[T]):
    """Handle returned by ``Container.register`` for fluent post-registration setup."""

    def __init__(self, container: Container, binding: Binding) -> None:
        self._container = container
        self._binding = binding

    @property
    def binding(self) -> Binding:
        return self._binding

    def implements(self, *aliases: Any, qualifier: Hashable | None = None) -> BindingHandle[T]:
        """Make the binding resolvable under additional keys.

        Each alias is registered as a ``TRANSIENT`` binding that resolves the
        original key, so caching stays governed by the original lifetime.

        Examples:
            .. code-block:: python

                container.register(SqlRepository, lifetime=Lifetime.SINGLETON).implements(Repository)
                assert container.resolve(Repository) is container.resolve(SqlRepository)

        """
        for alias in aliases:
            self._container.register(
                alias,
                self._resolve_original,
                qualifier=qualifier,
                lifetime=Lifetime.TRANSIENT,
            )
        return self

    def _resolve_original(self, container: Container) -> T:
        return container.resolve(self._binding.type, self._binding.qualifier)

    def __repr__(self) -> str:
        return f"BindingHandle({self._binding!r})"


class Container:
    """Register factories and resolve instances according to their lifetime.

    Keys are usually classes or protocols. A qualifier separates several
    bindings registered for the same key. Factories receive the container and
    may resolve their own dependencies from it.

    ``SINGLETON`` instances are built while ``register`` runs. ``TRANSIENT``
    instances are built on every call. ``WEAK`` instances are reused while
    something outside the container keeps them alive. ``GRAPH`` instances are
    shared within one top-level ``resolve`` call: the container caches each
    graph-scoped instance before visiting its injectable members, so sibling
    dependencies share instances and cycles between graph-scoped members
    terminate.

    The container does not synchronize access to its caches. Resolve from one
    thread at a time or guard the container with your own lock.
    """

    def __init__(self, default_lifetime: Lifetime = Lifetime.GRAPH) -> None:
        """Initialize an empty container.

        Args:
            default_lifetime: Lifetime used by registrations that omit
                ``lifetime``.

        """
        self._default_lifetime = default_lifetime
        self._bindings = BindingStore()
        self._validator = RegistrationValidator()

        self._singletons: dict[BindingKey, Any] = {}
        self._weak_instances: dict[BindingKey, WeakHolder[Any]] = {}
        self._graph_instances: dict[BindingKey, Any] = {}
        self._depth = 0

    @classmethod
    def from_settings(cls, settings: DiceSettings | None = None) -> Container:
        """Create a container configured from ``DiceSettings``.

        When ``settings`` is omitted they are read from ``DICE_*`` environment
        variables.
        """
        settings = settings if settings is not None else DiceSettings()
        return cls(default_lifetime=settings.default_lifetime)

    @property
    def default_lifetime(self) -> Lifetime:
        return self._default_lifetime

    @property
    def resolution_depth(self) -> int:
        """Number of resolutions currently in flight; ``0`` when idle."""
        return self._depth

    @property
    def graph_cache_size(self) -> int:
        """Number of graph-scoped instances cached for the in-flight graph."""
        return len(self._graph_instances)

    def register(
        self,
        dependency: type[T] | Any,
        factory: Callable[[Container], T] | None = None,
        *,
        qualifier: Hashable | None = None,
        lifetime: Lifetime | None = None,
    ) -> BindingHandle[T]:
        """Register how to build ``dependency``.

        A later registration for the same ``dependency`` and ``qualifier``
        replaces the earlier one and drops its cached instances.

        Args:
            dependency: Key callers resolve, usually a class or a protocol.
            factory: Callable receiving the container and returning the
                instance. When omitted, ``dependency`` must be a concrete class
                and is instantiated without arguments.
            qualifier: Optional hashable token separating bindings for the same
                key.
            lifetime: Caching policy. Defaults to the container default, or to
                ``SINGLETON`` for Pydantic settings classes registered without
                factory.

        Returns:
            A handle for further configuration of the binding.

        Raises:
            DiceInvalidRegistrationError: The factory is missing and
                ``dependency`` cannot be instantiated, or the factory is not
                callable.

        """
        if factory is None:
            self._validator.validate_concrete_type(dependency)
            if lifetime is None and is_pydantic_settings_subclass(dependency):
                lifetime = Lifetime.SINGLETON
            factory = _concrete_type_factory(dependency)
        else:
            self._validator.validate_factory(dependency, factory)

        binding = Binding(
            type=dependency,
            factory=factory,
            lifetime=lifetime if lifetime is not None else self._default_lifetime,
            qualifier=qualifier,
        )

        key = binding.key
        if binding.lifetime is Lifetime.SINGLETON:
            # built before the binding becomes visible to lookups
            self._singletons[key] = self._resolve_binding(binding, eager=True)
        else:
            self._singletons.pop(key, None)
        self._weak_instances.pop(key, None)

        previous = self._bindings.put(binding)
        if previous is not None:
            logger.warning(
                "Replacing %s binding for %s with %s binding",
                previous.lifetime.value,
                _describe_key(key),
                binding.lifetime.value,
            )
        logger.debug("Registered %s with %s lifetime", _describe_key(key), binding.lifetime.value)
        return BindingHandle(self, binding)

    def register_instance(
        self,
        dependency: type[T] | Any,
        instance: T,
        *,
        qualifier: Hashable | None = None,
    ) -> BindingHandle[T]:
        """Register an already built object as a ``SINGLETON``."""
        return self.register(
            dependency,
            lambda _: instance,
            qualifier=qualifier,
            lifetime=Lifetime.SINGLETON,
        )

    @overload
    def resolve(self, dependency: type[T], qualifier: Hashable | None = None) -> T: ...

    @overload
    def resolve(self, dependency: Any, qualifier: Hashable | None = None) -> Any: ...

    def resolve(self, dependency: Any, qualifier: Hashable | None = None) -> Any:
        """Resolve an instance of ``dependency``.

        Without ``qualifier`` the unqualified binding is used, or the latest
        binding registered for ``dependency`` when there is no unqualified one.

        Raises:
            DiceNotFoundError: Nothing is registered for ``dependency``.
            DiceQualifierMismatchError: ``dependency`` is registered only under
                other qualifiers.

        """
        binding = self._bindings.get(dependency, qualifier)
        return self._resolve_binding(binding)

    def provider(self, dependency: type[T] | Any, qualifier: Hashable | None = None) -> Lazy[T]:
        """Return a memoized callable resolving ``dependency`` on its first call.

        Use it to defer a dependency that would otherwise form a constructor
        cycle. A graph-scoped dependency resolved through the provider after
        the enclosing ``resolve`` returned starts a graph of its own.
        """
        return Lazy(lambda: cast("T", self.resolve(dependency, qualifier)))

    def is_registered(self, dependency: Any, qualifier: Hashable | None = None) -> bool:
        """Return whether ``resolve(dependency, qualifier)`` would find a binding."""
        return self._bindings.contains(dependency, qualifier)

    @property
    def bindings(self) -> tuple[Binding, ...]:
        return tuple(self._bindings)

    def describe(self) -> str:
        """Return one ``key -> lifetime`` line per registered binding."""
        return "\n".join(
            f"{_describe_key(binding.key)} -> {binding.lifetime.value}" for binding in self._bindings
        )

    def _resolve_binding(self, binding: Binding, *, eager: bool = False) -> Any:
        self._depth += 1
        cached_before = len(self._graph_instances)
        try:
            if eager:
                return self._construct(binding)
            return self._resolve_by_lifetime(binding)
        except Exception:
            self._discard_graph_instances_after(cached_before, binding)
            raise
        finally:
            self._depth -= 1
            if self._depth == 0 and self._graph_instances:
                logger.debug("Object graph of %s completed", _describe_key(binding.key))
                self._graph_instances.clear()

    def _discard_graph_instances_after(self, cached_before: int, binding: Binding) -> None:
        """Drop graph-scoped instances cached by a failed resolution.

        Entries cached before the failing frame started belong to its ancestors
        and stay, so a factory that catches the failure keeps graph identity.
        """
        # the graph cache only grows within a frame, so the frame's entries are its tail
        discarded = list(self._graph_instances)[cached_before:]
        if not discarded:
            return
        logger.debug(
            "Discarding %d graph-scoped instances after failure resolving %s",
            len(discarded),
            _describe_key(binding.key),
        )
        for key in discarded:
            del self._graph_instances[key]

    def _resolve_by_lifetime(self, binding: Binding) -> Any:
        if binding.lifetime is Lifetime.SINGLETON:
            return self._resolve_singleton(binding)
        if binding.lifetime is Lifetime.TRANSIENT:
            return self._construct(binding)
        if binding.lifetime is Lifetime.WEAK:
            return self._resolve_weak(binding)
        return self._resolve_graph(binding)

    def _resolve_singleton(self, binding: Binding) -> Any:
        try:
            return self._singletons[binding.key]
        except KeyError:
            raise DiceNotFoundError(binding.type, binding.qualifier) from None

    def _resolve_weak(self, binding: Binding) -> Any:
        key = binding.key
        holder = self._weak_instances.get(key)
        if holder is not None:
            instance = holder.value
            if instance is not None:
                return instance
            logger.debug("Weak instance of %s was collected, constructing a new one", _describe_key(key))

        instance = self._construct(binding)
        self._weak_instances[key] = WeakHolder(instance)
        return instance

    def _resolve_graph(self, binding: Binding) -> Any:
        key = binding.key
        if key in self._graph_instances:
            return self._graph_instances[key]

        instance = self._construct(binding)
        # cache before visiting members so cycles back to this instance terminate
        self._graph_instances[key] = instance
        self._visit_members(instance)
        return instance

    def _visit_members(self, instance: object) -> None:
        for member in injectable_members(instance):
            binding = self._bindings.get(member.dependency.type, member.dependency.qualifier)
            if binding.lifetime is not Lifetime.GRAPH and not member.needs_value(instance):
                continue

            value = self._resolve_binding(binding)
            if member.needs_value(instance):
                member.populate(instance, value)

    def _construct(self, binding: Binding) -> Any:
        logger.debug("Constructing %s (%s)", _describe_key(binding.key), binding.lifetime.value)
        return Lazy(lambda: binding.factory(self)).resolve()

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"Container(bindings={len(self._bindings)}, default_lifetime={self._default_lifetime})"


def _concrete_type_factory(concrete_type: type[T]) -> Callable[[Container], T]:
    def factory(_: Container) -> T:
        return concrete_type()

    return factory


def _describe_key(key: BindingKey) -> str:
    name = getattr(key.type, "__qualname__", None) or repr(key.type)
    if key.qualifier is None:
        return name
    return f"{name}[{key.qualifier!r}]"
