from __future__ import annotations

from enum import Enum


class Lifetime(Enum):
    """Defines how long a resolved instance is cached and reused by the container."""

    SINGLETON = "singleton"
    """A single instance is built when the binding is registered and shared afterwards."""

    TRANSIENT = "transient"
    """A new instance is created every time the dependency is requested."""

    WEAK = "weak"
    """The instance is reused only while something outside the container references it."""

    GRAPH = "graph"
    """The instance is shared within one top-level ``resolve`` call and rebuilt for the next one.

    Graph-scoped dependencies may reference each other cyclically: the instance
    under construction is cached before its members are visited.
    """
