"""Lifetimes: ``SINGLETON``, ``TRANSIENT`` and ``WEAK``.

See how object identity changes across repeated resolves, and how a ``WEAK``
instance is rebuilt once nothing references it anymore.
"""

from __future__ import annotations

import gc

from dicekit import Container, Lifetime


class SingletonService:
    pass


class TransientService:
    pass


class WeakService:
    pass


def main() -> None:
    container = Container()

    container.register(SingletonService, lifetime=Lifetime.SINGLETON)
    singleton_first = container.resolve(SingletonService)
    singleton_second = container.resolve(SingletonService)
    print(f"singleton_same={singleton_first is singleton_second}")  # => singleton_same=True

    container.register(TransientService, lifetime=Lifetime.TRANSIENT)
    transient_first = container.resolve(TransientService)
    transient_second = container.resolve(TransientService)
    print(f"transient_new={transient_first is not transient_second}")  # => transient_new=True

    built: list[str] = []

    def make_weak(_: Container) -> WeakService:
        built.append("weak")
        return WeakService()

    container.register(WeakService, make_weak, lifetime=Lifetime.WEAK)
    weak_first = container.resolve(WeakService)
    weak_second = container.resolve(WeakService)
    print(f"weak_same_while_alive={weak_first is weak_second}")  # => weak_same_while_alive=True

    del weak_first, weak_second
    gc.collect()
    container.resolve(WeakService)
    print(f"weak_builds={len(built)}")  # => weak_builds=2


if __name__ == "__main__":
    main()
