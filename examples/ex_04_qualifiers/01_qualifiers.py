"""Qualifiers: several bindings for one type, and the two lookup errors."""

from __future__ import annotations

from dicekit import Container, DiceNotFoundError, DiceQualifierMismatchError, Lifetime


class Database:
    def __init__(self, name: str) -> None:
        self.name = name


class Cache:
    pass


def main() -> None:
    container = Container(default_lifetime=Lifetime.SINGLETON)
    container.register(Database, lambda _: Database("primary"), qualifier="primary")
    container.register(Database, lambda _: Database("replica"), qualifier="replica")

    print(f"primary={container.resolve(Database, 'primary').name}")  # => primary=primary
    print(f"unqualified={container.resolve(Database).name}")  # => unqualified=replica

    try:
        container.resolve(Database, "analytics")
    except DiceQualifierMismatchError as error:
        print(f"mismatch={error.registered}")  # => mismatch=('primary', 'replica')

    try:
        container.resolve(Cache)
    except DiceNotFoundError as error:
        print(f"not_found={error.dependency.__name__}")  # => not_found=Cache

    print(container.describe().replace("\n", " | "))  # => Database['primary'] -> singleton | Database['replica'] -> singleton


if __name__ == "__main__":
    main()
