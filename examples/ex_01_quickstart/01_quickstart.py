"""Quickstart: register factories, resolve the top-level service.

Factories receive the container and resolve their own dependencies from it.
"""

from __future__ import annotations

from dicekit import Container, Lifetime


class Database:
    def __init__(self) -> None:
        self.host = "localhost"


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository


def main() -> None:
    container = Container()
    container.register(Database, lifetime=Lifetime.SINGLETON)
    container.register(UserRepository, lambda c: UserRepository(c.resolve(Database)))
    container.register(UserService, lambda c: UserService(c.resolve(UserRepository)))

    service = container.resolve(UserService)

    print(f"db_host={service.repository.database.host}")  # => db_host=localhost

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database


if __name__ == "__main__":
    main()
