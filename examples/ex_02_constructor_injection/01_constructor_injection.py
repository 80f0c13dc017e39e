"""Constructor injection with ``register_class``.

The registry builds the bean itself. ``__init__`` parameters are resolved by
annotation, or a single ``@constructor`` classmethod is used instead.
"""

from __future__ import annotations

from beanwire import Registry, constructor


class Settings:
    def __init__(self) -> None:
        self.url = "sqlite:///app.db"


class Database:
    def __init__(self, settings: Settings) -> None:
        self.url = settings.url


class Client:
    def __init__(self, base_url: str) -> None:
        self.base_url = base_url

    @constructor
    @classmethod
    def from_database(cls, database: Database) -> Client:
        return cls(base_url=database.url.replace("sqlite", "http"))


def main() -> None:
    registry = Registry()
    registry.register_class(Settings)
    registry.register_class(Database)
    registry.register_class(Client)

    database = registry.resolve_one(Database)
    print(f"database_url={database.url}")  # => database_url=sqlite:///app.db

    client = registry.resolve_one(Client)
    print(f"client_url={client.base_url}")  # => client_url=http:///app.db


if __name__ == "__main__":
    main()
