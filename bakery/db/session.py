import logging
from typing import Any

from sqlalchemy import Connection, Engine, create_engine
from sqlalchemy.pool import StaticPool

from bakery.core.errors import StoreError
from bakery.db.base import Base

logger = logging.getLogger(__name__)

# If you change the database schema, you must increment the database version.
DATABASE_VERSION = 1


def create_db_engine(database_url: str) -> Engine:
    """Create an engine for the local SQLite catalog file."""

    if not database_url.startswith("sqlite"):
        raise ValueError(f"Only SQLite databases are supported, got {database_url!r}")

    engine_kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if database_url in {"sqlite://", "sqlite:///:memory:"}:
        # Every connection must see the same in-memory database.
        engine_kwargs["poolclass"] = StaticPool

    return create_engine(database_url, **engine_kwargs)


class CatalogDatabase:
    """Manages creation and version upgrades of the catalog schema.

    The schema version is stored in SQLite's ``user_version`` pragma, so a
    database file remembers which version created it.
    """

    def __init__(self, engine: Engine, version: int = DATABASE_VERSION) -> None:
        self.engine = engine
        self.version = version
        self._ready = False

    def open(self) -> Engine:
        """Make sure the schema exists and is current, then return the engine."""

        if self._ready:
            return self.engine

        with self.engine.begin() as connection:
            current = connection.exec_driver_sql("PRAGMA user_version").scalar() or 0
            if current == 0:
                self.on_create(connection)
            elif current < self.version:
                self.on_upgrade(connection, current, self.version)
            elif current > self.version:
                raise StoreError(f"Cannot downgrade database from version {current} to {self.version}")

            if current != self.version:
                connection.exec_driver_sql(f"PRAGMA user_version = {int(self.version)}")

        self._ready = True
        return self.engine

    def on_create(self, connection: Connection) -> None:
        logger.info("Creating catalog schema at version %s", self.version)
        Base.metadata.create_all(connection)

    def on_upgrade(self, connection: Connection, old_version: int, new_version: int) -> None:
        # Still at version 1, nothing to migrate yet.
        logger.info("Upgrading catalog schema from version %s to %s", old_version, new_version)
