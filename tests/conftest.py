from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy import Engine

from bakery.db.session import create_db_engine
from bakery.services.catalog_store import CatalogStore
from bakery.services.resources import ResourceURI

AUTHORITY = "com.example.richard.inventoryapp"


@pytest.fixture
def engine(tmp_path: Path) -> Iterator[Engine]:
    engine = create_db_engine(f"sqlite:///{tmp_path / 'bakery.db'}")
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine: Engine) -> CatalogStore:
    return CatalogStore.from_engine(engine, AUTHORITY)


@pytest.fixture
def cakes_uri(store: CatalogStore) -> ResourceURI:
    return store.collection_uri


@pytest.fixture
def changes(store: CatalogStore) -> list[ResourceURI]:
    """Every resource the store notifies about, in order."""

    received: list[ResourceURI] = []
    store.notifier.register(store.collection_uri, received.append, notify_for_descendants=True)
    return received
