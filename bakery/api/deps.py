from functools import lru_cache

from bakery.core.config import get_settings
from bakery.db.session import create_db_engine
from bakery.services.catalog_store import CatalogStore


@lru_cache
def get_store() -> CatalogStore:
    """Return the process-wide catalog store built from settings."""

    settings = get_settings()
    engine = create_db_engine(settings.database_url)
    return CatalogStore.from_engine(engine, settings.content_authority)
