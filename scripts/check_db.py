"""Utility script to validate the configured catalog database."""

from sqlalchemy import text

from bakery.core.config import get_settings
from bakery.db.session import CatalogDatabase, create_db_engine


def main() -> None:
    """Open the catalog database, creating the schema if needed, and count its rows."""

    settings = get_settings()
    engine = CatalogDatabase(create_db_engine(settings.database_url)).open()
    with engine.connect() as connection:
        version = connection.exec_driver_sql("PRAGMA user_version").scalar()
        count = connection.execute(text("SELECT COUNT(*) FROM cakes")).scalar()
    print(f"Database connection succeeded (schema version {version}, {count} cake(s)).")


if __name__ == "__main__":
    main()
