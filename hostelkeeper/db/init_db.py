"""Database initialization utilities."""
import logging

from sqlalchemy import inspect

from hostelkeeper.db.base import Base
from hostelkeeper.db.session import engine

logger = logging.getLogger(__name__)


def init_db() -> None:
    """
    Create any missing tables.

    Suitable for development and testing; production schemas are managed
    outside the application.
    """
    existing_tables = set(inspect(engine).get_table_names())
    missing = [t for t in Base.metadata.sorted_tables if t.name not in existing_tables]

    if not missing:
        logger.info(f"Database already initialized with {len(existing_tables)} tables")
        return

    Base.metadata.create_all(bind=engine, tables=missing)
    logger.info(f"Created tables: {', '.join(t.name for t in missing)}")
