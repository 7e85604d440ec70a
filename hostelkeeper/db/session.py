"""Database session management."""
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from hostelkeeper.config.settings import settings


def _engine_options() -> dict:
    if settings.is_sqlite():
        return {
            "connect_args": {"check_same_thread": False, **settings.DB_CONNECT_ARGS},
            "poolclass": StaticPool,
        }
    return {
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_POOL_OVERFLOW,
        "connect_args": settings.DB_CONNECT_ARGS,
    }


def configure_sqlite(engine: Engine) -> None:
    """
    Let SQLAlchemy drive transactions on pysqlite so SAVEPOINTs nest
    inside the outer transaction.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


engine = create_engine(
    settings.get_database_url(),
    echo=settings.DB_ECHO,
    **_engine_options(),
)
if settings.is_sqlite():
    configure_sqlite(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/items/")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """Session for code running outside a request (scheduled jobs, startup)."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
