"""
Database configuration and session management.

Sets up the SQLAlchemy engine from ``settings.DATABASE_URL`` and provides the
request-scoped session dependency.
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from inventory_api.config import settings


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def register_sqlite_functions(engine: Engine) -> None:
    """Replace SQLite's ASCII-only ``lower()`` with Python's Unicode-aware one."""
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def make_engine(url: str, **kwargs) -> Engine:
    """Create an engine, relaxing SQLite's same-thread check for the threadpool."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":
        register_sqlite_functions(engine)
    return engine


engine       = make_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base         = declarative_base()


def init_db(bind: Engine = engine) -> None:
    """Create the items table (and constraints) if it does not exist yet."""
    # Register models on Base.metadata before creating tables
    from inventory_api import models  # noqa: F401

    Base.metadata.create_all(bind=bind)


def get_db():
    """
    Dependency function that provides a database session.
    
    Yields:
        Session: SQLAlchemy database session, closed once the request ends
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
