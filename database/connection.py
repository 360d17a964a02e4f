"""Database connection handling."""

import logging
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, Session

from config import get_database_url
from .models import Base

logger = logging.getLogger(__name__)

# Global engine and session factory
_engine = None
_SessionFactory = None


def _set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable WAL mode so a reader never blocks the single writer."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=30000")
    cursor.close()


def get_engine(database_url: Optional[str] = None):
    """Get or create the database engine.

    Args:
        database_url: SQLAlchemy URL; defaults to config.get_database_url().
            Only used when the engine is created.
    """
    global _engine
    if _engine is None:
        url = database_url or get_database_url()
        _engine = create_engine(
            url,
            echo=False,  # Set to True for SQL debugging
            pool_pre_ping=True,
        )
        if url.startswith("sqlite"):
            event.listen(_engine, "connect", _set_sqlite_pragma)
        logger.debug("Created database engine for %s", url)
    return _engine


def get_session_factory():
    """Get or create the session factory."""
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=get_engine())
    return _SessionFactory


def dispose_engine():
    """Close all connections and forget the cached engine."""
    global _engine, _SessionFactory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionFactory = None


def init_db(database_url: Optional[str] = None):
    """Initialize the database, creating all tables."""
    engine = get_engine(database_url)
    Base.metadata.create_all(engine)


def get_session() -> Session:
    """Get a new database session."""
    factory = get_session_factory()
    return factory()


@contextmanager
def session_scope():
    """Provide a transactional scope around a series of operations.

    Usage:
        with session_scope() as session:
            session.add(some_object)
            # Commits automatically on success, rolls back on exception
    """
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def check_database_access() -> tuple[bool, str]:
    """Check if database is accessible.

    Returns:
        Tuple of (success, message)
    """
    try:
        engine = get_engine()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True, "Database connection successful"
    except Exception as e:
        return False, f"Database connection failed: {str(e)}"
