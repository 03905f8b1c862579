"""Database helpers: engines, session factories and DB initialization.

Provides read/write session factories and a simple `init_db` helper that
creates the schema.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from .models import Base
from core.config import get_settings

# Read/Write partitioning pattern
# In production, set WRITE_DATABASE_URL and READ_DATABASE_URL to different DB instances.
# For SQLite/demo this defaults to the same file but the interfaces are separated.
_settings = get_settings()
WRITE_DATABASE_URL = _settings.write_database_url
READ_DATABASE_URL = _settings.read_database_url


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


# Engines
write_engine = create_engine(WRITE_DATABASE_URL, connect_args=_connect_args(WRITE_DATABASE_URL))
read_engine = create_engine(READ_DATABASE_URL, connect_args=_connect_args(READ_DATABASE_URL))

# Session factories
WriteSessionLocal = sessionmaker(bind=write_engine)
ReadSessionLocal = sessionmaker(bind=read_engine)


def init_db(engine=None):
    """Initialize the database schema.

    Creates all tables using SQLAlchemy models. Safe to call repeatedly.
    """
    Base.metadata.create_all(bind=engine or write_engine)


# Convenience generators for dependency injection
def get_write_session():
    """Yield a write-enabled SQLAlchemy session for the request scope.

    Use this generator as a FastAPI dependency to ensure the session is
    properly closed after the request completes.
    """
    db = WriteSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_read_session():
    """Yield a read-only SQLAlchemy session for the request scope.

    Used for read endpoints where routing reads to a replica may be desired.
    """
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()
