"""Session helpers for database operations.

`save`/`save_all` commit a single unit of work; `transaction` wraps a block
so that either all of its writes are committed or none are.
"""

from contextlib import contextmanager
from typing import Iterator, List

from sqlalchemy.orm import Session

from database.models import Base
from core.logger import get_logger

logger = get_logger("core.repository")


def save(session: Session, obj: Base) -> Base:
    """Convenience function to add, commit and refresh an object.

    Args:
        session: Database session.
        obj: Model instance to persist.

    Returns:
        The persisted object with refreshed attributes.
    """
    session.add(obj)
    session.commit()
    session.refresh(obj)
    return obj


def save_all(session: Session, objects: List[Base]) -> List[Base]:
    """Convenience function to add multiple objects, commit and refresh.

    Args:
        session: Database session.
        objects: List of model instances to persist.

    Returns:
        List of persisted objects with refreshed attributes.
    """
    session.add_all(objects)
    session.commit()
    for obj in objects:
        session.refresh(obj)
    return objects


@contextmanager
def transaction(session: Session) -> Iterator[Session]:
    """Commit everything written inside the block, or roll all of it back.

    Usage::

        with transaction(db):
            db.add(menu)
    """
    try:
        yield session
        session.commit()
    except Exception:
        logger.warning("Rolling back transaction")
        session.rollback()
        raise
