"""Transaction boundary shared by the services."""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """
    Commit every write made inside the block once, or roll all of it back.

    Repositories called inside the block must be passed ``commit=False`` so
    they only flush.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        logger.debug("Rolled back transaction")
        raise
