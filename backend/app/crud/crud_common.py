# app/crud/crud_common.py
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.services.errors import StorageFailureError

logger = logging.getLogger(__name__)


def commit_or_fail(db: Session, what: str) -> None:
    """Commit, or roll back and raise ``StorageFailureError`` if the store refuses."""
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Storing %s failed", what)
        raise StorageFailureError() from exc
