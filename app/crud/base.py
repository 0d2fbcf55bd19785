import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.core.errors import AlreadyTaken, ConcurrentModification, StorageError

logger = logging.getLogger(__name__)

# Postgres names the constraint, SQLite lists its columns
DUPLICATE_ATTEMPT_MARKERS = (
    "uq_quiz_results_quiz_user",
    "quiz_results.quiz_id, quiz_results.user_id",
)


def current_timestamp() -> datetime:
    return datetime.now(timezone.utc)


def is_duplicate_attempt(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return any(marker in message for marker in DUPLICATE_ATTEMPT_MARKERS)


def commit(db: Session, what: str) -> None:
    """Commit the unit of work, translating driver failures into service errors."""
    try:
        db.commit()
    except StaleDataError as exc:
        db.rollback()
        raise ConcurrentModification(f"{what} was modified concurrently") from exc
    except IntegrityError as exc:
        db.rollback()
        if is_duplicate_attempt(exc):
            raise AlreadyTaken("Quiz already taken") from exc
        logger.error("Integrity violation while saving %s: %s", what, exc.orig)
        raise StorageError(f"Could not save {what}") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to persist %s: %s", what, exc)
        raise StorageError(f"Could not save {what}") from exc
