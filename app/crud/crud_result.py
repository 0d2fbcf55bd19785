from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.errors import NotFound
from app.crud.base import commit
from app.db.models import QuizResult


def load_attempts_for_quiz(db: Session, quiz_id: str) -> List[QuizResult]:
    return db.query(QuizResult).filter(QuizResult.quiz_id == quiz_id).all()


def load_attempt(db: Session, quiz_id: str, user_id: str) -> Optional[QuizResult]:
    return (
        db.query(QuizResult)
        .filter(QuizResult.quiz_id == quiz_id, QuizResult.user_id == user_id)
        .first()
    )


def get_attempt(db: Session, attempt_id: str) -> QuizResult:
    attempt = db.query(QuizResult).filter(QuizResult.id == attempt_id).populate_existing().first()
    if attempt is None:
        raise NotFound(f"Attempt {attempt_id} not found")
    return attempt


def save_attempt(db: Session, attempt: QuizResult) -> None:
    db.add(attempt)
    commit(db, f"attempt by {attempt.user_id} on quiz {attempt.quiz_id}")


def load_scores(db: Session, quiz_id: str) -> List[int]:
    rows = db.query(QuizResult.score).filter(QuizResult.quiz_id == quiz_id).all()
    return [row.score for row in rows]
