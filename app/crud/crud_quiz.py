from sqlalchemy.orm import Session, joinedload
from sqlalchemy import select
from typing import List, Tuple, Optional
import random
import string
import logging

from app.core.config import settings
from app.core.errors import NotFound
from app.crud.base import commit, current_timestamp
from app.db.models import Quiz, QuizQuestion, QuizResult, new_id
from app.schemas.quiz import QuizCreate, QuizUpdate
from app.services.snapshot import QuizSnapshot, snapshot_from_quiz

logger = logging.getLogger(__name__)


def generate_quiz_id(user_id: str) -> str:
    suffix = "".join(random.choices(string.ascii_letters + string.digits, k=settings.QUIZ_ID_SUFFIX_LENGTH))
    return f"{user_id}_{suffix}"


def quiz_exists(db: Session, quiz_id: str) -> bool:
    return db.query(Quiz.quiz_id).filter(Quiz.quiz_id == quiz_id).first() is not None


def create_quiz(db: Session, user_id: str, quiz_data: QuizCreate, quiz_id: Optional[str] = None) -> Quiz:
    now = current_timestamp()
    quiz = Quiz(
        quiz_id=quiz_id or generate_quiz_id(user_id),
        title=quiz_data.title,
        time_limit=quiz_data.time_limit,
        created_by=user_id,
        created_at=now,
        last_updated=now,
    )
    for idx, q in enumerate(quiz_data.questions):
        quiz.questions.append(QuizQuestion(
            id=new_id(),
            position=idx,
            question_text=q.question_text,
            options=list(q.options),
            correct_answer=q.correct_answer,
        ))
    db.add(quiz)
    save_quiz(db, quiz)
    db.refresh(quiz)
    return quiz


def load_quiz(db: Session, quiz_id: str) -> Quiz:
    quiz = db.query(Quiz).filter(Quiz.quiz_id == quiz_id).first()
    if quiz is None:
        raise NotFound("Quiz not found")
    return quiz


def load_quiz_snapshot(db: Session, quiz_id: str) -> QuizSnapshot:
    """
    Read the quiz row and all its questions in one statement so the result
    reflects a single committed version.
    """
    quiz = (
        db.query(Quiz)
        .options(joinedload(Quiz.questions))
        .filter(Quiz.quiz_id == quiz_id)
        .populate_existing()
        .first()
    )
    if quiz is None:
        raise NotFound("Quiz not found")
    return snapshot_from_quiz(quiz)


def get_quiz_version(db: Session, quiz_id: str) -> int:
    version = db.execute(select(Quiz.version).where(Quiz.quiz_id == quiz_id)).scalar_one_or_none()
    if version is None:
        raise NotFound("Quiz not found")
    return version


def save_quiz(db: Session, quiz: Quiz) -> None:
    commit(db, f"quiz {quiz.quiz_id}")


def apply_quiz_edit(db: Session, quiz: Quiz, edit: QuizUpdate) -> Quiz:
    """
    Apply an edit description to a loaded quiz and commit it as one unit.

    Questions are matched by id and overwritten in place; anything without a
    known id is appended under a fresh id.
    """
    quiz.title = edit.title or quiz.title
    quiz.time_limit = edit.time_limit or quiz.time_limit

    if edit.questions:
        existing = {q.id: q for q in quiz.questions}
        for incoming in edit.questions:
            question = existing.get(incoming.id) if incoming.id else None
            if question is not None:
                question.question_text = incoming.question_text
                question.options = list(incoming.options)
                question.correct_answer = incoming.correct_answer
            else:
                question = QuizQuestion(
                    id=new_id(),
                    position=len(quiz.questions),
                    question_text=incoming.question_text,
                    options=list(incoming.options),
                    correct_answer=incoming.correct_answer,
                )
                quiz.questions.append(question)
                existing[question.id] = question

    quiz.last_updated = current_timestamp()
    save_quiz(db, quiz)
    logger.info("Quiz %s edited, now at version %s", quiz.quiz_id, quiz.version)
    return quiz


def get_quizzes_by_creator(db: Session, user_id: str) -> List[Quiz]:
    return (
        db.query(Quiz)
        .filter(Quiz.created_by == user_id)
        .order_by(Quiz.last_updated.desc())
        .all()
    )


def get_quizzes_taken_by(db: Session, user_id: str) -> List[Tuple[Quiz, QuizResult]]:
    return (
        db.query(Quiz, QuizResult)
        .join(QuizResult, QuizResult.quiz_id == Quiz.quiz_id)
        .filter(QuizResult.user_id == user_id)
        .order_by(QuizResult.submitted_at.desc())
        .all()
    )
