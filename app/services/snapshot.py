"""
Immutable views of a quiz's answer key.

Grading never touches ORM objects directly: a quiz is read once, frozen
into a QuizSnapshot tagged with the row version it was read at, and every
score computed from it can be traced back to that version.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class QuestionSnapshot:
    id: str
    question_text: str
    options: Tuple[str, ...]
    correct_answer: int


@dataclass(frozen=True)
class QuizSnapshot:
    quiz_id: str
    version: int
    questions: Tuple[QuestionSnapshot, ...]


def snapshot_from_quiz(quiz) -> QuizSnapshot:
    return QuizSnapshot(
        quiz_id=quiz.quiz_id,
        version=quiz.version,
        questions=tuple(
            QuestionSnapshot(
                id=q.id,
                question_text=q.question_text,
                options=tuple(q.options),
                correct_answer=q.correct_answer,
            )
            for q in quiz.questions
        ),
    )
