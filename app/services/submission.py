"""
Recording a taker's attempt.

The attempt is graded against one snapshot and stored with that snapshot's
version. If an edit committed while we were grading, the stored attempt is
handed to the rescore coordinator so its score ends up computed from the
newer snapshot rather than from a mix. The breakdown returned to the caller
always comes from the snapshot the stored score was computed from.
"""
import logging
from dataclasses import dataclass
from typing import List, Sequence

from sqlalchemy.orm import Session

from app.core.errors import AlreadyTaken
from app.crud import crud_quiz, crud_result
from app.db.models import QuizResult
from app.services.grading import Answer, GradedAnswer, answers_to_json, grade_answers
from app.services.rescore import RescoreCoordinator

logger = logging.getLogger(__name__)


@dataclass
class Submission:
    attempt: QuizResult
    results: List[GradedAnswer]
    total_questions: int

    @property
    def score(self) -> int:
        return self.attempt.score

    @property
    def incorrect(self) -> int:
        # Answers to questions that no longer exist are neither right nor wrong
        return sum(1 for r in self.results if r.correct_answer is not None and not r.is_correct)


def submit_attempt(
    db: Session,
    coordinator: RescoreCoordinator,
    quiz_id: str,
    user_id: str,
    answers: Sequence[Answer],
) -> Submission:
    if crud_result.load_attempt(db, quiz_id, user_id) is not None:
        raise AlreadyTaken("Quiz already taken")

    snapshot = crud_quiz.load_quiz_snapshot(db, quiz_id)
    results = grade_answers(answers, snapshot.questions)

    attempt = QuizResult(
        quiz_id=quiz_id,
        user_id=user_id,
        answers=answers_to_json(answers),
        score=sum(1 for r in results if r.is_correct),
        graded_version=snapshot.version,
    )
    # A concurrent submission by the same taker surfaces here as AlreadyTaken
    crud_result.save_attempt(db, attempt)

    current_version = crud_quiz.get_quiz_version(db, quiz_id)
    if current_version == snapshot.version:
        return Submission(attempt=attempt, results=results, total_questions=len(snapshot.questions))

    logger.info(
        "Quiz %s moved from version %s to %s during submission by %s, regrading",
        quiz_id, snapshot.version, current_version, user_id,
    )
    latest = crud_quiz.load_quiz_snapshot(db, quiz_id)
    report = coordinator.rescore(latest, [attempt.id])
    db.refresh(attempt)

    if attempt.graded_version == snapshot.version:
        logger.warning(
            "Regrade of attempt %s failed, score still reflects version %s: %s",
            attempt.id, snapshot.version, "; ".join(f.error for f in report.failed),
        )
        return Submission(attempt=attempt, results=results, total_questions=len(snapshot.questions))

    if attempt.graded_version != latest.version:
        # A later edit's rescore got to the attempt first
        latest = crud_quiz.load_quiz_snapshot(db, quiz_id)
    return Submission(
        attempt=attempt,
        results=grade_answers(answers, latest.questions),
        total_questions=len(latest.questions),
    )
