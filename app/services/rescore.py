"""
Re-grading of stored attempts after a quiz's answer key changes.

The coordinator only ever grades against a snapshot read after the edit
committed. Each attempt is handled by its own worker with its own session;
one attempt failing does not stop the others, and the caller gets back a
report listing what changed, what did not, and what failed.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import ConcurrentModification, QuizServiceError
from app.crud import crud_quiz, crud_result
from app.db.models import QuizResult
from app.services.grading import answers_from_json, grade
from app.services.snapshot import QuizSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttemptRescore:
    attempt_id: str
    user_id: str
    previous_score: int
    score: int
    changed: bool


@dataclass(frozen=True)
class RescoreFailure:
    attempt_id: str
    error: str


@dataclass
class RescoreReport:
    quiz_id: str
    version: int
    results: List[AttemptRescore] = field(default_factory=list)
    failed: List[RescoreFailure] = field(default_factory=list)

    @property
    def updated(self) -> List[AttemptRescore]:
        return [r for r in self.results if r.changed]

    @property
    def unchanged(self) -> List[AttemptRescore]:
        return [r for r in self.results if not r.changed]

    @property
    def scores(self) -> List[tuple]:
        return [(r.attempt_id, r.score) for r in self.results]

    @property
    def ok(self) -> bool:
        return not self.failed


class RescoreCoordinator:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        max_workers: Optional[int] = None,
        max_retries: Optional[int] = None,
    ):
        self.session_factory = session_factory
        self.max_workers = max_workers or settings.RESCORE_MAX_WORKERS
        self.max_retries = settings.RESCORE_MAX_RETRIES if max_retries is None else max_retries

    def rescore_quiz(self, quiz_id: str) -> RescoreReport:
        """Rescore every attempt of a quiz against its latest committed questions."""
        with self.session_factory() as db:
            snapshot = crud_quiz.load_quiz_snapshot(db, quiz_id)
            attempt_ids = [attempt.id for attempt in crud_result.load_attempts_for_quiz(db, quiz_id)]
        return self.rescore(snapshot, attempt_ids)

    def rescore(self, snapshot: QuizSnapshot, attempts: Sequence[Union[QuizResult, str]]) -> RescoreReport:
        report = RescoreReport(quiz_id=snapshot.quiz_id, version=snapshot.version)
        attempt_ids = [a if isinstance(a, str) else a.id for a in attempts]
        if not attempt_ids:
            return report

        logger.info(
            "Rescoring %d attempts for quiz %s at version %s",
            len(attempt_ids), snapshot.quiz_id, snapshot.version,
        )
        workers = min(self.max_workers, len(attempt_ids))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="rescore") as pool:
            futures = {
                pool.submit(self._rescore_attempt, snapshot, attempt_id): attempt_id
                for attempt_id in attempt_ids
            }
            for future in as_completed(futures):
                attempt_id = futures[future]
                try:
                    outcome = future.result()
                except (QuizServiceError, SQLAlchemyError) as exc:
                    logger.warning("Rescore of attempt %s failed: %s", attempt_id, exc)
                    report.failed.append(RescoreFailure(attempt_id=attempt_id, error=str(exc)))
                    continue
                report.results.append(outcome)

        logger.info(
            "Rescore of quiz %s done: %d updated, %d unchanged, %d failed",
            snapshot.quiz_id, len(report.updated), len(report.unchanged), len(report.failed),
        )
        return report

    def _rescore_attempt(self, snapshot: QuizSnapshot, attempt_id: str) -> AttemptRescore:
        attempts_left = self.max_retries + 1
        while True:
            attempts_left -= 1
            try:
                return self._rescore_once(snapshot, attempt_id)
            except ConcurrentModification:
                if attempts_left <= 0:
                    raise
                logger.debug("Attempt %s changed underneath rescore, retrying", attempt_id)

    def _rescore_once(self, snapshot: QuizSnapshot, attempt_id: str) -> AttemptRescore:
        with self.session_factory() as db:
            attempt = crud_result.get_attempt(db, attempt_id)
            previous = attempt.score

            if attempt.graded_version > snapshot.version:
                # Already graded against a newer edit
                return AttemptRescore(attempt.id, attempt.user_id, previous, previous, False)

            new_score = grade(answers_from_json(attempt.answers), snapshot.questions)
            if new_score == previous and attempt.graded_version == snapshot.version:
                return AttemptRescore(attempt.id, attempt.user_id, previous, previous, False)

            attempt.score = new_score
            attempt.graded_version = snapshot.version
            crud_result.save_attempt(db, attempt)
            return AttemptRescore(attempt.id, attempt.user_id, previous, new_score, new_score != previous)
