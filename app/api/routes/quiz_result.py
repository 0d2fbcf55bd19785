from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from app.api.deps import get_current_user, get_rescore_coordinator
from app.core.errors import NotFound
from app.crud import crud_result
from app.db.session import get_db
from app.schemas.quiz_result import AttemptSubmission, AttemptResponse, SubmissionResponse, GradedAnswerResponse
from app.schemas.user import CurrentUser
from app.services.grading import Answer
from app.services.rescore import RescoreCoordinator
from app.services.submission import submit_attempt

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quizzes/{quiz_id}/results", tags=["Quiz Results"])


@router.post("/", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
def submit_answers(
    quiz_id: str,
    submission: AttemptSubmission,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    coordinator: RescoreCoordinator = Depends(get_rescore_coordinator),
):
    answers = [Answer(question_id=a.question_id, selected_option=a.selected_option) for a in submission.answers]
    result = submit_attempt(db, coordinator, quiz_id, current_user.id, answers)
    logger.info("User %s scored %d on quiz %s", current_user.id, result.score, quiz_id)

    return SubmissionResponse(
        message="Answers submitted successfully",
        attempt_id=result.attempt.id,
        score=result.score,
        total_questions=result.total_questions,
        correct_answers=result.score,
        incorrect_answers=result.incorrect,
        graded_version=result.attempt.graded_version,
        results=[GradedAnswerResponse.model_validate(r) for r in result.results],
    )


@router.get("/me", response_model=AttemptResponse)
def get_my_result(
    quiz_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    attempt = crud_result.load_attempt(db, quiz_id, current_user.id)
    if attempt is None:
        raise NotFound("Quiz result not found")
    return attempt
