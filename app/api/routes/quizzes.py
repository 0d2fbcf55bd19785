from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import logging

from app.api.deps import get_current_user, get_rescore_coordinator
from app.core.errors import Unauthorized
from app.crud import crud_quiz, crud_result
from app.db.session import get_db
from app.schemas.quiz import (
    QuizCreate,
    QuizUpdate,
    QuizResponse,
    QuizToTakeResponse,
    QuizSearchResponse,
    CreatedQuizSummary,
    TakenQuizSummary,
)
from app.schemas.quiz_result import (
    QuizUpdateResponse,
    RescoreReportResponse,
    AttemptRescoreResponse,
    RescoreFailureResponse,
)
from app.schemas.quiz_stats import ScoreSummaryResponse
from app.schemas.user import CurrentUser
from app.services.rescore import RescoreCoordinator
from app.services.stats import summarize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quizzes", tags=["Quizzes"])


@router.post("/", response_model=QuizResponse, status_code=status.HTTP_201_CREATED)
def create_quiz(
    quiz_data: QuizCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    quiz_id = crud_quiz.generate_quiz_id(current_user.id)
    if crud_quiz.quiz_exists(db, quiz_id):
        raise HTTPException(status_code=400, detail="Quiz ID already exists")

    quiz = crud_quiz.create_quiz(db, current_user.id, quiz_data, quiz_id=quiz_id)
    logger.info("Quiz %s created by %s with %d questions", quiz.quiz_id, current_user.id, len(quiz.questions))
    return quiz


@router.get("/mine", response_model=List[CreatedQuizSummary])
def get_quizzes_by_user(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    quizzes = crud_quiz.get_quizzes_by_creator(db, current_user.id)
    return [
        CreatedQuizSummary(
            quiz_id=quiz.quiz_id,
            title=quiz.title,
            time_limit=quiz.time_limit,
            last_updated=quiz.last_updated,
            number_of_questions=len(quiz.questions),
            number_of_taken_by=len(quiz.taken_by),
        )
        for quiz in quizzes
    ]


@router.get("/taken", response_model=List[TakenQuizSummary])
def get_quizzes_taken_by_user(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return [
        TakenQuizSummary(
            quiz_id=quiz.quiz_id,
            title=quiz.title,
            num_questions=len(quiz.questions),
            quiz_score=result.score if result else None,
        )
        for quiz, result in crud_quiz.get_quizzes_taken_by(db, current_user.id)
    ]


@router.get("/{quiz_id}", response_model=QuizSearchResponse)
def search_quiz(
    quiz_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    quiz = crud_quiz.load_quiz(db, quiz_id)
    return QuizSearchResponse(
        quiz_id=quiz.quiz_id,
        title=quiz.title,
        time_limit=quiz.time_limit,
        created_by=quiz.created_by,
        last_updated=quiz.last_updated,
        questions=len(quiz.questions),
        taken_by=len(quiz.taken_by),
    )


@router.get("/{quiz_id}/take", response_model=QuizToTakeResponse)
def fetch_quiz_to_take(
    quiz_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    # QuestionToTake has no correct_answer field, so the key never leaves the server
    return crud_quiz.load_quiz(db, quiz_id)


@router.put("/{quiz_id}", response_model=QuizUpdateResponse)
def update_quiz(
    quiz_id: str,
    edit: QuizUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
    coordinator: RescoreCoordinator = Depends(get_rescore_coordinator),
):
    quiz = crud_quiz.load_quiz(db, quiz_id)
    if quiz.created_by != current_user.id:
        raise Unauthorized("Only the quiz creator can edit it")

    # The edit must be committed before any attempt is regraded against it
    crud_quiz.apply_quiz_edit(db, quiz, edit)
    report = coordinator.rescore_quiz(quiz_id)

    return QuizUpdateResponse(
        msg="Quiz and results updated successfully" if report.ok else "Quiz updated; some results could not be rescored",
        rescore=RescoreReportResponse(
            quiz_id=report.quiz_id,
            version=report.version,
            updated=[AttemptRescoreResponse.model_validate(r) for r in report.updated],
            unchanged=[AttemptRescoreResponse.model_validate(r) for r in report.unchanged],
            failed=[RescoreFailureResponse.model_validate(f) for f in report.failed],
        ),
    )


@router.get("/{quiz_id}/stats", response_model=ScoreSummaryResponse)
def get_quiz_stats(
    quiz_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    quiz = crud_quiz.load_quiz(db, quiz_id)
    if quiz.created_by != current_user.id and current_user.id not in quiz.taken_by:
        raise Unauthorized("Unauthorized access")

    summary = summarize(crud_result.load_scores(db, quiz_id))
    return ScoreSummaryResponse(
        quiz_id=quiz_id,
        count=summary.count,
        min=summary.min,
        max=summary.max,
        mean=summary.mean,
        median=summary.median,
        lower_quartile=summary.lower_quartile,
        upper_quartile=summary.upper_quartile,
    )
