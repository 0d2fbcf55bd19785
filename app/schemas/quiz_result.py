from pydantic import BaseModel, Field, StrictInt
from typing import List, Optional
from app.core.base_config import BaseConfig, UTCDateTime


class AnswerIn(BaseModel):
    question_id: str
    selected_option: StrictInt


class AttemptSubmission(BaseModel):
    answers: List[AnswerIn] = Field(default_factory=list)


class GradedAnswerResponse(BaseModel):
    question_id: str
    selected_option: int
    correct_answer: Optional[int]
    is_correct: bool

    class Config:
        from_attributes = True


class SubmissionResponse(BaseModel):
    message: str
    attempt_id: str
    score: int
    total_questions: int
    correct_answers: int
    incorrect_answers: int
    graded_version: int
    results: List[GradedAnswerResponse]


class AttemptResponse(BaseConfig):
    id: str
    quiz_id: str
    user_id: str
    answers: List[AnswerIn]
    score: int
    graded_version: int
    submitted_at: UTCDateTime


class AttemptRescoreResponse(BaseModel):
    attempt_id: str
    user_id: str
    previous_score: int
    score: int
    changed: bool

    class Config:
        from_attributes = True


class RescoreFailureResponse(BaseModel):
    attempt_id: str
    error: str

    class Config:
        from_attributes = True


class RescoreReportResponse(BaseModel):
    quiz_id: str
    version: int
    updated: List[AttemptRescoreResponse]
    unchanged: List[AttemptRescoreResponse]
    failed: List[RescoreFailureResponse]

    class Config:
        from_attributes = True


class QuizUpdateResponse(BaseModel):
    msg: str
    rescore: RescoreReportResponse
