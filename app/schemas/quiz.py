from pydantic import BaseModel, Field
from typing import List, Optional
from app.core.base_config import BaseConfig, UTCDateTime
from app.schemas.question import QuestionCreate, QuestionUpdate, QuestionResponse, QuestionToTake


class QuizCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    questions: List[QuestionCreate] = Field(min_length=1)
    time_limit: Optional[int] = Field(default=None, gt=0)


class QuizUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    time_limit: Optional[int] = Field(default=None, gt=0)
    questions: Optional[List[QuestionUpdate]] = None


class QuizResponse(BaseConfig):
    quiz_id: str
    title: str
    time_limit: Optional[int]
    created_by: str
    last_updated: UTCDateTime
    version: int
    questions: List[QuestionResponse]


class QuizToTakeResponse(BaseConfig):
    quiz_id: str
    title: str
    time_limit: Optional[int]
    created_by: str
    last_updated: UTCDateTime
    questions: List[QuestionToTake]


class QuizSearchResponse(BaseConfig):
    quiz_id: str
    title: str
    time_limit: Optional[int]
    created_by: str
    last_updated: UTCDateTime
    questions: int
    taken_by: int


class CreatedQuizSummary(BaseConfig):
    quiz_id: str
    title: str
    time_limit: Optional[int]
    last_updated: UTCDateTime
    number_of_questions: int
    number_of_taken_by: int


class TakenQuizSummary(BaseModel):
    quiz_id: str
    title: str
    num_questions: int
    quiz_score: Optional[int]
