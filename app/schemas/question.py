from pydantic import BaseModel, Field, StrictInt, model_validator
from typing import List, Optional


class QuestionBase(BaseModel):
    question_text: str = Field(min_length=1)
    options: List[str] = Field(min_length=2)
    correct_answer: StrictInt

    @model_validator(mode="after")
    def check_correct_answer_in_range(self):
        if not 0 <= self.correct_answer < len(self.options):
            raise ValueError("correct_answer must index into options")
        return self


class QuestionCreate(QuestionBase):
    pass


class QuestionUpdate(QuestionBase):
    # Unknown or missing ids are appended as new questions
    id: Optional[str] = None


class QuestionResponse(QuestionBase):
    id: str

    class Config:
        from_attributes = True


class QuestionToTake(BaseModel):
    id: str
    question_text: str
    options: List[str]

    class Config:
        from_attributes = True
