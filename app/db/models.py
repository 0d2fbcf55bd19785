from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.types import Text
from app.db.base import Base
import uuid
from datetime import datetime, timezone


def utcnow():
    """Function to return current UTC time with timezone info"""
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class Quiz(Base):
    __tablename__ = "quizzes"
    quiz_id = Column(String(128), primary_key=True)
    title = Column(String(200), nullable=False)
    time_limit = Column(Integer, nullable=True)
    created_by = Column(String(64), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    last_updated = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    # Bumped by the ORM on every UPDATE of the row; doubles as the snapshot number
    version = Column(Integer, nullable=False)

    questions = relationship(
        "QuizQuestion",
        back_populates="quiz",
        order_by="QuizQuestion.position",
        cascade="all, delete-orphan",
    )
    results = relationship("QuizResult", back_populates="quiz", cascade="all, delete-orphan")

    __mapper_args__ = {"version_id_col": version}

    @property
    def taken_by(self):
        return [result.user_id for result in self.results]


class QuizQuestion(Base):
    __tablename__ = "quiz_questions"
    id = Column(String(36), primary_key=True, default=new_id)
    quiz_id = Column(String(128), ForeignKey("quizzes.quiz_id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    question_text = Column(Text, nullable=False)
    options = Column(JSON, nullable=False)
    # Zero-based index into options
    correct_answer = Column(Integer, nullable=False)

    quiz = relationship("Quiz", back_populates="questions")


class QuizResult(Base):
    __tablename__ = "quiz_results"
    id = Column(String(36), primary_key=True, default=new_id)
    quiz_id = Column(String(128), ForeignKey("quizzes.quiz_id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    # [{"question_id": str, "selected_option": int}, ...] in submission order
    answers = Column(JSON, nullable=False, default=list)
    score = Column(Integer, nullable=False, default=0)
    graded_version = Column(Integer, nullable=False)
    row_version = Column(Integer, nullable=False)
    submitted_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    quiz = relationship("Quiz", back_populates="results")

    __table_args__ = (UniqueConstraint("quiz_id", "user_id", name="uq_quiz_results_quiz_user"),)
    __mapper_args__ = {"version_id_col": row_version}
