import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.api.deps import get_rescore_coordinator
from app.core.security import create_access_token
from app.crud import crud_quiz
from app.db.models import Base
from app.db.session import get_db
from app.main import app
from app.schemas.quiz import QuizCreate
from app.services.rescore import RescoreCoordinator


@pytest.fixture
def session_factory(tmp_path):
    # File-backed so rescore worker threads see committed rows
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def coordinator(session_factory):
    return RescoreCoordinator(session_factory, max_workers=4, max_retries=3)


@pytest.fixture
def client(session_factory, coordinator):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_rescore_coordinator] = lambda: coordinator
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user_id: str) -> dict:
        token = create_access_token({"sub": user_id})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def make_quiz(db_session):
    """Create a quiz owned by ``creator`` from (text, options, correct) tuples."""
    def _make_quiz(questions, creator="alice", title="Capitals"):
        data = QuizCreate(
            title=title,
            questions=[
                {"question_text": text, "options": options, "correct_answer": correct}
                for text, options, correct in questions
            ],
        )
        return crud_quiz.create_quiz(db_session, creator, data)
    return _make_quiz
