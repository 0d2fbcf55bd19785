from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.errors import AlreadyTaken, EmptyPopulation, NotFound, StorageError, Unauthorized
from app.core.logging_config import configure_logging
from app.db.models import Base
from app.db.session import engine

from app.api.routes import quizzes, quiz_result

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create the DB tables (if not using Alembic yet)
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION, lifespan=lifespan)


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_handler(status_code: int):
    async def handler(request: Request, exc: Exception):
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})
    return handler


app.add_exception_handler(NotFound, _error_handler(status.HTTP_404_NOT_FOUND))
app.add_exception_handler(EmptyPopulation, _error_handler(status.HTTP_404_NOT_FOUND))
app.add_exception_handler(Unauthorized, _error_handler(status.HTTP_403_FORBIDDEN))
app.add_exception_handler(AlreadyTaken, _error_handler(status.HTTP_400_BAD_REQUEST))
app.add_exception_handler(StorageError, _error_handler(status.HTTP_503_SERVICE_UNAVAILABLE))

app.include_router(quizzes)
app.include_router(quiz_result)


@app.get("/")
def root():
    return {"message": "Welcome to the Quiz Stats API"}
