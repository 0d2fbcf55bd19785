from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Quiz Stats Service"
    VERSION: str = "1.0.0"

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./quizstats.db")
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 10
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_POOL_RECYCLE: int = 1800

    # Security
    SECRET_KEY: str = Field(default="change-me-in-production")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 90
    TOKEN_URL: str = "/auth/login"
    CORS_ORIGINS: List[str] = ["*"]

    # Rescoring fan-out
    RESCORE_MAX_WORKERS: int = 4
    RESCORE_MAX_RETRIES: int = 3

    # Quiz ids look like "<creator>_<suffix>"
    QUIZ_ID_SUFFIX_LENGTH: int = 10

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


settings = Settings()
