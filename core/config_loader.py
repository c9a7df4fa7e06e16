from __future__ import annotations
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./scheduler.db"
    DB_ECHO: bool = False

    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    # shared password that unlocks the admin role
    ADMIN_PASSWORD: str = "admin123"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
