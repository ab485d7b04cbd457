from __future__ import annotations

import logging
from functools import lru_cache
from typing import AsyncGenerator, Sequence

from fastapi import Header, HTTPException, status, Request
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.services.dependency_service import DependencyService
from app.services.todo_service import TodoService

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # valeurs par défaut : l'API démarre sans variable d'environnement
    database_url: str = Field(
        default="sqlite+aiosqlite:///./todos.db", alias="DATABASE_URL"
    )
    api_key: str = Field(default="test-key", alias="API_KEY")
    allowed_origins_raw: str = Field(default="http://localhost:3000", alias="ALLOWED_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @property
    def allowed_origins(self) -> Sequence[str]:
        raw = self.allowed_origins_raw or ""
        return [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

engine: AsyncEngine = create_async_engine(settings.database_url, pool_pre_ping=True)

SessionLocal: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine, expire_on_commit=False, class_=AsyncSession
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        yield session


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return SessionLocal


# Les services vivent sur app.state (créés dans le lifespan)
def get_dependency_service(request: Request) -> DependencyService:
    return request.app.state.dependency_service


def get_todo_service(request: Request) -> TodoService:
    return request.app.state.todo_service


# Auth par clé API
def api_key_auth(x_api_key: str | None = Header(default=None, alias="X-API-Key")):
    if settings.api_key and x_api_key == settings.api_key:
        return True
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or missing API key",
        headers={"WWW-Authenticate": "ApiKey"},
    )
