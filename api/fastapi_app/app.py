# api/fastapi_app/app.py
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

# Charger .env le plus tôt possible
from dotenv import load_dotenv
load_dotenv()

import core.log  # configure root logger

from app.db.base import Base
from app.services.dependency_service import DependencyService
from app.services.todo_service import TodoService
from core.telemetry.metrics import metrics_enabled, generate_latest
from .deps import settings, get_sessionmaker
from .middleware import RequestIDMiddleware, MetricsMiddleware
from .routes import health, todos, dependencies, schedule
from .utils.error_handlers import setup_error_handlers

core.log.configure_logging(settings.log_level)

TAGS_METADATA = [
    {"name": "health", "description": "Healthcheck et disponibilité DB."},
    {"name": "todos", "description": "Création, lecture et suppression des todos."},
    {"name": "dependencies", "description": "Prérequis entre todos (graphe toujours acyclique)."},
    {"name": "schedule", "description": "Jour de démarrage au plus tôt, chemin critique et vue graphe."},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    sessionmaker = app.dependency_overrides.get(get_sessionmaker, get_sessionmaker)()
    async with sessionmaker() as session:
        # schéma minimal ; en production les migrations Alembic passent avant
        conn = await session.connection()
        await conn.run_sync(Base.metadata.create_all)
        await session.commit()
        dependency_service = DependencyService()
        await dependency_service.load(session)
    app.state.dependency_service = dependency_service
    app.state.todo_service = TodoService(dependency_service)
    yield


app = FastAPI(
    title="Todo DAG API",
    version="0.1.0",
    openapi_tags=TAGS_METADATA,
    lifespan=lifespan,
)

setup_error_handlers(app)

# -------- Middlewares --------
app.add_middleware(RequestIDMiddleware)                # X-Request-ID propagation
app.add_middleware(MetricsMiddleware)                  # Prometheus metrics
app.add_middleware(GZipMiddleware, minimum_size=1024)  # gzip

if metrics_enabled():
    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        payload = generate_latest()
        return Response(
            content=payload,
            media_type="text/plain; version=0.0.4; charset=utf-8",
        )

# CORS
CORS_ALLOW_METHODS = ["GET", "POST", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Content-Type", "Authorization", "X-API-Key", "X-Request-ID"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.allowed_origins),
    allow_methods=CORS_ALLOW_METHODS,
    allow_headers=CORS_ALLOW_HEADERS,
)

# -------- Routes --------
# Auth: all routes require API key except /health.
# Les routes fixes (/todos/dependencies, /todos/schedule) passent avant /todos/{todo_id}.
app.include_router(health.router)
app.include_router(dependencies.router)
app.include_router(schedule.router)
app.include_router(todos.router)


# Redirection vers Swagger
@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url="/docs")
