# alembic/env.py
from __future__ import annotations

import os

from alembic import context
from sqlalchemy import create_engine, pool
from sqlmodel import SQLModel

# --- Importe les modèles pour que SQLModel.metadata soit peuplé ---
from app.models.todo import Todo  # noqa: F401
from app.models.dependency import TodoDependency  # noqa: F401

config = context.config
target_metadata = SQLModel.metadata

# driver async de l'app -> driver sync pour Alembic
_SYNC_DRIVERS = {
    "sqlite+aiosqlite": "sqlite",
    "postgresql+asyncpg": "postgresql+psycopg2",
}


def _to_sync(url: str) -> str:
    for async_prefix, sync_prefix in _SYNC_DRIVERS.items():
        if url.startswith(async_prefix):
            return sync_prefix + url[len(async_prefix):]
    return url


def _sync_url() -> str:
    """
    URL de BDD pour Alembic, par priorité :
      1) DATABASE_URL_SYNC
      2) DATABASE_URL (même variable que l'API), driver converti
      3) sqlalchemy.url de alembic.ini
    """
    url = (
        os.getenv("DATABASE_URL_SYNC")
        or os.getenv("DATABASE_URL")
        or config.get_main_option("sqlalchemy.url")
    )
    if not url:
        raise RuntimeError(
            "Aucune URL de BDD trouvée. Définis DATABASE_URL ou DATABASE_URL_SYNC, "
            "ou mets sqlalchemy.url dans alembic.ini."
        )
    return _to_sync(url)


def _configure(**kwargs) -> None:
    # SQLite ne sait pas ALTER une contrainte : mode batch
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=_sync_url().startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    _configure(url=_sync_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(_sync_url(), poolclass=pool.NullPool)
    with connectable.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
