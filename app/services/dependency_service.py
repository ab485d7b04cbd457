"""
Point d'entrée unique des écritures sur le graphe.

Validation, cycle check, persistence and the in-memory replacement run as one
critical section under a single asyncio lock.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.dependency import TodoDependency
from app.models.todo import Todo
from core.exceptions import CircularDependencyError, DependencyValidationError, PersistenceError
from core.log import todo_id_var
from core.planning.cycle_guard import check_update
from core.planning.graph_store import GraphStore, dedupe_ids
from core.planning.scheduler import Schedule, build_schedule
from core.planning.task_graph import TaskGraph
from core.telemetry.metrics import record_dependency_update

logger = logging.getLogger(__name__)


async def known_todo_ids(session: AsyncSession) -> set[int]:
    rows = await session.execute(select(Todo.id))
    return {int(i) for i in rows.scalars().all()}


async def todo_titles(session: AsyncSession) -> Dict[int, str]:
    rows = await session.execute(select(Todo.id, Todo.title).order_by(Todo.id))
    return {int(tid): title for tid, title in rows.all()}


class DependencyService:
    def __init__(self, store: GraphStore | None = None) -> None:
        self.store = store or GraphStore()
        self._write_lock = asyncio.Lock()

    async def load(self, session: AsyncSession) -> GraphStore:
        """Reconstruit le store depuis la table ``todo_dependencies``."""
        rows = await session.execute(
            select(TodoDependency.todo_id, TodoDependency.depends_on_id)
        )
        fresh = GraphStore.from_edges(rows.all())
        async with self._write_lock:
            self.store = fresh
        logger.info("dependency graph loaded", extra={"edges": len(fresh)})
        return fresh

    @property
    def write_lock(self) -> asyncio.Lock:
        return self._write_lock

    def edges(self) -> List[tuple[int, int]]:
        return self.store.edges()

    async def update(self, session: AsyncSession, todo_id: int, depends_on_ids: Sequence[int]) -> List[int]:
        """
        Replace every prerequisite of ``todo_id``.

        Raises DependencyValidationError or CircularDependencyError without
        touching the database nor the store. A database failure raises
        PersistenceError and also leaves the store as it was.
        """
        token = todo_id_var.set(todo_id if isinstance(todo_id, int) else None)
        try:
            async with self._write_lock:
                known = await known_todo_ids(session)
                snapshot = self.store.snapshot()
                try:
                    prereqs = dedupe_ids(check_update(snapshot, todo_id, depends_on_ids, known))
                except CircularDependencyError:
                    record_dependency_update("rejected_cycle")
                    raise
                except DependencyValidationError as exc:
                    record_dependency_update("rejected_invalid")
                    logger.warning("dependency update rejected: %s", exc)
                    raise

                try:
                    await session.execute(
                        delete(TodoDependency).where(TodoDependency.todo_id == todo_id)
                    )
                    session.add_all(
                        [TodoDependency(todo_id=todo_id, depends_on_id=p) for p in prereqs]
                    )
                    await session.commit()
                except SQLAlchemyError as exc:
                    await session.rollback()
                    logger.exception("dependency update failed to persist")
                    raise PersistenceError("Error updating dependencies") from exc

                self.store.replace_outgoing(todo_id, prereqs)

            record_dependency_update("accepted")
            logger.info("dependencies updated", extra={"prerequisites": prereqs})
            return prereqs
        finally:
            todo_id_var.reset(token)

    def forget(self, todo_id: int) -> None:
        """Retire un todo supprimé du graphe en mémoire."""
        self.store.remove_task(todo_id)

    async def schedule(self, session: AsyncSession) -> Schedule:
        known = await known_todo_ids(session)
        return build_schedule(self.store.snapshot(), sorted(known))

    async def graph(self, session: AsyncSession) -> TaskGraph:
        titles = await todo_titles(session)
        snapshot = self.store.snapshot()
        return TaskGraph(titles, snapshot, build_schedule(snapshot, titles))
