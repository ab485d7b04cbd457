from __future__ import annotations

import logging
from datetime import datetime, UTC
from typing import Dict, List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.dependency import TodoDependency
from app.models.todo import Todo
from app.schemas.todo import TodoCreate, TodoOut, TodoRef
from app.services.dependency_service import DependencyService, known_todo_ids
from core.exceptions import NotFoundError, PersistenceError
from core.planning.scheduler import Schedule, build_schedule

logger = logging.getLogger(__name__)


class TodoService:
    """CRUD des todos ; garde le graphe cohérent lors des suppressions."""

    def __init__(self, dependencies: DependencyService) -> None:
        self.dependencies = dependencies

    async def known_ids(self, session: AsyncSession) -> set[int]:
        return await known_todo_ids(session)

    async def count_todos(self, session: AsyncSession) -> int:
        res = await session.execute(select(func.count()).select_from(Todo))
        return int(res.scalar_one())

    async def list_todos(self, session: AsyncSession, *, limit: int, offset: int) -> List[Todo]:
        res = await session.execute(
            select(Todo).order_by(Todo.created_at.desc(), Todo.id.desc()).limit(limit).offset(offset)
        )
        return list(res.scalars().all())

    async def get_todo(self, session: AsyncSession, todo_id: int) -> Todo:
        todo = await session.get(Todo, todo_id)
        if todo is None:
            raise NotFoundError("Todo not found")
        return todo

    async def create_todo(self, session: AsyncSession, data: TodoCreate) -> Todo:
        todo = Todo(
            title=data.title,
            due_date=data.due_date,
            image_url=data.image_url,
            created_at=datetime.now(UTC),
        )
        session.add(todo)
        await session.commit()
        await session.refresh(todo)
        logger.info("todo created", extra={"todo_id": todo.id})
        return todo

    async def delete_todo(self, session: AsyncSession, todo_id: int) -> None:
        """Supprime le todo et toutes les arêtes qui le référencent, dans la même transaction."""
        async with self.dependencies.write_lock:
            todo = await self.get_todo(session, todo_id)
            try:
                await session.execute(
                    delete(TodoDependency).where(
                        or_(
                            TodoDependency.todo_id == todo_id,
                            TodoDependency.depends_on_id == todo_id,
                        )
                    )
                )
                await session.delete(todo)
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.exception("todo deletion failed to persist", extra={"todo_id": todo_id})
                raise PersistenceError("Error deleting todo") from exc
            self.dependencies.forget(todo_id)
        logger.info("todo deleted", extra={"todo_id": todo_id})

    async def to_out(
        self,
        session: AsyncSession,
        todos: List[Todo],
        schedule: Optional[Schedule] = None,
    ) -> List[TodoOut]:
        """Annote les todos avec leurs prérequis, leur jour de démarrage et le chemin critique."""
        # un seul snapshot pour les prérequis et le planning
        snapshot = self.dependencies.store.snapshot()
        if schedule is None:
            schedule = build_schedule(snapshot, sorted(await known_todo_ids(session)))
        wanted = {p for t in todos for p in snapshot.get(t.id, ())}
        titles: Dict[int, str] = {}
        if wanted:
            res = await session.execute(select(Todo.id, Todo.title).where(Todo.id.in_(wanted)))
            titles = {int(tid): title for tid, title in res.all()}

        out: List[TodoOut] = []
        for t in todos:
            refs = [TodoRef(id=p, title=titles[p]) for p in snapshot.get(t.id, ()) if p in titles]
            out.append(
                TodoOut(
                    id=t.id,
                    title=t.title,
                    due_date=t.due_date,
                    image_url=t.image_url,
                    created_at=t.created_at,
                    dependencies=refs,
                    earliest_start=schedule.day_of(t.id),
                    critical=schedule.is_critical(t.id),
                )
            )
        return out
