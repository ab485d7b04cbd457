# api/fastapi_app/routes/todos.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import api_key_auth, get_session, get_todo_service
from ..pagination import PaginationParams, pagination_params, set_pagination_headers
from ..schemas import Page
from app.schemas.todo import TodoCreate, TodoOut
from app.services.todo_service import TodoService

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
    dependencies=[Depends(api_key_auth)],
)

log = logging.getLogger("api.todos")


@router.get("", response_model=Page[TodoOut])
async def list_todos(
    request: Request,
    response: Response,
    page: PaginationParams = Depends(pagination_params),
    session: AsyncSession = Depends(get_session),
    service: TodoService = Depends(get_todo_service),
):
    """Liste les todos (plus récents d'abord) avec prérequis, jour de démarrage et chemin critique."""
    total = await service.count_todos(session)
    todos = await service.list_todos(session, limit=page.limit, offset=page.offset)
    items = await service.to_out(session, todos)
    set_pagination_headers(response, request, total, page.limit, page.offset)
    return Page[TodoOut](items=items, total=total, limit=page.limit, offset=page.offset)


@router.post("", response_model=TodoOut, status_code=status.HTTP_201_CREATED)
async def create_todo(
    payload: TodoCreate,
    response: Response,
    session: AsyncSession = Depends(get_session),
    service: TodoService = Depends(get_todo_service),
):
    """Crée un todo.

    Exemple cURL::

        curl -X POST http://localhost:8000/todos \
             -H 'X-API-Key: <API_KEY>' \
             -H 'Content-Type: application/json' \
             -d '{"title": "Buy paint", "dueDate": "2026-11-02"}'
    """
    todo = await service.create_todo(session, payload)
    response.headers["Location"] = f"/todos/{todo.id}"
    (out,) = await service.to_out(session, [todo])
    return out


@router.get("/{todo_id}", response_model=TodoOut)
async def get_todo(
    todo_id: int,
    session: AsyncSession = Depends(get_session),
    service: TodoService = Depends(get_todo_service),
):
    todo = await service.get_todo(session, todo_id)
    (out,) = await service.to_out(session, [todo])
    return out


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo(
    todo_id: int,
    session: AsyncSession = Depends(get_session),
    service: TodoService = Depends(get_todo_service),
):
    await service.delete_todo(session, todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
