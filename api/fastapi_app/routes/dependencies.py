# api/fastapi_app/routes/dependencies.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import api_key_auth, get_dependency_service, get_session
from app.schemas.dependency import DependencyOut, DependencyUpdate, DependencyUpdateResponse
from app.services.dependency_service import DependencyService

router = APIRouter(
    prefix="/todos/dependencies",
    tags=["dependencies"],
    dependencies=[Depends(api_key_auth)],
)

log = logging.getLogger("api.dependencies")


@router.get("", response_model=List[DependencyOut])
async def list_dependencies(service: DependencyService = Depends(get_dependency_service)):
    """Ensemble brut des arêtes ``todoId -> dependsOnId``."""
    return [DependencyOut(todo_id=t, depends_on_id=p) for t, p in service.edges()]


@router.post("", response_model=DependencyUpdateResponse)
async def update_dependencies(
    payload: DependencyUpdate,
    session: AsyncSession = Depends(get_session),
    service: DependencyService = Depends(get_dependency_service),
):
    """Remplace tous les prérequis d'un todo.

    Rejected with 409 ``circular_dependency`` when the new list would close a
    cycle and with 400 ``validation_error`` when an id is unknown; in both
    cases nothing is written.
    """
    prereqs = await service.update(session, payload.todo_id, payload.depends_on_ids)
    return DependencyUpdateResponse(todo_id=payload.todo_id, depends_on_ids=prereqs)
