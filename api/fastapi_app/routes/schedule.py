# api/fastapi_app/routes/schedule.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import api_key_auth, get_dependency_service, get_session
from app.schemas.schedule import GraphOut, ScheduleOut
from app.services.dependency_service import DependencyService

router = APIRouter(
    prefix="/todos",
    tags=["schedule"],
    dependencies=[Depends(api_key_auth)],
)


@router.get("/schedule", response_model=ScheduleOut)
async def get_schedule(
    session: AsyncSession = Depends(get_session),
    service: DependencyService = Depends(get_dependency_service),
):
    schedule = await service.schedule(session)
    return ScheduleOut(
        earliest_start=schedule.earliest_start,
        critical_path=sorted(schedule.critical_path),
        length=schedule.length,
    )


@router.get("/graph", response_model=GraphOut)
async def get_graph(
    session: AsyncSession = Depends(get_session),
    service: DependencyService = Depends(get_dependency_service),
):
    """Nœuds et liens pour la vue graphe (source = prérequis, target = dépendant)."""
    graph = await service.graph(session)
    return GraphOut.model_validate(graph.to_node_link())
