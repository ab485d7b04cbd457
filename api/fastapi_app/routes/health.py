from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_session

router = APIRouter(prefix="", tags=["health"])


@router.get("/health")
async def healthcheck(request: Request, session: AsyncSession = Depends(get_session)):
    edges = len(request.app.state.dependency_service.store)
    try:
        await session.execute(text("SELECT 1"))
        return {"status": "ok", "db": "ok", "edges": edges}
    except Exception as e:
        return {"status": "degraded", "db": str(e), "edges": edges}
