from __future__ import annotations

from typing import Dict, List, Optional

from app.schemas.todo import CamelModel


class ScheduleOut(CamelModel):
    earliest_start: Dict[int, int]
    critical_path: List[int]
    length: Optional[int] = None


class GraphNodeOut(CamelModel):
    id: int
    title: str
    earliest_start: int
    critical: bool


class GraphLinkOut(CamelModel):
    source: int
    target: int


class GraphOut(CamelModel):
    nodes: List[GraphNodeOut]
    links: List[GraphLinkOut]
