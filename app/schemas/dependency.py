from __future__ import annotations

from typing import List

from pydantic import StrictInt

from app.schemas.todo import CamelModel


class DependencyOut(CamelModel):
    todo_id: int
    depends_on_id: int


class DependencyUpdate(CamelModel):
    """Corps de ``POST /todos/dependencies`` : remplace tous les prérequis de ``todo_id``."""

    todo_id: StrictInt
    depends_on_ids: List[StrictInt]


class DependencyUpdateResponse(CamelModel):
    message: str = "Dependencies updated"
    todo_id: int
    depends_on_ids: List[int]
