from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON en camelCase (contrat historique du front), attributs en snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TodoCreate(CamelModel):
    title: str = Field(min_length=1, max_length=500)
    due_date: Optional[datetime] = None
    image_url: Optional[str] = Field(default=None, max_length=2_000)

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("due_date", mode="before")
    @classmethod
    def _parse_due_date(cls, v: Any) -> Any:
        # le front envoie "YYYY-MM-DD" ou "" quand le champ date est vide
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
            try:
                return datetime.fromisoformat(v.replace("Z", "+00:00"))
            except ValueError:
                return v
        return v

    @field_validator("image_url")
    @classmethod
    def _strip_image(cls, v: Optional[str]) -> Optional[str]:
        return (v.strip() or None) if v is not None else None


class TodoRef(CamelModel):
    id: int
    title: str


class TodoOut(CamelModel):
    id: int
    title: str
    due_date: Optional[datetime] = None
    image_url: Optional[str] = None
    created_at: datetime
    dependencies: List[TodoRef] = Field(default_factory=list)
    earliest_start: int = 0
    critical: bool = False
