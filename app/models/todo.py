from __future__ import annotations

from datetime import datetime, UTC
from typing import Optional

from sqlalchemy import Column, DateTime, Integer, Text, func, Index
from sqlmodel import SQLModel, Field


class Todo(SQLModel, table=True):
    __tablename__ = "todos"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True, nullable=False),
    )
    title: str = Field(sa_column=Column(Text, nullable=False))
    due_date: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )
    image_url: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
    )


# Index trié pour la liste (plus récents d'abord)
Index("ix_todos_created_at_desc", Todo.__table__.c.created_at.desc())
