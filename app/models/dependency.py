from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, Index
from sqlmodel import SQLModel, Field


class TodoDependency(SQLModel, table=True):
    """Arête ``todo_id -> depends_on_id`` : todo_id attend la fin de depends_on_id."""

    __tablename__ = "todo_dependencies"

    todo_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("todos.id", ondelete="CASCADE"),
            primary_key=True,
            nullable=False,
        )
    )
    depends_on_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("todos.id", ondelete="CASCADE"),
            primary_key=True,
            nullable=False,
        )
    )

    __table_args__ = (Index("ix_todo_dependencies_depends_on_id", "depends_on_id"),)
