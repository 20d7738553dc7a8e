"""
Translate a task listing request into SQLAlchemy filter, sort and
pagination pieces.

The builder trusts enum membership of ``status``/``priority`` (FastAPI
validates those at the request boundary) and only composes clauses.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import asc, case, desc, or_
from sqlalchemy.sql.expression import ColumnElement, UnaryExpression

from app.config import settings
from app.models.enums import TaskPriority, TaskStatus
from app.models.task import Task

SortField = Literal["createdAt", "updatedAt", "dueDate", "title", "status", "priority"]
SortOrder = Literal["asc", "desc"]

# enums sort by declaration rank (pending < in-progress < completed,
# low < medium < high), not by their text, on every backend
SORT_COLUMNS = {
    "createdAt": Task.created_at,
    "updatedAt": Task.updated_at,
    "dueDate": Task.due_date,
    "title": Task.title,
    "status": case({m: i for i, m in enumerate(TaskStatus)}, value=Task.status),
    "priority": case({m: i for i, m in enumerate(TaskPriority)}, value=Task.priority),
}

NULLABLE_SORT_FIELDS = {"dueDate"}

class TaskQuery(BaseModel):
    """One listing request. Built once per request, never mutated."""

    model_config = ConfigDict(frozen=True)

    owner_id: uuid.UUID
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    search: str | None = None
    sort_by: SortField = "createdAt"
    sort_order: SortOrder = "desc"
    page: int = Field(default=1, ge=1, le=settings.max_page)
    limit: int = Field(default_factory=lambda: settings.default_page_size, ge=1)

@dataclass(frozen=True)
class TaskQueryPlan:
    filters: tuple[ColumnElement[bool], ...]
    order_by: tuple[UnaryExpression, ...]
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

def build_filters(q: TaskQuery) -> list[ColumnElement[bool]]:
    # owner scoping is unconditional
    filters: list[ColumnElement[bool]] = [Task.owner_id == q.owner_id]

    if q.status is not None:
        filters.append(Task.status == q.status)

    if q.priority is not None:
        filters.append(Task.priority == q.priority)

    if q.search:
        filters.append(
            or_(
                Task.title.icontains(q.search, autoescape=True),
                Task.description.icontains(q.search, autoescape=True),
            )
        )

    return filters

def build_order_by(q: TaskQuery) -> tuple[UnaryExpression, ...]:
    direction = asc if q.sort_order == "asc" else desc
    primary = direction(SORT_COLUMNS[q.sort_by])
    if q.sort_by in NULLABLE_SORT_FIELDS:
        # unset values go last in both directions
        primary = primary.nulls_last()
    # id as secondary key so ties come back in a stable order
    return (primary, direction(Task.id))

def build_task_query(q: TaskQuery) -> TaskQueryPlan:
    return TaskQueryPlan(
        filters=tuple(build_filters(q)),
        order_by=build_order_by(q),
        page=q.page,
        limit=q.limit,
    )
