import uuid
from datetime import datetime

from pydantic import Field

from app.models.enums import TaskPriority, TaskStatus
from app.schemas.base import ApiModel

class TaskCreateIn(ApiModel):
    title: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    status: TaskStatus = TaskStatus.pending
    priority: TaskPriority = TaskPriority.medium
    due_date: datetime | None = None

class TaskUpdateIn(ApiModel):
    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None

class TaskOut(ApiModel):
    id: uuid.UUID
    owner: uuid.UUID
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime

class TaskEnvelopeOut(ApiModel):
    success: bool = True
    task: TaskOut

class TaskMessageOut(TaskEnvelopeOut):
    message: str

class TaskListOut(ApiModel):
    success: bool = True
    count: int
    total: int
    page: int
    pages: int
    tasks: list[TaskOut]

class TaskStatsOut(ApiModel):
    total: int
    by_status: dict[str, int]
    by_priority: dict[str, int]

class TaskStatsEnvelopeOut(ApiModel):
    success: bool = True
    stats: TaskStatsOut
