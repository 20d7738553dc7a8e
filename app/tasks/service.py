import math
import uuid
from dataclasses import dataclass, field

from sqlalchemy import select, func
from sqlalchemy.orm import InstrumentedAttribute, Session

from app.models.task import Task
from app.tasks.query import TaskQueryPlan

@dataclass
class TaskPage:
    items: list[Task]
    count: int
    total: int
    page: int
    pages: int

@dataclass
class TaskStats:
    total: int
    by_status: dict[str, int] = field(default_factory=dict)
    by_priority: dict[str, int] = field(default_factory=dict)

def get_owned_task(db: Session, task_id: uuid.UUID, owner_id: uuid.UUID) -> Task | None:
    # missing and foreign-owned look the same to the caller
    return db.scalar(select(Task).where(Task.id == task_id, Task.owner_id == owner_id))

def count_tasks(db: Session, plan: TaskQueryPlan) -> int:
    return db.scalar(select(func.count()).select_from(Task).where(*plan.filters)) or 0

def list_tasks(db: Session, plan: TaskQueryPlan) -> TaskPage:
    q = (
        select(Task)
        .where(*plan.filters)
        .order_by(*plan.order_by)
        .offset(plan.offset)
        .limit(plan.limit)
    )
    items = list(db.scalars(q).all())
    total = count_tasks(db, plan)

    return TaskPage(
        items=items,
        count=len(items),
        total=total,
        page=plan.page,
        pages=math.ceil(total / plan.limit),
    )

def _group_count(db: Session, owner_id: uuid.UUID, column: InstrumentedAttribute) -> dict[str, int]:
    q = (
        select(column, func.count())
        .where(Task.owner_id == owner_id)
        .group_by(column)
    )
    return {value.value: n for value, n in db.execute(q).all()}

def task_stats(db: Session, owner_id: uuid.UUID) -> TaskStats:
    """
    Per-owner totals. Status/priority values with no tasks are left out of the
    maps rather than reported as zero.
    """
    total = db.scalar(select(func.count()).select_from(Task).where(Task.owner_id == owner_id)) or 0

    return TaskStats(
        total=total,
        by_status=_group_count(db, owner_id, Task.status),
        by_priority=_group_count(db, owner_id, Task.priority),
    )
