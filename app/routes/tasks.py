import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.auth.deps import get_current_user
from app.config import settings
from app.db import get_db
from app.models.enums import TaskPriority, TaskStatus
from app.models.task import Task
from app.models.user import User
from app.ratelimit import api_rate_limit
from app.schemas.tasks import (
    TaskCreateIn,
    TaskEnvelopeOut,
    TaskListOut,
    TaskMessageOut,
    TaskOut,
    TaskStatsEnvelopeOut,
    TaskStatsOut,
    TaskUpdateIn,
)
from app.tasks.query import SortField, SortOrder, TaskQuery, build_task_query
from app.tasks.service import get_owned_task, list_tasks, task_stats

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"], dependencies=[Depends(api_rate_limit)])

TASK_NOT_FOUND = "Task not found"

def task_out(t: Task) -> TaskOut:
    return TaskOut(
        id=t.id,
        owner=t.owner_id,
        title=t.title,
        description=t.description,
        status=t.status,
        priority=t.priority,
        due_date=t.due_date,
        created_at=t.created_at,
        updated_at=t.updated_at,
    )

def _owned_or_404(db: Session, task_id: uuid.UUID, user: User) -> Task:
    t = get_owned_task(db, task_id, user.id)
    if t is None:
        raise HTTPException(status_code=404, detail=TASK_NOT_FOUND)
    return t

# registered before /{task_id}
@router.get("/stats", response_model=TaskStatsEnvelopeOut)
def get_task_stats(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TaskStatsEnvelopeOut:
    s = task_stats(db, user.id)
    return TaskStatsEnvelopeOut(
        stats=TaskStatsOut(total=s.total, by_status=s.by_status, by_priority=s.by_priority)
    )

@router.get("", response_model=TaskListOut)
@router.get("/", response_model=TaskListOut, include_in_schema=False)
def get_tasks(
    status: TaskStatus | None = Query(None),
    priority: TaskPriority | None = Query(None),
    search: str | None = Query(None, max_length=100),
    sort_by: SortField = Query("createdAt", alias="sortBy"),
    sort_order: SortOrder = Query("desc", alias="sortOrder"),
    page: int = Query(1, ge=1, le=settings.max_page),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TaskListOut:
    q = TaskQuery(
        owner_id=user.id,
        status=status,
        priority=priority,
        search=search.strip() if search else None,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    result = list_tasks(db, build_task_query(q))
    return TaskListOut(
        count=result.count,
        total=result.total,
        page=result.page,
        pages=result.pages,
        tasks=[task_out(t) for t in result.items],
    )

@router.get("/{task_id}", response_model=TaskEnvelopeOut)
def get_task(
    task_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TaskEnvelopeOut:
    return TaskEnvelopeOut(task=task_out(_owned_or_404(db, task_id, user)))

@router.post("", response_model=TaskMessageOut, status_code=201)
@router.post("/", response_model=TaskMessageOut, status_code=201, include_in_schema=False)
def create_task(
    payload: TaskCreateIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TaskMessageOut:
    t = Task(
        owner_id=user.id,
        title=payload.title,
        description=payload.description,
        status=payload.status,
        priority=payload.priority,
        due_date=payload.due_date,
    )
    db.add(t)
    db.commit()
    db.refresh(t)
    log.info("task %s created by %s", t.id, user.id)
    return TaskMessageOut(message="Task created successfully", task=task_out(t))

@router.put("/{task_id}", response_model=TaskMessageOut)
def update_task(
    task_id: uuid.UUID,
    payload: TaskUpdateIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TaskMessageOut:
    t = _owned_or_404(db, task_id, user)

    if payload.title is not None:
        t.title = payload.title
    if payload.status is not None:
        t.status = payload.status
    if payload.priority is not None:
        t.priority = payload.priority

    # nullable fields can be cleared by sending null
    if "description" in payload.model_fields_set:
        t.description = payload.description
    if "due_date" in payload.model_fields_set:
        t.due_date = payload.due_date

    db.add(t)
    db.commit()
    db.refresh(t)
    return TaskMessageOut(message="Task updated successfully", task=task_out(t))

@router.delete("/{task_id}", response_model=TaskMessageOut)
def delete_task(
    task_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TaskMessageOut:
    t = _owned_or_404(db, task_id, user)
    out = task_out(t)
    db.delete(t)
    db.commit()
    log.info("task %s deleted by %s", task_id, user.id)
    return TaskMessageOut(message="Task deleted successfully", task=out)
