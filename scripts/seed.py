import uuid
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.auth.passwords import hash_password
from app.auth.tokens import now_utc
from app.db import SessionLocal
from app.models.enums import TaskPriority, TaskStatus
from app.models.task import Task
from app.models.user import User

DEMO_PASSWORD = "password123"

DEMO_TASKS = [
    ("Buy Milk", "two liters, semi-skimmed", TaskStatus.pending, TaskPriority.low, 1),
    ("Write report", "quarterly numbers", TaskStatus.in_progress, TaskPriority.high, 3),
    ("Book dentist", None, TaskStatus.pending, TaskPriority.medium, 7),
    ("Renew passport", "check photo requirements", TaskStatus.completed, TaskPriority.high, None),
    ("Clean garage", None, TaskStatus.pending, TaskPriority.low, None),
]

@dataclass
class SeedResult:
    email: str
    password: str
    user_id: uuid.UUID
    task_ids: list[uuid.UUID]

def get_or_create_user(db: Session, email: str, name: str) -> User:
    email = email.lower().strip()
    u = db.scalar(select(User).where(User.email == email))
    if u is None:
        u = User(email=email, name=name, password_hash=hash_password(DEMO_PASSWORD))
        db.add(u)
        db.flush()
    return u

def get_or_create_task(
    db: Session,
    owner_id: uuid.UUID,
    title: str,
    description: str | None,
    status: TaskStatus,
    priority: TaskPriority,
    due_in_days: int | None,
) -> Task:
    t = db.scalar(select(Task).where(Task.owner_id == owner_id, Task.title == title))
    if t is None:
        t = Task(
            owner_id=owner_id,
            title=title,
            description=description,
            status=status,
            priority=priority,
            due_date=now_utc() + timedelta(days=due_in_days) if due_in_days is not None else None,
        )
        db.add(t)
        db.flush()
    else:
        # keep it stable if you re-run seed
        if t.status != status or t.priority != priority:
            t.status = status
            t.priority = priority
            db.add(t)
            db.flush()
    return t

def seed() -> SeedResult:
    db = SessionLocal()
    try:
        user = get_or_create_user(db, "demo@example.com", "demo")
        tasks = [get_or_create_task(db, user.id, *row) for row in DEMO_TASKS]
        db.commit()

        return SeedResult(
            email=user.email,
            password=DEMO_PASSWORD,
            user_id=user.id,
            task_ids=[t.id for t in tasks],
        )
    finally:
        db.close()

if __name__ == "__main__":
    r = seed()
    print("seed complete")
    print(f"user_id={r.user_id}")
    print(f"login: {r.email} / {r.password}")
    print(f"tasks: {len(r.task_ids)}")
