from enum import Enum

class TaskStatus(str, Enum):
    pending = "pending"
    in_progress = "in-progress"
    completed = "completed"

class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"

def enum_values(enum_cls: type[Enum]) -> list[str]:
    # persist the wire values ("in-progress"), not member names
    return [m.value for m in enum_cls]
