from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from taskflow.models.enums import Priority, TaskStatus


def _title_min_length(v: str) -> str:
    v = v.strip()
    if len(v) < 3:
        raise ValueError("Title must be at least 3 characters")
    return v


class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    due_date: Optional[date] = None
    # honoured for admins only
    user_id: Optional[int] = None

    @field_validator("title")
    @classmethod
    def title_not_short(cls, v):
        return _title_min_length(v)

    @field_validator("description")
    @classmethod
    def strip_description(cls, v):
        return v.strip() if v is not None else v


class TaskUpdate(BaseModel):
    title: str
    description: Optional[str] = None
    priority: Priority
    status: TaskStatus
    due_date: Optional[date] = None

    @field_validator("title")
    @classmethod
    def title_not_short(cls, v):
        return _title_min_length(v)

    @field_validator("description")
    @classmethod
    def strip_description(cls, v):
        return v.strip() if v is not None else v


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    priority: Priority
    status: TaskStatus
    due_date: Optional[date] = None
    user_id: int
    user_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TaskCreated(BaseModel):
    message: str
    taskId: int


class StatusCount(BaseModel):
    status: TaskStatus
    count: int


class PriorityCount(BaseModel):
    priority: Priority
    count: int


class TaskStats(BaseModel):
    total: int
    byStatus: List[StatusCount]
    byPriority: List[PriorityCount]
    overdue: int
