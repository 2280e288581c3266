from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from taskflow.deps import get_current_claims, get_task_service
from taskflow.models.enums import Priority, TaskStatus
from taskflow.schemas.task import TaskCreate, TaskCreated, TaskOut, TaskStats, TaskUpdate
from taskflow.services.tasks import TaskService
from taskflow.services.tokens import Claims

# All routes are protected
router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskOut])
def list_tasks(
    priority: Optional[Priority] = None,
    status: Optional[TaskStatus] = None,
    search: Optional[str] = Query(None, description="Search in title and description"),
    claims: Claims = Depends(get_current_claims),
    tasks: TaskService = Depends(get_task_service),
):
    """Non-admins only ever see their own tasks; filters apply on top."""
    return tasks.list(claims, priority=priority, status=status, search=search)


@router.get("/stats", response_model=TaskStats)
def task_stats(claims: Claims = Depends(get_current_claims), tasks: TaskService = Depends(get_task_service)):
    return tasks.stats(claims)


@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: int, claims: Claims = Depends(get_current_claims), tasks: TaskService = Depends(get_task_service)):
    return tasks.get(claims, task_id)


@router.post("", response_model=TaskCreated, status_code=201)
def create_task(task: TaskCreate, claims: Claims = Depends(get_current_claims),
                tasks: TaskService = Depends(get_task_service)):
    new = tasks.create(claims, task)
    return {"message": "Task created successfully", "taskId": new.id}


@router.put("/{task_id}")
def update_task(task_id: int, task: TaskUpdate, claims: Claims = Depends(get_current_claims),
                tasks: TaskService = Depends(get_task_service)):
    tasks.update(claims, task_id, task)
    return {"message": "Task updated successfully"}


@router.delete("/{task_id}")
def delete_task(task_id: int, claims: Claims = Depends(get_current_claims),
                tasks: TaskService = Depends(get_task_service)):
    tasks.delete(claims, task_id)
    return {"message": "Task deleted successfully"}
