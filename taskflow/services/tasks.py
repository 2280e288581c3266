"""Task persistence with the access policy applied to every operation."""
import logging
from datetime import date
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from taskflow.errors import NotFound
from taskflow.models.enums import Priority, TaskStatus
from taskflow.models.task import Task
from taskflow.models.user import User
from taskflow.services.policy import Operation, authorize_task_access, owner_scope

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, db: Session):
        self.db = db

    def _scoped(self, claims, query):
        owner_id = owner_scope(claims)
        if owner_id is not None:
            query = query.filter(Task.user_id == owner_id)
        return query

    def list(self, claims, priority: Optional[Priority] = None, status: Optional[TaskStatus] = None,
             search: Optional[str] = None):
        query = self._scoped(claims, self.db.query(Task).options(joinedload(Task.owner)))
        if priority:
            query = query.filter(Task.priority == priority)
        if status:
            query = query.filter(Task.status == status)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Task.title.ilike(pattern), Task.description.ilike(pattern)))
        return query.order_by(Task.created_at.desc(), Task.id.desc()).all()

    def _load(self, task_id: int) -> Task:
        task = self.db.query(Task).options(joinedload(Task.owner)).filter(Task.id == task_id).first()
        if task is None:
            raise NotFound("Task not found")
        return task

    def get(self, claims, task_id: int) -> Task:
        task = self._load(task_id)
        authorize_task_access(claims, task, Operation.READ)
        return task

    def create(self, claims, data) -> Task:
        owner_id = authorize_task_access(claims, data, Operation.CREATE)
        if owner_id != claims.id and self.db.get(User, owner_id) is None:
            raise NotFound("User not found")

        task = Task(
            title=data.title,
            description=data.description,
            priority=data.priority or Priority.MEDIUM,
            status=data.status or TaskStatus.PENDING,
            due_date=data.due_date,
            user_id=owner_id,
        )
        self.db.add(task)
        self._commit()
        self.db.refresh(task)
        logger.info("Task %s created by user %s for user %s", task.id, claims.id, owner_id)
        return task

    def update(self, claims, task_id: int, data) -> Task:
        task = self._load(task_id)
        authorize_task_access(claims, task, Operation.UPDATE)
        # full replace; the owner is not part of the payload
        task.title = data.title
        task.description = data.description
        task.priority = data.priority
        task.status = data.status
        task.due_date = data.due_date
        self._commit()
        self.db.refresh(task)
        logger.info("Task %s updated by user %s", task.id, claims.id)
        return task

    def delete(self, claims, task_id: int) -> None:
        task = self._load(task_id)
        authorize_task_access(claims, task, Operation.DELETE)
        self.db.delete(task)
        self._commit()
        logger.info("Task %s deleted by user %s", task_id, claims.id)

    def stats(self, claims, today: Optional[date] = None) -> dict:
        today = today or date.today()

        total = self._scoped(claims, self.db.query(func.count(Task.id))).scalar()

        by_status = (
            self._scoped(claims, self.db.query(Task.status, func.count(Task.id)))
            .group_by(Task.status)
            .all()
        )
        by_priority = (
            self._scoped(claims, self.db.query(Task.priority, func.count(Task.id)))
            .group_by(Task.priority)
            .all()
        )
        overdue = (
            self._scoped(claims, self.db.query(func.count(Task.id)))
            .filter(Task.due_date.isnot(None), Task.due_date < today, Task.status != TaskStatus.COMPLETED)
            .scalar()
        )

        return {
            "total": total or 0,
            "byStatus": [{"status": s, "count": c} for s, c in by_status],
            "byPriority": [{"priority": p, "count": c} for p, c in by_priority],
            "overdue": overdue or 0,
        }

    def _commit(self):
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
