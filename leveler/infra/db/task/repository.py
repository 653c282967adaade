from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from leveler.core.domain import Task
from leveler.core.exceptions import NotFoundError
from leveler.core.interfaces import TaskRepository
from leveler.infra.db.models import TaskORM
from leveler.infra.db.task.mapper import task_from_orm, task_to_orm


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, task: Task) -> None:
        self.session.add(task_to_orm(task))

    def get(self, task_id: str) -> Optional[Task]:
        obj = self.session.get(TaskORM, task_id)
        return task_from_orm(obj) if obj else None

    def list_by_schedule(self, schedule_id: str) -> List[Task]:
        stmt = (
            select(TaskORM)
            .where(TaskORM.schedule_id == schedule_id)
            .order_by(TaskORM.name, TaskORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [task_from_orm(row) for row in rows]

    def update_dates(self, task_id: str, start_date: date, end_date: date) -> None:
        obj = self.session.get(TaskORM, task_id)
        if obj is None:
            raise NotFoundError(f"Task {task_id} not found.", code="TASK_NOT_FOUND")
        obj.start_date = start_date
        obj.end_date = end_date


__all__ = ["SqlAlchemyTaskRepository"]
