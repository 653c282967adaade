# leveler/infra/db/models.py
from __future__ import annotations
from datetime import date
from typing import List, Optional

from sqlalchemy import (
    Date,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leveler.infra.db.base import Base
from leveler.core.domain import TaskStatus


class TaskORM(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    schedule_id: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    duration_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    assigned_to: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    status: Mapped[TaskStatus] = mapped_column(
        SAEnum(TaskStatus), default=TaskStatus.PENDING, nullable=False
    )

    predecessor_links: Mapped[List["TaskPredecessorORM"]] = relationship(
        back_populates="task",
        cascade="all, delete-orphan",
        order_by="TaskPredecessorORM.position",
    )
Index("idx_tasks_schedule_id", TaskORM.schedule_id)


class TaskPredecessorORM(Base):
    __tablename__ = "task_predecessors"

    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True
    )
    # no FK: a predecessor outside the snapshot is tolerated and treated as absent
    predecessor_task_id: Mapped[str] = mapped_column(String, primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    task: Mapped[TaskORM] = relationship(back_populates="predecessor_links")
Index("idx_pred_predecessor", TaskPredecessorORM.predecessor_task_id)
