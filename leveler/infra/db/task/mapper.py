from __future__ import annotations

from leveler.core.domain import Task
from leveler.infra.db.models import TaskORM, TaskPredecessorORM


def task_to_orm(task: Task) -> TaskORM:
    return TaskORM(
        id=task.id,
        schedule_id=task.schedule_id,
        name=task.name,
        start_date=task.start_date,
        end_date=task.end_date,
        duration_days=task.duration_days,
        assigned_to=task.assigned_to,
        status=task.status,
        predecessor_links=[
            TaskPredecessorORM(task_id=task.id, predecessor_task_id=pred_id, position=position)
            for position, pred_id in enumerate(dict.fromkeys(task.predecessors))
        ],
    )


def task_from_orm(obj: TaskORM) -> Task:
    return Task(
        id=obj.id,
        schedule_id=obj.schedule_id,
        name=obj.name,
        start_date=obj.start_date,
        end_date=obj.end_date,
        duration_days=obj.duration_days,
        predecessors=[link.predecessor_task_id for link in obj.predecessor_links],
        assigned_to=obj.assigned_to,
        status=obj.status,
    )


__all__ = ["task_to_orm", "task_from_orm"]
