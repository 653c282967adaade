from leveler.core.domain.enums import CLOSED_TASK_STATUSES, TaskStatus
from leveler.core.domain.identifiers import generate_id
from leveler.core.domain.policy import LevelingPolicy
from leveler.core.domain.task import Task

__all__ = [
    "generate_id",
    "TaskStatus",
    "CLOSED_TASK_STATUSES",
    "Task",
    "LevelingPolicy",
]
