from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from leveler.core.domain import LevelingPolicy
from leveler.core.interfaces import TaskRepository
from leveler.core.services.common.base import ServiceBase
from leveler.core.services.scheduling.critical_path import calculate_critical_path
from leveler.core.services.scheduling.leveling_service import ResourceLevelingMixin
from leveler.core.services.scheduling.models import CriticalPathResult


class SchedulingEngine(ResourceLevelingMixin, ServiceBase):
    """
    Schedule-level entry point over a task store:
    - critical path and float per task
    - resource histogram and over-allocations
    - leveling preview, then a separate apply step
    """

    def __init__(
        self,
        session: Session,
        task_repo: TaskRepository,
        policy: Optional[LevelingPolicy] = None,
    ):
        super().__init__(session)
        self._task_repo: TaskRepository = task_repo
        self._policy: LevelingPolicy = (policy or LevelingPolicy()).validate()

    @property
    def policy(self) -> LevelingPolicy:
        return self._policy

    def calculate_critical_path(self, schedule_id: str) -> CriticalPathResult:
        tasks = self._task_repo.list_by_schedule(schedule_id)
        return calculate_critical_path(tasks)


__all__ = ["SchedulingEngine"]
