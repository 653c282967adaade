from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy.orm import Session

from leveler.core.domain import LevelingPolicy
from leveler.core.events.domain_events import domain_events
from leveler.core.interfaces import TaskRepository
from leveler.core.services.scheduling.critical_path import calculate_critical_path
from leveler.core.services.scheduling.histogram import build_resource_histogram
from leveler.core.services.scheduling.leveling import level_resources
from leveler.core.services.scheduling.leveling_models import (
    ApplyResult,
    LevelingResult,
    ResourceHistogram,
    TaskAdjustment,
)

logger = logging.getLogger(__name__)


class ResourceLevelingMixin:
    _session: Session
    _task_repo: TaskRepository
    _policy: LevelingPolicy

    def get_resource_histogram(self, schedule_id: str) -> ResourceHistogram:
        tasks = self._task_repo.list_by_schedule(schedule_id)
        return build_resource_histogram(tasks, self._policy)

    def level_resources(self, schedule_id: str) -> LevelingResult:
        """
        Preview leveling for a schedule.

        CPM, histogram and leveling all read the same snapshot so the
        float values and the demand line up.
        """
        tasks = self._task_repo.list_by_schedule(schedule_id)
        critical_path = calculate_critical_path(tasks)
        histogram = build_resource_histogram(tasks, self._policy)
        return level_resources(tasks, critical_path, histogram, self._policy)

    def apply_leveled_dates(
        self,
        schedule_id: str,
        adjustments: Iterable[TaskAdjustment],
    ) -> ApplyResult:
        """
        Persist proposed shifts one task at a time.

        Not transactional across the batch: a missing task, a task of
        another schedule or a failed write is recorded in errors and the
        remaining adjustments are still applied.
        """
        result = ApplyResult()

        for adjustment in adjustments:
            task = self._task_repo.get(adjustment.task_id)
            if task is None:
                result.errors.append(f"Task {adjustment.task_id} not found")
                continue
            if task.schedule_id != schedule_id:
                result.errors.append(
                    f"Task {adjustment.task_id} does not belong to schedule {schedule_id}"
                )
                continue

            try:
                self.commit_write(
                    lambda: self._task_repo.update_dates(
                        adjustment.task_id,
                        adjustment.new_start,
                        adjustment.new_end,
                    )
                )
            except Exception as exc:
                logger.warning("Failed to apply leveled dates to task %s: %s", adjustment.task_id, exc)
                result.errors.append(f"Failed to update task {adjustment.task_id}: {exc}")
                continue
            result.applied += 1

        logger.info(
            "Applied %d leveled adjustment(s) to schedule %s (%d error(s))",
            result.applied,
            schedule_id,
            len(result.errors),
        )
        if result.applied:
            domain_events.tasks_changed.emit(schedule_id)
        return result


__all__ = ["ResourceLevelingMixin"]
