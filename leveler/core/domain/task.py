from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from leveler.core.domain.enums import CLOSED_TASK_STATUSES, TaskStatus
from leveler.core.domain.identifiers import generate_id


@dataclass
class Task:
    id: str
    schedule_id: str
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    duration_days: Optional[int] = None
    predecessors: List[str] = field(default_factory=list)
    assigned_to: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING

    @staticmethod
    def create(
        schedule_id: str,
        name: str,
        dependency: Optional[str] = None,
        **extra,
    ) -> "Task":
        task = Task(id=generate_id(), schedule_id=schedule_id, name=name, **extra)
        if dependency is not None:
            task.dependency = dependency
        return task

    @property
    def dependency(self) -> Optional[str]:
        """Single-predecessor view kept for callers of the flat task schema."""
        return self.predecessors[0] if self.predecessors else None

    @dependency.setter
    def dependency(self, task_id: Optional[str]) -> None:
        rest = [p for p in self.predecessors[1:] if p != task_id]
        self.predecessors = ([task_id] if task_id else []) + rest

    @property
    def is_closed(self) -> bool:
        return self.status in CLOSED_TASK_STATUSES

    @property
    def contributes_demand(self) -> bool:
        """True when the task loads its resource: open, assigned and dated."""
        return (
            not self.is_closed
            and bool(self.assigned_to)
            and self.start_date is not None
            and self.end_date is not None
        )

    def cpm_duration(self) -> int:
        """
        Duration used by the forward/backward pass.

        Explicit positive duration_days wins; otherwise the dated span (at
        least one day). A task with neither is a zero-duration milestone.
        """
        if self.duration_days is not None:
            return max(0, int(self.duration_days))
        if self.start_date is not None and self.end_date is not None:
            return self.span_days()
        return 0

    def span_days(self) -> int:
        """Calendar days covered by [start_date, end_date), never less than one."""
        if self.start_date is None or self.end_date is None:
            return 0
        return max(1, (self.end_date - self.start_date).days)


__all__ = ["Task"]
