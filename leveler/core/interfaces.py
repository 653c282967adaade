# leveler/core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from leveler.core.domain import Task


class TaskRepository(ABC):
    """Task snapshot provider consumed by the scheduling services."""

    @abstractmethod
    def add(self, task: Task) -> None: ...

    @abstractmethod
    def get(self, task_id: str) -> Optional[Task]: ...

    @abstractmethod
    def list_by_schedule(self, schedule_id: str) -> List[Task]: ...

    @abstractmethod
    def update_dates(self, task_id: str, start_date: date, end_date: date) -> None: ...


__all__ = ["TaskRepository"]
