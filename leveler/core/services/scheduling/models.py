from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class CPMTaskResult:
    task_id: str
    name: str
    duration: int
    es: int
    ef: int
    ls: int
    lf: int
    total_float: int
    free_float: int
    is_critical: bool


@dataclass
class CriticalPathResult:
    tasks: List[CPMTaskResult] = field(default_factory=list)
    critical_path_task_ids: List[str] = field(default_factory=list)
    project_duration: int = 0

    def by_task_id(self) -> Dict[str, CPMTaskResult]:
        return {info.task_id: info for info in self.tasks}


__all__ = ["CPMTaskResult", "CriticalPathResult"]
