from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from leveler.core.domain import LevelingPolicy


@dataclass
class DailyDemand:
    date: date
    hours: float


@dataclass
class ResourceDemand:
    resource_name: str
    demand: list[DailyDemand] = field(default_factory=list)


@dataclass
class OverAllocation:
    resource_name: str
    date: date
    demand: float
    capacity: float


@dataclass
class ResourceHistogram:
    resources: list[ResourceDemand]
    over_allocations: list[OverAllocation]
    # rates the demand was accumulated with; leveling moves load at the same rate
    policy: LevelingPolicy = field(default_factory=LevelingPolicy)


@dataclass
class TaskAdjustment:
    task_id: str
    task_name: str
    original_start: date
    original_end: date
    new_start: date
    new_end: date
    reason: str
    shift_days: int = 0


@dataclass
class LevelingResult:
    original_demand: list[ResourceDemand]
    leveled_demand: list[ResourceDemand]
    adjusted_tasks: list[TaskAdjustment]
    over_allocations: list[OverAllocation]


@dataclass
class ApplyResult:
    applied: int = 0
    errors: list[str] = field(default_factory=list)


__all__ = [
    "DailyDemand",
    "ResourceDemand",
    "OverAllocation",
    "ResourceHistogram",
    "TaskAdjustment",
    "LevelingResult",
    "ApplyResult",
]
