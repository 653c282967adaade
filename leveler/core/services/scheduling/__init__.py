from .critical_path import calculate_critical_path
from .engine import SchedulingEngine
from .histogram import DemandMap, build_resource_histogram
from .leveling import level_resources
from .leveling_models import (
    ApplyResult,
    DailyDemand,
    LevelingResult,
    OverAllocation,
    ResourceDemand,
    ResourceHistogram,
    TaskAdjustment,
)
from .models import CPMTaskResult, CriticalPathResult

__all__ = [
    "SchedulingEngine",
    "calculate_critical_path",
    "build_resource_histogram",
    "level_resources",
    "DemandMap",
    "CPMTaskResult",
    "CriticalPathResult",
    "DailyDemand",
    "ResourceDemand",
    "OverAllocation",
    "ResourceHistogram",
    "TaskAdjustment",
    "LevelingResult",
    "ApplyResult",
]
