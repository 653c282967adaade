from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from leveler.core.domain import LevelingPolicy, Task
from leveler.core.exceptions import ValidationError
from leveler.core.services.scheduling.histogram import DemandMap
from leveler.core.services.scheduling.leveling_models import (
    LevelingResult,
    ResourceHistogram,
    TaskAdjustment,
)
from leveler.core.services.scheduling.models import CriticalPathResult

logger = logging.getLogger(__name__)


@dataclass
class LevelingCandidate:
    task: Task
    start: date
    end: date
    span_days: int
    total_float: int

    @property
    def resource_name(self) -> str:
        return self.task.assigned_to or ""


def select_leveling_candidates(
    tasks: Iterable[Task],
    critical_path: CriticalPathResult,
) -> list[LevelingCandidate]:
    """Open, assigned, dated tasks off the critical path, most float first."""
    cpm_by_id = critical_path.by_task_id()
    critical_ids = set(critical_path.critical_path_task_ids)

    candidates: list[LevelingCandidate] = []
    for task in tasks:
        if not task.contributes_demand:
            continue
        info = cpm_by_id.get(task.id)
        if info is None or info.is_critical or task.id in critical_ids:
            continue
        if info.total_float <= 0:
            continue
        candidates.append(
            LevelingCandidate(
                task=task,
                start=task.start_date,
                end=task.end_date,
                span_days=task.span_days(),
                total_float=info.total_float,
            )
        )

    # stable: equal float keeps snapshot order
    candidates.sort(key=lambda c: -c.total_float)
    return candidates


def _over_days_around(
    demand_map: DemandMap,
    candidate: LevelingCandidate,
    delay: int,
    capacity: float,
) -> int:
    # window covering both the current span and the span shifted by delay
    return demand_map.over_capacity_days(
        candidate.resource_name, candidate.start, candidate.span_days + delay, capacity
    )


def _shift_load(
    demand_map: DemandMap,
    candidate: LevelingCandidate,
    from_start: date,
    to_start: date,
    hours_per_day: float,
) -> None:
    resource_name = candidate.resource_name
    demand_map.subtract_span(resource_name, from_start, candidate.span_days, hours_per_day)
    demand_map.add_span(resource_name, to_start, candidate.span_days, hours_per_day)


def find_first_improving_delay(
    demand_map: DemandMap,
    candidate: LevelingCandidate,
    policy: LevelingPolicy,
) -> Optional[int]:
    """
    Smallest delay within the task's float that lowers over-allocation.

    Delays are screened in ascending order against the simulation as it
    stands, with the task's own load still on its current days. A screened
    delay is then tried on the map itself (load moved, counted, moved
    back) and only kept if the resource ends up with fewer over-capacity
    days around the old and new spans. The first delay that leaves the
    task's new span within capacity wins; failing that, the first delay
    that merely lowers the count.
    """
    resource_name = candidate.resource_name
    capacity = policy.capacity_hours
    current = demand_map.over_capacity_days(
        resource_name, candidate.start, candidate.span_days, capacity
    )

    fallback: Optional[int] = None
    for delay in range(1, candidate.total_float + 1):
        shifted_start = candidate.start + timedelta(days=delay)
        screened = demand_map.over_capacity_days(
            resource_name, shifted_start, candidate.span_days, capacity
        )
        if screened >= current:
            continue

        before = _over_days_around(demand_map, candidate, delay, capacity)
        _shift_load(demand_map, candidate, candidate.start, shifted_start, policy.hours_per_day)
        after = _over_days_around(demand_map, candidate, delay, capacity)
        clears_task = not demand_map.over_capacity_days(
            resource_name, shifted_start, candidate.span_days, capacity
        )
        _shift_load(demand_map, candidate, shifted_start, candidate.start, policy.hours_per_day)

        if after >= before:
            continue
        if clears_task:
            return delay
        if fallback is None:
            fallback = delay
    return fallback


def _resolve_policy(
    histogram: ResourceHistogram,
    policy: Optional[LevelingPolicy],
) -> LevelingPolicy:
    if policy is None:
        return histogram.policy.validate()
    if policy != histogram.policy:
        raise ValidationError(
            "Leveling policy differs from the one the histogram was built with.",
            code="LEVELING_POLICY_MISMATCH",
        )
    return policy.validate()


def level_resources(
    tasks: Iterable[Task],
    critical_path: CriticalPathResult,
    histogram: ResourceHistogram,
    policy: Optional[LevelingPolicy] = None,
) -> LevelingResult:
    """
    Single-pass greedy leveling preview.

    Walks non-critical tasks from most to least float and delays each one
    by the first amount that reduces its resource's over-capacity days,
    never beyond its total float. Earlier moves are not revisited.
    Load is moved at the rate the histogram was built with; passing a
    different policy raises ValidationError.
    Nothing is persisted; the adjustments are a proposal for
    apply_leveled_dates.
    """
    policy = _resolve_policy(histogram, policy)
    original_demand = copy.deepcopy(histogram.resources)

    if not histogram.over_allocations:
        return LevelingResult(
            original_demand=original_demand,
            leveled_demand=copy.deepcopy(histogram.resources),
            adjusted_tasks=[],
            over_allocations=[],
        )

    demand_map = DemandMap.from_resource_demand(histogram.resources)
    adjustments: list[TaskAdjustment] = []

    for candidate in select_leveling_candidates(tasks, critical_path):
        resource_name = candidate.resource_name
        if not demand_map.has_resource(resource_name):
            continue
        if not demand_map.over_capacity_days(
            resource_name, candidate.start, candidate.span_days, policy.capacity_hours
        ):
            continue

        delay = find_first_improving_delay(demand_map, candidate, policy)
        if delay is None:
            logger.debug(
                "Float of task %s cannot move it off %s's over-allocated days",
                candidate.task.id,
                resource_name,
            )
            continue

        new_start = candidate.start + timedelta(days=delay)
        new_end = candidate.end + timedelta(days=delay)
        _shift_load(demand_map, candidate, candidate.start, new_start, policy.hours_per_day)

        adjustments.append(
            TaskAdjustment(
                task_id=candidate.task.id,
                task_name=candidate.task.name,
                original_start=candidate.start,
                original_end=candidate.end,
                new_start=new_start,
                new_end=new_end,
                reason=(
                    f"Delayed {delay} day(s) to resolve resource over-allocation "
                    f"for {resource_name} (float: {candidate.total_float} days)"
                ),
                shift_days=delay,
            )
        )
        candidate.start = new_start
        candidate.end = new_end

    remaining = demand_map.over_allocations(policy.capacity_hours)
    logger.info(
        "Leveling proposed %d adjustment(s); %d of %d over-allocated day(s) remain",
        len(adjustments),
        len(remaining),
        len(histogram.over_allocations),
    )
    return LevelingResult(
        original_demand=original_demand,
        leveled_demand=demand_map.to_resource_demand(drop_empty=True),
        adjusted_tasks=adjustments,
        over_allocations=remaining,
    )


__all__ = [
    "LevelingCandidate",
    "select_leveling_candidates",
    "find_first_improving_delay",
    "level_resources",
]
