from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, Iterable, Iterator, Optional

from leveler.core.domain import LevelingPolicy, Task
from leveler.core.services.scheduling.leveling_models import (
    DailyDemand,
    OverAllocation,
    ResourceDemand,
    ResourceHistogram,
)


def iter_span_days(start: date, days: int) -> Iterator[date]:
    for offset in range(days):
        yield start + timedelta(days=offset)


class DemandMap:
    """
    Hours per resource per calendar day.

    Mutable on purpose: the leveling simulation moves task load around in
    place with add/subtract and re-reads the over-capacity counts.
    """

    def __init__(self) -> None:
        self._hours: Dict[str, Dict[date, float]] = {}

    @classmethod
    def from_resource_demand(cls, resources: Iterable[ResourceDemand]) -> "DemandMap":
        demand_map = cls()
        for resource in resources:
            days = demand_map._hours.setdefault(resource.resource_name, {})
            for entry in resource.demand:
                days[entry.date] = entry.hours
        return demand_map

    def has_resource(self, resource_name: str) -> bool:
        return resource_name in self._hours

    def resources(self) -> list[str]:
        return sorted(self._hours)

    def hours(self, resource_name: str, day: date) -> float:
        return self._hours.get(resource_name, {}).get(day, 0.0)

    def add(self, resource_name: str, day: date, hours: float) -> None:
        days = self._hours.setdefault(resource_name, {})
        days[day] = days.get(day, 0.0) + hours

    def subtract(self, resource_name: str, day: date, hours: float) -> None:
        days = self._hours.setdefault(resource_name, {})
        days[day] = max(0.0, days.get(day, 0.0) - hours)

    def add_span(self, resource_name: str, start: date, days: int, hours: float) -> None:
        for day in iter_span_days(start, days):
            self.add(resource_name, day, hours)

    def subtract_span(self, resource_name: str, start: date, days: int, hours: float) -> None:
        for day in iter_span_days(start, days):
            self.subtract(resource_name, day, hours)

    def over_capacity_days(
        self,
        resource_name: str,
        start: date,
        days: int,
        capacity: float,
    ) -> int:
        return sum(
            1
            for day in iter_span_days(start, days)
            if self.hours(resource_name, day) > capacity
        )

    def to_resource_demand(self, drop_empty: bool = False) -> list[ResourceDemand]:
        resources: list[ResourceDemand] = []
        for resource_name in self.resources():
            days = self._hours[resource_name]
            demand = [
                DailyDemand(date=day, hours=days[day])
                for day in sorted(days)
                if not (drop_empty and days[day] <= 0)
            ]
            resources.append(ResourceDemand(resource_name=resource_name, demand=demand))
        return resources

    def over_allocations(self, capacity: float) -> list[OverAllocation]:
        conflicts: list[OverAllocation] = []
        for resource_name in self.resources():
            days = self._hours[resource_name]
            for day in sorted(days):
                if days[day] > capacity:
                    conflicts.append(
                        OverAllocation(
                            resource_name=resource_name,
                            date=day,
                            demand=days[day],
                            capacity=capacity,
                        )
                    )
        return conflicts


def build_demand_map(tasks: Iterable[Task], policy: LevelingPolicy) -> DemandMap:
    demand_map = DemandMap()
    for task in tasks:
        if not task.contributes_demand:
            continue
        demand_map.add_span(
            task.assigned_to,
            task.start_date,
            task.span_days(),
            policy.hours_per_day,
        )
    return demand_map


def build_resource_histogram(
    tasks: Iterable[Task],
    policy: Optional[LevelingPolicy] = None,
) -> ResourceHistogram:
    """
    Per-resource daily load of open, assigned, dated tasks.

    Every day in [start_date, end_date) adds policy.hours_per_day; a task
    whose dates coincide still loads one day. Days above
    policy.capacity_hours are reported as over-allocations.
    """
    policy = (policy or LevelingPolicy()).validate()
    demand_map = build_demand_map(tasks, policy)
    return ResourceHistogram(
        resources=demand_map.to_resource_demand(),
        over_allocations=demand_map.over_allocations(policy.capacity_hours),
        policy=policy,
    )


__all__ = [
    "DemandMap",
    "build_demand_map",
    "build_resource_histogram",
    "iter_span_days",
]
