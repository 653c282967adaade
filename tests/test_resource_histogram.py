from datetime import date

import pytest

from leveler.core.domain import LevelingPolicy, TaskStatus
from leveler.core.exceptions import ValidationError
from leveler.core.services.scheduling import DemandMap, build_resource_histogram


def test_histogram_overlap_reports_double_load_per_day(make_task):
    tasks = [
        make_task("Wiring", date(2026, 1, 3), 5, assigned_to="Alice"),
        make_task("Fitting", date(2026, 1, 5), 5, assigned_to="Alice"),
    ]

    histogram = build_resource_histogram(tasks)

    assert [r.resource_name for r in histogram.resources] == ["Alice"]
    alice = {d.date: d.hours for d in histogram.resources[0].demand}
    assert list(alice) == [date(2026, 1, day) for day in range(3, 10)]
    for day in (5, 6, 7):
        assert alice[date(2026, 1, day)] == 16
    assert alice[date(2026, 1, 4)] == 8
    assert alice[date(2026, 1, 8)] == 8

    assert [(o.resource_name, o.date, o.demand, o.capacity) for o in histogram.over_allocations] == [
        ("Alice", date(2026, 1, 5), 16, 8),
        ("Alice", date(2026, 1, 6), 16, 8),
        ("Alice", date(2026, 1, 7), 16, 8),
    ]


def test_histogram_end_date_is_exclusive_and_same_day_counts_once(make_task):
    tasks = [
        make_task("Span", date(2026, 2, 2), 2, assigned_to="Bob"),
        make_task("Blip", date(2026, 2, 9), 0, assigned_to="Bob"),
    ]

    bob = build_resource_histogram(tasks).resources[0]

    assert [(d.date, d.hours) for d in bob.demand] == [
        (date(2026, 2, 2), 8),
        (date(2026, 2, 3), 8),
        (date(2026, 2, 9), 8),
    ]


def test_histogram_skips_closed_unassigned_and_undated_tasks(make_task):
    start = date(2026, 3, 2)
    tasks = [
        make_task("Open", start, 1, assigned_to="Cara"),
        make_task("Done", start, 1, assigned_to="Cara", status=TaskStatus.COMPLETED),
        make_task("Dropped", start, 1, assigned_to="Cara", status=TaskStatus.CANCELLED),
        make_task("Running", start, 1, assigned_to="Cara", status=TaskStatus.IN_PROGRESS),
        make_task("Nobody", start, 1),
        make_task("Undated", assigned_to="Cara", duration=3),
    ]

    histogram = build_resource_histogram(tasks)

    assert len(histogram.resources) == 1
    assert histogram.resources[0].demand[0].hours == 16
    assert len(histogram.over_allocations) == 1


def test_histogram_orders_resources_by_name(make_task):
    start = date(2026, 1, 5)
    tasks = [
        make_task("T1", start, 1, assigned_to="Zoe"),
        make_task("T2", start, 1, assigned_to="Adam"),
        make_task("T3", start, 1, assigned_to="Mia"),
    ]

    names = [r.resource_name for r in build_resource_histogram(tasks).resources]
    assert names == ["Adam", "Mia", "Zoe"]


def test_histogram_is_deterministic(services, seed, make_task):
    seed(
        make_task("Wiring", date(2026, 1, 3), 5, assigned_to="Alice"),
        make_task("Fitting", date(2026, 1, 5), 5, assigned_to="Alice"),
        make_task("Paint", date(2026, 1, 4), 2, assigned_to="Bob"),
    )
    engine = services["scheduling_engine"]

    first = engine.get_resource_histogram("sched-main")
    second = engine.get_resource_histogram("sched-main")

    assert first == second
    assert repr(first) == repr(second)


def test_histogram_uses_policy_rates(make_task):
    start = date(2026, 1, 5)
    policy = LevelingPolicy(hours_per_day=4.0, capacity_hours=8.0)

    two = [make_task(f"T{i}", start, 1, assigned_to="Dee") for i in range(2)]
    three = [make_task(f"T{i}", start, 1, assigned_to="Dee") for i in range(3)]

    assert build_resource_histogram(two, policy).over_allocations == []
    over = build_resource_histogram(three, policy).over_allocations
    assert [(o.demand, o.capacity) for o in over] == [(12.0, 8.0)]
    assert build_resource_histogram(three, policy).policy is policy
    assert build_resource_histogram(three).policy == LevelingPolicy()


@pytest.mark.parametrize(
    "policy, code",
    [
        (LevelingPolicy(hours_per_day=0), "LEVELING_INVALID_HOURS"),
        (LevelingPolicy(capacity_hours=-1), "LEVELING_INVALID_CAPACITY"),
    ],
)
def test_histogram_rejects_invalid_policy(policy, code):
    with pytest.raises(ValidationError) as exc:
        build_resource_histogram([], policy)
    assert exc.value.code == code


def test_demand_map_add_subtract_and_capacity_scan():
    demand = DemandMap()
    start = date(2026, 4, 6)

    demand.add_span("Eve", start, 3, 8)
    demand.add("Eve", date(2026, 4, 7), 8)

    assert demand.hours("Eve", date(2026, 4, 7)) == 16
    assert demand.hours("Eve", date(2026, 4, 20)) == 0
    assert demand.hours("Nobody", start) == 0
    assert demand.over_capacity_days("Eve", start, 3, 8) == 1
    assert demand.over_capacity_days("Eve", date(2026, 4, 8), 5, 8) == 0

    demand.subtract_span("Eve", start, 2, 8)
    demand.subtract("Eve", start, 8)  # clamps at zero

    assert demand.hours("Eve", start) == 0
    assert demand.hours("Eve", date(2026, 4, 7)) == 8
    assert [d.date for d in demand.to_resource_demand(drop_empty=True)[0].demand] == [
        date(2026, 4, 7),
        date(2026, 4, 8),
    ]
    assert len(demand.to_resource_demand()[0].demand) == 3

