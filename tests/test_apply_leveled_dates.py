from datetime import date, timedelta

import pytest

from leveler.core.events.domain_events import domain_events
from leveler.core.services.scheduling import SchedulingEngine, TaskAdjustment
from leveler.infra.db.task import SqlAlchemyTaskRepository


def _shift(task_id: str, start: date, end: date, days: int = 1) -> TaskAdjustment:
    delta = timedelta(days=days)
    return TaskAdjustment(
        task_id=task_id,
        task_name=task_id,
        original_start=start,
        original_end=end,
        new_start=start + delta,
        new_end=end + delta,
        reason=f"Delayed {days} day(s)",
        shift_days=days,
    )


class _FailingWriteRepository(SqlAlchemyTaskRepository):
    def __init__(self, session, failing_id: str):
        super().__init__(session)
        self.failing_id = failing_id

    def update_dates(self, task_id, start_date, end_date):
        if task_id == self.failing_id:
            raise RuntimeError("disk full")
        super().update_dates(task_id, start_date, end_date)


class _BrokenReadRepository(SqlAlchemyTaskRepository):
    def get(self, task_id):
        raise RuntimeError("store offline")


@pytest.fixture
def tasks_changed():
    seen: list[str] = []
    domain_events.tasks_changed.connect(seen.append)
    try:
        yield seen
    finally:
        domain_events.tasks_changed.disconnect(seen.append)


def test_apply_persists_dates_and_reports_missing_tasks(services, seed, make_task):
    seed(make_task("T1", date(2026, 1, 5), 1, assigned_to="Alice"))
    engine = services["scheduling_engine"]

    result = engine.apply_leveled_dates(
        "sched-main",
        [
            _shift("T1", date(2026, 1, 5), date(2026, 1, 6)),
            _shift("ghost", date(2026, 1, 5), date(2026, 1, 6)),
        ],
    )

    assert result.applied == 1
    assert result.errors == ["Task ghost not found"]
    stored = services["task_repo"].get("T1")
    assert (stored.start_date, stored.end_date) == (date(2026, 1, 6), date(2026, 1, 7))


def test_apply_rejects_task_of_another_schedule(services, seed, make_task):
    seed(make_task("Other", date(2026, 1, 5), 1, assigned_to="Alice", schedule_id="sched-other"))

    result = services["scheduling_engine"].apply_leveled_dates(
        "sched-main", [_shift("Other", date(2026, 1, 5), date(2026, 1, 6))]
    )

    assert result.applied == 0
    assert result.errors == ["Task Other does not belong to schedule sched-main"]
    assert services["task_repo"].get("Other").start_date == date(2026, 1, 5)


def test_apply_continues_after_a_failed_write(session, seed, make_task):
    seed(
        make_task("T1", date(2026, 1, 5), 1, assigned_to="Alice"),
        make_task("T2", date(2026, 1, 5), 1, assigned_to="Alice"),
    )
    engine = SchedulingEngine(session, _FailingWriteRepository(session, failing_id="T1"))

    result = engine.apply_leveled_dates(
        "sched-main",
        [
            _shift("T1", date(2026, 1, 5), date(2026, 1, 6)),
            _shift("T2", date(2026, 1, 5), date(2026, 1, 6), days=2),
        ],
    )

    assert result.applied == 1
    assert result.errors == ["Failed to update task T1: disk full"]
    repo = SqlAlchemyTaskRepository(session)
    assert repo.get("T1").start_date == date(2026, 1, 5)
    assert repo.get("T2").start_date == date(2026, 1, 7)


def test_apply_propagates_store_read_failures(session, seed, make_task):
    seed(make_task("T1", date(2026, 1, 5), 1, assigned_to="Alice"))
    engine = SchedulingEngine(session, _BrokenReadRepository(session))

    with pytest.raises(RuntimeError, match="store offline"):
        engine.apply_leveled_dates("sched-main", [_shift("T1", date(2026, 1, 5), date(2026, 1, 6))])


def test_apply_emits_tasks_changed_only_when_something_was_written(
    services, seed, make_task, tasks_changed
):
    seed(make_task("T1", date(2026, 1, 5), 1, assigned_to="Alice"))
    engine = services["scheduling_engine"]

    engine.apply_leveled_dates("sched-main", [_shift("ghost", date(2026, 1, 5), date(2026, 1, 6))])
    engine.apply_leveled_dates("sched-main", [])
    assert tasks_changed == []

    engine.apply_leveled_dates("sched-main", [_shift("T1", date(2026, 1, 5), date(2026, 1, 6))])
    assert tasks_changed == ["sched-main"]


def test_level_then_apply_clears_over_allocation(services, seed, make_task):
    seed(
        make_task("Backbone", date(2026, 1, 5), 10, assigned_to="Carol"),
        make_task("T1", date(2026, 1, 5), 1, assigned_to="Alice"),
        make_task("T2", date(2026, 1, 5), 1, assigned_to="Alice"),
    )
    engine = services["scheduling_engine"]

    assert engine.get_resource_histogram("sched-main").over_allocations
    preview = engine.level_resources("sched-main")
    applied = engine.apply_leveled_dates("sched-main", preview.adjusted_tasks)

    assert applied.applied == len(preview.adjusted_tasks) == 1
    assert applied.errors == []
    after = engine.get_resource_histogram("sched-main")
    assert after.over_allocations == []
    assert after.resources == preview.leveled_demand
