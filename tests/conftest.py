# tests/conftest.py
from datetime import date, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import leveler.infra.db.models  # noqa: F401  registers tables on Base
from leveler.core.domain import Task, TaskStatus
from leveler.infra.db.base import Base
from leveler.infra.services import build_service_graph

SCHEDULE_ID = "sched-main"


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def services(session):
    return build_service_graph(session).as_dict()


@pytest.fixture
def make_task():
    """
    Build a Task whose id is its name, so assertions read like the schedule.

    `start` plus `days` sets [start, start + days); `duration` sets
    duration_days explicitly.
    """

    def _make(
        name: str,
        start: date | None = None,
        days: int | None = None,
        *,
        duration: int | None = None,
        dependency: str | None = None,
        predecessors: list[str] | None = None,
        assigned_to: str | None = None,
        status: TaskStatus = TaskStatus.PENDING,
        schedule_id: str = SCHEDULE_ID,
    ) -> Task:
        end = start + timedelta(days=days) if start is not None and days is not None else None
        task = Task(
            id=name,
            schedule_id=schedule_id,
            name=name,
            start_date=start,
            end_date=end,
            duration_days=duration,
            predecessors=list(predecessors or []),
            assigned_to=assigned_to,
            status=status,
        )
        if dependency is not None:
            task.dependency = dependency
        return task

    return _make


@pytest.fixture
def seed(services):
    """Persist tasks through the repository and commit."""
    task_repo = services["task_repo"]
    session = services["session"]

    def _seed(*tasks: Task) -> list[Task]:
        for task in tasks:
            task_repo.add(task)
        session.commit()
        return list(tasks)

    return _seed
