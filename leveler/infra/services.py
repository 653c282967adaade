from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Session

from leveler.core.domain import LevelingPolicy
from leveler.core.services.scheduling import SchedulingEngine
from leveler.infra.db.task import SqlAlchemyTaskRepository


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    task_repo: SqlAlchemyTaskRepository
    scheduling_engine: SchedulingEngine

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "task_repo": self.task_repo,
            "scheduling_engine": self.scheduling_engine,
        }


def build_service_graph(session: Session, policy: Optional[LevelingPolicy] = None) -> ServiceGraph:
    task_repo = SqlAlchemyTaskRepository(session)
    scheduling_engine = SchedulingEngine(session, task_repo, policy=policy)
    return ServiceGraph(
        session=session,
        task_repo=task_repo,
        scheduling_engine=scheduling_engine,
    )


__all__ = ["ServiceGraph", "build_service_graph"]
