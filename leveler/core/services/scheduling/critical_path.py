from __future__ import annotations

import logging
from typing import Dict, Iterable

from leveler.core.domain import Task
from leveler.core.services.scheduling.graph import build_dependency_graph
from leveler.core.services.scheduling.models import CriticalPathResult
from leveler.core.services.scheduling.passes import run_backward_pass, run_forward_pass
from leveler.core.services.scheduling.results import build_critical_path_result

logger = logging.getLogger(__name__)


def calculate_critical_path(tasks: Iterable[Task]) -> CriticalPathResult:
    """
    CPM over a task snapshot:
    - forward pass: ES/EF as day offsets from schedule start
    - backward pass: LS/LF against the project finish
    - total/free float and the critical chain

    Raises CyclicDependencyError when the dependencies cannot be ordered.
    """
    tasks_by_id: Dict[str, Task] = {task.id: task for task in tasks}
    if not tasks_by_id:
        return CriticalPathResult()

    topo_order, predecessors, successors = build_dependency_graph(tasks_by_id)
    durations = {task_id: task.cpm_duration() for task_id, task in tasks_by_id.items()}

    es, ef, project_duration = run_forward_pass(
        topo_order=topo_order,
        predecessors=predecessors,
        durations=durations,
    )
    ls, lf = run_backward_pass(
        topo_order=topo_order,
        successors=successors,
        durations=durations,
        project_duration=project_duration,
    )

    result = build_critical_path_result(
        tasks_by_id=tasks_by_id,
        topo_order=topo_order,
        predecessors=predecessors,
        successors=successors,
        durations=durations,
        es=es,
        ef=ef,
        ls=ls,
        lf=lf,
        project_duration=project_duration,
    )
    logger.debug(
        "CPM computed for %d tasks: duration=%d days, critical=%s",
        len(tasks_by_id),
        project_duration,
        result.critical_path_task_ids,
    )
    return result


__all__ = ["calculate_critical_path"]
