from __future__ import annotations

from typing import Dict, List

from leveler.core.domain import Task
from leveler.core.services.scheduling.models import CPMTaskResult, CriticalPathResult


def build_critical_path_result(
    tasks_by_id: Dict[str, Task],
    topo_order: List[str],
    predecessors: Dict[str, List[str]],
    successors: Dict[str, List[str]],
    durations: Dict[str, int],
    es: Dict[str, int],
    ef: Dict[str, int],
    ls: Dict[str, int],
    lf: Dict[str, int],
    project_duration: int,
) -> CriticalPathResult:
    total_float: Dict[str, int] = {}
    results: List[CPMTaskResult] = []

    for task_id in topo_order:
        slack = ls[task_id] - es[task_id]
        total_float[task_id] = slack

        succs = successors[task_id]
        if succs:
            free_float = max(0, min(es[succ_id] for succ_id in succs) - ef[task_id])
        else:
            free_float = slack

        results.append(
            CPMTaskResult(
                task_id=task_id,
                name=tasks_by_id[task_id].name,
                duration=durations[task_id],
                es=es[task_id],
                ef=ef[task_id],
                ls=ls[task_id],
                lf=lf[task_id],
                total_float=slack,
                free_float=free_float,
                is_critical=slack == 0,
            )
        )

    critical_ids = trace_critical_chain(
        topo_order=topo_order,
        predecessors=predecessors,
        successors=successors,
        es=es,
        ef=ef,
        total_float=total_float,
        project_duration=project_duration,
    )
    return CriticalPathResult(
        tasks=results,
        critical_path_task_ids=critical_ids,
        project_duration=project_duration,
    )


def trace_critical_chain(
    topo_order: List[str],
    predecessors: Dict[str, List[str]],
    successors: Dict[str, List[str]],
    es: Dict[str, int],
    ef: Dict[str, int],
    total_float: Dict[str, int],
    project_duration: int,
) -> List[str]:
    """
    Zero-float tasks that sit on a chain running from a start at day 0 to
    the project finish, each link handing over without a gap (EF == next ES).
    Returned in topological order.
    """
    zero_float = {task_id for task_id in topo_order if total_float[task_id] == 0}

    from_start: set[str] = set()
    for task_id in topo_order:
        if task_id not in zero_float:
            continue
        if es[task_id] == 0 or any(
            pred_id in from_start and ef[pred_id] == es[task_id]
            for pred_id in predecessors[task_id]
        ):
            from_start.add(task_id)

    to_finish: set[str] = set()
    for task_id in reversed(topo_order):
        if task_id not in zero_float:
            continue
        if ef[task_id] == project_duration or any(
            succ_id in to_finish and es[succ_id] == ef[task_id]
            for succ_id in successors[task_id]
        ):
            to_finish.add(task_id)

    return [task_id for task_id in topo_order if task_id in from_start and task_id in to_finish]


__all__ = ["build_critical_path_result", "trace_critical_chain"]
