from __future__ import annotations

import heapq
from datetime import date
from typing import Dict, List

from leveler.core.domain import Task
from leveler.core.exceptions import CyclicDependencyError


def build_dependency_graph(
    tasks_by_id: Dict[str, Task],
) -> tuple[list[str], dict[str, list[str]], dict[str, list[str]]]:
    """
    Return (topo_order, predecessors_by_id, successors_by_id).

    Edges run predecessor -> successor. Predecessor ids outside the snapshot
    are dropped, so such a task becomes a root.
    """
    predecessors: Dict[str, List[str]] = {task_id: [] for task_id in tasks_by_id}
    successors: Dict[str, List[str]] = {task_id: [] for task_id in tasks_by_id}

    for task_id, task in tasks_by_id.items():
        for pred_id in task.predecessors:
            if pred_id not in tasks_by_id or pred_id in predecessors[task_id]:
                continue
            predecessors[task_id].append(pred_id)
            successors[pred_id].append(task_id)

    indegree: Dict[str, int] = {task_id: len(preds) for task_id, preds in predecessors.items()}

    # Kahn's algorithm on a min-heap keyed by (start, name, id) so ties are stable.
    heap: list[tuple[date, str, str]] = []
    for task_id, degree in indegree.items():
        if degree == 0:
            heapq.heappush(heap, _order_key(tasks_by_id[task_id]))

    topo_order: list[str] = []
    while heap:
        _start, _name, task_id = heapq.heappop(heap)
        topo_order.append(task_id)
        for succ_id in successors[task_id]:
            indegree[succ_id] -= 1
            if indegree[succ_id] == 0:
                heapq.heappush(heap, _order_key(tasks_by_id[succ_id]))

    if len(topo_order) != len(tasks_by_id):
        unresolved = [task_id for task_id, degree in indegree.items() if degree > 0]
        raise CyclicDependencyError(unresolved)

    return topo_order, predecessors, successors


def _order_key(task: Task) -> tuple[date, str, str]:
    return (task.start_date or date.max, task.name or "", task.id)


__all__ = ["build_dependency_graph"]
