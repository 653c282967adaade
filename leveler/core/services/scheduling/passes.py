from __future__ import annotations

from typing import Dict, List


def run_forward_pass(
    topo_order: List[str],
    predecessors: Dict[str, List[str]],
    durations: Dict[str, int],
) -> tuple[Dict[str, int], Dict[str, int], int]:
    es: Dict[str, int] = {}
    ef: Dict[str, int] = {}

    for task_id in topo_order:
        start = max((ef[pred_id] for pred_id in predecessors[task_id]), default=0)
        es[task_id] = start
        ef[task_id] = start + durations[task_id]

    project_duration = max(ef.values(), default=0)
    return es, ef, project_duration


def run_backward_pass(
    topo_order: List[str],
    successors: Dict[str, List[str]],
    durations: Dict[str, int],
    project_duration: int,
) -> tuple[Dict[str, int], Dict[str, int]]:
    ls: Dict[str, int] = {}
    lf: Dict[str, int] = {}

    for task_id in reversed(topo_order):
        finish = min(
            (ls[succ_id] for succ_id in successors[task_id]),
            default=project_duration,
        )
        lf[task_id] = min(finish, project_duration)
        ls[task_id] = lf[task_id] - durations[task_id]

    return ls, lf


__all__ = ["run_forward_pass", "run_backward_pass"]
