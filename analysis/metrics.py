# Directory: analysis/metrics.py
"""
Metrics calculation and analysis for auto-assignment runs.
"""
import numpy as np
import pandas as pd
from typing import List, Dict, Sequence

from assignment.greedy import CandidateScore
from assignment.interfaces import AssignmentResult
from models import Task, Member


def compute_assignment_metrics(
    tasks: Sequence[Task],
    results: Sequence[AssignmentResult],
    members: Sequence[Member],
    default_hours: float = 8.0,
) -> Dict[str, float]:
    """
    Compute summary metrics for a batch of auto-assignments.

    Args:
        tasks: Tasks that were submitted for assignment
        results: Successful assignment results
        members: Members after the run, with their updated workloads
        default_hours: Estimate counted for tasks without one

    Returns:
        Dict of metric names to metric values
    """
    eligible = [m for m in members if m.role == "user"]

    # 1. Workload Balance Ratio (Lower is better)
    # Standard deviation of workload / mean workload
    workloads = np.array([m.resolved_workload for m in eligible], dtype=float)
    mean_workload = float(workloads.mean()) if workloads.size else 0.0
    std_workload = float(workloads.std()) if workloads.size else 0.0
    workload_balance_ratio = std_workload / mean_workload if mean_workload != 0 else 0.0

    # 2. Score statistics of the chosen members
    scores = np.array([r.score for r in results], dtype=float)
    mean_score = float(scores.mean()) if scores.size else 0.0
    min_score = float(scores.min()) if scores.size else 0.0
    max_score = float(scores.max()) if scores.size else 0.0

    # 3. Task Coverage (Higher is better)
    task_coverage = (len(results) / len(tasks) * 100) if len(tasks) > 0 else 0.0

    # 4. Hours handed out by the engine
    assigned_hours = float(
        sum(r.task.resolved_estimated_hours(default_hours) for r in results)
    )

    # 5. Members receiving at least one task
    distinct_assignees = len({r.member.id for r in results})

    return {
        "workload_balance_ratio": workload_balance_ratio,
        "mean_workload": mean_workload,
        "mean_score": mean_score,
        "min_score": min_score,
        "max_score": max_score,
        "task_coverage": task_coverage,
        "assigned_hours": assigned_hours,
        "auto_assigned_count": float(sum(1 for r in results if r.task.auto_assigned)),
        "distinct_assignees": float(distinct_assignees),
    }


def ranking_frame(candidates: List[CandidateScore]) -> pd.DataFrame:
    """Tabulate a candidate ranking with one row per member and score component."""
    rows = []
    for rank, candidate in enumerate(candidates, start=1):
        row = {"rank": rank, "username": candidate.member.username}
        row.update(candidate.breakdown.to_dict())
        rows.append(row)

    frame = pd.DataFrame(rows)
    if not frame.empty:
        frame = frame.set_index("rank")
    return frame
