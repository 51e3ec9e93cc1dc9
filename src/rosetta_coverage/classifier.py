"""Task status classification and filter predicates."""

from __future__ import annotations

from rosetta_coverage.models import Task, TaskFilter, TaskStatus


def classify(task: Task) -> TaskStatus:
    """Classify a task by presence of its local and remote code."""

    has_local = task.local_code is not None
    has_remote = task.remote_code is not None
    if has_local and has_remote:
        return TaskStatus.BOTH
    if has_local:
        return TaskStatus.LOCAL_ONLY
    if has_remote:
        return TaskStatus.REMOTE_ONLY
    return TaskStatus.NEITHER


def retains(task_filter: TaskFilter, status: TaskStatus) -> bool:
    """Return whether ``task_filter`` keeps tasks with ``status``."""

    if task_filter is TaskFilter.ALL:
        return True
    if task_filter is TaskFilter.LOCAL:
        return status is TaskStatus.LOCAL_ONLY
    if task_filter is TaskFilter.REMOTE:
        return status is TaskStatus.REMOTE_ONLY
    if task_filter is TaskFilter.UNIMPLEMENTED:
        return status is TaskStatus.NEITHER
    raise ValueError(f"Unsupported task filter: {task_filter!r}")
