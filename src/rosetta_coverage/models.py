"""Domain models for task coverage reporting."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from rosetta_coverage.errors import TaskLookupError


class TaskStatus(str, Enum):
    """Presence of local and remote implementations for one task."""

    BOTH = "both"
    LOCAL_ONLY = "local_only"
    REMOTE_ONLY = "remote_only"
    NEITHER = "neither"


class TaskFilter(str, Enum):
    """User-selected subset of statuses to print and export."""

    ALL = "all"
    LOCAL = "local"
    REMOTE = "remote"
    UNIMPLEMENTED = "unimplemented"


class DiffTag(str, Enum):
    """Kind of one diff segment."""

    SAME = "same"
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True, slots=True)
class Task:
    """One task with its optional local and remote implementations.

    ``None`` means the implementation is absent. An empty string is a present
    but empty implementation.
    """

    title: str
    url: str
    local_code: str | None = None
    remote_code: str | None = None
    local_path: Path | None = None


@dataclass(frozen=True, slots=True)
class DiffSegment:
    """Run of lines sharing one diff tag."""

    tag: DiffTag
    lines: tuple[str, ...]


@dataclass(slots=True)
class ExportRecord:
    """Serializable snapshot of one reported task."""

    title: str
    url: str
    local_code: str | None
    remote_code: str | None
    path: str | None

    @classmethod
    def from_task(cls, task: Task) -> ExportRecord:
        return cls(
            title=task.title,
            url=task.url,
            local_code=task.local_code,
            remote_code=task.remote_code,
            path=str(task.local_path) if task.local_path is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return fields in export order, keeping absent values as ``None``."""

        return {
            "title": self.title,
            "url": self.url,
            "local_code": self.local_code,
            "remote_code": self.remote_code,
            "path": self.path,
        }


@dataclass(slots=True)
class TaskLookup:
    """Outcome of resolving one task name through the task index."""

    name: str
    task: Task | None = None
    error: TaskLookupError | None = None

    @property
    def ok(self) -> bool:
        return self.task is not None and self.error is None
