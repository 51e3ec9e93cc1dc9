"""Task coverage report: status blocks, optional diffs and export records."""

from __future__ import annotations

import json
import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import click

from rosetta_coverage.classifier import classify, retains
from rosetta_coverage.diff import render_diff
from rosetta_coverage.models import ExportRecord, Task, TaskFilter, TaskStatus

logger = logging.getLogger(__name__)

PRESENT_GLYPH = " ✔ "
ABSENT_GLYPH = " ✘ "


@dataclass(slots=True)
class CoverageReport:
    """Rendered output lines plus export records for retained tasks."""

    lines: list[str] = field(default_factory=list)
    records: list[ExportRecord] = field(default_factory=list)
    counts: Counter[TaskStatus] = field(default_factory=Counter)

    @property
    def shown(self) -> int:
        return sum(self.counts.values())

    def summary_line(self) -> str:
        return (
            f"Tasks: shown={self.shown} "
            f"both={self.counts[TaskStatus.BOTH]} "
            f"local_only={self.counts[TaskStatus.LOCAL_ONLY]} "
            f"remote_only={self.counts[TaskStatus.REMOTE_ONLY]} "
            f"neither={self.counts[TaskStatus.NEITHER]}"
        )


def report(
    tasks: Iterable[Task],
    task_filter: TaskFilter = TaskFilter.ALL,
    *,
    show_diff: bool = False,
    want_export: bool = False,
) -> CoverageReport:
    """Build the coverage report for ``tasks`` in iteration order."""

    result = CoverageReport()
    for task in tasks:
        status = classify(task)
        if not retains(task_filter, status):
            logger.debug(
                "Skipping %r: status=%s filter=%s",
                task.title,
                status.value,
                task_filter.value,
            )
            continue

        result.counts[status] += 1
        result.lines.extend(format_task(task, show_diff=show_diff))
        if want_export:
            result.records.append(ExportRecord.from_task(task))
    return result


def format_task(task: Task, *, show_diff: bool = False) -> list[str]:
    """Render one task as a title line, a presence line and an optional diff."""

    lines = [
        click.style(task.title, bold=True),
        "Local:"
        + format_presence(task.local_code is not None)
        + "Remote:"
        + format_presence(task.remote_code is not None),
    ]
    if show_diff and task.local_code is not None and task.remote_code is not None:
        lines.extend(render_diff(task.remote_code, task.local_code))
    return lines


def format_presence(present: bool) -> str:
    if present:
        return click.style(PRESENT_GLYPH, fg="green", bold=True)
    return click.style(ABSENT_GLYPH, fg="red", bold=True)


def write_export(records: Iterable[ExportRecord], path: Path) -> None:
    """Write records as a pretty-printed JSON array; I/O errors propagate."""

    payload = [record.to_dict() for record in records]
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Exported %d task record(s) to %s", len(payload), path)
