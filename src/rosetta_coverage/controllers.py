"""Controller for the coverage CLI command."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from rosetta_coverage.config import Settings
from rosetta_coverage.errors import TaskLookupError
from rosetta_coverage.index import LocalTaskSource, RosettaCodeClient, TaskIndex
from rosetta_coverage.models import TaskFilter, TaskLookup
from rosetta_coverage.reporter import CoverageReport, report, write_export

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CoverageCommand:
    """CLI inputs for the coverage command."""

    task_names: tuple[str, ...]
    task_filter: TaskFilter = TaskFilter.ALL
    show_diff: bool = False
    json_path: Path | None = None
    repo_path: Path | None = None
    language: str | None = None


@dataclass(slots=True)
class CoverageRunResult:
    """Report plus the lookups that could not be resolved."""

    report: CoverageReport
    failures: list[TaskLookupError] = field(default_factory=list)

    @property
    def lines(self) -> list[str]:
        return self.report.lines

    @property
    def success(self) -> bool:
        return not self.failures

    def failure_lines(self) -> list[str]:
        return [f"Lookup failed: {error.name}: {error.message}" for error in self.failures]


class CoverageCliController:
    """Coordinates task lookup, reporting and export."""

    def run(self, command: CoverageCommand) -> CoverageRunResult:
        settings = Settings.from_env(repo_path=command.repo_path, language=command.language)
        settings.validate()

        with RosettaCodeClient(settings.wiki) as wiki:
            index = TaskIndex(
                local_source=LocalTaskSource(settings.repo_path),
                wiki=wiki,
                language=settings.language,
            )
            if command.task_names:
                lookups = index.fetch_tasks(command.task_names)
            else:
                lookups = index.fetch_all_tasks()

        failures = _collect_failures(lookups)
        coverage = report(
            (lookup.task for lookup in lookups if lookup.task is not None),
            command.task_filter,
            show_diff=command.show_diff,
            want_export=command.json_path is not None,
        )
        return CoverageRunResult(report=coverage, failures=failures)

    def export(self, result: CoverageRunResult, path: Path) -> str:
        write_export(result.report.records, path)
        return f"Exported {len(result.report.records)} task(s) to {path}"


def _collect_failures(lookups: list[TaskLookup]) -> list[TaskLookupError]:
    failures = [lookup.error for lookup in lookups if lookup.error is not None]
    for error in failures:
        logger.warning("Lookup failed for %r: %s", error.name, error.message)
    return failures
