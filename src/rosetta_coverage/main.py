"""CLI entrypoint for rosetta-coverage."""

from pathlib import Path

import rich_click as click

from rosetta_coverage import __version__
from rosetta_coverage.controllers import CoverageCliController, CoverageCommand
from rosetta_coverage.errors import CoverageError
from rosetta_coverage.logging_setup import setup_logging
from rosetta_coverage.models import TaskFilter

click.rich_click.USE_MARKDOWN = True
COVERAGE_CONTROLLER = CoverageCliController()


@click.command()
@click.version_option(version=__version__, prog_name="rosetta-coverage")
@click.argument("task_names", nargs=-1, metavar="[TASK]...")
@click.option(
    "--diff",
    "show_diff",
    is_flag=True,
    default=False,
    help="Print diffs of tasks between the local and remote version.",
)
@click.option(
    "--filter",
    "task_filter",
    type=click.Choice([item.value for item in TaskFilter], case_sensitive=False),
    default=TaskFilter.ALL.value,
    show_default=True,
    help="Filter tasks printed by the program.",
)
@click.option(
    "--json",
    "json_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Dump JSON to the provided filename.",
)
@click.option(
    "--repo-path",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help=(
        "Local repository root. "
        "Defaults to ROSETTA_COVERAGE_REPO_PATH or the current directory."
    ),
)
@click.option(
    "--language",
    default=None,
    help=(
        "Wiki language section to compare against. "
        "Defaults to ROSETTA_COVERAGE_LANGUAGE or Rust."
    ),
)
@click.option("--verbose", is_flag=True, default=False, help="Log debug details to stderr.")
def coverage(  # noqa: PLR0913
    task_names: tuple[str, ...],
    show_diff: bool,
    task_filter: str,
    json_path: Path | None,
    repo_path: Path | None,
    language: str | None,
    verbose: bool,
) -> None:
    """Query differences between the local repository and the Rosetta Code wiki.

    Prints the name of each task, followed by whether it is implemented
    locally, online, or both. Name tasks as they appear on the wiki, for
    example `K-d tree`. If no tasks are specified, determines the status
    for all tasks.
    """

    setup_logging(verbose=verbose)
    try:
        result = COVERAGE_CONTROLLER.run(
            CoverageCommand(
                task_names=task_names,
                task_filter=TaskFilter(task_filter.lower()),
                show_diff=show_diff,
                json_path=json_path,
                repo_path=repo_path,
                language=language,
            ),
        )
    except (CoverageError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    _emit_lines(result.lines)
    _emit_lines(result.failure_lines(), err=True)

    if json_path is not None:
        try:
            click.echo(COVERAGE_CONTROLLER.export(result, json_path), err=True)
        except OSError as exc:
            raise click.ClickException(f"Cannot write JSON to {json_path}: {exc}") from exc

    click.echo(result.report.summary_line(), err=True)
    if not result.success:
        raise click.ClickException(f"{len(result.failures)} task lookup(s) failed.")


def _emit_lines(lines: list[str], *, err: bool = False) -> None:
    for line in lines:
        click.echo(line, err=err)


if __name__ == "__main__":  # pragma: no cover
    coverage()
