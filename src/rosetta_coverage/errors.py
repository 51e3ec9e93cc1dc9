"""Error types shared by the task index and the CLI."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class CoverageError(Exception):
    """Base coverage error."""

    message: str
    code: str = "coverage_error"

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class TaskLookupError(CoverageError):
    """A named task could not be resolved locally or on the wiki."""

    name: str = ""
    code: str = "lookup"


@dataclass(slots=True)
class RemoteSourceError(CoverageError):
    """Wiki request failed at the transport or HTTP level."""

    url: str | None = None
    code: str = "remote"


@dataclass(slots=True)
class LocalSourceError(CoverageError):
    """Local repository manifest could not be read or parsed."""

    path: str | None = None
    code: str = "local"
