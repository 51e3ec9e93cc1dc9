"""Task discovery: local repository manifests and the Rosetta Code wiki."""

from rosetta_coverage.index.catalog import TaskIndex
from rosetta_coverage.index.local import LocalTask, LocalTaskSource
from rosetta_coverage.index.wiki import RosettaCodeClient, extract_language_code

__all__ = [
    "LocalTask",
    "LocalTaskSource",
    "RosettaCodeClient",
    "TaskIndex",
    "extract_language_code",
]
