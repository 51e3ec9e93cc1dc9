"""Discover locally implemented tasks from crate manifests."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlparse

from rosetta_coverage.errors import LocalSourceError

logger = logging.getLogger(__name__)

TASKS_DIR = "tasks"
MANIFEST_NAME = "Cargo.toml"
SOURCE_CANDIDATES: tuple[str, ...] = ("src/main.rs", "src/lib.rs")


@dataclass(frozen=True, slots=True)
class LocalTask:
    """A task implemented in the local repository."""

    title: str
    url: str
    code: str | None
    path: Path | None


def title_from_url(url: str) -> str:
    """Derive the wiki page title from its URL, e.g. ``.../wiki/K-d_tree``.

    Sub-page titles keep their slash: ``.../wiki/Hello_world/Text`` is
    ``Hello world/Text``.
    """

    path = urlparse(url).path.rstrip("/")
    _, marker, page = path.partition("/wiki/")
    if not marker:
        page = path.rsplit("/", 1)[-1]
    return normalize_title(unquote(page))


def normalize_title(name: str) -> str:
    """Spell a title the way the wiki stores it: spaces, first letter upper-cased."""

    title = name.replace("_", " ").strip()
    return title[:1].upper() + title[1:]


class LocalTaskSource:
    """Reads ``tasks/**/Cargo.toml`` manifests carrying a Rosetta Code URL."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self._tasks: dict[str, LocalTask] | None = None

    def tasks(self) -> dict[str, LocalTask]:
        """Return local tasks keyed by title, scanning the repository once."""

        if self._tasks is None:
            self._tasks = self._scan()
        return self._tasks

    def get(self, name: str) -> LocalTask | None:
        return self.tasks().get(normalize_title(name))

    def _scan(self) -> dict[str, LocalTask]:
        tasks_root = self.root / TASKS_DIR
        if not tasks_root.is_dir():
            logger.warning("No %s directory under %s; no local tasks found", TASKS_DIR, self.root)
            return {}

        found: dict[str, LocalTask] = {}
        for manifest_path in sorted(tasks_root.rglob(MANIFEST_NAME)):
            task = _load_task(manifest_path)
            if task is None:
                continue
            if task.title in found:
                logger.warning(
                    "Duplicate local task %r in %s; keeping %s",
                    task.title,
                    manifest_path,
                    found[task.title].path,
                )
                continue
            found[task.title] = task
        logger.info("Discovered %d local task(s) under %s", len(found), tasks_root)
        return found


def _load_task(manifest_path: Path) -> LocalTask | None:
    try:
        manifest = tomllib.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise LocalSourceError(
            message=f"Cannot read manifest {manifest_path}: {exc}",
            path=str(manifest_path),
        ) from exc

    metadata = manifest.get("package", {}).get("metadata", {}).get("rosettacode", {})
    url = metadata.get("url") if isinstance(metadata, dict) else None
    if not isinstance(url, str) or not url.strip():
        logger.debug("Manifest %s has no rosettacode url; skipping", manifest_path)
        return None

    crate_dir = manifest_path.parent
    for candidate in SOURCE_CANDIDATES:
        source_path = crate_dir / candidate
        if not source_path.is_file():
            continue
        try:
            code = source_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise LocalSourceError(
                message=f"Cannot read task source {source_path}: {exc}",
                path=str(source_path),
            ) from exc
        return LocalTask(title=title_from_url(url), url=url.strip(), code=code, path=source_path)
    logger.debug("Manifest %s has no source file; reporting task without code", manifest_path)
    return LocalTask(title=title_from_url(url), url=url.strip(), code=None, path=None)
