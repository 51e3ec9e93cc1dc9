"""Join local tasks and wiki pages into reportable tasks."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rosetta_coverage.errors import RemoteSourceError, TaskLookupError
from rosetta_coverage.index.local import LocalTask, LocalTaskSource, normalize_title
from rosetta_coverage.index.wiki import (
    TITLES_PER_REQUEST,
    RosettaCodeClient,
    extract_language_code,
)
from rosetta_coverage.models import Task, TaskLookup

logger = logging.getLogger(__name__)


class TaskIndex:
    """Resolves task names against the local repository and the wiki."""

    def __init__(
        self,
        *,
        local_source: LocalTaskSource,
        wiki: RosettaCodeClient,
        language: str,
    ) -> None:
        self.local_source = local_source
        self.wiki = wiki
        self.language = language

    def fetch_tasks(self, names: Sequence[str]) -> list[TaskLookup]:
        """Resolve each name independently; a failed name does not stop the rest."""

        return [self._lookup(name) for name in names]

    def fetch_all_tasks(self) -> list[TaskLookup]:
        """Resolve every task known locally or listed in the wiki category.

        Every title is fetched, so a local task whose page sits outside the
        category still gets its remote code. Listing the category is a
        whole-run failure; a failed page batch fails only the tasks in it,
        local ones included, since their status cannot be known.
        """

        local_tasks = self.local_source.tasks()
        remote_titles = {normalize_title(title) for title in self.wiki.list_task_titles()}
        titles = sorted(remote_titles | set(local_tasks), key=str.casefold)

        texts: dict[str, str | None] = {}
        failed: dict[str, RemoteSourceError] = {}
        for start in range(0, len(titles), TITLES_PER_REQUEST):
            batch = titles[start : start + TITLES_PER_REQUEST]
            try:
                texts.update(self.wiki.fetch_wikitexts(batch))
            except RemoteSourceError as exc:
                logger.warning("Wiki fetch failed for %d task(s): %s", len(batch), exc)
                failed.update(dict.fromkeys(batch, exc))

        lookups: list[TaskLookup] = []
        for title in titles:
            if title in failed:
                lookups.append(_failed_lookup(title, failed[title]))
                continue
            lookups.append(
                TaskLookup(
                    name=title,
                    task=self._build_task(title, local_tasks.get(title), texts.get(title)),
                ),
            )
        return lookups

    def _lookup(self, name: str) -> TaskLookup:
        local = self.local_source.get(name)
        title = local.title if local is not None else normalize_title(name)
        try:
            wikitext = self.wiki.fetch_wikitext(title)
        except RemoteSourceError as exc:
            logger.warning("Wiki fetch failed for %r: %s", title, exc)
            return _failed_lookup(name, exc)

        if local is None and wikitext is None:
            return TaskLookup(
                name=name,
                error=TaskLookupError(message=f"Task not found: {name!r}", name=name),
            )
        return TaskLookup(name=name, task=self._build_task(title, local, wikitext))

    def _build_task(self, title: str, local: LocalTask | None, wikitext: str | None) -> Task:
        remote_code = extract_language_code(wikitext, self.language) if wikitext else None
        return Task(
            title=title,
            url=local.url if local is not None else self.wiki.page_url(title),
            local_code=local.code if local is not None else None,
            remote_code=remote_code,
            local_path=local.path if local is not None else None,
        )


def _failed_lookup(name: str, error: RemoteSourceError) -> TaskLookup:
    return TaskLookup(
        name=name,
        error=TaskLookupError(message=str(error), name=name),
    )
