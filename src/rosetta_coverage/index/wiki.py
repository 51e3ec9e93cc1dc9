"""Rosetta Code wiki client and language section extraction."""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import quote

import httpx

from rosetta_coverage.config import WikiSettings
from rosetta_coverage.errors import RemoteSourceError

logger = logging.getLogger(__name__)

CATEGORY_PAGE_LIMIT = 500
TITLES_PER_REQUEST = 50

_HEADER_START = re.compile(r"^==\s*\{\{\s*header\s*\|", re.IGNORECASE | re.MULTILINE)


class RosettaCodeClient:
    """MediaWiki API client for task listing and page text."""

    def __init__(
        self,
        settings: WikiSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings or WikiSettings()
        self._client = httpx.Client(
            timeout=httpx.Timeout(self.settings.request_timeout_seconds, connect=10.0),
            headers={"User-Agent": self.settings.user_agent},
            transport=transport or httpx.HTTPTransport(retries=self.settings.max_retries),
            follow_redirects=True,
        )

    def page_url(self, title: str) -> str:
        """Canonical wiki URL for a task title."""

        return f"{self.settings.base_url.rstrip('/')}/wiki/{quote(title.replace(' ', '_'))}"

    def list_task_titles(self) -> list[str]:
        """Return every page title in the configured task category."""

        params: dict[str, Any] = {
            "action": "query",
            "list": "categorymembers",
            "cmtitle": f"Category:{self.settings.category}",
            "cmtype": "page",
            "cmlimit": CATEGORY_PAGE_LIMIT,
            "format": "json",
            "formatversion": 2,
        }
        titles: list[str] = []
        while True:
            payload = self._query(params)
            members = payload.get("query", {}).get("categorymembers", [])
            titles.extend(member["title"] for member in members)
            continuation = payload.get("continue")
            if not continuation:
                break
            params = {**params, **continuation}
        logger.info("Wiki category %s lists %d task(s)", self.settings.category, len(titles))
        return titles

    def fetch_wikitext(self, title: str) -> str | None:
        """Return raw page wikitext, or ``None`` if the page does not exist."""

        return self.fetch_wikitexts([title]).get(title)

    def fetch_wikitexts(self, titles: list[str]) -> dict[str, str | None]:
        """Fetch several pages, keyed by the requested titles."""

        texts: dict[str, str | None] = {}
        for start in range(0, len(titles), TITLES_PER_REQUEST):
            batch = titles[start : start + TITLES_PER_REQUEST]
            texts.update(self._fetch_batch(batch))
        return texts

    def _fetch_batch(self, titles: list[str]) -> dict[str, str | None]:
        payload = self._query(
            {
                "action": "query",
                "prop": "revisions",
                "rvprop": "content",
                "rvslots": "main",
                "titles": "|".join(titles),
                "format": "json",
                "formatversion": 2,
            },
        )
        query = payload.get("query", {})
        # The API answers with normalized titles (first letter upper-cased, "_" -> " ").
        aliases = {item["to"]: item["from"] for item in query.get("normalized", [])}

        texts: dict[str, str | None] = dict.fromkeys(titles)
        for page in query.get("pages", []):
            requested = aliases.get(page["title"], page["title"])
            if page.get("missing") or page.get("invalid"):
                logger.debug("Wiki page %r does not exist", requested)
                continue
            revisions = page.get("revisions") or []
            if revisions:
                texts[requested] = revisions[0]["slots"]["main"]["content"]
        return texts

    def _query(self, params: dict[str, Any]) -> dict[str, Any]:
        url = self.settings.api_url
        try:
            response = self._client.get(url, params=params)
        except httpx.TimeoutException as exc:
            raise RemoteSourceError(message=f"Timeout querying {url}", url=url) from exc
        except httpx.HTTPError as exc:
            raise RemoteSourceError(message=f"HTTP error querying {url}: {exc}", url=url) from exc

        if not response.is_success:
            raise RemoteSourceError(
                message=f"Wiki API returned HTTP {response.status_code} for {url}",
                url=url,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise RemoteSourceError(
                message=f"Wiki API returned invalid JSON: {exc}",
                url=url,
            ) from exc
        if "error" in payload:
            error = payload["error"]
            raise RemoteSourceError(
                message=f"Wiki API error {error.get('code')}: {error.get('info')}",
                url=url,
            )
        return payload

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> RosettaCodeClient:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()


def extract_language_code(wikitext: str, language: str) -> str | None:
    """Return the code blocks of one language section, or ``None``.

    The section runs from ``=={{header|<language>}}==`` to the next language
    header. Blocks are ``<lang …>`` or ``<syntaxhighlight lang=…>`` tags and
    are joined by a blank line.
    """

    header = re.compile(
        r"^==\s*\{\{\s*header\s*\|\s*" + re.escape(language) + r"\s*\}\}\s*==",
        re.IGNORECASE | re.MULTILINE,
    )
    match = header.search(wikitext)
    if match is None:
        return None

    section = wikitext[match.end() :]
    next_header = _HEADER_START.search(section)
    if next_header is not None:
        section = section[: next_header.start()]

    lang = re.escape(language.lower()) + r"(?=[\s\"'>])"
    block = re.compile(
        r"<lang\s+" + lang + r"[^>]*>(.*?)</lang>"
        r"|<syntaxhighlight\s+lang\s*=\s*[\"']?" + lang + r"[^>]*>(.*?)</syntaxhighlight>",
        re.IGNORECASE | re.DOTALL,
    )
    blocks = [
        (lang_body or highlight_body).strip("\n")
        for lang_body, highlight_body in block.findall(section)
    ]
    if not blocks:
        return None
    return "\n\n".join(blocks)
