"""Runtime configuration for the coverage report."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlparse

from rosetta_coverage import __version__

DEFAULT_USER_AGENT = f"rosetta-coverage/{__version__} (+https://rosettacode.org/wiki/Rosetta_Code)"


@dataclass(slots=True)
class WikiSettings:
    """Rosetta Code wiki access settings."""

    base_url: str = "https://rosettacode.org"
    api_path: str = "/w/api.php"
    category: str = "Programming_Tasks"
    request_timeout_seconds: float = 30.0
    max_retries: int = 3
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def api_url(self) -> str:
        return self.base_url.rstrip("/") + self.api_path


@dataclass(slots=True)
class Settings:
    """Application settings."""

    repo_path: Path = Path(".")
    language: str = "Rust"
    wiki: WikiSettings = field(default_factory=WikiSettings)

    @classmethod
    def from_env(
        cls,
        repo_path: Path | None = None,
        language: str | None = None,
    ) -> Settings:
        """Load settings from environment; explicit arguments win."""

        return cls(
            repo_path=repo_path or Path(os.getenv("ROSETTA_COVERAGE_REPO_PATH", ".")),
            language=language or os.getenv("ROSETTA_COVERAGE_LANGUAGE", "Rust"),
            wiki=WikiSettings(
                base_url=os.getenv("ROSETTA_COVERAGE_WIKI_URL", "https://rosettacode.org"),
                api_path=os.getenv("ROSETTA_COVERAGE_WIKI_API_PATH", "/w/api.php"),
                category=os.getenv("ROSETTA_COVERAGE_WIKI_CATEGORY", "Programming_Tasks"),
                request_timeout_seconds=float(
                    os.getenv("ROSETTA_COVERAGE_REQUEST_TIMEOUT_SECONDS", "30.0"),
                ),
                max_retries=int(os.getenv("ROSETTA_COVERAGE_MAX_RETRIES", "3")),
                user_agent=os.getenv("ROSETTA_COVERAGE_USER_AGENT", DEFAULT_USER_AGENT),
            ),
        )

    def validate(self) -> None:
        """Raise configuration error for unusable settings."""

        parsed = urlparse(self.wiki.base_url)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError(
                "Invalid wiki URL: "
                f"{self.wiki.base_url!r}. "
                "Expected an absolute URL with http:// or https:// scheme.",
            )
        if self.wiki.request_timeout_seconds <= 0:
            raise ValueError("ROSETTA_COVERAGE_REQUEST_TIMEOUT_SECONDS must be > 0.")
        if self.wiki.max_retries < 0:
            raise ValueError("ROSETTA_COVERAGE_MAX_RETRIES must be >= 0.")
        if not self.language.strip():
            raise ValueError("Language name must not be empty.")
        if not self.wiki.category.strip():
            raise ValueError("ROSETTA_COVERAGE_WIKI_CATEGORY must not be empty.")
