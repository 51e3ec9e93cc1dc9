from __future__ import annotations

from pathlib import Path

import allure
import pytest

from rosetta_coverage.config import DEFAULT_USER_AGENT, Settings, WikiSettings

pytestmark = [
    allure.epic("Coverage Report"),
    allure.feature("Configuration"),
]


def test_from_env_defaults() -> None:
    settings = Settings.from_env()

    assert settings.repo_path == Path(".")
    assert settings.language == "Rust"
    assert settings.wiki.api_url == "https://rosettacode.org/w/api.php"
    assert settings.wiki.category == "Programming_Tasks"
    assert settings.wiki.user_agent == DEFAULT_USER_AGENT
    settings.validate()


def test_from_env_reads_overrides(monkeypatch) -> None:
    monkeypatch.setenv("ROSETTA_COVERAGE_REPO_PATH", "/srv/rust-rosetta")
    monkeypatch.setenv("ROSETTA_COVERAGE_LANGUAGE", "Go")
    monkeypatch.setenv("ROSETTA_COVERAGE_WIKI_URL", "http://wiki.local/")
    monkeypatch.setenv("ROSETTA_COVERAGE_REQUEST_TIMEOUT_SECONDS", "5.5")
    monkeypatch.setenv("ROSETTA_COVERAGE_MAX_RETRIES", "0")

    settings = Settings.from_env()

    assert settings.repo_path == Path("/srv/rust-rosetta")
    assert settings.language == "Go"
    assert settings.wiki.api_url == "http://wiki.local/w/api.php"
    assert settings.wiki.request_timeout_seconds == 5.5
    assert settings.wiki.max_retries == 0


def test_explicit_arguments_win_over_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ROSETTA_COVERAGE_REPO_PATH", "/srv/rust-rosetta")
    monkeypatch.setenv("ROSETTA_COVERAGE_LANGUAGE", "Go")

    settings = Settings.from_env(repo_path=tmp_path, language="Rust")

    assert settings.repo_path == tmp_path
    assert settings.language == "Rust"


def test_validate_rejects_non_http_wiki_url() -> None:
    settings = Settings(wiki=WikiSettings(base_url="ftp://rosettacode.org"))

    with pytest.raises(ValueError, match="Invalid wiki URL"):
        settings.validate()


def test_validate_rejects_non_positive_timeout() -> None:
    settings = Settings(wiki=WikiSettings(request_timeout_seconds=0))

    with pytest.raises(ValueError, match="REQUEST_TIMEOUT_SECONDS"):
        settings.validate()


def test_validate_rejects_negative_retries() -> None:
    settings = Settings(wiki=WikiSettings(max_retries=-1))

    with pytest.raises(ValueError, match="MAX_RETRIES"):
        settings.validate()


def test_validate_rejects_blank_language() -> None:
    with pytest.raises(ValueError, match="Language"):
        Settings(language="  ").validate()
