"""Shared test fixtures."""

from __future__ import annotations

import os
from pathlib import Path

import httpx
import pytest

KD_TREE_LOCAL = 'fn main() {\n    println!("kd");\n}\n'
KD_TREE_REMOTE = 'fn main() {\n    println!("k-d");\n}'

CATEGORY_TITLES = ["K-d tree", "Hello world/Text", "100 doors"]
WIKI_PAGES = {
    "K-d tree": (
        "{{task}}\n"
        "=={{header|C}}==\n"
        "<lang c>int main(void) { return 0; }</lang>\n"
        "=={{header|Rust}}==\n"
        f"<lang rust>\n{KD_TREE_REMOTE}\n</lang>\n"
        "=={{header|Scala}}==\n"
        "<lang scala>object KdTree</lang>\n"
    ),
    "Hello world/Text": (
        "{{task}}\n"
        "=={{header|Python}}==\n"
        "<syntaxhighlight lang=\"python\">print('Hi')</syntaxhighlight>\n"
    ),
    "100 doors": (
        "=={{header|Rust}}==\n"
        '<syntaxhighlight lang="rust">\n'
        "fn main() { let doors = [false; 100]; }\n"
        "</syntaxhighlight>\n"
    ),
    # Served by the wiki but not listed in the task category.
    "Draft task": "=={{header|Rust}}==\n<lang rust>fn main() {}</lang>\n",
}


def wiki_handler(request: httpx.Request) -> httpx.Response:
    """Serve a tiny MediaWiki API over the pages above."""

    params = request.url.params
    if params.get("list") == "categorymembers":
        members = [{"ns": 0, "title": title} for title in CATEGORY_TITLES]
        return httpx.Response(200, json={"query": {"categorymembers": members}})

    titles = params["titles"].split("|")
    if any("Broken" in title for title in titles):
        return httpx.Response(503, text="upstream unavailable")

    pages = []
    for title in titles:
        if title in WIKI_PAGES:
            pages.append(
                {
                    "title": title,
                    "revisions": [{"slots": {"main": {"content": WIKI_PAGES[title]}}}],
                },
            )
        else:
            pages.append({"title": title, "missing": True})
    return httpx.Response(200, json={"batchcomplete": True, "query": {"pages": pages}})


def write_crate(root: Path, crate_dir: str, url: str | None, code: str | None = None) -> Path:
    """Create a task crate under ``root/tasks`` and return its directory."""

    crate = root / "tasks" / crate_dir
    crate.mkdir(parents=True)
    manifest = f'[package]\nname = "{crate.name}"\nversion = "0.1.0"\n'
    if url is not None:
        manifest += f'\n[package.metadata.rosettacode]\nurl = "{url}"\n'
    (crate / "Cargo.toml").write_text(manifest, encoding="utf-8")
    if code is not None:
        (crate / "src").mkdir()
        (crate / "src" / "main.rs").write_text(code, encoding="utf-8")
    return crate


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep developer ROSETTA_COVERAGE_* settings out of tests."""
    for name in list(os.environ):
        if name.startswith("ROSETTA_COVERAGE_"):
            monkeypatch.delenv(name)


@pytest.fixture()
def wiki_transport() -> httpx.MockTransport:
    return httpx.MockTransport(wiki_handler)


@pytest.fixture()
def local_repo(tmp_path: Path) -> Path:
    """Repository with one shared task, one local-only task and one unrelated crate."""
    repo = tmp_path / "repo"
    write_crate(repo, "trees/k-d-tree", "https://rosettacode.org/wiki/K-d_tree", KD_TREE_LOCAL)
    write_crate(
        repo,
        "misc/local-only",
        "http://rosettacode.org/wiki/Local_only_task",
        'fn main() {}\n',
    )
    write_crate(repo, "support/helpers", None, "pub fn helper() {}\n")
    return repo


@pytest.fixture()
def make_crate():
    return write_crate
