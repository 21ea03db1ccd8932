"""Pytest configuration and fixtures."""

import os
from typing import Any, Optional

import pytest

from issue_finder.errors import FetchError


@pytest.fixture(autouse=True)
def _clean_settings_env(monkeypatch, tmp_path):
    """Keep the caller's environment and .env files out of Settings."""
    monkeypatch.chdir(tmp_path)
    for var in ("GITHUB_TOKEN", "GH_TOKEN", "CLAUDE_CONFIG_DIR"):
        monkeypatch.delenv(var, raising=False)
    for var in [name for name in os.environ if name.startswith("ISSUE_FINDER_")]:
        monkeypatch.delenv(var)


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio backend for async tests."""
    return "asyncio"


@pytest.fixture
def make_repo():
    """Create a git repository with an optional origin remote."""
    import git

    def _make(path, origin: Optional[str] = None):
        path.mkdir(parents=True, exist_ok=True)
        repo = git.Repo.init(str(path))
        if origin is not None:
            repo.create_remote("origin", origin)
        repo.close()
        return path

    return _make


class FakeSource:
    """In-memory issue source keyed by slug.

    A value that is an exception instance is raised instead of returned.
    """

    def __init__(self, responses: dict[str, Any]) -> None:
        self.responses = responses
        self.calls: list[str] = []
        self.closed = False

    async def fetch_issues(self, slug: str) -> list[Any]:
        self.calls.append(slug)
        result = self.responses.get(slug, FetchError(slug, "not found"))
        if isinstance(result, BaseException):
            raise result
        return result

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_source():
    """Factory for FakeSource instances."""
    return FakeSource


@pytest.fixture
def sample_raw_issues():
    """Two raw issue records as returned by ``GET repos/{slug}/issues``."""
    return [
        {
            "number": 12,
            "title": "Crash on startup",
            "html_url": "https://github.com/octo/app/issues/12",
            "state": "open",
            "labels": [{"name": "bug", "color": "d73a4a"}, {"name": "p1"}],
            "user": {"login": "octocat"},
        },
        {
            "number": 9,
            "title": "Document config",
            "html_url": "https://github.com/octo/app/issues/9",
            "state": "closed",
            "labels": [],
        },
    ]
