"""Issue fetching via the ``gh`` CLI or the GitHub REST API."""

import asyncio
import json
import logging
from typing import Any, Optional, Protocol, Sequence

import httpx

from issue_finder.errors import (
    CommandError,
    FetchDecodeError,
    FetchError,
    FetchTimeout,
    GhNotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


class IssueSource(Protocol):
    """Anything that can return the raw issues array for a repository slug."""

    async def fetch_issues(self, slug: str) -> list[Any]: ...

    async def close(self) -> None: ...


def decode_issues(slug: str, payload: bytes) -> list[Any]:
    """Decode a UTF-8 JSON array payload, raising FetchDecodeError otherwise."""
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FetchDecodeError(slug, f"Invalid UTF-8 in response: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FetchDecodeError(slug, f"Failed to parse response: {exc}") from exc
    if not isinstance(data, list):
        raise FetchDecodeError(
            slug, f"Expected a JSON array, got {type(data).__name__}"
        )
    return data


# ── Subprocess plumbing ──────────────────────────────────────────────────

async def _run(
    gh_path: str, args: Sequence[str], timeout: Optional[float]
) -> tuple[int, bytes, bytes]:
    """Run ``gh`` with *args*; kill it on timeout or cancellation."""
    try:
        proc = await asyncio.create_subprocess_exec(
            gh_path,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise GhNotFoundError(f"Failed to execute gh command: {exc}") from exc

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except BaseException:
        # TimeoutError and CancelledError both land here
        if proc.returncode is None:
            proc.kill()
            await proc.wait()
        raise
    return proc.returncode or 0, stdout, stderr


async def run_gh_command(
    args: Sequence[str],
    gh_path: str = "gh",
    timeout: Optional[float] = None,
) -> str:
    """Run an arbitrary ``gh`` command and return its stdout.

    A non-zero exit raises :class:`CommandError` carrying the stderr text.
    """
    returncode, stdout, stderr = await _run(gh_path, args, timeout)
    if returncode != 0:
        raise CommandError(stderr.decode("utf-8", errors="replace"), returncode)
    try:
        return stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CommandError(str(exc), returncode) from exc


# ── gh CLI backend ───────────────────────────────────────────────────────

class GhCliFetcher:
    """Fetches issues with ``gh api repos/{slug}/issues``.

    Authentication is whatever ``gh auth login`` stored; nothing is passed
    explicitly.
    """

    def __init__(self, gh_path: str = "gh", timeout: Optional[float] = DEFAULT_TIMEOUT) -> None:
        self.gh_path = gh_path
        self.timeout = timeout

    async def fetch_issues(self, slug: str) -> list[Any]:
        """Return the raw issues array (first page only)."""
        args = ["api", f"repos/{slug}/issues"]
        logger.debug("Running %s %s", self.gh_path, " ".join(args))
        try:
            returncode, stdout, stderr = await _run(self.gh_path, args, self.timeout)
        except asyncio.TimeoutError as exc:
            raise FetchTimeout(slug, f"gh timed out after {self.timeout}s") from exc

        if returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise FetchError(slug, f"gh exited with status {returncode}: {message}")
        return decode_issues(slug, stdout)

    async def close(self) -> None:
        """Nothing to release; present for parity with RestFetcher."""


# ── REST backend ─────────────────────────────────────────────────────────

class RestFetcher:
    """Fetches issues straight from the GitHub REST API."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = "https://api.github.com",
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ) -> None:
        self.token = token
        self.base_url = base_url
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def headers(self) -> dict[str, str]:
        h: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=self.timeout,
            )
        return self._client

    async def fetch_issues(self, slug: str) -> list[Any]:
        """Return the raw issues array (first page only)."""
        client = self._client_instance()
        try:
            resp = await client.get(f"/repos/{slug}/issues")
        except httpx.TimeoutException as exc:
            raise FetchTimeout(slug, f"request timed out after {self.timeout}s") from exc
        except httpx.HTTPError as exc:
            raise FetchError(slug, f"request failed: {exc}") from exc

        if resp.is_error:
            raise FetchError(
                slug, f"GitHub API error ({resp.status_code}): {resp.reason_phrase}"
            )
        return decode_issues(slug, resp.content)

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
