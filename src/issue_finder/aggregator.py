"""Issue aggregation across every GitHub repository in a projects directory.

Drives the locator, resolves each remote to a slug, fetches the raw issues
and normalizes them into one ordered list.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Optional, Union

from issue_finder.config import Settings
from issue_finder.errors import FetchError
from issue_finder.fetcher import GhCliFetcher, IssueSource, RestFetcher
from issue_finder.locator import RepoLocator
from issue_finder.models import Issue
from issue_finder.normalizer import normalize_issues
from issue_finder.remote import resolve_slug

logger = logging.getLogger(__name__)


def build_source(settings: Settings) -> IssueSource:
    """Create the issue source selected by ``settings.backend``."""
    if settings.backend == "rest":
        return RestFetcher(token=settings.token, timeout=settings.timeout)
    return GhCliFetcher(gh_path=settings.gh_path, timeout=settings.timeout)


class IssueAggregator:
    """Collects issues from all GitHub repositories below a root directory."""

    def __init__(
        self,
        source: Optional[IssueSource] = None,
        concurrency: int = 1,
        on_status: Optional[Callable[[str], None]] = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._source = source or GhCliFetcher()
        self.concurrency = concurrency
        self._on_status = on_status or (lambda _: None)

    # ── Status helper ─────────────────────────────────────────────────────

    def _status(self, msg: str) -> None:
        self._on_status(msg)

    # ── Pipeline ──────────────────────────────────────────────────────────

    async def collect(self, root: Union[str, Path]) -> list[Issue]:
        """Return every issue found, in locator order then API order.

        Raises DiscoveryIoError if *root* cannot be listed and
        MalformedRemoteUrl if a GitHub remote has no ``github.com/`` part.
        A repository whose fetch fails is skipped.
        """
        self._status(f"Scanning {root} …")
        candidates = RepoLocator(root).locate()
        slugs = [resolve_slug(candidate.url) for candidate in candidates]
        logger.info("Found %d GitHub repositories under %s", len(slugs), root)

        semaphore = asyncio.Semaphore(self.concurrency)

        async def _one(slug: str) -> list[Issue]:
            async with semaphore:
                return await self._issues_for(slug)

        tasks = [asyncio.ensure_future(_one(slug)) for slug in slugs]
        try:
            batches = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        issues = [issue for batch in batches for issue in batch]
        self._status(f"Found {len(issues)} issues in {len(slugs)} repositories")
        logger.info("Collected %d issues", len(issues))
        return issues

    async def _issues_for(self, slug: str) -> list[Issue]:
        self._status(f"Fetching issues for {slug} …")
        try:
            raw: list[Any] = await self._source.fetch_issues(slug)
        except FetchError as exc:
            logger.warning("Skipping %s: %s", slug, exc)
            return []
        return normalize_issues(raw, slug)

    async def close(self) -> None:
        await self._source.close()


async def list_issues(
    root: Optional[Union[str, Path]] = None,
    settings: Optional[Settings] = None,
) -> list[Issue]:
    """List issues under *root* (default: the configured projects directory)."""
    settings = settings or Settings()
    aggregator = IssueAggregator(
        source=build_source(settings),
        concurrency=settings.concurrency,
    )
    try:
        return await aggregator.collect(root if root is not None else settings.projects_dir)
    finally:
        await aggregator.close()
