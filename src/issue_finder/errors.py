"""Exceptions raised by the issue-discovery pipeline."""

from typing import Optional


class IssueFinderError(Exception):
    """Base class for all issue-finder errors."""


class MalformedRemoteUrl(IssueFinderError):
    """A GitHub remote URL has no ``github.com/`` marker."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid GitHub URL: {url}")
        self.url = url


class DiscoveryIoError(IssueFinderError):
    """The projects directory could not be listed."""


class GhNotFoundError(IssueFinderError):
    """The ``gh`` executable could not be started."""


class CommandError(IssueFinderError):
    """A ``gh`` invocation exited with a non-zero status."""

    def __init__(self, stderr: str, returncode: Optional[int] = None) -> None:
        super().__init__(stderr)
        self.stderr = stderr
        self.returncode = returncode


class FetchError(IssueFinderError):
    """Issues for one repository could not be fetched."""

    def __init__(self, slug: str, message: str) -> None:
        super().__init__(f"{slug}: {message}")
        self.slug = slug


class FetchDecodeError(FetchError):
    """The fetched payload was not UTF-8 text holding a JSON array."""


class FetchTimeout(FetchError):
    """The fetch did not complete within the configured timeout."""
