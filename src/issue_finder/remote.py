"""GitHub remote URL parsing."""

from issue_finder.errors import MalformedRemoteUrl

GITHUB_MARKER = "github.com/"


def resolve_slug(url: str) -> str:
    """Return the ``owner/repo`` slug of a GitHub remote URL.

    One trailing ``.git`` is stripped, then everything after the first
    ``github.com/`` is returned as-is. scp-style remotes such as
    ``git@github.com:owner/repo.git`` carry no ``github.com/`` marker and
    raise :class:`MalformedRemoteUrl`.
    """
    trimmed = url[: -len(".git")] if url.endswith(".git") else url
    _, marker, slug = trimmed.partition(GITHUB_MARKER)
    if not marker:
        raise MalformedRemoteUrl(url)
    return slug
