"""Mapping of raw API records onto :class:`Issue`."""

import logging
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from issue_finder.models import Issue, RawIssue

logger = logging.getLogger(__name__)


def decode_raw_issue(raw: Any) -> Optional[RawIssue]:
    """Decode one raw record, or return None when a required field is unusable."""
    try:
        return RawIssue.model_validate(raw)
    except ValidationError as exc:
        logger.debug("Dropping issue record: %s", exc.errors(include_url=False))
        return None


def normalize_issue(raw: Any, repo: str) -> Optional[Issue]:
    """Convert one raw record to an Issue tagged with *repo*, or None to drop it."""
    decoded = decode_raw_issue(raw)
    if decoded is None:
        return None
    return Issue(
        repo=repo,
        number=decoded.number,
        title=decoded.title,
        url=decoded.html_url,
        state=decoded.state,
        labels=decoded.labels,
    )


def normalize_issues(raws: Iterable[Any], repo: str) -> list[Issue]:
    """Normalize a batch, keeping accepted records in their original order."""
    issues: list[Issue] = []
    for raw in raws:
        issue = normalize_issue(raw, repo)
        if issue is not None:
            issues.append(issue)
    return issues
