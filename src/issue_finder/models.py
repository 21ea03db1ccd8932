"""Data models for issue-finder."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ── Output records ───────────────────────────────────────────────────────

class Issue(BaseModel):
    """A GitHub issue discovered in a local project."""

    repo: str
    number: int
    title: str
    url: str
    state: str
    labels: list[str] = Field(default_factory=list)


class RemoteCandidate(BaseModel):
    """A local repository directory paired with its GitHub remote URL."""

    path: Path
    url: str


# ── Raw API decoding ─────────────────────────────────────────────────────

class RawIssue(BaseModel):
    """Strict decode schema for one item of ``GET repos/{slug}/issues``.

    ``number``, ``title``, ``html_url`` and ``state`` are required and must
    have exactly the JSON type shown; a ``true`` or ``3.0`` number is
    rejected. ``labels`` is optional and never fails validation.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    number: int
    title: str
    html_url: str
    state: str
    labels: list[str] = Field(default_factory=list)

    @field_validator("labels", mode="before")
    @classmethod
    def _label_names(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [
            label["name"]
            for label in value
            if isinstance(label, dict) and isinstance(label.get("name"), str)
        ]
