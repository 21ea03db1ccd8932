"""Runtime configuration for issue-finder.

Configuration is loaded from environment variables and a local ``.env``
file (if present):

- ``ISSUE_FINDER_PROJECTS_DIR``: directory to scan. Defaults to
  ``$CLAUDE_CONFIG_DIR/projects`` or ``~/.claude/projects``.
- ``ISSUE_FINDER_GH_PATH``: path of the ``gh`` executable.
- ``ISSUE_FINDER_TIMEOUT``: per-repository fetch timeout in seconds.
- ``ISSUE_FINDER_CONCURRENCY``: repositories fetched at once.
- ``ISSUE_FINDER_BACKEND``: ``gh`` (default) or ``rest``.
- ``ISSUE_FINDER_LOG_LEVEL``: logging level name.
- ``GITHUB_TOKEN`` / ``GH_TOKEN``: token for the ``rest`` backend.
"""

import os
from pathlib import Path
from typing import Any, Literal, Optional, get_args

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]

LOG_LEVELS: tuple[str, ...] = get_args(LogLevel)


def default_projects_dir() -> Path:
    """Return the ``projects`` directory inside the Claude configuration root."""
    claude_dir = os.environ.get("CLAUDE_CONFIG_DIR")
    base = Path(claude_dir) if claude_dir else Path.home() / ".claude"
    return base.expanduser() / "projects"


class Settings(BaseSettings):
    """Resolved issue-finder settings."""

    projects_dir: Path = Field(
        default_factory=default_projects_dir,
        description="Directory whose immediate subdirectories are scanned",
    )
    gh_path: str = Field(default="gh", description="Path of the gh executable")
    timeout: float = Field(default=60.0, gt=0, description="Per-repository fetch timeout")
    concurrency: int = Field(default=1, ge=1, description="Repositories fetched at once")
    backend: Literal["gh", "rest"] = Field(default="gh", description="How issues are fetched")
    token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_TOKEN", "GH_TOKEN"),
        description="GitHub token used by the rest backend",
    )
    log_level: LogLevel = Field(default="WARNING", description="Root logging level")

    model_config = SettingsConfigDict(
        env_prefix="ISSUE_FINDER_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value
