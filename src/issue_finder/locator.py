"""Discovery of GitHub-backed repositories under a projects directory."""

import configparser
import logging
from pathlib import Path
from typing import Optional, Union

import git  # GitPython

from issue_finder.errors import DiscoveryIoError
from issue_finder.models import RemoteCandidate

logger = logging.getLogger(__name__)

GITHUB_HOST = "github.com"


class RepoLocator:
    """Finds immediate subdirectories that are repositories with a GitHub origin."""

    def __init__(self, root: Union[str, Path], remote_name: str = "origin") -> None:
        self.root = Path(root).expanduser()
        self.remote_name = remote_name

    def locate(self) -> list[RemoteCandidate]:
        """Return one candidate per GitHub repository, in directory listing order."""
        if not self.root.exists():
            logger.warning("Projects directory does not exist: %s", self.root)
            return []

        try:
            entries = list(self.root.iterdir())
        except OSError as exc:
            raise DiscoveryIoError(
                f"Failed to read projects directory {self.root}: {exc}"
            ) from exc

        candidates: list[RemoteCandidate] = []
        for entry in entries:
            if not entry.is_dir():
                continue
            url = self.remote_url(entry)
            if url is None:
                continue
            if GITHUB_HOST not in url:
                logger.debug("Skipping %s: %s is not a GitHub remote", entry, url)
                continue
            candidates.append(RemoteCandidate(path=entry, url=url))
        return candidates

    def remote_url(self, path: Path) -> Optional[str]:
        """Return the configured URL of the tracked remote, or None."""
        try:
            repo = git.Repo(str(path))
        except (git.GitError, configparser.Error):
            logger.debug("Skipping %s: not a git repository", path)
            return None

        with repo:
            try:
                return repo.remote(self.remote_name).config_reader.get("url")
            except (ValueError, configparser.Error) as exc:
                logger.debug(
                    "Skipping %s: no usable %r remote url (%s)", path, self.remote_name, exc
                )
                return None
