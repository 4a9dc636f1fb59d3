from __future__ import annotations

import os
import re
import time
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from git import GitCommandError, Repo

from ..core.domain.exceptions import (
    InvalidRepositoryError,
    RepositoryNetworkError,
    RepositoryNotFoundError,
    RepositorySizeExceededError,
)
from ..core.ports import LoggerPort
from ..shared.disk_usage import tree_size_bytes
from ..shared.rmtree_force import rmtree_force


DEFAULT_MAX_REPO_BYTES = 50 * 1024 * 1024

_NAME_RE = re.compile(r"^[A-Za-z0-9._-]+$")

# Substrings git prints when the remote repository or branch is missing.
# GitHub answers unknown repositories with an auth challenge, hence "username".
_NOT_FOUND_MARKERS = (
    "not found",
    "does not exist",
    "does not appear to be a git repository",
    "could not read username",
    "authentication failed",
    "remote branch",
)


def _check_name(kind: str, value: str) -> None:
    if not value or value in (".", "..") or not _NAME_RE.match(value):
        raise InvalidRepositoryError(f"Invalid {kind} name: {value!r}")


@dataclass
class WorkingArea:
    """Directory owned by exactly one pipeline run."""

    path: Path

    @property
    def exists(self) -> bool:
        return self.path.exists()

    def destroy(self) -> None:
        """Remove the directory; a no-op when it is already gone or never existed."""
        rmtree_force(self.path)


class RepositoryAcquirer:
    """Shallow-clones repositories into isolated working areas under a size ceiling."""

    def __init__(
        self,
        *,
        workspaces_dir: Path,
        logger: LoggerPort,
        clone_base_url: str = "https://github.com",
        max_repo_bytes: int = DEFAULT_MAX_REPO_BYTES,
    ) -> None:
        self._workspaces_dir = workspaces_dir
        self._logger = logger
        self._clone_base_url = clone_base_url.rstrip("/")
        self._max_repo_bytes = max_repo_bytes

    def clone_url(self, owner: str, repo: str) -> str:
        return f"{self._clone_base_url}/{owner}/{repo}.git"

    def new_working_area(self, owner: str, repo: str) -> WorkingArea:
        # owner identity + nanosecond timestamp + pid keeps concurrent runs apart
        name = f"{owner}__{repo}__{time.time_ns()}_{os.getpid()}"
        return WorkingArea(path=self._workspaces_dir / name)

    @contextmanager
    def acquire(self, owner: str, repo: str) -> Iterator[WorkingArea]:
        """Yield a working area holding a depth-1 clone of the default branch.

        The area is destroyed when the context exits, whether the clone, the
        size check, or any later stage fails.
        """
        _check_name("owner", owner)
        _check_name("repository", repo)
        slug = f"{owner}/{repo}"

        area = self.new_working_area(owner, repo)
        try:
            self._clone(slug, self.clone_url(owner, repo), area.path)
            self._enforce_size(slug, area)
            yield area
        finally:
            self._release(area)

    def _clone(self, slug: str, url: str, dest: Path) -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        self._logger.info("clone_started", type="clone_started", target=slug, workdir=str(dest))
        try:
            repo = Repo.clone_from(
                url,
                dest,
                env={"GIT_TERMINAL_PROMPT": "0"},
                depth=1,
                single_branch=True,
            )
        except GitCommandError as e:
            stderr = str(e.stderr or e).lower()
            self._logger.warning("clone_failed", type="clone_failed", target=slug, status=e.status, stderr=stderr.strip())
            if any(marker in stderr for marker in _NOT_FOUND_MARKERS):
                raise RepositoryNotFoundError(slug) from e
            raise RepositoryNetworkError(f"Failed to clone '{slug}': {stderr.strip() or e}") from e
        repo.close()

    def _enforce_size(self, slug: str, area: WorkingArea) -> None:
        size = tree_size_bytes(area.path, stop_after=self._max_repo_bytes)
        self._logger.info("clone_measured", type="clone_measured", target=slug, size_bytes=size)
        if size > self._max_repo_bytes:
            raise RepositorySizeExceededError(slug, size, self._max_repo_bytes)

    def _release(self, area: WorkingArea) -> None:
        try:
            area.destroy()
        except OSError:
            self._logger.exception("workspace_cleanup_error", workdir=str(area.path))
        else:
            self._logger.info("workspace_released", type="workspace_released", workdir=str(area.path))
