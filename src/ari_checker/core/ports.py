from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import Protocol

from .domain.models import AuditReport, LintReport, Manifest, ManifestCheck


class WorkingAreaPort(Protocol):
    """Directory holding one fetched repository copy for the duration of a run."""

    path: Path

    @property
    def exists(self) -> bool:
        ...

    def destroy(self) -> None:
        """Remove the directory. Safe to call repeatedly or before creation."""
        ...


class AcquirerPort(Protocol):
    """Port for fetching a repository into an isolated working area."""

    def acquire(self, owner: str, repo: str) -> AbstractContextManager[WorkingAreaPort]:
        """Context manager yielding a populated working area.

        The working area is destroyed when the context exits, on every path.

        Raises:
            InvalidRepositoryError: If owner or repo is not a valid identifier
            RepositoryNotFoundError: If the repository or branch is absent
            RepositoryNetworkError: If the clone fails for a transport reason
            RepositorySizeExceededError: If the fetched tree exceeds the ceiling
        """
        ...


class ManifestValidatorPort(Protocol):
    """Port for confirming the fetched tree is an analyzable project."""

    def validate(self, workdir: Path) -> Manifest:
        """Parse the manifest inside ``workdir``.

        Raises:
            InvalidManifestError: If the manifest is missing or not a JSON object
        """
        ...


class RemoteManifestPort(Protocol):
    """Port for checking a manifest through the hosting provider without cloning."""

    def check_remote(self, owner: str, repo: str, branch: str | None = None) -> ManifestCheck:
        ...


class DependencyInstallerPort(Protocol):
    def install(self, workdir: Path) -> bool:
        """Install declared dependencies. Returns False on failure, never raises."""
        ...


class LintRunnerPort(Protocol):
    def run(self, workdir: Path) -> LintReport:
        """Lint the tree. Returns a penalty report on failure, never raises."""
        ...


class AuditRunnerPort(Protocol):
    def run(self, workdir: Path) -> AuditReport:
        """Audit dependencies. Returns zeroed counts on failure, never raises."""
        ...


class LLMPort(Protocol):
    """Port for chat-style LLM inference."""

    def complete(self, *, system: str, user: str) -> str:
        """Return the model's text answer.

        Raises:
            LLMUnavailableError: If no credentials are configured
        """
        ...


class LoggerPort(Protocol):
    """Port for structured logging.

    Extra keyword arguments are attached to the record as structured fields.
    """

    def debug(self, message: str, **kwargs) -> None:
        ...

    def info(self, message: str, **kwargs) -> None:
        ...

    def warning(self, message: str, **kwargs) -> None:
        ...

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        ...

    def exception(self, message: str, **kwargs) -> None:
        ...


class RunLogStorePort(Protocol):
    """Port for reading per-target JSONL run logs."""

    def read_log(self, target: str, verbose: bool) -> list[str]:
        """Read and format the log for one ``owner/repo`` target.

        Raises:
            FileNotFoundError: If no run was logged for the target
        """
        ...

    def summarize_all(self, verbose: bool) -> list[str]:
        """Summarize all logged runs as a table."""
        ...
