from __future__ import annotations

from ..domain.models import ManifestCheck
from ..ports import LoggerPort, RemoteManifestPort


class ValidateUseCase:
    """Check that a hosted repository carries a parseable manifest, without cloning it."""

    def __init__(
        self,
        *,
        remote_manifest: RemoteManifestPort,
        logger: LoggerPort,
        default_branch: str = "main",
    ) -> None:
        self._remote_manifest = remote_manifest
        self._logger = logger
        self._default_branch = default_branch

    def execute(self, *, owner: str, repo: str, branch: str | None = None) -> ManifestCheck:
        ref = branch or self._default_branch
        check = self._remote_manifest.check_remote(owner, repo, ref)
        self._logger.info(
            "manifest_checked",
            type="manifest_checked",
            target=f"{owner}/{repo}",
            branch=ref,
            is_valid=check.is_valid,
            check_message=check.message,
        )
        return check
