from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..core.domain.exceptions import ContentApiError, InvalidManifestError
from ..core.domain.models import Manifest, ManifestCheck
from ..core.ports import LoggerPort
from .github_content import GitHubContentClient


MANIFEST_FILE = "package.json"

# Placeholder written by `npm init`
_NPM_INIT_TEST_SCRIPT = 'echo "Error: no test specified" && exit 1'
_TEST_DIRS = ("test", "tests", "__tests__", "spec")


def _parse_manifest(text: str) -> dict[str, Any] | None:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def detect_tests(workdir: Path, data: dict[str, Any]) -> bool:
    """True when the project declares a real test script or ships a test directory."""
    scripts = data.get("scripts")
    if isinstance(scripts, dict):
        test_script = scripts.get("test")
        if isinstance(test_script, str) and test_script.strip() and test_script.strip() != _NPM_INIT_TEST_SCRIPT:
            return True
    return any((workdir / name).is_dir() for name in _TEST_DIRS)


class ManifestValidator:
    """Confirms a checked-out tree, or a hosted repository, carries a parseable manifest."""

    def __init__(
        self,
        *,
        logger: LoggerPort,
        content_client: GitHubContentClient | None = None,
        manifest_file: str = MANIFEST_FILE,
    ) -> None:
        self._logger = logger
        self._content_client = content_client
        self._manifest_file = manifest_file

    def validate(self, workdir: Path) -> Manifest:
        """Parse the manifest inside a working area.

        Raises:
            InvalidManifestError: If the file is missing or not a JSON object
        """
        fp = workdir / self._manifest_file
        if not fp.is_file():
            raise InvalidManifestError(f"'{self._manifest_file}' not found in the repository.")

        data = _parse_manifest(fp.read_text(encoding="utf-8", errors="replace"))
        if data is None:
            raise InvalidManifestError(f"'{self._manifest_file}' found but it is not valid JSON.")

        has_tests = detect_tests(workdir, data)
        self._logger.info(
            "manifest_valid",
            type="manifest_valid",
            package_name=data.get("name"),
            has_tests=has_tests,
        )
        return Manifest(data=data, has_tests=has_tests)

    def check_remote(self, owner: str, repo: str, branch: str | None = None) -> ManifestCheck:
        """Look for the manifest through the hosting provider's content API."""
        if self._content_client is None:
            raise RuntimeError("ManifestValidator was created without a content client")

        ref = branch or "main"
        try:
            text = self._content_client.fetch_file(owner, repo, self._manifest_file, branch=ref)
        except ContentApiError as e:
            return ManifestCheck(is_valid=False, message=f"GitHub API Error: {e}")

        if text is None:
            return ManifestCheck(
                is_valid=False,
                message=f"'{self._manifest_file}' not found in the '{ref}' branch of the '{owner}/{repo}' repository.",
            )

        data = _parse_manifest(text)
        if data is None:
            return ManifestCheck(
                is_valid=False,
                message=f"'{self._manifest_file}' found but it is not valid JSON.",
            )
        return ManifestCheck(
            is_valid=True,
            message=f"'{self._manifest_file}' found and valid JSON.",
            data=data,
        )
