"""Domain exceptions for ari_checker."""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for errors that reject a pipeline run.

    ``kind`` is a stable machine-readable tag carried into the rejected result.
    """

    kind = "pipeline_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRepositoryError(PipelineError):
    """Raised when an owner or repository name is not a valid identifier."""

    kind = "invalid_repository"


class RepositoryNotFoundError(PipelineError):
    """Raised when the repository or its default branch does not exist."""

    kind = "not_found"

    def __init__(self, slug: str, message: str | None = None) -> None:
        self.slug = slug
        if message is None:
            message = f"Repository '{slug}' was not found or is not accessible."
        super().__init__(message)


class RepositoryNetworkError(PipelineError):
    """Raised when the clone fails for a transport reason."""

    kind = "network_error"


class RepositorySizeExceededError(PipelineError):
    """Raised when the fetched tree is larger than the configured ceiling."""

    kind = "size_exceeded"

    def __init__(self, slug: str, size_bytes: int, limit_bytes: int) -> None:
        self.slug = slug
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            f"Repository '{slug}' is too large: {size_bytes / (1024 * 1024):.1f} MiB "
            f"exceeds the {limit_bytes / (1024 * 1024):.1f} MiB limit."
        )


class InvalidManifestError(PipelineError):
    """Raised when the manifest is missing or is not valid JSON."""

    kind = "invalid_manifest"


class ContentApiError(Exception):
    """Raised when the hosting provider's content API answers with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class LLMUnavailableError(Exception):
    """Raised when no LLM credentials are configured."""
