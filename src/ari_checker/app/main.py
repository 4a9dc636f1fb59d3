from __future__ import annotations

from .config import AppConfig
from .container import Container


def _create_container(config: AppConfig | None = None, *, target: str | None = None) -> Container:
    """Create and initialize a container.

    Args:
        config: Optional config. If None, loads from environment variables.
        target: owner/repo slug naming the run log (optional)

    Returns:
        Initialized container instance
    """
    container = Container()

    if config is None:
        # Load from environment variables (BaseSettings default behavior)
        config = AppConfig()
    if target is not None:
        config = config.for_run(target)

    container.config.from_pydantic(config)
    container.init_resources()

    return container


def analyze(
    owner: str,
    repo: str,
    *,
    explain: bool | None = None,
    config: AppConfig | None = None,
) -> dict[str, object]:
    """Compute the Application Readiness Index of a GitHub repository.

    Args:
        owner: Repository owner
        repo: Repository name
        explain: Override for whether an LLM explanation is requested
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        Final artifact: is_valid, message, and on acceptance ari_score,
        status, metrics and explanation (None when unavailable)
    """
    if config is None:
        config = AppConfig()
    if explain is not None:
        config = config.model_copy(update={"analysis": config.analysis.model_copy(update={"explain": explain})})

    container = _create_container(config, target=f"{owner}/{repo}")
    try:
        result = container.analyze_uc().execute(owner=owner, repo=repo)
    finally:
        container.shutdown_resources()
    return result.to_dict()


def validate(
    owner: str,
    repo: str,
    *,
    branch: str | None = None,
    config: AppConfig | None = None,
) -> dict[str, object]:
    """Check through the GitHub API that the repository has a valid package.json.

    Args:
        owner: Repository owner
        repo: Repository name
        branch: Branch to inspect (defaults to the configured default branch)
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        is_valid, message and, when valid, the parsed manifest under ``data``
    """
    container = _create_container(config)
    try:
        check = container.validate_uc().execute(owner=owner, repo=repo, branch=branch)
    finally:
        container.shutdown_resources()
    return check.to_dict()


def logs(
    target: str | None = None,
    verbose: bool = False,
    config: AppConfig | None = None,
) -> list[str]:
    """Show run logs.

    Args:
        target: Optional owner/repo. If None, shows summary of all runs.
        verbose: Show raw records (single target) or degradation notes (summary)
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        List of log lines
    """
    container = _create_container(config)
    try:
        return container.logs_uc().execute(target, verbose)
    finally:
        container.shutdown_resources()
