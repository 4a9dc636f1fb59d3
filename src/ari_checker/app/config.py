from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs
from pydantic import BaseModel, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_NAME = "ari_checker"


def _default_home() -> Path:
    """Get default home directory using platformdirs."""
    return Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_cache_dir)


class DirectoryConfig(BaseModel):
    """Directory configuration with computed paths."""

    home: Path = Field(
        default_factory=_default_home,
        description="Base directory for all ari_checker data",
    )

    @computed_field
    @property
    def workspaces_dir(self) -> Path:
        """Parent directory of per-run working areas."""
        path = self.home / "workspaces"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @computed_field
    @property
    def logs_dir(self) -> Path:
        """Directory for JSONL run logs."""
        path = self.home / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path


class LLMConfig(BaseModel):
    """LLM configuration for the optional explanation step."""

    api_key: str | None = Field(
        default=None,
        description="LLM API key; the explanation is skipped when unset",
    )

    provider_name: str = Field(
        default="openai",
        description="LLM provider (openai, anthropic)",
    )

    model_name: str = Field(
        default="gpt-4o-mini",
        description="LLM model name",
    )

    base_url: str | None = Field(
        default=None,
        description="Override for the provider's API endpoint",
    )

    temperature: float = Field(default=0.2, ge=0.0, le=2.0)

    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Seconds before the LLM request is abandoned",
    )


class GitHubConfig(BaseModel):
    """GitHub configuration."""

    token: str | None = Field(
        default=None,
        description="GitHub personal access token (optional, raises API rate limits)",
    )

    api_base_url: str = Field(default="https://api.github.com")

    clone_base_url: str = Field(
        default="https://github.com",
        description="Prefix of clone URLs: <clone_base_url>/<owner>/<repo>.git",
    )

    default_branch: str = Field(
        default="main",
        description="Branch used by the remote manifest check",
    )

    request_timeout: float = Field(default=15.0, gt=0)


class AnalysisConfig(BaseModel):
    """Pipeline limits and switches."""

    max_repo_bytes: int = Field(
        default=50 * 1024 * 1024,
        gt=0,
        description="Ceiling for the on-disk size of a fetched repository",
    )

    manifest_file: str = Field(default="package.json")

    install_timeout: float = Field(default=300.0, gt=0, description="Seconds allowed for npm install")
    lint_timeout: float = Field(default=180.0, gt=0, description="Seconds allowed for eslint")
    audit_timeout: float = Field(default=120.0, gt=0, description="Seconds allowed for npm audit")

    explain: bool = Field(
        default=True,
        description="Ask the LLM for an explanation of the score",
    )


class LoggingConfig(BaseModel):
    logger_name: str = Field(default="ari_checker")
    console_output: bool = Field(default=False)
    level: str = Field(default="INFO")


class RuntimeConfig(BaseModel):
    """Per-invocation values set by the caller, not by the environment."""

    target: str | None = Field(
        default=None,
        description="owner/repo being analyzed; names the JSONL run log",
    )


class AppConfig(BaseSettings):
    """Root application configuration.

    All configuration is loaded from environment variables with ARI_CHECKER_ prefix.
    Use double underscore for nested config: ARI_CHECKER_LLM__API_KEY

    Example env vars:
        # Optional: without it the score is returned without an explanation
        export ARI_CHECKER_LLM__API_KEY=sk-xxxxxxxxxxxxx

        # Optional (with defaults)
        export ARI_CHECKER_LLM__PROVIDER_NAME=openai
        export ARI_CHECKER_LLM__MODEL_NAME=gpt-4o-mini
        export ARI_CHECKER_GITHUB__TOKEN=ghp_xxxxxxxxxxxxx
        export ARI_CHECKER_ANALYSIS__MAX_REPO_BYTES=52428800
        export ARI_CHECKER_DIRECTORIES__HOME=/custom/path
    """

    model_config = SettingsConfigDict(
        env_prefix="ARI_CHECKER_",
        env_nested_delimiter="__",
        frozen=True,
        extra="forbid",
    )

    directories: DirectoryConfig = Field(default_factory=DirectoryConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)

    def for_run(self, target: str | None, *, console_output: bool | None = None, level: str | None = None) -> "AppConfig":
        """Copy of this config bound to one target's run log."""
        logging_update: dict[str, object] = {}
        if console_output is not None:
            logging_update["console_output"] = console_output
        if level is not None:
            logging_update["level"] = level
        return self.model_copy(
            update={
                "runtime": RuntimeConfig(target=target),
                "logging": self.logging.model_copy(update=logging_update),
            }
        )
