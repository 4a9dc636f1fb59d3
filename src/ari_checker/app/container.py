from __future__ import annotations

from dependency_injector import containers, providers

from ..core.services import AnalysisOrchestrator, ExplanationService, JsonExtractor
from ..core.usecases.analyze import AnalyzeUseCase
from ..core.usecases.logs import LogsUseCase
from ..core.usecases.validate import ValidateUseCase
from ..infra.analyzers import AuditRunner, DependencyInstaller, LintRunner
from ..infra.github_content import GitHubContentClient
from ..infra.llm import LLM
from ..infra.log_store import RunLogStore
from ..infra.logging import AnalysisLogger
from ..infra.manifest import ManifestValidator
from ..infra.workspace import RepositoryAcquirer


class Container(containers.DeclarativeContainer):
    """DI container; populate ``config`` with ``config.from_pydantic(AppConfig(...))``."""

    config = providers.Configuration()

    # Logger (Resource: manages lifecycle with init/shutdown)
    logger = providers.Resource(
        AnalysisLogger,
        target=config.runtime.target,
        logs_dir=config.directories.logs_dir,
        logger_name=config.logging.logger_name,
        console_output=config.logging.console_output,
        level=config.logging.level,
    )

    # Adapters
    content_client = providers.Singleton(
        GitHubContentClient,
        api_base_url=config.github.api_base_url,
        token=config.github.token,
        timeout=config.github.request_timeout,
    )

    acquirer = providers.Factory(
        RepositoryAcquirer,
        workspaces_dir=config.directories.workspaces_dir,
        logger=logger,
        clone_base_url=config.github.clone_base_url,
        max_repo_bytes=config.analysis.max_repo_bytes,
    )

    manifest_validator = providers.Factory(
        ManifestValidator,
        logger=logger,
        content_client=content_client,
        manifest_file=config.analysis.manifest_file,
    )

    installer = providers.Factory(
        DependencyInstaller,
        logger=logger,
        timeout=config.analysis.install_timeout,
    )

    lint_runner = providers.Factory(
        LintRunner,
        logger=logger,
        timeout=config.analysis.lint_timeout,
    )

    audit_runner = providers.Factory(
        AuditRunner,
        logger=logger,
        timeout=config.analysis.audit_timeout,
    )

    llm = providers.Factory(
        LLM,
        provider=config.llm.provider_name,
        model=config.llm.model_name,
        api_key=config.llm.api_key,
        logger=logger,
        temperature=config.llm.temperature,
        timeout=config.llm.request_timeout,
        base_url=config.llm.base_url,
    )

    log_store = providers.Singleton(
        RunLogStore,
        logs_dir=config.directories.logs_dir,
    )

    # Domain services
    json_extractor = providers.Singleton(JsonExtractor)

    explainer = providers.Factory(
        ExplanationService,
        llm=llm,
        logger=logger,
        json_extractor=json_extractor,
        enabled=config.analysis.explain,
    )

    analysis_orchestrator = providers.Factory(
        AnalysisOrchestrator,
        acquirer=acquirer,
        validator=manifest_validator,
        installer=installer,
        lint_runner=lint_runner,
        audit_runner=audit_runner,
        explainer=explainer,
        logger=logger,
    )

    # Use cases
    analyze_uc = providers.Factory(
        AnalyzeUseCase,
        orchestrator=analysis_orchestrator,
    )

    validate_uc = providers.Factory(
        ValidateUseCase,
        remote_manifest=manifest_validator,
        logger=logger,
        default_branch=config.github.default_branch,
    )

    logs_uc = providers.Factory(
        LogsUseCase,
        log_store=log_store,
    )
