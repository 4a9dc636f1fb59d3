from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, TypeVar

from ..domain.exceptions import PipelineError
from ..domain.models import (
    AnalysisMetrics,
    AuditReport,
    ExplanationContext,
    LintReport,
    PipelineResult,
    PipelineStage,
    RepositoryRef,
)
from ..domain.scoring import compute_score
from ..ports import (
    AcquirerPort,
    AuditRunnerPort,
    DependencyInstallerPort,
    LintRunnerPort,
    LoggerPort,
    ManifestValidatorPort,
)
from .explanation_service import ExplanationService


_R = TypeVar("_R")


class AnalysisOrchestrator:
    """Runs the readiness pipeline for one repository.

    acquiring -> validating -> analyzing -> scoring -> explaining -> cleanup -> done,
    with rejection possible while acquiring or validating. The working area is
    owned by the acquirer's context manager, so cleanup happens on every exit
    path without being repeated at each rejection branch.
    """

    def __init__(
        self,
        *,
        acquirer: AcquirerPort,
        validator: ManifestValidatorPort,
        installer: DependencyInstallerPort,
        lint_runner: LintRunnerPort,
        audit_runner: AuditRunnerPort,
        explainer: ExplanationService,
        logger: LoggerPort,
    ) -> None:
        self._acquirer = acquirer
        self._validator = validator
        self._installer = installer
        self._lint_runner = lint_runner
        self._audit_runner = audit_runner
        self._explainer = explainer
        self._logger = logger
        self._stage = PipelineStage.ACQUIRING

    def run(self, *, owner: str, repo: str) -> PipelineResult:
        """Execute the pipeline.

        Args:
            owner: Repository owner (user or organization)
            repo: Repository name

        Returns:
            Accepted result with score, or a rejection with an explanatory message
        """
        target = RepositoryRef(owner=owner, name=repo)
        self._logger.info("run_started", type="run_started", target=target.slug)

        try:
            result = self._run(target)
        except PipelineError as e:
            failed_at = self._stage
            self._finish_rejected()
            result = PipelineResult.rejected(
                target,
                stage=failed_at,
                kind=e.kind,
                message=e.message,
            )
        except Exception as e:
            failed_at = self._stage
            self._logger.exception("pipeline_fault", stage=failed_at.value)
            self._finish_rejected()
            result = PipelineResult.rejected(
                target,
                stage=failed_at,
                kind="internal",
                message=f"Analysis failed while {failed_at.value}: {e}",
            )

        self._logger.info("final_result", type="final_result", result=result.to_dict())
        return result

    def _run(self, target: RepositoryRef) -> PipelineResult:
        self._enter(PipelineStage.ACQUIRING)
        with self._acquirer.acquire(target.owner, target.name) as area:
            self._logger.info("repo_acquired", type="repo_acquired", workdir=str(area.path))

            self._enter(PipelineStage.VALIDATING)
            manifest = self._validator.validate(area.path)

            self._enter(PipelineStage.ANALYZING)
            lint, audit = self._analyze(area.path)

            self._enter(PipelineStage.SCORING)
            metrics = AnalysisMetrics.from_reports(lint, audit)
            score = compute_score(metrics)
            self._logger.info(
                "score_computed",
                type="score_computed",
                ari_score=score.ari_score,
                status=score.status.value,
                metrics=metrics.to_dict(),
            )

            self._enter(PipelineStage.EXPLAINING)
            explanation = self._explainer.explain(
                score,
                ExplanationContext(has_tests=manifest.has_tests, lint_failed=metrics.lint_failed),
            )

            self._enter(PipelineStage.CLEANUP)

        self._enter(PipelineStage.DONE)
        degraded = tuple(
            f"{name}: {report.degraded_reason}"
            for name, report in (("lint", lint), ("audit", audit))
            if report.degraded_reason is not None
        )
        return PipelineResult(
            target=target,
            is_valid=True,
            message=f"Analysis complete for '{target.slug}': ARI {score.ari_score} ({score.status.value}).",
            score=score,
            explanation=explanation,
            degraded=degraded,
        )

    def _analyze(self, workdir: Path) -> tuple[LintReport, AuditReport]:
        installed = self._installer.install(workdir)
        self._logger.info("dependencies_resolved", type="dependencies_resolved", installed=installed)

        # Both analyzers only read the tree; the pool exit is the join barrier.
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="ari-analyzer") as pool:
            lint_future = pool.submit(self._lint_runner.run, workdir)
            audit_future = pool.submit(self._audit_runner.run, workdir)
            lint = self._join("lint", lint_future, LintReport.penalty)
            audit = self._join("audit", audit_future, AuditReport.zeroed)

        for name, report in (("lint", lint), ("audit", audit)):
            if report.is_degraded:
                self._logger.warning(f"{name}_degraded", type="analyzer_degraded", reason=report.degraded_reason)
        return lint, audit

    def _join(self, name: str, future: Future[_R], fallback: Callable[[str], _R]) -> _R:
        try:
            return future.result()
        except Exception as e:
            self._logger.exception("analyzer_crashed", analyzer=name)
            return fallback(f"unexpected error: {type(e).__name__}: {e}")

    def _enter(self, stage: PipelineStage) -> None:
        self._stage = stage
        self._logger.info("stage", type="stage", stage=stage.value)

    def _finish_rejected(self) -> None:
        # The acquirer's context has already released the working area.
        self._enter(PipelineStage.CLEANUP)
        self._enter(PipelineStage.REJECTED)
