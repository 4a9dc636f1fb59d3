from __future__ import annotations

from ..domain.models import PipelineResult
from ..services import AnalysisOrchestrator


class AnalyzeUseCase:
    """Use case for computing the readiness index of one repository.

    Thin orchestration layer that delegates to AnalysisOrchestrator.
    """

    def __init__(
        self,
        *,
        orchestrator: AnalysisOrchestrator,
    ) -> None:
        self._orchestrator = orchestrator

    def execute(self, *, owner: str, repo: str) -> PipelineResult:
        """Run the pipeline.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            Pipeline result (accepted or rejected)
        """
        return self._orchestrator.run(owner=owner, repo=repo)
