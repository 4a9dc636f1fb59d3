from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


LINT_PENALTY_ERRORS = 20
LINT_PENALTY_WARNINGS = 50


@dataclass(frozen=True)
class RepositoryRef:
    """Owner/name pair identifying a hosted repository."""
    owner: str
    name: str

    @property
    def slug(self) -> str:
        """Returns owner/name format."""
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class LintReport:
    """Lint analyzer outcome.

    Ok when ``degraded_reason`` is None, otherwise the fixed penalty values
    produced after the lint tool could not complete.
    """
    errors: int
    warnings: int
    degraded_reason: str | None = None

    @property
    def is_degraded(self) -> bool:
        return self.degraded_reason is not None

    @classmethod
    def penalty(cls, reason: str) -> "LintReport":
        return cls(
            errors=LINT_PENALTY_ERRORS,
            warnings=LINT_PENALTY_WARNINGS,
            degraded_reason=reason,
        )


@dataclass(frozen=True)
class AuditReport:
    """Dependency audit outcome.

    A failing audit degrades to zero counts: no signal rather than a penalty.
    """
    critical: int
    high: int
    degraded_reason: str | None = None

    @property
    def is_degraded(self) -> bool:
        return self.degraded_reason is not None

    @classmethod
    def zeroed(cls, reason: str) -> "AuditReport":
        return cls(critical=0, high=0, degraded_reason=reason)


@dataclass(frozen=True)
class AnalysisMetrics:
    lint_errors: int = 0
    lint_warnings: int = 0
    critical_vulns: int = 0
    high_vulns: int = 0
    lint_failed: bool = False

    def __post_init__(self) -> None:
        for name in ("lint_errors", "lint_warnings", "critical_vulns", "high_vulns"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")

    @classmethod
    def from_reports(cls, lint: LintReport, audit: AuditReport) -> "AnalysisMetrics":
        """Merge both analyzer outcomes. Defined for every combination of Ok/degraded."""
        return cls(
            lint_errors=lint.errors,
            lint_warnings=lint.warnings,
            critical_vulns=audit.critical,
            high_vulns=audit.high,
            lint_failed=lint.is_degraded,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "lint_errors": self.lint_errors,
            "lint_warnings": self.lint_warnings,
            "critical_vulns": self.critical_vulns,
            "high_vulns": self.high_vulns,
            "lint_failed": self.lint_failed,
        }


class RiskStatus(str, Enum):
    LOW_RISK = "Low Risk"
    MODERATE_RISK = "Moderate Risk"
    HIGH_RISK = "High Risk"


@dataclass(frozen=True)
class ScoreResult:
    ari_score: int
    status: RiskStatus
    metrics: AnalysisMetrics


@dataclass(frozen=True)
class ExplanationContext:
    has_tests: bool | None = None
    lint_failed: bool = False


@dataclass(frozen=True)
class Explanation:
    summary: str
    top_risks: tuple[str, ...] = ()
    why_score_is_low_or_high: tuple[str, ...] = ()
    improvement_suggestions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "top_risks": list(self.top_risks),
            "why_score_is_low_or_high": list(self.why_score_is_low_or_high),
            "improvement_suggestions": list(self.improvement_suggestions),
        }


@dataclass(frozen=True)
class Manifest:
    """Parsed package manifest found inside a working area."""
    data: dict[str, Any]
    has_tests: bool


@dataclass(frozen=True)
class ManifestCheck:
    """Outcome of checking a manifest through the hosting provider's API."""
    is_valid: bool
    message: str
    data: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"is_valid": self.is_valid, "message": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload


class PipelineStage(str, Enum):
    ACQUIRING = "acquiring"
    VALIDATING = "validating"
    ANALYZING = "analyzing"
    SCORING = "scoring"
    EXPLAINING = "explaining"
    CLEANUP = "cleanup"
    DONE = "done"
    REJECTED = "rejected"


@dataclass(frozen=True)
class PipelineResult:
    """Terminal artifact of one pipeline run.

    Either a rejection (``is_valid`` False, ``score`` None) or an acceptance
    carrying the score and, when obtained, an explanation.
    """
    target: RepositoryRef
    is_valid: bool
    message: str
    score: ScoreResult | None = None
    explanation: Explanation | None = None
    rejected_at: PipelineStage | None = None
    error_kind: str | None = None
    degraded: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def rejected(
        cls,
        target: RepositoryRef,
        *,
        stage: PipelineStage,
        kind: str,
        message: str,
    ) -> "PipelineResult":
        return cls(
            target=target,
            is_valid=False,
            message=message,
            rejected_at=stage,
            error_kind=kind,
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"is_valid": self.is_valid, "message": self.message}
        if self.score is not None:
            payload["ari_score"] = self.score.ari_score
            payload["status"] = self.score.status.value
            payload["metrics"] = self.score.metrics.to_dict()
            payload["explanation"] = (
                self.explanation.to_dict() if self.explanation is not None else None
            )
        return payload
