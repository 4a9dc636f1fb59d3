from __future__ import annotations

import math

from .models import AnalysisMetrics, RiskStatus, ScoreResult


LINT_ERROR_WEIGHT = 1.0
LINT_WARNING_WEIGHT = 0.25
CRITICAL_VULN_WEIGHT = 15.0
HIGH_VULN_WEIGHT = 5.0

MAX_SCORE = 100
MODERATE_RISK_THRESHOLD = 60
LOW_RISK_THRESHOLD = 80


def deduction_for(metrics: AnalysisMetrics) -> float:
    return (
        metrics.lint_errors * LINT_ERROR_WEIGHT
        + metrics.lint_warnings * LINT_WARNING_WEIGHT
        + metrics.critical_vulns * CRITICAL_VULN_WEIGHT
        + metrics.high_vulns * HIGH_VULN_WEIGHT
    )


def status_for(score: int) -> RiskStatus:
    if score < MODERATE_RISK_THRESHOLD:
        return RiskStatus.HIGH_RISK
    if score < LOW_RISK_THRESHOLD:
        return RiskStatus.MODERATE_RISK
    return RiskStatus.LOW_RISK


def compute_score(metrics: AnalysisMetrics) -> ScoreResult:
    """Map analyzer metrics to the ARI score and its risk category.

    The raw score is clamped to [0, 100] and rounded half-up, so the result is
    always an integer in range and depends on nothing but ``metrics``.
    """
    raw = MAX_SCORE - deduction_for(metrics)
    clamped = min(max(raw, 0.0), float(MAX_SCORE))
    final = int(math.floor(clamped + 0.5))
    return ScoreResult(ari_score=final, status=status_for(final), metrics=metrics)
