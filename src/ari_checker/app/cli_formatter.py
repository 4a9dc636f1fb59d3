"""CLI output formatting utilities for human-readable display."""

from __future__ import annotations

from ..core.domain.models import ManifestCheck, PipelineResult


def format_pipeline_result(result: PipelineResult) -> str:
    """Format a pipeline result for human-readable CLI output.

    Args:
        result: Accepted or rejected pipeline result

    Returns:
        Formatted string for display
    """
    lines = []
    lines.append("=" * 80)
    lines.append("APPLICATION READINESS INDEX")
    lines.append("=" * 80)

    lines.append(f"\nRepository: {result.target.slug}")

    if not result.is_valid or result.score is None:
        lines.append(f"\nRejected: {result.message}")
        lines.append("\n" + "=" * 80)
        return "\n".join(lines)

    score = result.score
    metrics = score.metrics
    lines.append(f"\nARI Score: {score.ari_score}/100")
    lines.append(f"Status: {score.status.value.upper()}")

    lines.append("\n" + "-" * 80)
    lines.append("METRICS")
    lines.append("-" * 80)
    lint_note = " (lint could not run; penalty applied)" if metrics.lint_failed else ""
    lines.append(f"\nESLint errors:   {metrics.lint_errors}{lint_note}")
    lines.append(f"ESLint warnings: {metrics.lint_warnings}")
    lines.append(f"Critical vulns:  {metrics.critical_vulns}")
    lines.append(f"High vulns:      {metrics.high_vulns}")

    if result.degraded:
        lines.append("\nDegraded analyzers:")
        for note in result.degraded:
            lines.append(f"  - {note}")

    explanation = result.explanation
    lines.append("\n" + "-" * 80)
    lines.append("EXPLANATION")
    lines.append("-" * 80)
    if explanation is None:
        lines.append("\n(unavailable)")
    else:
        lines.append(f"\n{explanation.summary}")
        for title, items in (
            ("Top risks", explanation.top_risks),
            ("Why the score is at this level", explanation.why_score_is_low_or_high),
            ("Improvement suggestions", explanation.improvement_suggestions),
        ):
            if items:
                lines.append(f"\n{title}:")
                for i, item in enumerate(items, 1):
                    lines.append(f"  {i}. {item}")

    lines.append("\n" + "=" * 80)
    return "\n".join(lines)


def format_manifest_check(slug: str, check: ManifestCheck) -> str:
    mark = "OK" if check.is_valid else "INVALID"
    lines = [f"{slug}: {mark}", check.message]
    if check.data:
        name = check.data.get("name")
        version = check.data.get("version")
        if name:
            lines.append(f"Package: {name}{'@' + str(version) if version else ''}")
    return "\n".join(lines)
