from __future__ import annotations

from .models import ExplanationContext, ScoreResult


SYSTEM_PROMPT = (
    "You are a senior software auditor explaining technical execution risk to non-technical investors.\n"
    "Rules:\n"
    "- Do NOT invent issues\n"
    "- Do NOT change or reinterpret scores\n"
    "- Only explain based on provided metrics\n"
    "- Be concise, factual, and neutral\n"
    "- Return valid JSON only"
)


def _flag(value: bool | None) -> str:
    if value is None:
        return "unknown"
    return "true" if value else "false"


def build_explanation_prompt(*, score: ScoreResult, context: ExplanationContext) -> str:
    """Build the user prompt asking the model to explain an already computed score."""
    metrics = score.metrics
    return (
        "Application Analysis:\n\n"
        f"ARI Score: {score.ari_score}\n"
        f"Status: {score.status.value}\n\n"
        "Metrics:\n"
        f"- ESLint errors: {metrics.lint_errors}\n"
        f"- ESLint warnings: {metrics.lint_warnings}\n"
        f"- Critical vulnerabilities: {metrics.critical_vulns}\n"
        f"- High vulnerabilities: {metrics.high_vulns}\n\n"
        "Context:\n"
        f"- Tests present: {_flag(context.has_tests)}\n"
        f"- ESLint execution failed: {_flag(context.lint_failed)}\n\n"
        "Tasks:\n"
        "1. Explain why the ARI score is at this level\n"
        "2. List the top technical risks\n"
        "3. Suggest concrete improvements that would most increase the ARI score\n\n"
        "Return ONLY valid JSON with this exact structure:\n"
        "{\n"
        "  \"summary\": string,\n"
        "  \"top_risks\": string[],\n"
        "  \"why_score_is_low_or_high\": string[],\n"
        "  \"improvement_suggestions\": string[]\n"
        "}"
    )
