from __future__ import annotations

from pydantic import BaseModel, ConfigDict, ValidationError

from ..domain.exceptions import LLMUnavailableError
from ..domain.models import Explanation, ExplanationContext, ScoreResult
from ..domain.prompt import SYSTEM_PROMPT, build_explanation_prompt
from ..ports import LLMPort, LoggerPort
from .json_extractor import JsonExtractor


class _ExplanationPayload(BaseModel):
    """Shape the model is asked to return."""

    model_config = ConfigDict(extra="ignore", strict=True)

    summary: str
    top_risks: list[str]
    why_score_is_low_or_high: list[str]
    improvement_suggestions: list[str]


class ExplanationService:
    """Optional enrichment turning a score into human-readable commentary.

    Advisory only: every failure yields None and is logged, nothing is raised.
    """

    def __init__(
        self,
        *,
        llm: LLMPort,
        logger: LoggerPort,
        json_extractor: JsonExtractor,
        enabled: bool = True,
    ) -> None:
        self._llm = llm
        self._logger = logger
        self._json_extractor = json_extractor
        self._enabled = enabled

    def explain(self, score: ScoreResult, context: ExplanationContext) -> Explanation | None:
        if not self._enabled:
            self._logger.info("explanation_skipped", reason="disabled")
            return None

        prompt = build_explanation_prompt(score=score, context=context)
        try:
            raw_text = self._llm.complete(system=SYSTEM_PROMPT, user=prompt)
        except LLMUnavailableError as e:
            self._logger.warning("explanation_skipped", reason=str(e))
            return None
        except Exception as e:
            self._logger.warning(
                "explanation_failed",
                reason="llm_call_failed",
                error=f"{type(e).__name__}: {e}",
            )
            return None

        parsed = self._json_extractor.extract(raw_text)
        if parsed is None:
            self._logger.warning("explanation_failed", reason="no_json_object", raw_text_len=len(raw_text or ""))
            return None

        try:
            payload = _ExplanationPayload.model_validate(parsed)
        except ValidationError as e:
            self._logger.warning("explanation_failed", reason="unexpected_shape", error_count=e.error_count())
            return None

        return Explanation(
            summary=payload.summary,
            top_risks=tuple(payload.top_risks),
            why_score_is_low_or_high=tuple(payload.why_score_is_low_or_high),
            improvement_suggestions=tuple(payload.improvement_suggestions),
        )
