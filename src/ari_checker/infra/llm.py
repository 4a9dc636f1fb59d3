from __future__ import annotations

from .llm_adapters import get_adapter
from ..core.domain.exceptions import LLMUnavailableError
from ..core.ports import LoggerPort


class LLM:
    def __init__(
        self,
        *,
        provider: str,
        model: str,
        api_key: str | None,
        logger: LoggerPort,
        temperature: float = 0.2,
        timeout: float = 60.0,
        base_url: str | None = None,
    ) -> None:
        self._provider = provider
        self._model = model
        self._api_key = api_key
        self._logger = logger
        self._temperature = temperature
        self._timeout = timeout
        self._base_url = base_url

    @property
    def available(self) -> bool:
        return bool(self._api_key)

    def complete(self, *, system: str, user: str) -> str:
        if not self._api_key:
            raise LLMUnavailableError("LLM skipped: API key not set (ARI_CHECKER_LLM__API_KEY)")

        # Log LLM input with provider/model info
        self._logger.info(
            "llm_input",
            type="llm_input",
            provider=self._provider,
            model=self._model,
            prompt_len=len(system) + len(user),
            prompt=user,
        )

        adapter = get_adapter(
            self._provider,
            self._model,
            self._api_key,
            timeout=self._timeout,
            base_url=self._base_url,
        )
        resp = adapter.complete(system, user, temperature=self._temperature)
        text = resp.text

        usage = resp.usage
        if usage is not None:
            self._logger.info(
                "llm_usage",
                type="llm_usage",
                provider=self._provider,
                model=self._model,
                input_tokens=usage.input_tokens,
                output_tokens=usage.output_tokens,
                total_tokens=usage.total_tokens,
            )

        self._logger.info(
            "llm_output",
            type="llm_output",
            provider=self._provider,
            model=self._model,
            raw_text_len=len(text),
            raw_text=text,
        )

        return text
