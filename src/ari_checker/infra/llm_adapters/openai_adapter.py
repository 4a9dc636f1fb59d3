from __future__ import annotations

from openai import OpenAI
from openai.types.chat import ChatCompletionMessageParam

from .types import LLMResponse, TokenUsage


class OpenAIChatAdapter:
    """OpenAI Chat Completions adapter (gpt-4o-mini, gpt-4o, etc.)."""

    def __init__(self, model: str, api_key: str, *, timeout: float = 60.0, base_url: str | None = None) -> None:
        self.model = model
        self._client = OpenAI(api_key=api_key, timeout=timeout, base_url=base_url)

    def complete(
        self,
        system: str,
        user: str,
        *,
        temperature: float = 0.2,
        max_output_tokens: int = 1024,
    ) -> LLMResponse:
        messages: list[ChatCompletionMessageParam] = [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ]
        response = self._client.chat.completions.create(
            model=self.model,
            temperature=temperature,
            max_tokens=max_output_tokens,
            messages=messages,
        )

        text = ""
        if response.choices:
            text = response.choices[0].message.content or ""

        usage = None
        u = response.usage
        if u is not None:
            iu = u.prompt_tokens
            ou = u.completion_tokens
            tt = u.total_tokens if u.total_tokens is not None else (iu or 0) + (ou or 0)
            usage = TokenUsage(input_tokens=iu, output_tokens=ou, total_tokens=tt)
        return LLMResponse(text=text, usage=usage)
