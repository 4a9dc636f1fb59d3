from __future__ import annotations

from typing import Protocol, runtime_checkable

from .types import LLMResponse


@runtime_checkable
class ChatCompletionAdapter(Protocol):
    """Minimal interface for a single system + user chat turn."""

    def complete(
        self,
        system: str,
        user: str,
        *,
        temperature: float = 0.2,
        max_output_tokens: int = 1024,
    ) -> LLMResponse:
        """Send one chat turn and return normalized text + token usage."""
        raise NotImplementedError
