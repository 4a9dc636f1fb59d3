from __future__ import annotations

from .anthropic_adapter import AnthropicChatAdapter
from .interface import ChatCompletionAdapter
from .openai_adapter import OpenAIChatAdapter


def get_adapter(
    provider: str,
    model: str,
    api_key: str,
    *,
    timeout: float = 60.0,
    base_url: str | None = None,
) -> ChatCompletionAdapter:
    """Factory that returns an adapter for the requested provider/model."""
    if provider == "openai":
        return OpenAIChatAdapter(model, api_key, timeout=timeout, base_url=base_url)
    if provider == "anthropic":
        return AnthropicChatAdapter(model, api_key, timeout=timeout, base_url=base_url)
    raise ValueError("provider must be 'openai' or 'anthropic'")
