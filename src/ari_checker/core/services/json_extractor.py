from __future__ import annotations

import json
from typing import Any


class JsonExtractor:
    """Domain service for reading the JSON object an LLM was asked to return.

    The whole response must be a single JSON object. Markdown fences or
    surrounding prose count as a malformed response.
    """

    def extract(self, text: str) -> dict[str, Any] | None:
        """Parse ``text`` as one JSON object.

        Args:
            text: Raw model output

        Returns:
            Parsed object, or None when the body is not exactly a JSON object
        """
        if not text:
            return None

        try:
            parsed = json.loads(text.strip())
        except json.JSONDecodeError:
            return None
        return parsed if isinstance(parsed, dict) else None
