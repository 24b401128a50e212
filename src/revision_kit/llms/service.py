# src/revision_kit/llms/service.py

import logging
import re

from revision_kit.observability import names
from revision_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import LLMClient, Message

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"```\s*$")


def strip_code_fences(raw: str) -> str:
    """Remove a markdown code fence wrapped around a JSON reply."""
    return _TRAILING_FENCE.sub("", _LEADING_FENCE.sub("", raw.strip())).strip()


class GenerativeService:
    """Fail-soft facade over an optional LLM client.

    ``chat`` returns None when no client is configured or the call fails, so
    every caller has exactly one thing to branch on.
    """

    def __init__(
        self,
        client: LLMClient | None = None,
        temperature: float = 0.7,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._client = client
        self._temperature = temperature
        self.metrics_hook = metrics_hook
        if client is None:
            logger.warning(
                "No LLM client configured; analysis will use heuristic fallback"
            )

    def is_available(self) -> bool:
        return self._client is not None

    async def chat(self, messages: list[Message], max_tokens: int = 1000) -> str | None:
        if self._client is None:
            return None
        try:
            response = await self._client.complete(
                messages=messages,
                temperature=self._temperature,
                max_tokens=max_tokens,
            )
        except Exception as e:
            logger.warning("LLM chat failed, degrading to fallback: %s", e)
            self.metrics_hook.increment(names.LLM_ERRORS_TOTAL)
            return None
        return response.content
