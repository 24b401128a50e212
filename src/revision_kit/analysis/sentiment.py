# src/revision_kit/analysis/sentiment.py

import logging
from typing import Any

import httpx

from revision_kit._rounding import clamp, round_half_up

from .confidence import analyze_confidence, blend_confidence, detect_hesitation_signals
from .models import ConfidenceAnalysis, Sentiment, SentimentScore

logger = logging.getLogger(__name__)

LANGUAGE_API_VERSION = "2023-04-01"
MAX_DOCUMENT_CHARS = 5120


class AzureLanguageSentimentClient:
    """Azure AI Language sentiment analysis, mapped to a 0-100 confidence proxy.

    Returns None instead of raising so callers fall back to heuristics.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = (
            f"{endpoint.rstrip('/')}/language/:analyze-text"
            f"?api-version={LANGUAGE_API_VERSION}"
        )
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        logger.info("Initialized AzureLanguageSentimentClient endpoint=%s", endpoint)

    async def score(self, text: str) -> SentimentScore | None:
        body = {
            "kind": "SentimentAnalysis",
            "analysisInput": {
                "documents": [
                    {"id": "1", "text": text[:MAX_DOCUMENT_CHARS], "language": "en"}
                ]
            },
        }
        headers = {"Ocp-Apim-Subscription-Key": self._api_key}
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                res = await client.post(self._url, json=body, headers=headers)
            if res.status_code != 200:
                logger.warning("Azure Language API error: %d", res.status_code)
                return None
            return self._to_score(res.json())
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Azure Language API call failed: %s", e)
            return None

    def _to_score(self, payload: Any) -> SentimentScore | None:
        documents = (payload.get("results") or {}).get("documents") or []
        if not documents:
            return None
        doc = documents[0]
        scores = doc["confidenceScores"]
        # Positive answers lean confident, negative lean hesitant.
        raw = scores["positive"] * 90 + scores["neutral"] * 50 + scores["negative"] * 15
        # Azure also reports "mixed", which has no counterpart here.
        sentiment: Sentiment = "neutral"
        if doc["sentiment"] in ("positive", "negative"):
            sentiment = doc["sentiment"]
        return SentimentScore(
            sentiment=sentiment, confidence=round_half_up(clamp(raw, 0, 100))
        )


async def assess_confidence(
    answer_text: str,
    sentiment_client: AzureLanguageSentimentClient | None = None,
) -> ConfidenceAnalysis:
    """Provider-backed confidence when available, heuristic otherwise."""
    if sentiment_client is not None:
        scored = await sentiment_client.score(answer_text)
        if scored is not None:
            signals = detect_hesitation_signals(answer_text)
            return ConfidenceAnalysis(
                sentiment=scored.sentiment,
                confidence=blend_confidence(scored.confidence, answer_text, signals),
                hesitation_signals=signals,
            )
    return analyze_confidence(answer_text)
