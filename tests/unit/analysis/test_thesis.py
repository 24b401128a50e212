import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from revision_kit.analysis.models import GeneratedAnalysis, HeuristicAnalysis
from revision_kit.analysis.thesis import ThesisAnalysisPayload, analyze_thesis
from revision_kit.llms.base import LLMResponse, Role, Usage
from revision_kit.llms.service import GenerativeService

CURRENT = "Introduction\nMethodology\nWe interviewed 40 students.\nResults"
PREVIOUS = "Introduction\nWe plan to interview students."

PAYLOAD = {
    "progress_score": 99,
    "abstract_alignment_verdict": "on_track",
    "key_topic_coverage": [
        "introduction",
        "methodology",
        "results",
        "sampling",
        "ethics",
    ],
    "missing_core_sections": ["discussion", "conclusion"],
    "structural_readiness": "moderate",
    "gap_report": ["g1", "g2", "g3", "g4", "g5", "g6"],
    "next_steps": ["s1", "s2"],
    "trend_delta": 35,
}


def _client(*replies: str | Exception) -> MagicMock:
    client = MagicMock()
    client.complete = AsyncMock(
        side_effect=[
            reply
            if isinstance(reply, Exception)
            else LLMResponse(
                content=reply,
                finish_reason="stop",
                usage=Usage(prompt_tokens=1, completion_tokens=1, total_tokens=2),
                latency_ms=1.0,
            )
            for reply in replies
        ]
    )
    return client


class TestThesisAnalysisPayload:
    def test_values_clamped_and_lists_capped(self) -> None:
        payload = ThesisAnalysisPayload.model_validate(PAYLOAD)

        assert payload.progress_score == 95
        assert payload.trend_delta == 20
        assert len(payload.key_topic_coverage) == 4
        assert len(payload.gap_report) == 5

    def test_low_progress_raised_to_floor(self) -> None:
        payload = ThesisAnalysisPayload.model_validate(
            {**PAYLOAD, "progress_score": 3, "trend_delta": -50}
        )

        assert payload.progress_score == 35
        assert payload.trend_delta == -20


class TestAnalyzeThesis:
    @pytest.mark.asyncio
    async def test_generated_branch(self) -> None:
        client = _client(json.dumps(PAYLOAD))
        metrics_hook = MagicMock()

        result = await analyze_thesis(
            CURRENT,
            PREVIOUS,
            abstract="Interview study of thesis revision",
            version_number=2,
            generative=GenerativeService(client),
            metrics_hook=metrics_hook,
        )

        assert isinstance(result, GeneratedAnalysis)
        assert result.source == "generated"
        assert result.progress_score == 95
        assert result.trend_delta == 20
        assert result.is_first_submission is False
        assert result.gap_report == ["g1", "g2", "g3", "g4", "g5"]
        assert result.next_steps == ["s1", "s2"]
        assert result.gaps_resolved == 4 - 2
        assert result.gaps_open == 2 + 5
        assert result.previous_excerpt == PREVIOUS
        metrics_hook.increment.assert_called_once_with("analysis_generated_total")

    @pytest.mark.asyncio
    async def test_prompt_carries_retrieved_context(self) -> None:
        client = _client(json.dumps(PAYLOAD))

        await analyze_thesis(CURRENT, PREVIOUS, generative=GenerativeService(client))

        messages = client.complete.call_args.kwargs["messages"]
        assert messages[0].role == Role.SYSTEM
        assert "[Chunk 1 | chars 1-" in messages[1].content
        assert "Previous version context" in messages[1].content
        assert "Abstract: Not provided" in messages[1].content
        assert client.complete.call_args.kwargs["max_tokens"] == 1400

    @pytest.mark.asyncio
    async def test_repairs_invalid_json_once(self) -> None:
        fenced = f"```json\n{json.dumps(PAYLOAD)}\n```"
        client = _client("Here is my evaluation!", fenced)

        result = await analyze_thesis(CURRENT, generative=GenerativeService(client))

        assert isinstance(result, GeneratedAnalysis)
        repair_messages = client.complete.call_args_list[1].kwargs["messages"]
        assert [m.role for m in repair_messages] == [
            Role.SYSTEM,
            Role.USER,
            Role.ASSISTANT,
            Role.USER,
        ]
        assert repair_messages[2].content == "Here is my evaluation!"
        assert "raw JSON object" in repair_messages[3].content

    @pytest.mark.asyncio
    async def test_falls_back_when_repair_fails(self) -> None:
        client = _client("nope", "still nope")
        metrics_hook = MagicMock()

        result = await analyze_thesis(
            CURRENT, generative=GenerativeService(client), metrics_hook=metrics_hook
        )

        assert isinstance(result, HeuristicAnalysis)
        assert client.complete.await_count == 2
        metrics_hook.increment.assert_called_once_with(
            "analysis_fallback_total", labels={"reason": "reply"}
        )

    @pytest.mark.asyncio
    async def test_falls_back_on_provider_error(self) -> None:
        client = _client(RuntimeError("rate limited"))

        result = await analyze_thesis(CURRENT, generative=GenerativeService(client))

        assert isinstance(result, HeuristicAnalysis)
        assert client.complete.await_count == 1

    @pytest.mark.asyncio
    async def test_unavailable_service_uses_heuristic(self) -> None:
        result = await analyze_thesis(CURRENT, generative=GenerativeService())

        assert result == await analyze_thesis(CURRENT)
        assert result.source == "heuristic"

    @pytest.mark.asyncio
    async def test_rejects_out_of_vocabulary_verdict(self) -> None:
        bad = json.dumps({**PAYLOAD, "structural_readiness": "excellent"})
        client = _client(bad, bad)

        result = await analyze_thesis(CURRENT, generative=GenerativeService(client))

        assert isinstance(result, HeuristicAnalysis)
