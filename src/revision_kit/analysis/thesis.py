# src/revision_kit/analysis/thesis.py

import logging
from typing import Literal

from pydantic import BaseModel, ValidationError, field_validator

from revision_kit._rounding import clamp
from revision_kit.diff.changes import calculate_change_counts
from revision_kit.llms.base import Message, Role
from revision_kit.llms.service import GenerativeService, strip_code_fences
from revision_kit.observability import names
from revision_kit.observability.base import MetricsHook, NoOpMetricsHook
from revision_kit.prompts import PromptsLibrary
from revision_kit.retrieval.config import PREVIOUS_DRAFT_PRESET, THESIS_ANALYSIS_PRESET
from revision_kit.retrieval.retriever import retrieve_context

from .heuristics import EXCERPT_CHARS, MAX_TOPIC_COVERAGE, analyze_heuristically
from .models import GeneratedAnalysis, HeuristicAnalysis

logger = logging.getLogger(__name__)

ANALYSIS_MAX_TOKENS = 1400
MAX_GAP_REPORT = 5
MAX_NEXT_STEPS = 4


class ThesisAnalysisPayload(BaseModel):
    """Shape of the generative service's JSON reply, clamped to legal ranges."""

    progress_score: int
    abstract_alignment_verdict: Literal[
        "on_track", "partially_aligned", "needs_realignment", "insufficient_data"
    ]
    key_topic_coverage: list[str] = []
    missing_core_sections: list[str] = []
    structural_readiness: Literal["strong", "moderate", "developing"]
    gap_report: list[str] = []
    next_steps: list[str] = []
    trend_delta: int = 0

    @field_validator("progress_score")
    @classmethod
    def _clamp_progress(cls, value: int) -> int:
        return int(clamp(value, 35, 95))

    @field_validator("trend_delta")
    @classmethod
    def _clamp_trend(cls, value: int) -> int:
        return int(clamp(value, -20, 20))

    @field_validator("key_topic_coverage")
    @classmethod
    def _cap_coverage(cls, value: list[str]) -> list[str]:
        return value[:MAX_TOPIC_COVERAGE]

    @field_validator("gap_report")
    @classmethod
    def _cap_gaps(cls, value: list[str]) -> list[str]:
        return value[:MAX_GAP_REPORT]

    @field_validator("next_steps")
    @classmethod
    def _cap_steps(cls, value: list[str]) -> list[str]:
        return value[:MAX_NEXT_STEPS]


def _parse_payload(raw: str) -> ThesisAnalysisPayload | None:
    try:
        return ThesisAnalysisPayload.model_validate_json(strip_code_fences(raw))
    except ValidationError as e:
        logger.warning("Thesis analysis reply rejected: %d error(s)", e.error_count())
        return None


def build_analysis_prompt(
    current_text: str,
    previous_text: str | None,
    abstract: str | None,
    prompts: PromptsLibrary,
) -> list[Message]:
    current = retrieve_context(current_text, THESIS_ANALYSIS_PRESET)
    previous_section = ""
    if previous_text:
        previous = retrieve_context(previous_text, PREVIOUS_DRAFT_PRESET)
        previous_section = (
            "\nPrevious version context (retrieved from full previous draft):\n"
            f"{previous.context}\n"
            f"Previous version metadata: {previous.metadata_line()}"
        )

    return prompts.messages(
        "thesis_analysis",
        "1.0",
        abstract=abstract or "Not provided",
        current_context=current.context,
        current_metadata=current.metadata_line(),
        previous_section=previous_section,
    )


async def request_analysis(
    messages: list[Message],
    generative: GenerativeService,
    prompts: PromptsLibrary,
) -> ThesisAnalysisPayload | None:
    """One call, plus one repair round when the reply is not valid JSON."""
    raw = await generative.chat(messages, max_tokens=ANALYSIS_MAX_TOKENS)
    if raw is None:
        return None

    payload = _parse_payload(raw)
    if payload is not None:
        return payload

    repair = prompts.get("json_repair", "1.0")
    fixed = await generative.chat(
        [
            Message(role=Role.SYSTEM, content=repair.system or ""),
            *messages[1:],
            Message(role=Role.ASSISTANT, content=raw),
            Message(role=Role.USER, content=repair.render()),
        ],
        max_tokens=ANALYSIS_MAX_TOKENS,
    )
    return _parse_payload(fixed) if fixed is not None else None


async def analyze_thesis(
    current_text: str,
    previous_text: str | None = None,
    abstract: str | None = None,
    previous_progress: int | None = None,
    version_number: int = 1,
    *,
    generative: GenerativeService | None = None,
    prompts: PromptsLibrary | None = None,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> GeneratedAnalysis | HeuristicAnalysis:
    """Evaluate a thesis version, preferring the generative service.

    Any unavailability or unusable reply selects the heuristic branch; the
    returned type says which branch produced the result.
    """
    changes = calculate_change_counts(previous_text, current_text)

    if generative is not None and generative.is_available():
        prompts = prompts or PromptsLibrary()
        messages = build_analysis_prompt(current_text, previous_text, abstract, prompts)
        payload = await request_analysis(messages, generative, prompts)
        if payload is not None:
            metrics_hook.increment(names.ANALYSIS_GENERATED_TOTAL)
            covered = payload.key_topic_coverage
            missing = payload.missing_core_sections
            previous_excerpt = previous_text[:EXCERPT_CHARS] if previous_text else None
            return GeneratedAnalysis(
                progress_score=payload.progress_score,
                trend_delta=payload.trend_delta,
                is_first_submission=version_number == 1,
                abstract_alignment_verdict=payload.abstract_alignment_verdict,
                key_topic_coverage=covered,
                missing_core_sections=missing,
                structural_readiness=payload.structural_readiness,
                additions_count=changes.additions,
                deletions_count=changes.deletions,
                major_edits_count=changes.major_edits,
                gaps_resolved=max(0, len(covered) - len(missing)),
                gaps_open=len(missing) + len(payload.gap_report),
                previous_excerpt=previous_excerpt,
                current_excerpt=current_text[:EXCERPT_CHARS],
                gap_report=payload.gap_report,
                next_steps=payload.next_steps,
            )
        logger.warning("Generative thesis analysis unusable, using heuristic fallback")
        metrics_hook.increment(
            names.ANALYSIS_FALLBACK_TOTAL, labels={"reason": "reply"}
        )
    else:
        metrics_hook.increment(
            names.ANALYSIS_FALLBACK_TOTAL, labels={"reason": "unavailable"}
        )

    return analyze_heuristically(
        current_text,
        previous_text,
        abstract,
        previous_progress,
        version_number,
        changes=changes,
    )
