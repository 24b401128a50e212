from dataclasses import dataclass
from typing import ClassVar, Literal

AlignmentVerdict = Literal[
    "on_track", "partially_aligned", "needs_realignment", "insufficient_data"
]
StructuralReadiness = Literal["strong", "moderate", "developing"]
Sentiment = Literal["positive", "neutral", "negative"]


@dataclass(frozen=True)
class ThesisAnalysis:
    """Progress evaluation of one thesis version.

    Produced either by the generative service or by the heuristic scorer;
    ``source`` tells the two apart.
    """

    source: ClassVar[str] = "unknown"

    progress_score: int
    trend_delta: int
    is_first_submission: bool
    abstract_alignment_verdict: AlignmentVerdict
    key_topic_coverage: list[str]
    missing_core_sections: list[str]
    structural_readiness: StructuralReadiness
    additions_count: int
    deletions_count: int
    major_edits_count: int
    gaps_resolved: int
    gaps_open: int
    previous_excerpt: str | None
    current_excerpt: str


@dataclass(frozen=True)
class HeuristicAnalysis(ThesisAnalysis):
    source: ClassVar[str] = "heuristic"


@dataclass(frozen=True)
class GeneratedAnalysis(ThesisAnalysis):
    source: ClassVar[str] = "generated"

    gap_report: list[str]
    next_steps: list[str]


@dataclass(frozen=True)
class ConfidenceAnalysis:
    sentiment: Sentiment
    confidence: int
    hesitation_signals: list[str]


@dataclass(frozen=True)
class SentimentScore:
    sentiment: Sentiment
    confidence: int
