import re

from revision_kit._rounding import clamp, round_half_up
from revision_kit.diff.changes import ChangeCounts, calculate_change_counts

from .models import AlignmentVerdict, HeuristicAnalysis, StructuralReadiness

CORE_SECTIONS = (
    "introduction",
    "methodology",
    "results",
    "discussion",
    "conclusion",
    "references",
)

MIN_PROGRESS = 35
MAX_HEURISTIC_PROGRESS = 92
BASE_PROGRESS = 45
CHARS_PER_PROGRESS_POINT = 1200
POINTS_PER_SECTION = 5
MAX_TOPIC_COVERAGE = 4
MAX_TREND_DELTA = 20
EXCERPT_CHARS = 1500

MIN_ABSTRACT_CHARS = 20
MIN_ABSTRACT_TOKEN_LENGTH = 5
ON_TRACK_RATIO = 0.55
PARTIAL_RATIO = 0.3

_NON_LETTERS = re.compile(r"[^a-z\s]")


def structural_readiness(missing_count: int) -> StructuralReadiness:
    if missing_count <= 1:
        return "strong"
    if missing_count <= 3:
        return "moderate"
    return "developing"


def progress_score(text_length: int, covered_count: int) -> int:
    raw = (
        BASE_PROGRESS
        + round_half_up(text_length / CHARS_PER_PROGRESS_POINT)
        + POINTS_PER_SECTION * covered_count
    )
    return int(clamp(raw, MIN_PROGRESS, MAX_HEURISTIC_PROGRESS))


def trend_delta(score: int, previous_progress: int | None) -> int:
    if previous_progress is None:
        return 0
    return int(clamp(score - previous_progress, -MAX_TREND_DELTA, MAX_TREND_DELTA))


def abstract_alignment(text: str, abstract: str | None) -> AlignmentVerdict:
    """Share of the abstract's content words that reappear in the text."""
    if not abstract or len(abstract.strip()) < MIN_ABSTRACT_CHARS:
        return "insufficient_data"

    tokens = {
        token
        for token in _NON_LETTERS.sub(" ", abstract.lower()).split()
        if len(token) >= MIN_ABSTRACT_TOKEN_LENGTH
    }
    if not tokens:
        return "insufficient_data"

    lower = text.lower()
    ratio = sum(1 for token in tokens if token in lower) / len(tokens)
    if ratio >= ON_TRACK_RATIO:
        return "on_track"
    if ratio >= PARTIAL_RATIO:
        return "partially_aligned"
    return "needs_realignment"


def analyze_heuristically(
    current_text: str,
    previous_text: str | None = None,
    abstract: str | None = None,
    previous_progress: int | None = None,
    version_number: int = 1,
    *,
    changes: ChangeCounts | None = None,
) -> HeuristicAnalysis:
    """Deterministic progress evaluation used when no generative service answers."""
    lower = current_text.lower()
    missing = [s for s in CORE_SECTIONS if s not in lower]
    covered = [s for s in CORE_SECTIONS if s in lower][:MAX_TOPIC_COVERAGE]

    score = progress_score(len(current_text), len(covered))
    if changes is None:
        changes = calculate_change_counts(previous_text, current_text)

    return HeuristicAnalysis(
        progress_score=score,
        trend_delta=trend_delta(score, previous_progress),
        is_first_submission=version_number == 1,
        abstract_alignment_verdict=abstract_alignment(current_text, abstract),
        key_topic_coverage=covered,
        missing_core_sections=missing,
        structural_readiness=structural_readiness(len(missing)),
        additions_count=changes.additions,
        deletions_count=changes.deletions,
        major_edits_count=changes.major_edits,
        gaps_resolved=max(0, (2 if previous_text else 0) + len(covered) - len(missing)),
        gaps_open=len(missing),
        previous_excerpt=previous_text[:EXCERPT_CHARS] if previous_text else None,
        current_excerpt=current_text[:EXCERPT_CHARS],
    )
