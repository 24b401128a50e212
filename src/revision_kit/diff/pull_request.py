import logging
from dataclasses import dataclass
from enum import Enum

from revision_kit.observability import names
from revision_kit.observability.base import MetricsHook, NoOpMetricsHook

from .engine import DiffRow, DiffStats, diff_lines
from .normalize import (
    is_binary_extraction,
    normalize_diff_lines,
    reports_parser_missing,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_DIFF_LINES = 280


class DiffCapability(str, Enum):
    READY = "ready"
    PARSER_MISSING = "parser_missing"
    BINARY_DETECTED = "binary_detected"
    NO_CONTENT = "no_content"


PARSER_MISSING_MESSAGE = (
    "Semantic diff is unavailable because parser dependencies are missing. "
    "Install a PDF/DOCX text extractor, then upload a new version."
)
BINARY_DETECTED_MESSAGE = (
    "Binary PDF stream detected instead of semantic text. "
    "Re-upload after parser setup to get meaningful diff."
)
NO_CONTENT_MESSAGE = "No extractable text found in either version for diffing."


@dataclass(frozen=True)
class PullRequestDiff:
    capability: DiffCapability
    message: str | None
    rows: list[DiffRow]
    stats: DiffStats

    @property
    def is_ready(self) -> bool:
        return self.capability == DiffCapability.READY


def _notice(
    capability: DiffCapability, message: str, left: str, right: str
) -> PullRequestDiff:
    return PullRequestDiff(
        capability=capability,
        message=message,
        rows=[DiffRow("context", 1, 1, left, right)],
        stats=DiffStats(additions=0, removals=0, unchanged=1, truncated=False),
    )


def build_pull_request_diff(
    previous_text: str,
    current_text: str,
    *,
    parser_available: bool = True,
    max_lines: int = DEFAULT_MAX_DIFF_LINES,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> PullRequestDiff:
    """Side-by-side diff of two extracted versions, or an explanatory notice.

    Degenerate inputs are reported through ``capability`` instead of raising.
    ``parser_available`` is the extraction collaborator's own report of
    whether a real PDF/DOCX parser backed the texts.
    """
    if (
        not parser_available
        or reports_parser_missing(previous_text)
        or reports_parser_missing(current_text)
    ):
        logger.warning("Diff skipped: text extraction parser unavailable")
        metrics_hook.increment(
            names.DIFF_DEGRADED_TOTAL,
            labels={"capability": DiffCapability.PARSER_MISSING.value},
        )
        return _notice(
            DiffCapability.PARSER_MISSING,
            PARSER_MISSING_MESSAGE,
            "Parser-backed extraction unavailable for previous submission.",
            "Parser-backed extraction unavailable for current submission.",
        )

    if is_binary_extraction(previous_text) or is_binary_extraction(current_text):
        logger.warning("Diff skipped: binary PDF stream detected")
        metrics_hook.increment(
            names.DIFF_DEGRADED_TOTAL,
            labels={"capability": DiffCapability.BINARY_DETECTED.value},
        )
        return _notice(
            DiffCapability.BINARY_DETECTED,
            BINARY_DETECTED_MESSAGE,
            "Binary PDF content detected in previous submission. "
            "Semantic diff unavailable until parser-backed extraction is enabled.",
            "Binary PDF content detected in current submission. "
            "Semantic diff unavailable until parser-backed extraction is enabled.",
        )

    previous = normalize_diff_lines(previous_text, max_lines)
    current = normalize_diff_lines(current_text, max_lines)

    if not previous.lines and not current.lines:
        return PullRequestDiff(
            capability=DiffCapability.NO_CONTENT,
            message=NO_CONTENT_MESSAGE,
            rows=[],
            stats=DiffStats(additions=0, removals=0, unchanged=0, truncated=False),
        )

    result = diff_lines(
        previous.lines,
        current.lines,
        truncated=previous.truncated or current.truncated,
        metrics_hook=metrics_hook,
    )
    return PullRequestDiff(
        capability=DiffCapability.READY,
        message=None,
        rows=result.rows,
        stats=result.stats,
    )
