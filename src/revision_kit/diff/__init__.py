from .changes import (
    ChangeCounts,
    ChangeMarker,
    build_change_markers,
    calculate_change_counts,
    is_likely_edit,
)
from .engine import DiffRow, DiffStats, LineDiff, diff_lines
from .normalize import NormalizedLines, is_binary_extraction, normalize_diff_lines
from .pull_request import (
    DEFAULT_MAX_DIFF_LINES,
    DiffCapability,
    PullRequestDiff,
    build_pull_request_diff,
)

__all__ = [
    "DiffRow",
    "DiffStats",
    "LineDiff",
    "diff_lines",
    "NormalizedLines",
    "normalize_diff_lines",
    "is_binary_extraction",
    "DEFAULT_MAX_DIFF_LINES",
    "DiffCapability",
    "PullRequestDiff",
    "build_pull_request_diff",
    "ChangeCounts",
    "ChangeMarker",
    "calculate_change_counts",
    "build_change_markers",
    "is_likely_edit",
]
