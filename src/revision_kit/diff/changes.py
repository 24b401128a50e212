from dataclasses import dataclass
from typing import Literal

from revision_kit._rounding import round_half_up

from .engine import diff_lines
from .normalize import is_binary_extraction

# First submissions have nothing to diff against; size stands in for additions.
CHARS_PER_ESTIMATED_ADDITION = 160
FIRST_VERSION_MAJOR_EDIT_RATIO = 0.2
MAJOR_EDIT_RATIO = 0.35

EDIT_TOKEN_OVERLAP = 0.55
EDIT_MIN_TOKENS = 5
PREVIEW_CHARS = 220
MAX_ADDITION_MARKERS = 6
MAX_REMOVAL_MARKERS = 4
MAX_EDIT_MARKERS = 4
MAX_MARKERS = 10

# Bounds the O(n*m) line diff behind the revision counts.
MAX_COUNTED_LINES = 600


@dataclass(frozen=True)
class ChangeCounts:
    additions: int
    deletions: int
    major_edits: int


@dataclass(frozen=True)
class ChangeMarker:
    id: str
    label: str
    type: Literal["addition", "removal", "edit"]
    preview: str


def _split_lines(text: str) -> list[str]:
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    return lines[:MAX_COUNTED_LINES]


def calculate_change_counts(
    previous_text: str | None, current_text: str
) -> ChangeCounts:
    if not previous_text:
        estimated = len(current_text) / CHARS_PER_ESTIMATED_ADDITION
        additions = max(1, round_half_up(estimated))
        return ChangeCounts(
            additions=additions,
            deletions=0,
            major_edits=max(
                1, round_half_up(additions * FIRST_VERSION_MAJOR_EDIT_RATIO)
            ),
        )

    stats = diff_lines(_split_lines(previous_text), _split_lines(current_text)).stats
    return ChangeCounts(
        additions=stats.additions,
        deletions=stats.removals,
        major_edits=round_half_up(
            min(stats.additions, stats.removals) * MAJOR_EDIT_RATIO
        ),
    )


def is_likely_edit(previous_line: str, current_line: str) -> bool:
    """Two different lines sharing most of their tokens."""
    if previous_line == current_line:
        return False

    previous_tokens = previous_line.lower().split()
    current_tokens = current_line.lower().split()
    if len(previous_tokens) < EDIT_MIN_TOKENS or len(current_tokens) < EDIT_MIN_TOKENS:
        return False

    previous_set = set(previous_tokens)
    overlap = sum(1 for token in current_tokens if token in previous_set)
    longest = max(len(previous_tokens), len(current_tokens))
    return overlap / longest >= EDIT_TOKEN_OVERLAP


def _stripped_lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def build_change_markers(
    previous_excerpt: str, current_excerpt: str
) -> list[ChangeMarker]:
    if is_binary_extraction(previous_excerpt) or is_binary_extraction(current_excerpt):
        return [
            ChangeMarker(
                id="change-note-1",
                label="Diff Notice",
                type="edit",
                preview=(
                    "Binary PDF stream detected instead of semantic text. "
                    "Re-upload after parser setup to get meaningful diff."
                ),
            )
        ]

    previous_lines = _stripped_lines(previous_excerpt)
    current_lines = _stripped_lines(current_excerpt)
    previous_set = set(previous_lines)
    current_set = set(current_lines)

    added = [line for line in current_lines if line not in previous_set]
    removed = [line for line in previous_lines if line not in current_set]
    edited = [
        line
        for line in current_lines
        if any(is_likely_edit(prev, line) for prev in previous_lines)
    ]

    markers = [
        ChangeMarker(
            f"change-add-{n}", f"Addition {n}", "addition", line[:PREVIEW_CHARS]
        )
        for n, line in enumerate(added[:MAX_ADDITION_MARKERS], start=1)
    ]
    markers += [
        ChangeMarker(f"change-rem-{n}", f"Removal {n}", "removal", line[:PREVIEW_CHARS])
        for n, line in enumerate(removed[:MAX_REMOVAL_MARKERS], start=1)
    ]
    markers += [
        ChangeMarker(f"change-edit-{n}", f"Edit {n}", "edit", line[:PREVIEW_CHARS])
        for n, line in enumerate(edited[:MAX_EDIT_MARKERS], start=1)
    ]
    return markers[:MAX_MARKERS]
