import logging
from collections.abc import Sequence
from dataclasses import dataclass
from time import monotonic
from typing import Literal

from revision_kit.observability import names
from revision_kit.observability.base import MetricsHook, NoOpMetricsHook

logger = logging.getLogger(__name__)

RowType = Literal["context", "addition", "removal"]


@dataclass(frozen=True)
class DiffRow:
    """One side-by-side diff row.

    Line numbers are 1-based and only set on the side the row belongs to.
    """

    type: RowType
    left_line: int | None
    right_line: int | None
    left_text: str
    right_text: str


@dataclass(frozen=True)
class DiffStats:
    additions: int
    removals: int
    unchanged: int
    truncated: bool = False


@dataclass(frozen=True)
class LineDiff:
    rows: list[DiffRow]
    stats: DiffStats
    # Both inputs were empty. Not the same as "no changes".
    no_content: bool = False


def _lcs_table(left: Sequence[str], right: Sequence[str]) -> list[list[int]]:
    rows, cols = len(left), len(right)
    table = [[0] * (cols + 1) for _ in range(rows + 1)]
    for i in range(rows - 1, -1, -1):
        for j in range(cols - 1, -1, -1):
            if left[i] == right[j]:
                table[i][j] = table[i + 1][j + 1] + 1
            else:
                table[i][j] = max(table[i + 1][j], table[i][j + 1])
    return table


def diff_lines(
    previous_lines: Sequence[str],
    current_lines: Sequence[str],
    *,
    truncated: bool = False,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> LineDiff:
    """Minimal line diff via longest common subsequence.

    O(n*m) in line count; callers cap the inputs. On a tie the removal is
    emitted before the addition, so the output is deterministic.
    """
    start = monotonic()
    left, right = list(previous_lines), list(current_lines)

    if not left and not right:
        return LineDiff(
            rows=[],
            stats=DiffStats(additions=0, removals=0, unchanged=0, truncated=truncated),
            no_content=True,
        )

    table = _lcs_table(left, right)
    rows: list[DiffRow] = []
    i = j = 0
    left_line = right_line = 1

    def removal(text: str) -> None:
        nonlocal left_line
        rows.append(DiffRow("removal", left_line, None, text, ""))
        left_line += 1

    def addition(text: str) -> None:
        nonlocal right_line
        rows.append(DiffRow("addition", None, right_line, "", text))
        right_line += 1

    while i < len(left) and j < len(right):
        if left[i] == right[j]:
            rows.append(DiffRow("context", left_line, right_line, left[i], right[j]))
            left_line += 1
            right_line += 1
            i += 1
            j += 1
        elif table[i + 1][j] >= table[i][j + 1]:
            removal(left[i])
            i += 1
        else:
            addition(right[j])
            j += 1

    for text in left[i:]:
        removal(text)
    for text in right[j:]:
        addition(text)

    stats = DiffStats(
        additions=sum(1 for r in rows if r.type == "addition"),
        removals=sum(1 for r in rows if r.type == "removal"),
        unchanged=sum(1 for r in rows if r.type == "context"),
        truncated=truncated,
    )

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.DIFF_DURATION, elapsed_ms)
    metrics_hook.increment(names.DIFF_ROWS_TOTAL, len(rows))
    logger.debug(
        "Diffed %d vs %d lines: +%d -%d =%d",
        len(left),
        len(right),
        stats.additions,
        stats.removals,
        stats.unchanged,
    )
    return LineDiff(rows=rows, stats=stats)
