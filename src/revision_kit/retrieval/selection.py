from collections.abc import Sequence

from .ranking import RankedChunk

# Beyond this many chunks, selected indexes must not be adjacent.
SPREAD_THRESHOLD = 8


def coverage_targets(total_chunks: int) -> list[int]:
    """First, middle and last chunk indexes, de-duplicated."""
    targets: list[int] = []
    for idx in (0, (total_chunks - 1) // 2, total_chunks - 1):
        if idx not in targets:
            targets.append(idx)
    return targets


def select_chunk_indexes(
    ranked: Sequence[RankedChunk],
    total_chunks: int,
    max_chunks: int,
    ensure_coverage: bool,
) -> list[int]:
    """Pick up to max_chunks indexes spread across the document.

    Greedy over the ranking with a minimum index distance, then topped up
    from the ranking without the distance rule. With ensure_coverage the
    first/middle/last chunks are forced in, evicting the lowest-scored
    non-forced pick when the budget is already full.
    """
    if max_chunks <= 0:
        return []

    min_distance = 2 if total_chunks > SPREAD_THRESHOLD else 1
    scores = {r.index: r.score for r in ranked}
    selected: list[int] = []

    for candidate in ranked:
        if len(selected) >= max_chunks:
            break
        if all(abs(s - candidate.index) >= min_distance for s in selected):
            selected.append(candidate.index)

    for candidate in ranked:
        if len(selected) >= max_chunks:
            break
        if candidate.index not in selected:
            selected.append(candidate.index)

    if ensure_coverage and total_chunks > 2:
        targets = coverage_targets(total_chunks)
        for target in targets:
            if target in selected:
                continue
            if len(selected) < max_chunks:
                selected.append(target)
                continue

            evictable = [idx for idx in selected if idx not in targets]
            if not evictable:
                continue
            weakest = min(evictable, key=lambda idx: scores.get(idx, 0.0))
            selected[selected.index(weakest)] = target

    return sorted(set(selected))[:max_chunks]
