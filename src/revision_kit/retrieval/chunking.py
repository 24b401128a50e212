from dataclasses import dataclass
from time import monotonic

from revision_kit.observability import names
from revision_kit.observability.base import MetricsHook, NoOpMetricsHook

# A soft boundary is only taken if the chunk keeps at least this share of chunk_size.
MIN_SOFT_BOUNDARY_RATIO = 0.6


@dataclass(frozen=True)
class Chunk:
    index: int
    start: int
    end: int
    text: str


def normalize_text(text: str) -> str:
    return text.replace("\r\n", "\n").strip()


def chunk_text(
    text: str,
    *,
    chunk_size: int,
    overlap: int,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[Chunk]:
    """Split text into overlapping chunks that prefer paragraph/sentence ends.

    Offsets refer to the normalized text (unified line endings, trimmed).
    An overlap >= chunk_size is tolerated: every chunk still advances the
    start by at least one character.
    """
    started = monotonic()
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")
    if overlap < 0:
        raise ValueError("overlap must be >= 0")

    chunks: list[Chunk] = []
    normalized = normalize_text(text)
    text_len = len(normalized)
    min_boundary_offset = int(chunk_size * MIN_SOFT_BOUNDARY_RATIO)

    start = 0
    index = 0
    while start < text_len:
        end = min(start + chunk_size, text_len)

        if end < text_len:
            soft_boundary = max(
                normalized.rfind("\n", 0, end + 1),
                normalized.rfind(". ", 0, end + 2),
            )
            if soft_boundary > start + min_boundary_offset:
                end = soft_boundary + 1

        body = normalized[start:end].strip()
        if body:
            chunks.append(Chunk(index=index, start=start, end=end, text=body))
            index += 1

        if end >= text_len:
            break
        start = max(end - overlap, start + 1)

    elapsed_ms = 1000 * (monotonic() - started)
    metrics_hook.record_latency(names.CHUNKING_DURATION, elapsed_ms)
    metrics_hook.increment(names.CHUNKING_CHUNKS_CREATED, len(chunks))
    return chunks
