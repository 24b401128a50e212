import logging
from dataclasses import dataclass
from time import monotonic

from revision_kit.observability import names
from revision_kit.observability.base import MetricsHook, NoOpMetricsHook

from .assembly import NO_TEXT_SENTINEL, format_chunk_context
from .chunking import chunk_text
from .config import RetrievalConfig
from .ranking import rank_chunks
from .selection import select_chunk_indexes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetrievedContext:
    context: str
    total_chunks: int
    selected_chunk_indexes: tuple[int, ...]

    def metadata_line(self) -> str:
        """Provenance line for prompts; chunk numbers are 1-based."""
        selected = ",".join(str(i + 1) for i in self.selected_chunk_indexes)
        return f"total_chunks={self.total_chunks}, selected_chunks={selected}"


def retrieve_context(
    text: str,
    config: RetrievalConfig,
    *,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> RetrievedContext:
    """Build a budgeted, coverage-aware excerpt of text for the given query.

    Never raises for degenerate text: empty input yields the sentinel
    context with zero chunks.
    """
    start = monotonic()
    if not text.strip():
        logger.debug("Empty text, returning sentinel context")
        return RetrievedContext(
            context=NO_TEXT_SENTINEL, total_chunks=0, selected_chunk_indexes=()
        )

    chunks = chunk_text(
        text,
        chunk_size=config.chunk_size,
        overlap=config.overlap,
        metrics_hook=metrics_hook,
    )

    if len(chunks) <= config.max_chunks:
        selected = [c.index for c in chunks]
    else:
        ranked = rank_chunks(chunks, config.query)
        selected = select_chunk_indexes(
            ranked,
            total_chunks=len(chunks),
            max_chunks=config.max_chunks,
            ensure_coverage=config.ensure_coverage,
        )

    context = format_chunk_context([chunks[i] for i in selected], config.max_chars)

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.RETRIEVAL_DURATION, elapsed_ms)
    metrics_hook.increment(names.RETRIEVAL_CHUNKS_SELECTED, len(selected))
    metrics_hook.record_gauge(names.RETRIEVAL_CONTEXT_CHARS, len(context))
    logger.debug(
        "Retrieved %d/%d chunks, context=%d chars",
        len(selected),
        len(chunks),
        len(context),
    )

    return RetrievedContext(
        context=context,
        total_chunks=len(chunks),
        selected_chunk_indexes=tuple(selected),
    )


def retrieve_context_for(
    text: str,
    *,
    query: str,
    max_chunks: int,
    chunk_size: int,
    overlap: int,
    max_chars: int,
    ensure_coverage: bool,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> RetrievedContext:
    """Keyword form of retrieve_context; validates the settings first."""
    config = RetrievalConfig(
        query=query,
        max_chunks=max_chunks,
        chunk_size=chunk_size,
        overlap=overlap,
        max_chars=max_chars,
        ensure_coverage=ensure_coverage,
    )
    return retrieve_context(text, config, metrics_hook=metrics_hook)
