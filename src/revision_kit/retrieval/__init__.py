from .assembly import NO_TEXT_SENTINEL, format_chunk_context
from .chunking import Chunk, chunk_text
from .config import (
    COACHING_QUESTIONS_PRESET,
    COACHING_TURN_PRESET,
    PREVIOUS_DRAFT_PRESET,
    THESIS_ANALYSIS_PRESET,
    RetrievalConfig,
)
from .ranking import RankedChunk, extract_query_terms, rank_chunks
from .retriever import RetrievedContext, retrieve_context, retrieve_context_for
from .selection import select_chunk_indexes

__all__ = [
    "Chunk",
    "chunk_text",
    "RankedChunk",
    "extract_query_terms",
    "rank_chunks",
    "select_chunk_indexes",
    "NO_TEXT_SENTINEL",
    "format_chunk_context",
    "RetrievalConfig",
    "RetrievedContext",
    "retrieve_context",
    "retrieve_context_for",
    "THESIS_ANALYSIS_PRESET",
    "PREVIOUS_DRAFT_PRESET",
    "COACHING_QUESTIONS_PRESET",
    "COACHING_TURN_PRESET",
]
