import re
from collections.abc import Sequence
from dataclasses import dataclass

from .chunking import Chunk

MAX_QUERY_TERMS = 36
MIN_TERM_LENGTH = 3
LONG_TERM_LENGTH = 7
LONG_TERM_WEIGHT = 2.0
SHORT_TERM_WEIGHT = 1.0
HEADING_BONUS = 0.35

STOPWORDS = frozenset(
    {
        "the",
        "and",
        "for",
        "that",
        "with",
        "from",
        "this",
        "into",
        "your",
        "about",
        "what",
        "when",
        "where",
        "which",
        "while",
        "have",
        "will",
        "would",
        "should",
        "could",
        "their",
        "them",
        "they",
        "then",
        "than",
        "only",
    }
)

STRUCTURAL_HEADINGS = (
    "introduction",
    "methodology",
    "methods",
    "results",
    "discussion",
    "conclusion",
    "limitations",
    "future work",
    "references",
)

_NON_TERM_CHARS = re.compile(r"[^a-z0-9\s]")


@dataclass(frozen=True)
class RankedChunk:
    index: int
    score: float


def extract_query_terms(query: str) -> list[str]:
    """Lowercase, de-duplicated query terms in first-seen order."""
    cleaned = _NON_TERM_CHARS.sub(" ", query.lower())
    terms: list[str] = []
    for token in cleaned.split():
        if len(token) < MIN_TERM_LENGTH or token in STOPWORDS or token in terms:
            continue
        terms.append(token)
    return terms[:MAX_QUERY_TERMS]


def score_chunk(text: str, terms: Sequence[str]) -> float:
    lower = text.lower()
    score = 0.0
    for term in terms:
        long_term = len(term) >= LONG_TERM_LENGTH
        weight = LONG_TERM_WEIGHT if long_term else SHORT_TERM_WEIGHT
        score += weight * lower.count(term)
    for heading in STRUCTURAL_HEADINGS:
        score += HEADING_BONUS * lower.count(heading)
    return score


def rank_chunks(chunks: Sequence[Chunk], query: str) -> list[RankedChunk]:
    """Rank chunks by descending score; ties keep document order."""
    terms = extract_query_terms(query)
    ranked = [
        RankedChunk(index=c.index, score=score_chunk(c.text, terms)) for c in chunks
    ]
    return sorted(ranked, key=lambda r: (-r.score, r.index))
