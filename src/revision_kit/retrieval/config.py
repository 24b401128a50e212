# src/revision_kit/retrieval/config.py

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class RetrievalConfig:
    """Configuration for a single retrieval call.

    Immutable. Validated on construction so a bad chunking setup fails at
    startup instead of at call time.
    """

    query: str = ""
    max_chunks: int = 8
    chunk_size: int = 1800
    overlap: int = 250
    max_chars: int = 14000
    ensure_coverage: bool = True

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")
        if self.overlap < 0:
            raise ValueError("overlap must be >= 0")
        if self.max_chunks <= 0:
            raise ValueError("max_chunks must be > 0")
        if self.max_chars <= 0:
            raise ValueError("max_chars must be > 0")

    def with_query(self, query: str) -> "RetrievalConfig":
        return replace(self, query=query)


THESIS_ANALYSIS_PRESET = RetrievalConfig(
    query=(
        "overall thesis objective introduction methodology results discussion "
        "conclusion limitations references contributions"
    ),
    max_chunks=8,
    chunk_size=1800,
    overlap=250,
    max_chars=14000,
    ensure_coverage=True,
)

PREVIOUS_DRAFT_PRESET = RetrievalConfig(
    query="previous thesis draft key arguments methods results limitations",
    max_chunks=3,
    chunk_size=1800,
    overlap=250,
    max_chars=4500,
    ensure_coverage=True,
)

COACHING_QUESTIONS_PRESET = RetrievalConfig(
    query="thesis methodology evidence limitations contribution findings",
    max_chunks=7,
    chunk_size=1800,
    overlap=250,
    max_chars=12000,
    ensure_coverage=True,
)

COACHING_TURN_PRESET = RetrievalConfig(
    max_chunks=4,
    chunk_size=1600,
    overlap=250,
    max_chars=7000,
    ensure_coverage=False,
)
