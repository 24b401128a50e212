# Analysis
from .analysis import (
    AzureLanguageSentimentClient,
    ConfidenceAnalysis,
    GeneratedAnalysis,
    HeuristicAnalysis,
    ThesisAnalysis,
    analyze_confidence,
    analyze_thesis,
    assess_confidence,
)

# Citations
from .citations import (
    CitationReport,
    CitationVerifier,
    CrossRefProvider,
    OpenAlexProvider,
    SemanticScholarProvider,
    VerificationConfig,
    build_citation_report,
)

# Diff
from .diff import (
    DiffCapability,
    LineDiff,
    PullRequestDiff,
    build_change_markers,
    build_pull_request_diff,
    calculate_change_counts,
    diff_lines,
)

# LLMs
from .llms import GenerativeService, LLMConfig, create_llm_client

# Observability
from .observability import LoggingMetricsHook, MetricsHook, NoOpMetricsHook

# Prompts
from .prompts import Prompt, PromptsLibrary

# Retrieval
from .retrieval import (
    Chunk,
    RetrievalConfig,
    RetrievedContext,
    chunk_text,
    retrieve_context,
)

__all__ = [
    # Retrieval
    "Chunk",
    "chunk_text",
    "RetrievalConfig",
    "RetrievedContext",
    "retrieve_context",
    # Diff
    "LineDiff",
    "diff_lines",
    "DiffCapability",
    "PullRequestDiff",
    "build_pull_request_diff",
    "calculate_change_counts",
    "build_change_markers",
    # Citations
    "CitationVerifier",
    "VerificationConfig",
    "CrossRefProvider",
    "OpenAlexProvider",
    "SemanticScholarProvider",
    "CitationReport",
    "build_citation_report",
    # Analysis
    "ThesisAnalysis",
    "HeuristicAnalysis",
    "GeneratedAnalysis",
    "ConfidenceAnalysis",
    "analyze_thesis",
    "analyze_confidence",
    "assess_confidence",
    "AzureLanguageSentimentClient",
    # LLMs
    "GenerativeService",
    "LLMConfig",
    "create_llm_client",
    # Observability
    "MetricsHook",
    "NoOpMetricsHook",
    "LoggingMetricsHook",
    # Prompts
    "Prompt",
    "PromptsLibrary",
]
