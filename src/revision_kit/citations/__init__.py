from .extraction import CitationScan, extract_reference_lines, scan_citations
from .formatting import heuristic_format_errors, validate_citation_formats
from .providers import (
    BibliographicProvider,
    CrossRefProvider,
    OpenAlexProvider,
    SemanticScholarProvider,
)
from .report import CitationReport, build_citation_report, citation_health_score
from .verification import (
    CitationVerificationResult,
    CitationVerifier,
    VerificationConfig,
    citation_query,
)

__all__ = [
    "CitationScan",
    "scan_citations",
    "extract_reference_lines",
    "validate_citation_formats",
    "heuristic_format_errors",
    "BibliographicProvider",
    "CrossRefProvider",
    "OpenAlexProvider",
    "SemanticScholarProvider",
    "CitationVerifier",
    "VerificationConfig",
    "CitationVerificationResult",
    "citation_query",
    "CitationReport",
    "build_citation_report",
    "citation_health_score",
]
