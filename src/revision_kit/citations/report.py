import logging
from dataclasses import dataclass

from revision_kit.llms.service import GenerativeService
from revision_kit.prompts import PromptsLibrary

from .extraction import scan_citations
from .formatting import heuristic_format_errors, validate_citation_formats
from .verification import CitationVerifier

logger = logging.getLogger(__name__)

MIN_HEALTH_SCORE = 45
ISSUE_PENALTY = 15


@dataclass(frozen=True)
class CitationReport:
    citation_health_score: int
    issues_count: int
    missing_citations: list[str]
    broken_references: list[str]
    formatting_errors: list[str]


def citation_health_score(issues_count: int) -> int:
    return max(MIN_HEALTH_SCORE, 100 - ISSUE_PENALTY * issues_count)


async def build_citation_report(
    text: str,
    *,
    generative: GenerativeService | None = None,
    verifier: CitationVerifier | None = None,
    prompts: PromptsLibrary | None = None,
) -> CitationReport:
    """Run the three citation layers and fold their findings into one score.

    1. Pattern extraction always runs.
    2. Format validation uses the generative service when it is available,
       otherwise (or on any failure) a structural heuristic.
    3. Existence verification runs when a verifier with providers is given.
    """
    scan = scan_citations(text)

    missing_citations: list[str] = []
    if scan.citation_count == 0:
        missing_citations.append("No in-text citations detected.")
    broken_references = (
        [] if scan.has_reference_section else ["Reference section not detected."]
    )

    formatting_errors: list[str] | None = None
    if generative is not None:
        formatting_errors = await validate_citation_formats(
            scan.reference_lines, generative, prompts
        )
    if formatting_errors is None:
        formatting_errors = heuristic_format_errors(text)

    to_verify = scan.reference_lines[:10]
    if verifier is not None and verifier.is_configured() and to_verify:
        try:
            result = await verifier.check_citations_exist(to_verify)
        except Exception as e:
            logger.warning("Citation existence check failed, skipping: %s", e)
        else:
            if result.unverified:
                missing_citations.append(
                    f"{len(result.unverified)} citation(s) could not be verified "
                    "in bibliographic search."
                )

    issues_count = (
        len(missing_citations) + len(broken_references) + len(formatting_errors)
    )
    logger.info(
        "Citation report: citations=%d, references=%d, issues=%d",
        scan.citation_count,
        len(scan.reference_lines),
        issues_count,
    )
    return CitationReport(
        citation_health_score=citation_health_score(issues_count),
        issues_count=issues_count,
        missing_citations=missing_citations,
        broken_references=broken_references,
        formatting_errors=formatting_errors,
    )
