import re
from dataclasses import dataclass

REFERENCE_SECTION_CHARS = 8000
MAX_REFERENCE_LINES = 50
MIN_REFERENCE_LINE_CHARS = 20

AUTHOR_YEAR_CITATION = re.compile(
    r"\([A-Z][A-Za-z]+(?:,\s*[A-Z][A-Za-z]+)?,\s*\d{4}(?:,\s*p\.?\s*\d+)?\)"
)
NUMERIC_CITATION = re.compile(r"\[\d+(?:[-–]\d+)?\]")
REFERENCE_HEADING = re.compile(r"references|bibliography", re.IGNORECASE)
REFERENCE_SECTION = re.compile(
    r"(?:references|bibliography)\s*\n([\s\S]{0,%d})" % REFERENCE_SECTION_CHARS,
    re.IGNORECASE,
)


@dataclass(frozen=True)
class CitationScan:
    """Everything the pattern layer finds in one document."""

    author_year: list[str]
    numeric: list[str]
    reference_lines: list[str]
    has_reference_section: bool

    @property
    def citation_count(self) -> int:
        return len(self.author_year) + len(self.numeric)


def extract_reference_lines(text: str) -> list[str]:
    """Entry lines after the first References/Bibliography heading."""
    match = REFERENCE_SECTION.search(text)
    if not match:
        return []
    lines = (line.strip() for line in match.group(1).split("\n"))
    return [line for line in lines if len(line) > MIN_REFERENCE_LINE_CHARS][
        :MAX_REFERENCE_LINES
    ]


def scan_citations(text: str) -> CitationScan:
    return CitationScan(
        author_year=AUTHOR_YEAR_CITATION.findall(text),
        numeric=NUMERIC_CITATION.findall(text),
        reference_lines=extract_reference_lines(text),
        has_reference_section=bool(REFERENCE_HEADING.search(text)),
    )
