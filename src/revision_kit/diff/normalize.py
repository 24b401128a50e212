import re
from dataclasses import dataclass

# Placeholder emitted by the extraction collaborator when no parser is installed.
PARSER_UNAVAILABLE_MARKER = "text extraction is unavailable in this environment"

BINARY_SAMPLE_CHARS = 3000
BINARY_NON_PRINTABLE_RATIO = 0.08
BINARY_SAMPLE_LENGTH_LIMIT = 1200

_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")
_WHITESPACE = re.compile(r"\s+")
_PDF_VERSION = re.compile(r"%PDF-\d\.\d")
_PDF_OBJECTS = re.compile(r"/FlateDecode|endobj|stream x|/Type\s*/Page")


@dataclass(frozen=True)
class NormalizedLines:
    lines: list[str]
    truncated: bool


def normalize_diff_lines(text: str, max_lines: int | None = None) -> NormalizedLines:
    """Split text into whitespace-collapsed, non-blank lines.

    Text without any newline is split on sentence terminators instead, so a
    flattened extraction still diffs sentence by sentence.
    """
    cleaned = text.replace("\r\n", "\n").strip()
    if not cleaned:
        return NormalizedLines(lines=[], truncated=False)

    if "\n" in cleaned:
        raw_lines = cleaned.split("\n")
    else:
        raw_lines = _SENTENCE_SPLIT.split(cleaned)

    lines = [_WHITESPACE.sub(" ", line.strip()) for line in raw_lines]
    lines = [line for line in lines if line]

    if not max_lines or len(lines) <= max_lines:
        return NormalizedLines(lines=lines, truncated=False)
    return NormalizedLines(lines=lines[:max_lines], truncated=True)


def is_printable_ascii(char: str) -> bool:
    code = ord(char)
    return code in (9, 10, 13) or 32 <= code <= 126


def reports_parser_missing(text: str) -> bool:
    return PARSER_UNAVAILABLE_MARKER in text


def is_binary_extraction(text: str) -> bool:
    """True when the "text" is really a raw PDF byte stream."""
    sample = text[:BINARY_SAMPLE_CHARS]
    if not sample:
        return False
    if reports_parser_missing(sample):
        return True
    if not (_PDF_VERSION.search(sample) or _PDF_OBJECTS.search(sample)):
        return False

    non_printable = sum(1 for char in sample if not is_printable_ascii(char))
    return (
        non_printable / len(sample) > BINARY_NON_PRINTABLE_RATIO
        or len(sample) > BINARY_SAMPLE_LENGTH_LIMIT
    )
