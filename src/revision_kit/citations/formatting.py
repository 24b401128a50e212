import json
import logging
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ValidationError

from revision_kit.llms.service import GenerativeService, strip_code_fences
from revision_kit.prompts import PromptsLibrary

logger = logging.getLogger(__name__)

MAX_FORMAT_SAMPLE = 25
FORMAT_MAX_TOKENS = 600
NO_FORMAT_CUES = "Could not confidently detect standard citation formatting cues."


class FormatValidationPayload(BaseModel):
    formatting_errors: list[Any] = []


def describe_format_error(entry: Any) -> str:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, dict):
        if entry.get("issue") and entry.get("description"):
            return f"{entry['issue']}: {entry['description']}"
        return json.dumps(entry)
    return str(entry)


def heuristic_format_errors(text: str) -> list[str]:
    """Structural fallback: a reference list without "et al." looks unformatted."""
    if "et al." in text.lower():
        return []
    return [NO_FORMAT_CUES]


async def validate_citation_formats(
    reference_lines: Sequence[str],
    generative: GenerativeService,
    prompts: PromptsLibrary | None = None,
) -> list[str] | None:
    """Ask the generative service for formatting errors in a sample of references.

    Returns None when the service is unavailable, fails, or answers with
    something that is not the expected JSON, so the caller can fall back.
    """
    if not reference_lines or not generative.is_available():
        return None

    sample = list(reference_lines)[:MAX_FORMAT_SAMPLE]
    messages = (prompts or PromptsLibrary()).messages(
        "citation_format", "1.0", citations="\n".join(sample)
    )
    raw = await generative.chat(messages, max_tokens=FORMAT_MAX_TOKENS)
    if raw is None:
        return None

    try:
        payload = FormatValidationPayload.model_validate_json(strip_code_fences(raw))
    except ValidationError as e:
        logger.warning("Citation format reply was not valid JSON: %s", e.error_count())
        return None
    return [describe_format_error(entry) for entry in payload.formatting_errors]
