from collections.abc import Sequence

from .chunking import Chunk

NO_TEXT_SENTINEL = "No thesis text available."
ELLIPSIS = "..."
BLOCK_SEPARATOR = "\n\n"

# Below this remaining budget no further chunk is started.
MIN_REMAINING_CHARS = 60


def chunk_header(chunk: Chunk) -> str:
    return f"[Chunk {chunk.index + 1} | chars {chunk.start + 1}-{chunk.end}]"


def format_chunk_context(chunks: Sequence[Chunk], max_chars: int) -> str:
    """Render chunks as headed blocks whose total length stays within max_chars."""
    if not chunks:
        return NO_TEXT_SENTINEL

    blocks: list[str] = []
    remaining = max_chars

    for chunk in chunks:
        if remaining <= MIN_REMAINING_CHARS:
            break

        header = chunk_header(chunk)
        header_cost = (len(BLOCK_SEPARATOR) if blocks else 0) + len(header) + 1
        body_budget = remaining - header_cost
        if body_budget <= len(ELLIPSIS):
            break

        body = chunk.text
        if len(body) > body_budget:
            body = body[: body_budget - len(ELLIPSIS)].rstrip() + ELLIPSIS

        blocks.append(f"{header}\n{body}")
        remaining -= header_cost + len(body)

    if not blocks:
        return NO_TEXT_SENTINEL
    return BLOCK_SEPARATOR.join(blocks)
