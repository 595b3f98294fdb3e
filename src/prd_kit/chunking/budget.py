import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import replace
from typing import Any

from .chunking import Chunk

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN = 4
# Partial chunks need this much budget and content to be worth keeping
MIN_PARTIAL_TOKENS = 3
MIN_PARTIAL_CHARS = 10
TRUNCATION_MARKER = "..."


def estimate_tokens(text: Any) -> int:
    """Rough token count: one token per four characters, rounded up."""
    if not isinstance(text, str):
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def count_chunk_tokens(chunks: Iterable[Chunk]) -> int:
    return sum(estimate_tokens(chunk.content) for chunk in chunks)


def fit_to_token_budget(chunks: Sequence[Chunk], max_tokens: int) -> list[Chunk]:
    """Keep a prefix of `chunks` that fits in `max_tokens`.

    The first chunk that does not fit may be kept in truncated form
    (ending in "..."); nothing after it is considered.
    """
    kept: list[Chunk] = []
    used = 0

    for chunk in chunks:
        tokens = estimate_tokens(chunk.content)
        if used + tokens <= max_tokens:
            kept.append(chunk)
            used += tokens
            continue

        partial = _truncate(chunk, max_tokens - used)
        if partial is not None:
            kept.append(partial)
        logger.debug(
            "Token budget %d reached after %d of %d chunks (partial=%s)",
            max_tokens,
            len(kept),
            len(chunks),
            partial is not None,
        )
        break

    return kept


def _truncate(chunk: Chunk, remaining_tokens: int) -> Chunk | None:
    if remaining_tokens < MIN_PARTIAL_TOKENS:
        return None

    max_chars = remaining_tokens * CHARS_PER_TOKEN
    content = chunk.content[:max_chars]
    last_space = content.rfind(" ")
    if last_space > max_chars * 0.5:
        content = content[:last_space]

    if len(content) < MIN_PARTIAL_CHARS:
        return None

    content += TRUNCATION_MARKER
    return Chunk(
        content=content,
        metadata=replace(chunk.metadata, size=len(content)),
    )
