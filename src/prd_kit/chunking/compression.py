import logging
from collections.abc import Sequence
from enum import Enum

from .chunking import Chunk

logger = logging.getLogger(__name__)


class CompressionStrategy(str, Enum):
    """How to pick which chunks survive when there are too many."""

    FIRST = "first"
    DISTRIBUTED = "distributed"
    KEYWORD_BASED = "keyword-based"


def select_chunks(
    chunks: Sequence[Chunk],
    max_chunks: int,
    strategy: CompressionStrategy | str = CompressionStrategy.FIRST,
    keywords: Sequence[str] | None = None,
) -> list[Chunk]:
    """Reduce a chunk list to at most `max_chunks` entries.

    Chunks are returned untouched and in document order. Unknown
    strategies, and keyword selection without keywords, fall back to
    `first`.
    """
    if max_chunks <= 0:
        return []
    if len(chunks) <= max_chunks:
        return list(chunks)

    try:
        strategy = CompressionStrategy(strategy)
    except ValueError:
        logger.debug("Unknown compression strategy %r, using first", strategy)
        strategy = CompressionStrategy.FIRST

    if strategy is CompressionStrategy.DISTRIBUTED:
        return _distributed(chunks, max_chunks)
    if strategy is CompressionStrategy.KEYWORD_BASED:
        terms = [k for k in keywords or [] if k]
        if terms:
            return _by_keywords(chunks, max_chunks, terms)
        logger.debug("No keywords supplied, using first")
    return list(chunks[:max_chunks])


def _distributed(chunks: Sequence[Chunk], max_chunks: int) -> list[Chunk]:
    step = len(chunks) // max_chunks
    return [chunks[i * step] for i in range(max_chunks)]


def score_chunk(chunk: Chunk, keywords: Sequence[str]) -> int:
    """Case-sensitive count of keyword occurrences in the chunk."""
    return sum(chunk.content.count(k) for k in keywords if k)


def _by_keywords(
    chunks: Sequence[Chunk], max_chunks: int, keywords: Sequence[str]
) -> list[Chunk]:
    ranked = sorted(
        range(len(chunks)),
        key=lambda i: (-score_chunk(chunks[i], keywords), i),
    )
    kept = sorted(ranked[:max_chunks])
    return [chunks[i] for i in kept]
