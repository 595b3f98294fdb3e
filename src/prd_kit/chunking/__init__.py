from .budget import count_chunk_tokens, estimate_tokens, fit_to_token_budget
from .chunking import (
    DEFAULT_SEPARATORS,
    Chunk,
    ChunkingOptions,
    ChunkMetadata,
    chunk_text,
)
from .compression import CompressionStrategy, select_chunks

__all__ = [
    "DEFAULT_SEPARATORS",
    "Chunk",
    "ChunkMetadata",
    "ChunkingOptions",
    "CompressionStrategy",
    "chunk_text",
    "count_chunk_tokens",
    "estimate_tokens",
    "fit_to_token_budget",
    "select_chunks",
]
