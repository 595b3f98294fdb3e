# Chunking
from .chunking import (
    Chunk,
    ChunkingOptions,
    ChunkMetadata,
    CompressionStrategy,
    chunk_text,
    estimate_tokens,
    fit_to_token_budget,
    select_chunks,
)

# Context assembly
from .context import (
    CompressionMetadata,
    ContextConfig,
    ContextStackManager,
    GlobalContext,
    ModuleContext,
    StepContext,
)

# Observability
from .observability import InMemoryMetricsHook, MetricsHook, NoOpMetricsHook

# Parsing
from .parsers import (
    EntityVocabulary,
    ExtractedEntities,
    MarkdownParser,
    ParseResult,
    Section,
    TaskNode,
    parse_document,
)

__all__ = [
    # Chunking
    "Chunk",
    "ChunkMetadata",
    "ChunkingOptions",
    "CompressionStrategy",
    "chunk_text",
    "estimate_tokens",
    "fit_to_token_budget",
    "select_chunks",
    # Context assembly
    "CompressionMetadata",
    "ContextConfig",
    "ContextStackManager",
    "GlobalContext",
    "ModuleContext",
    "StepContext",
    # Observability
    "InMemoryMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Parsing
    "EntityVocabulary",
    "ExtractedEntities",
    "MarkdownParser",
    "ParseResult",
    "Section",
    "TaskNode",
    "parse_document",
]
