# src/prd_kit/context/models.py

from dataclasses import dataclass, field
from typing import Literal

from prd_kit.chunking.chunking import Chunk
from prd_kit.chunking.compression import CompressionStrategy
from prd_kit.parsers.models import ExtractedEntities

ContextType = Literal["global", "module"]
Complexity = Literal["simple", "medium", "complex"]


@dataclass(frozen=True)
class CompressionMetadata:
    """How much of a text survived chunk selection.

    `compression_ratio` is kept / total chunk count, not a byte ratio.
    """

    original_length: int
    chunks_count: int
    compression_ratio: float
    strategy: CompressionStrategy


@dataclass(frozen=True)
class ChunkedContext:
    chunks: list[Chunk]
    compression: CompressionMetadata


@dataclass(frozen=True)
class GlobalContext:
    summary: str
    project_type: str
    complexity: Complexity
    tech_stack: list[str]
    chunks: list[Chunk]
    compression: CompressionMetadata


@dataclass(frozen=True)
class ModuleContext:
    module_id: str
    module_title: str
    summary: str
    related_entities: ExtractedEntities
    chunks: list[Chunk]
    compression: CompressionMetadata


@dataclass(frozen=True)
class StepContext:
    task_id: str
    step_summary: str
    relevant_entities: ExtractedEntities


@dataclass(frozen=True)
class PromptContext:
    """Chunk texts selected for one prompt, with their estimated token cost."""

    global_chunks: list[str] = field(default_factory=list)
    module_chunks: list[str] = field(default_factory=list)
    total_tokens: int = 0
