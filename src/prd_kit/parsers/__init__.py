from .base import DocumentParser
from .entities import (
    DEFAULT_VOCABULARY,
    EntityVocabulary,
    extract_entities,
    load_vocabulary,
)
from .markdown_parser import MarkdownParser, detect_sections, parse_document
from .models import EntityTotals, ExtractedEntities, ParseResult, Section, TaskNode
from .task_tree import build_task_tree, count_tasks, flatten_task_tree

__all__ = [
    "DEFAULT_VOCABULARY",
    "DocumentParser",
    "EntityTotals",
    "EntityVocabulary",
    "ExtractedEntities",
    "MarkdownParser",
    "ParseResult",
    "Section",
    "TaskNode",
    "build_task_tree",
    "count_tasks",
    "detect_sections",
    "extract_entities",
    "flatten_task_tree",
    "load_vocabulary",
    "parse_document",
]
