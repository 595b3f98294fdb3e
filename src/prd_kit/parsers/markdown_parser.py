# parsers/markdown_parser.py

import logging
import re
import uuid
from time import monotonic
from typing import Any

from prd_kit.observability import names
from prd_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import DocumentParser
from .entities import DEFAULT_VOCABULARY, EntityVocabulary, extract_entities
from .models import ParseResult, Section
from .task_tree import (
    build_task_tree,
    collect_entity_totals,
    count_tasks,
    level_histogram,
)

logger = logging.getLogger(__name__)

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")


def _normalize(raw_text: str) -> str:
    # Upload handlers sometimes hand us double-escaped JSON bodies
    return raw_text.replace("\\n", "\n")


def detect_sections(
    raw_text: Any, vocabulary: EntityVocabulary = DEFAULT_VOCABULARY
) -> list[Section]:
    """Slice a markdown document into heading-delimited sections.

    Text before the first heading is dropped; a document without
    headings has no sections.
    """
    if not isinstance(raw_text, str) or not raw_text:
        return []

    sections: list[Section] = []
    heading: tuple[int, str] | None = None
    body: list[str] = []

    def close() -> None:
        if heading is None:
            return
        level, title = heading
        content = "\n".join(body).strip()
        sections.append(
            Section(
                id=str(uuid.uuid4()),
                title=title,
                level=level,
                content=content,
                entities=extract_entities(content, vocabulary),
            )
        )

    for line in _normalize(raw_text).split("\n"):
        match = HEADING_PATTERN.match(line)
        if match:
            close()
            heading = (len(match.group(1)), match.group(2).strip())
            body = []
        elif heading is not None:
            body.append(line)

    close()
    return sections


class MarkdownParser(DocumentParser):
    """
    Heading-driven PRD parser.
    - `#` to `######` headings open sections
    - Section nesting follows heading depth
    - Entities are tagged per section from a keyword vocabulary
    """

    def __init__(
        self,
        vocabulary: EntityVocabulary = DEFAULT_VOCABULARY,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.vocabulary = vocabulary
        self.metrics_hook = metrics_hook

    def parse(self, raw_text: Any) -> ParseResult:
        if not isinstance(raw_text, str) or not raw_text:
            logger.debug(
                "Ignoring document input of type %s", type(raw_text).__name__
            )
            return ParseResult()

        start = monotonic()
        sections = detect_sections(raw_text, self.vocabulary)
        task_tree = build_task_tree(sections)
        total = count_tasks(task_tree)

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.PARSE_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.PARSE_SECTIONS_DETECTED, len(sections))
        self.metrics_hook.increment(names.PARSE_TASKS_BUILT, total)
        logger.debug(
            "Parsed %d sections into %d root tasks in %.2f ms",
            len(sections),
            len(task_tree),
            elapsed_ms,
        )

        return ParseResult(
            sections=sections,
            task_tree=task_tree,
            total_task_count=total,
            level_histogram=level_histogram(task_tree),
            entity_totals=collect_entity_totals(task_tree),
            input_size=len(_normalize(raw_text)),
        )


def parse_document(
    raw_text: Any,
    *,
    vocabulary: EntityVocabulary = DEFAULT_VOCABULARY,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> ParseResult:
    return MarkdownParser(vocabulary, metrics_hook).parse(raw_text)
