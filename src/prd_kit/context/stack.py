# src/prd_kit/context/stack.py

import logging
from collections.abc import Iterable, Sequence
from time import monotonic
from typing import Any

from prd_kit.chunking.budget import estimate_tokens, fit_to_token_budget
from prd_kit.chunking.chunking import (
    Chunk,
    ChunkingOptions,
    ChunkMetadata,
    chunk_text,
)
from prd_kit.chunking.compression import CompressionStrategy, select_chunks
from prd_kit.observability import names
from prd_kit.observability.base import MetricsHook, NoOpMetricsHook
from prd_kit.parsers.markdown_parser import parse_document
from prd_kit.parsers.models import ParseResult, TaskNode
from prd_kit.parsers.task_tree import iter_task_tree

from .analysis import (
    analyze_complexity,
    detect_project_type,
    extract_project_summary,
    extract_tech_stack,
    generate_module_detailed_content,
    generate_module_summary,
)
from .config import ContextConfig
from .keywords import extract_relevant_keywords
from .models import (
    ChunkedContext,
    CompressionMetadata,
    ContextType,
    GlobalContext,
    ModuleContext,
    PromptContext,
    StepContext,
)
from .policy import max_chunks_for, select_compression_strategy

logger = logging.getLogger(__name__)


def _whole_text_chunk(text: str) -> Chunk:
    return Chunk(
        content=text,
        metadata=ChunkMetadata(
            index=0,
            start_position=0,
            end_position=len(text),
            size=len(text),
            has_overlap=False,
        ),
    )


class ContextStackManager:
    """Builds the layered context (global, module, step) fed to prompt generation.

    Stateless between calls: every method works only on its arguments
    and the immutable config.
    """

    def __init__(
        self,
        config: ContextConfig | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.config = config or ContextConfig()
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized ContextStackManager with chunk_size=%d, overlap=%d, max_tokens=%d",
            self.config.chunk_size,
            self.config.chunk_overlap,
            self.config.max_context_tokens,
        )

    def process_text(self, text: Any, context_type: ContextType) -> ChunkedContext:
        """Chunk, compress and token-budget one text."""
        start = monotonic()
        original_length = len(text) if isinstance(text, str) else 0

        chunk_size = (
            self.config.chunk_size
            if context_type == "global"
            else self.config.module_chunk_size
        )
        if 0 < original_length <= chunk_size and text.strip():
            # Small texts are injected whole, paragraphs and all
            chunks = [_whole_text_chunk(text)]
        else:
            options = ChunkingOptions(
                chunk_size=chunk_size, chunk_overlap=self.config.chunk_overlap
            )
            chunks = chunk_text(text, options, metrics_hook=self.metrics_hook)

        strategy = select_compression_strategy(len(chunks), context_type, self.config)
        keywords = None
        if strategy is CompressionStrategy.KEYWORD_BASED:
            keywords = extract_relevant_keywords(text, context_type)
            logger.debug("Ranking %s chunks by keywords: %s", context_type, keywords)

        selected = select_chunks(
            chunks, max_chunks_for(context_type, self.config), strategy, keywords
        )
        final = fit_to_token_budget(selected, self.config.max_context_tokens)
        ratio = len(final) / len(chunks) if chunks else 1.0

        labels = {"context_type": context_type, "strategy": strategy.value}
        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(
            names.CONTEXT_COMPRESSION_DURATION, elapsed_ms, labels=labels
        )
        self.metrics_hook.increment(names.CONTEXT_CHUNKS_KEPT, len(final), labels=labels)
        self.metrics_hook.record_gauge(
            names.CONTEXT_COMPRESSION_RATIO, ratio, labels=labels
        )
        logger.debug(
            "Compressed %s context: %d -> %d chunks with %s",
            context_type,
            len(chunks),
            len(final),
            strategy.value,
        )

        return ChunkedContext(
            chunks=final,
            compression=CompressionMetadata(
                original_length=original_length,
                chunks_count=len(final),
                compression_ratio=ratio,
                strategy=strategy,
            ),
        )

    def extract_global_context(
        self, raw_text: Any, parse_result: ParseResult | None = None
    ) -> GlobalContext | None:
        if not isinstance(raw_text, str) or not raw_text.strip():
            logger.debug("No document text, skipping global context")
            return None

        if parse_result is None:
            parse_result = parse_document(raw_text, metrics_hook=self.metrics_hook)

        chunked = self.process_text(raw_text, "global")
        return GlobalContext(
            summary=extract_project_summary(raw_text),
            project_type=detect_project_type(raw_text),
            complexity=analyze_complexity(parse_result),
            tech_stack=extract_tech_stack(raw_text, parse_result.task_tree),
            chunks=chunked.chunks,
            compression=chunked.compression,
        )

    def extract_module_contexts(
        self, task_tree: Iterable[TaskNode]
    ) -> list[ModuleContext]:
        """One module context per root task."""
        contexts: list[ModuleContext] = []
        for root in task_tree:
            chunked = self.process_text(
                generate_module_detailed_content(root), "module"
            )
            contexts.append(
                ModuleContext(
                    module_id=root.id,
                    module_title=root.task_name,
                    summary=generate_module_summary(root),
                    related_entities=root.entities,
                    chunks=chunked.chunks,
                    compression=chunked.compression,
                )
            )
        logger.debug("Built %d module contexts", len(contexts))
        return contexts

    def get_step_context(self, task: TaskNode) -> StepContext:
        return StepContext(
            task_id=task.id,
            step_summary=task.content_summary,
            relevant_entities=task.entities,
        )

    def find_relevant_module_context(
        self,
        task: TaskNode,
        module_contexts: Sequence[ModuleContext],
        task_tree: Iterable[TaskNode] | None = None,
    ) -> ModuleContext | None:
        """Module context of the task's root, else the first one.

        Without `task_tree` only root tasks can be matched exactly.
        """
        if not module_contexts:
            return None

        by_id = {mc.module_id: mc for mc in module_contexts}
        if task.id in by_id:
            return by_id[task.id]

        for root in task_tree or ():
            if root.id in by_id and any(
                t.id == task.id for t in iter_task_tree(root.sub_tasks)
            ):
                return by_id[root.id]

        return module_contexts[0]

    def get_context_chunks_for_prompt(
        self,
        global_context: GlobalContext | None,
        module_context: ModuleContext | None,
        max_tokens: int | None = None,
    ) -> PromptContext:
        """Whole chunks only: global chunks first, then module chunks."""
        budget = self.config.prompt_max_tokens if max_tokens is None else max_tokens
        used = 0

        def take(chunks: Sequence[Chunk]) -> list[str]:
            nonlocal used
            taken: list[str] = []
            for chunk in chunks:
                tokens = estimate_tokens(chunk.content)
                if used + tokens > budget:
                    break
                taken.append(chunk.content)
                used += tokens
            return taken

        global_chunks = take(global_context.chunks) if global_context else []
        module_chunks: list[str] = []
        if module_context and used < budget:
            module_chunks = take(module_context.chunks)

        return PromptContext(
            global_chunks=global_chunks,
            module_chunks=module_chunks,
            total_tokens=used,
        )
