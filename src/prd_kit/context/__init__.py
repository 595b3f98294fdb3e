from .config import ContextConfig, load_context_config
from .keywords import extract_domain_keywords, extract_relevant_keywords
from .models import (
    ChunkedContext,
    CompressionMetadata,
    GlobalContext,
    ModuleContext,
    PromptContext,
    StepContext,
)
from .policy import select_compression_strategy
from .stack import ContextStackManager

__all__ = [
    "ChunkedContext",
    "CompressionMetadata",
    "ContextConfig",
    "ContextStackManager",
    "GlobalContext",
    "ModuleContext",
    "PromptContext",
    "StepContext",
    "extract_domain_keywords",
    "extract_relevant_keywords",
    "load_context_config",
    "select_compression_strategy",
]
