from prd_kit.chunking.compression import CompressionStrategy

from .config import ContextConfig
from .models import ContextType


def max_chunks_for(context_type: ContextType, config: ContextConfig) -> int:
    if context_type == "global":
        return config.global_max_chunks
    return config.module_max_chunks


def select_compression_strategy(
    total_chunks: int, context_type: ContextType, config: ContextConfig
) -> CompressionStrategy:
    """Pick a strategy from the chunk count.

    The whole document favours even coverage until it gets long; a module
    favours its opening chunks. Past the limits, both rank by keywords.
    """
    if total_chunks <= max_chunks_for(context_type, config):
        return CompressionStrategy.FIRST

    if context_type == "global":
        if total_chunks <= config.global_distributed_limit:
            return CompressionStrategy.DISTRIBUTED
        return CompressionStrategy.KEYWORD_BASED

    if total_chunks <= config.module_first_limit:
        return CompressionStrategy.FIRST
    return CompressionStrategy.KEYWORD_BASED
