# src/prd_kit/context/config.py

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger(__name__)


class ContextConfig(BaseModel):
    """Chunking and compression settings for context assembly.

    Immutable. Explicit. No magic defaults from environment.
    The strategy thresholds are hand-tuned; adjust them per deployment
    rather than treating them as derived values.
    """

    chunk_size: int = Field(default=1500, gt=0)
    chunk_overlap: int = Field(default=200, ge=0)
    module_chunk_ratio: float = Field(default=0.8, gt=0, le=1)
    global_max_chunks: int = Field(default=5, gt=0)
    module_max_chunks: int = Field(default=3, gt=0)
    global_distributed_limit: int = Field(default=8, gt=0)
    module_first_limit: int = Field(default=6, gt=0)
    max_context_tokens: int = Field(default=2000, gt=0)
    prompt_max_tokens: int = Field(default=1500, gt=0)

    class Config:
        extra = "forbid"
        frozen = True

    @model_validator(mode="after")
    def _overlap_fits_every_chunk_size(self) -> "ContextConfig":
        if self.chunk_overlap >= self.module_chunk_size:
            raise ValueError("chunk_overlap must be < the module chunk size")
        return self

    @property
    def module_chunk_size(self) -> int:
        return int(self.chunk_size * self.module_chunk_ratio)


def load_context_config(path: str | Path) -> ContextConfig:
    """Read a YAML mapping of ContextConfig fields; absent keys keep defaults."""
    logger.info("Loading context config from %s", path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        logger.error("Cannot read context config: %s", path)
        raise
    return ContextConfig(**data)
