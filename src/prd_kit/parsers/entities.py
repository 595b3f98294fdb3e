import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from .models import ExtractedEntities

logger = logging.getLogger(__name__)


class EntityVocabulary(BaseModel):
    """Keyword lists used to tag section content.

    Matching is plain substring containment on lower-cased text, so
    "user" also matches "username". Terms should be lower-case.
    """

    actors: list[str] = [
        "user",
        "admin",
        "developer",
        "pengguna",
        "administrator",
        "stakeholder",
    ]
    systems: list[str] = [
        "sistem",
        "system",
        "database",
        "api",
        "service",
        "server",
        "aplikasi",
    ]
    features: list[str] = [
        "fitur",
        "feature",
        "fungsi",
        "function",
        "modul",
        "module",
        "komponen",
    ]

    class Config:
        extra = "forbid"
        frozen = True


DEFAULT_VOCABULARY = EntityVocabulary()


def load_vocabulary(path: str | Path) -> EntityVocabulary:
    """Load a vocabulary from a YAML mapping with `actors`/`systems`/`features`.

    Buckets missing from the file keep their defaults.
    """
    logger.info("Loading entity vocabulary from %s", path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        logger.error("Cannot read entity vocabulary: %s", path)
        raise
    return EntityVocabulary(**data)


def _match_terms(lowered: str, terms: list[str]) -> list[str]:
    # dict keeps first-seen order while dropping duplicate terms
    return list(dict.fromkeys(t for t in terms if t and t.lower() in lowered))


def extract_entities(
    content: Any, vocabulary: EntityVocabulary = DEFAULT_VOCABULARY
) -> ExtractedEntities:
    if not isinstance(content, str) or not content:
        return ExtractedEntities()

    lowered = content.lower()
    return ExtractedEntities(
        actors=_match_terms(lowered, vocabulary.actors),
        systems=_match_terms(lowered, vocabulary.systems),
        features=_match_terms(lowered, vocabulary.features),
    )
