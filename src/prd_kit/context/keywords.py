import re
from typing import Any

from .models import ContextType

TECHNICAL_KEYWORDS = [
    "implementation",
    "system",
    "module",
    "component",
    "service",
    "api",
    "database",
    "authentication",
    "authorization",
    "security",
    "performance",
    "scalability",
    "architecture",
    "design",
    "requirements",
    "features",
    "functionality",
    "integration",
    "testing",
    "deployment",
    "configuration",
    "optimization",
]

CONTEXT_KEYWORDS: dict[str, list[str]] = {
    "global": [
        "project",
        "overview",
        "summary",
        "objectives",
        "goals",
        "scope",
        "technology",
        "stack",
        "platform",
        "infrastructure",
        "framework",
    ],
    "module": [
        "task",
        "step",
        "process",
        "workflow",
        "procedure",
        "method",
        "algorithm",
        "logic",
        "business",
        "rules",
        "validation",
        "processing",
    ],
}

STOP_WORDS = frozenset(
    [
        "The",
        "This",
        "That",
        "An",
        "A",
        "With",
        "From",
        "When",
        "Where",
        "And",
        "For",
        "Into",
        "Is",
        "Are",
        "Was",
        "Were",
        "It",
    ]
)

QUOTED_TERM = re.compile(r'"([^"]+)"')
# Multi-word Title Case phrases first, then single capitalised/PascalCase words
CAPITALIZED_TERM = re.compile(
    r"\b(?:[A-Z][a-z]+(?:[\s-][A-Z][a-z]+)+|[A-Z][a-zA-Z_]+)\b"
)

DOMAIN_KEYWORD_LIMIT = 10
RELEVANT_KEYWORD_LIMIT = 15


def extract_domain_keywords(text: Any) -> list[str]:
    """Quoted terms and capitalised names, in order of appearance."""
    if not isinstance(text, str) or not text:
        return []

    found: dict[str, None] = {}
    remainder = text

    for match in QUOTED_TERM.finditer(text):
        term = match.group(1).strip()
        if 2 < len(term) < 50:
            found.setdefault(term)
        remainder = remainder.replace(match.group(0), "", 1)

    for match in CAPITALIZED_TERM.finditer(remainder):
        term = match.group(0).strip()
        words = term.split(" ")
        if len(words) > 1 and words[0] in STOP_WORDS:
            term = " ".join(words[1:])
        if not term or not 3 < len(term) < 30:
            continue
        if " " not in term and term in STOP_WORDS:
            continue
        found.setdefault(term)

    return list(found)[:DOMAIN_KEYWORD_LIMIT]


def extract_relevant_keywords(text: Any, context_type: ContextType) -> list[str]:
    """Keywords used to rank chunks for keyword-based compression."""
    lowered = text.lower() if isinstance(text, str) else ""
    vocabulary = TECHNICAL_KEYWORDS + CONTEXT_KEYWORDS.get(context_type, [])

    found = dict.fromkeys(k for k in vocabulary if k in lowered)
    for keyword in extract_domain_keywords(text):
        found.setdefault(keyword)

    return list(found)[:RELEVANT_KEYWORD_LIMIT]
