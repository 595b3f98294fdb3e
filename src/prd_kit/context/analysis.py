"""Heuristics that describe a PRD as a whole: summary, type, complexity, stack."""

import re
from collections.abc import Iterable

from prd_kit.parsers.models import ParseResult, TaskNode
from prd_kit.parsers.task_tree import iter_task_tree

from .models import Complexity

SUMMARY_HEADING = re.compile(
    r"^#{1,3}\s*(pendahuluan|introduction|executive summary|overview|ringkasan)",
    re.IGNORECASE,
)
SHALLOW_HEADING = re.compile(r"^#{1,3}\s+")

SUMMARY_MAX_LINES = 5
SUMMARY_MAX_CHARS = 500
MODULE_SUMMARY_MAX_CHARS = 300
TECH_STACK_LIMIT = 8

# First matching rule wins; platform terms are the most specific signal
PROJECT_TYPE_RULES: list[tuple[str, tuple[str, ...]]] = [
    ("System/Platform", ("sistem", "platform", "orchestrator")),
    ("Mobile Application", ("mobile app", "aplikasi mobile")),
    ("Web Application", ("web app", "aplikasi web", "website")),
    ("Desktop Application", ("desktop", "aplikasi desktop")),
    ("API/Backend Service", ("api", "backend", "microservice")),
]
DEFAULT_PROJECT_TYPE = "Software Application"

KNOWN_TECHNOLOGIES = [
    "next.js",
    "react",
    "typescript",
    "node.js",
    "mongodb",
    "express",
    "tailwind",
    "prisma",
    "postgresql",
    "mysql",
    "redis",
    "docker",
    "kubernetes",
    "aws",
    "azure",
    "gcp",
    "firebase",
    "vercel",
]


def _clip(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def extract_project_summary(text: str) -> str:
    """Up to five lines from the introduction/overview section.

    Falls back to the opening of the document when no such section exists.
    """
    lines: list[str] = []
    in_summary = False

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if SUMMARY_HEADING.match(line):
            in_summary = True
            continue
        if not in_summary:
            continue
        if SHALLOW_HEADING.match(line):
            break
        if line and not line.startswith("#"):
            lines.append(line)
            if len(lines) >= SUMMARY_MAX_LINES:
                break

    if not lines:
        return _clip(text, SUMMARY_MAX_CHARS)
    return _clip(" ".join(lines), SUMMARY_MAX_CHARS)


def detect_project_type(text: str) -> str:
    lowered = text.lower()
    for project_type, terms in PROJECT_TYPE_RULES:
        if any(term in lowered for term in terms):
            return project_type
    return DEFAULT_PROJECT_TYPE


def analyze_complexity(result: ParseResult) -> Complexity:
    tasks = result.total_task_count
    systems = result.entity_totals.total_systems
    features = result.entity_totals.total_features

    score = 0
    if tasks > 20:
        score += 3
    elif tasks > 10:
        score += 2
    elif tasks >= 5:
        score += 1

    if systems > 8:
        score += 3
    elif systems >= 5:
        score += 2
    elif systems > 2:
        score += 1

    if features > 15:
        score += 2
    elif features >= 5:
        score += 1

    if score >= 6:
        return "complex"
    if score >= 3:
        return "medium"
    return "simple"


def extract_tech_stack(text: str, task_tree: Iterable[TaskNode] = ()) -> list[str]:
    lowered = text.lower()
    stack = dict.fromkeys(t for t in KNOWN_TECHNOLOGIES if t in lowered)

    for task in iter_task_tree(task_tree):
        for system in task.entities.systems:
            if len(system) > 2:
                stack.setdefault(system.lower())

    return list(stack)[:TECH_STACK_LIMIT]


def generate_module_summary(node: TaskNode) -> str:
    summary = _clip(node.content_summary, MODULE_SUMMARY_MAX_CHARS)
    if node.sub_tasks:
        summary += f" (covers {len(node.sub_tasks)} sub-tasks)"
    return summary


def generate_module_detailed_content(node: TaskNode) -> str:
    """Flatten a root task and two levels of sub-tasks into chunkable text."""
    parts = [
        f"Module: {node.task_name or 'Untitled Module'}",
        f"Summary: {node.content_summary or 'No summary available.'}",
    ]

    entities = node.entities
    if entities.actors:
        parts.append(f"Actors: {', '.join(entities.actors)}")
    if entities.systems:
        parts.append(f"Systems: {', '.join(entities.systems)}")
    if entities.features:
        parts.append(f"Features: {', '.join(entities.features)}")

    if node.sub_tasks:
        parts.append(f"\nSub-tasks ({len(node.sub_tasks)}):")
        for i, sub in enumerate(node.sub_tasks, start=1):
            parts.append(
                f"{i}. {sub.task_name or 'Untitled Subtask'}: "
                f"{sub.content_summary or 'No summary.'}"
            )
            for j, nested in enumerate(sub.sub_tasks, start=1):
                parts.append(
                    f"   {i}.{j}. {nested.task_name or 'Untitled Nested Subtask'}: "
                    f"{nested.content_summary or 'No summary.'}"
                )

    return "\n".join(parts)
