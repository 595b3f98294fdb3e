# parsers/models.py

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ExtractedEntities:
    actors: list[str] = field(default_factory=list)
    systems: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "actors": list(self.actors),
            "systems": list(self.systems),
            "features": list(self.features),
        }


@dataclass(frozen=True)
class Section:
    """A heading and the body text directly under it.

    `content` excludes nested headings and their bodies.
    """

    id: str
    title: str
    level: int
    content: str
    entities: ExtractedEntities


@dataclass
class TaskNode:
    """One node of the task tree.

    Nodes are only mutated by the tree builder while it attaches
    children; after `build_task_tree` returns, treat them as read-only.
    """

    id: str
    task_name: str
    level: int
    content_summary: str
    entities: ExtractedEntities
    sub_tasks: list["TaskNode"] = field(default_factory=list)
    status: str = "pending"
    dependencies: list[str] = field(default_factory=list)
    priority: str = "medium"
    risk_level: str = "low"

    @classmethod
    def from_section(cls, section: Section) -> "TaskNode":
        return cls(
            id=section.id,
            task_name=section.title,
            level=section.level,
            content_summary=section.content,
            entities=section.entities,
        )

    def to_dict(self) -> dict[str, Any]:
        """Render the subtree with the keys the document store expects."""
        return {
            "id": self.id,
            "taskName": self.task_name,
            "level": self.level,
            "contentSummary": self.content_summary,
            "entities": self.entities.to_dict(),
            "subTasks": [child.to_dict() for child in self.sub_tasks],
            "status": self.status,
            "dependencies": list(self.dependencies),
            "metadata": {"priority": self.priority, "riskLevel": self.risk_level},
        }


@dataclass(frozen=True)
class EntityTotals:
    unique_actors: list[str] = field(default_factory=list)
    unique_systems: list[str] = field(default_factory=list)
    unique_features: list[str] = field(default_factory=list)

    @property
    def total_actors(self) -> int:
        return len(self.unique_actors)

    @property
    def total_systems(self) -> int:
        return len(self.unique_systems)

    @property
    def total_features(self) -> int:
        return len(self.unique_features)


@dataclass(frozen=True)
class ParseResult:
    sections: list[Section] = field(default_factory=list)
    task_tree: list[TaskNode] = field(default_factory=list)
    total_task_count: int = 0
    level_histogram: dict[int, int] = field(default_factory=dict)
    entity_totals: EntityTotals = field(default_factory=EntityTotals)
    input_size: int = 0
