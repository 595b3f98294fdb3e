from collections.abc import Iterable, Iterator

from .models import EntityTotals, Section, TaskNode


def build_task_tree(sections: Iterable[Section]) -> list[TaskNode]:
    """Nest sections into a task tree by comparing heading levels.

    A heading closes every open heading at its own depth or deeper, so
    equal levels become siblings and skipped depths (h1 -> h4) still nest
    under the nearest shallower heading.
    """
    roots: list[TaskNode] = []
    open_nodes: list[TaskNode] = []

    for section in sections:
        node = TaskNode.from_section(section)

        while open_nodes and open_nodes[-1].level >= node.level:
            open_nodes.pop()

        if open_nodes:
            open_nodes[-1].sub_tasks.append(node)
        else:
            roots.append(node)

        open_nodes.append(node)

    return roots


def iter_task_tree(tasks: Iterable[TaskNode]) -> Iterator[TaskNode]:
    """Depth-first, document-order walk."""
    pending = list(reversed(list(tasks)))
    while pending:
        task = pending.pop()
        yield task
        pending.extend(reversed(task.sub_tasks))


def flatten_task_tree(tasks: Iterable[TaskNode]) -> list[TaskNode]:
    return list(iter_task_tree(tasks))


def count_tasks(tasks: Iterable[TaskNode]) -> int:
    return sum(1 for _ in iter_task_tree(tasks))


def level_histogram(tasks: Iterable[TaskNode]) -> dict[int, int]:
    histogram: dict[int, int] = {}
    for task in iter_task_tree(tasks):
        histogram[task.level] = histogram.get(task.level, 0) + 1
    return histogram


def collect_entity_totals(tasks: Iterable[TaskNode]) -> EntityTotals:
    actors: dict[str, None] = {}
    systems: dict[str, None] = {}
    features: dict[str, None] = {}

    for task in iter_task_tree(tasks):
        actors.update(dict.fromkeys(task.entities.actors))
        systems.update(dict.fromkeys(task.entities.systems))
        features.update(dict.fromkeys(task.entities.features))

    return EntityTotals(
        unique_actors=list(actors),
        unique_systems=list(systems),
        unique_features=list(features),
    )
