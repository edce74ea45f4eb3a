"""Validate a task collection and index it for graph construction."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from cpmgraph.errors import InvalidInput
from cpmgraph.models import ANCHOR_CODES, END, START, Task

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Augmented tasks (anchors included) plus both adjacency indexes."""

    tasks: dict[str, Task]
    predecessors_by_code: dict[str, list[Task]]
    successors_by_code: dict[str, list[Task]]
    root_codes: frozenset[str]
    terminal_codes: frozenset[str]


def find_root_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Tasks with no dependencies, sorted by code."""
    return sorted((t for t in tasks if not t.dependencies), key=lambda t: t.code)


def find_terminal_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Tasks no other task depends on, sorted by code."""
    tasks = list(tasks)
    required = set()
    for task in tasks:
        required.update(task.dependencies)
    return sorted((t for t in tasks if t.code not in required), key=lambda t: t.code)


def _index_by_code(tasks: list[Task]) -> dict[str, Task]:
    by_code: dict[str, Task] = {}
    for task in tasks:
        if not task.code:
            raise InvalidInput("Task code must be a non-empty string")
        if task.code in ANCHOR_CODES:
            raise InvalidInput(f"Task code {task.code} is reserved")
        if task.code in by_code:
            raise InvalidInput(f"Duplicate task code {task.code}")
        if task.code in task.dependencies:
            raise InvalidInput(f"Task {task.code} depends on itself")
        if task.duration < 0:
            raise InvalidInput(f"Task {task.code} has negative duration {task.duration}")
        if task.crew_size < 0:
            raise InvalidInput(f"Task {task.code} has negative crew size {task.crew_size}")
        by_code[task.code] = task

    for task in by_code.values():
        for dep in sorted(task.dependencies):
            if dep not in by_code:
                raise InvalidInput(f"Task {task.code} has dangling dependency {dep}")
    return by_code


def build(tasks: Iterable[Task] | None) -> BuildResult:
    """Validate *tasks*, attach START/END anchors and build adjacency.

    Root tasks are re-pointed at START through copies, so the caller's
    task records are left untouched. END depends on every terminal task.
    """
    if tasks is None:
        raise InvalidInput("Provided tasks should not be None and have at least one task")
    tasks = list(tasks)
    if not tasks:
        raise InvalidInput("Provided tasks should not be None and have at least one task")

    by_code = _index_by_code(tasks)

    roots = find_root_tasks(by_code.values())
    if not roots:
        raise InvalidInput("No root tasks: every task depends on another task")
    terminals = find_terminal_tasks(by_code.values())
    logger.debug("Found %d root and %d terminal tasks", len(roots), len(terminals))

    augmented: dict[str, Task] = {
        START: Task(code=START, operation_name=START),
    }
    for code, task in by_code.items():
        if not task.dependencies:
            task = replace(task, dependencies=frozenset({START}))
        augmented[code] = task
    augmented[END] = Task(
        code=END,
        operation_name=END,
        dependencies=frozenset(t.code for t in terminals),
    )

    predecessors_by_code: dict[str, list[Task]] = {}
    successors_by_code: dict[str, list[Task]] = {code: [] for code in augmented}
    for code, task in augmented.items():
        predecessors_by_code[code] = [augmented[dep] for dep in sorted(task.dependencies)]
        for dep in task.dependencies:
            successors_by_code[dep].append(task)
    for successors in successors_by_code.values():
        successors.sort(key=lambda t: t.code)

    return BuildResult(
        tasks=augmented,
        predecessors_by_code=predecessors_by_code,
        successors_by_code=successors_by_code,
        root_codes=frozenset(t.code for t in roots),
        terminal_codes=frozenset(t.code for t in terminals),
    )
