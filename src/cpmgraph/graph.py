"""Bidirectional dependency graph of CPM nodes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

import networkx as nx

from cpmgraph.builder import BuildResult
from cpmgraph.errors import InvariantViolation
from cpmgraph.models import END, START, EnrichedTask, Interval, Task


@dataclass(eq=False)
class Node:
    """Computed metrics for one task inside one graph.

    ``predecessors`` and ``successors`` hold task codes into the owning
    graph's node table, not the nodes themselves.
    """

    task: Task
    duration: int = 0
    earliest_start: int | None = None
    earliest_finish: int | None = None
    latest_start: int | None = None
    latest_finish: int | None = None
    slack: int | None = None
    resolved_forward: bool = False
    resolved_backward: bool = False
    predecessors: set[str] = field(default_factory=set)
    successors: set[str] = field(default_factory=set)

    @classmethod
    def for_task(cls, task: Task) -> Node:
        return cls(task=task, duration=task.duration)

    @property
    def code(self) -> str:
        return self.task.code

    @property
    def is_anchor(self) -> bool:
        return self.task.is_anchor

    @property
    def is_critical(self) -> bool:
        return self.slack == 0

    def resolve_forward(self, predecessors: Iterable[Node]) -> None:
        """Set earliest start/finish from already resolved predecessors."""
        self.earliest_start = max((p.earliest_finish for p in predecessors), default=0)
        self.earliest_finish = self.earliest_start + self.duration
        self.resolved_forward = True

    def resolve_backward(self, successors: Iterable[Node]) -> None:
        """Set latest start/finish and slack from already resolved successors.

        With no successors (the END node) the latest finish equals the
        earliest finish.
        """
        self.latest_finish = min((s.latest_start for s in successors), default=self.earliest_finish)
        self.latest_start = self.latest_finish - self.duration
        self.slack = self.latest_finish - self.earliest_finish
        self.resolved_backward = True

    def enriched(self) -> EnrichedTask:
        return EnrichedTask(
            task=self.task,
            start_interval=Interval(self.earliest_start, self.latest_start),
            end_interval=Interval(self.earliest_finish, self.latest_finish),
        )

    def __repr__(self) -> str:
        return (
            f"Node({self.code!r}, duration={self.duration}, "
            f"es={self.earliest_start}, ef={self.earliest_finish}, "
            f"ls={self.latest_start}, lf={self.latest_finish}, slack={self.slack})"
        )


class DependencyGraph:
    """Owns every node of one computation, stored on a ``networkx.DiGraph``
    keyed by task code. An edge A -> B means B depends on A."""

    def __init__(
        self,
        tasks: dict[str, Task],
        predecessors_by_code: dict[str, list[Task]],
        successors_by_code: dict[str, list[Task]],
    ):
        self._dag = nx.DiGraph()
        for code, task in tasks.items():
            self._dag.add_node(code, node=Node.for_task(task))
        for code, predecessors in predecessors_by_code.items():
            for pred in predecessors:
                self._dag.add_edge(pred.code, code)
        for code, successors in successors_by_code.items():
            for succ in successors:
                self._dag.add_edge(code, succ.code)

        for code in self._dag:
            node = self[code]
            node.predecessors = set(self._dag.predecessors(code))
            node.successors = set(self._dag.successors(code))

        if START not in self._dag or END not in self._dag:
            raise InvariantViolation("START and END nodes have to exist once the builder has run")

    @classmethod
    def from_build(cls, result: BuildResult) -> DependencyGraph:
        return cls(result.tasks, result.predecessors_by_code, result.successors_by_code)

    @property
    def start(self) -> Node:
        return self[START]

    @property
    def end(self) -> Node:
        return self[END]

    def __getitem__(self, code: str) -> Node:
        return self._dag.nodes[code]["node"]

    def __contains__(self, code: object) -> bool:
        return code in self._dag

    def __len__(self) -> int:
        return self._dag.number_of_nodes()

    def __iter__(self) -> Iterator[Node]:
        for code in sorted(self._dag):
            yield self[code]

    def node_for(self, task: Task) -> Node:
        return self[task.code]

    def predecessors(self, node: Node) -> list[Node]:
        return [self[code] for code in sorted(node.predecessors)]

    def successors(self, node: Node) -> list[Node]:
        return [self[code] for code in sorted(node.successors)]

    def find_cycle(self) -> list[str]:
        """Codes along one dependency cycle, or an empty list."""
        try:
            edges = nx.find_cycle(self._dag)
        except nx.NetworkXNoCycle:
            return []
        return [u for u, _ in edges]
