"""Forward and backward CPM passes over a dependency graph.

Both passes are Kahn-style: a node becomes ready once every neighbour on
the incoming side is resolved, and each node is queued exactly once. Nodes
left over at the end can only sit on or behind a cycle.
"""

from __future__ import annotations

import logging
from collections import deque

from cpmgraph.errors import CycleDetected, InvariantViolation
from cpmgraph.graph import DependencyGraph

logger = logging.getLogger(__name__)


def resolve_forward(graph: DependencyGraph) -> None:
    """Fill earliest start/finish on every node, starting from START."""
    start = graph.start
    start.resolve_forward([])

    pending = {node.code: len(node.predecessors) for node in graph}
    ready = deque([start])
    while ready:
        node = ready.popleft()
        for succ in graph.successors(node):
            pending[succ.code] -= 1
            if pending[succ.code] == 0:
                succ.resolve_forward(graph.predecessors(succ))
                ready.append(succ)

    unresolved = [node.code for node in graph if not node.resolved_forward]
    if unresolved:
        raise CycleDetected("forward", unresolved, graph.find_cycle())
    logger.debug("Forward pass resolved %d nodes, earliest finish %d", len(graph), graph.end.earliest_finish)


def resolve_backward(graph: DependencyGraph) -> None:
    """Fill latest start/finish and slack on every node, starting from END."""
    unfinished = [node.code for node in graph if not node.resolved_forward]
    if unfinished:
        raise InvariantViolation(f"Backward pass needs a completed forward pass; unresolved: {', '.join(unfinished)}")

    end = graph.end
    end.resolve_backward([])

    pending = {node.code: len(node.successors) for node in graph}
    ready = deque([end])
    while ready:
        node = ready.popleft()
        for pred in graph.predecessors(node):
            pending[pred.code] -= 1
            if pending[pred.code] == 0:
                pred.resolve_backward(graph.successors(pred))
                ready.append(pred)

    unresolved = [node.code for node in graph if not node.resolved_backward]
    if unresolved:
        raise CycleDetected("backward", unresolved, graph.find_cycle())
    logger.debug("Backward pass resolved %d nodes", len(graph))


def resolve(graph: DependencyGraph) -> DependencyGraph:
    """Run both passes in order and return *graph*."""
    resolve_forward(graph)
    resolve_backward(graph)
    return graph
