import pytest

from cpmgraph.builder import build
from cpmgraph.errors import InvariantViolation
from cpmgraph.graph import DependencyGraph, Node
from cpmgraph.models import END, START, Task


def test_graph_has_one_node_per_task(complex_tasks):
    graph = DependencyGraph.from_build(build(complex_tasks))
    assert len(graph) == 12
    assert graph.start.code == START
    assert graph.end.code == END
    assert all(t.code in graph for t in complex_tasks)


def test_links_are_mutual_inverses(complex_tasks):
    graph = DependencyGraph.from_build(build(complex_tasks))
    for node in graph:
        for pred in graph.predecessors(node):
            assert node.code in pred.successors
        for succ in graph.successors(node):
            assert node.code in succ.predecessors


def test_every_inner_node_is_connected(complex_tasks):
    graph = DependencyGraph.from_build(build(complex_tasks))
    for node in graph:
        if node is not graph.start:
            assert node.predecessors
        if node is not graph.end:
            assert node.successors


def test_diamond_intermediate_neighbours(diamond_tasks):
    graph = DependencyGraph.from_build(build(diamond_tasks))
    intermediate = graph["intermediate"]
    assert len(intermediate.predecessors) == 3
    assert len(intermediate.successors) == 4
    assert [n.code for n in graph.successors(graph.start)] == ["firstRoot", "secondRoot", "thirdRoot"]


def test_lookup_by_task(chain_tasks):
    result = build(chain_tasks)
    graph = DependencyGraph.from_build(result)
    node = graph.node_for(chain_tasks[1])
    assert node.code == "intermediate"
    assert node.duration == 1
    assert node.earliest_start is None
    assert not node.resolved_forward and not node.resolved_backward


def test_missing_anchor_is_an_invariant_violation():
    start = Task(START)
    with pytest.raises(InvariantViolation):
        DependencyGraph({START: start}, {START: []}, {START: []})


def test_find_cycle(make_task):
    tasks = {
        START: Task(START),
        "A": make_task("A", ["B"]),
        "B": make_task("B", ["A"]),
        END: Task(END),
    }
    preds = {START: [], "A": [tasks["B"]], "B": [tasks["A"]], END: []}
    succs = {START: [], "A": [tasks["B"]], "B": [tasks["A"]], END: []}
    graph = DependencyGraph(tasks, preds, succs)
    assert set(graph.find_cycle()) == {"A", "B"}


def test_no_cycle(chain_tasks):
    graph = DependencyGraph.from_build(build(chain_tasks))
    assert graph.find_cycle() == []


def test_node_resolution_arithmetic():
    a = Node.for_task(Task("A", duration=2))
    b = Node.for_task(Task("B", duration=3))
    c = Node.for_task(Task("C", duration=4))
    a.resolve_forward([])
    b.resolve_forward([a])
    c.resolve_forward([a, b])
    assert (c.earliest_start, c.earliest_finish) == (5, 9)

    c.resolve_backward([])
    assert (c.latest_start, c.latest_finish, c.slack) == (5, 9, 0)
    b.resolve_backward([c])
    assert (b.latest_start, b.latest_finish, b.slack) == (2, 5, 0)
    a.resolve_backward([b, c])
    assert (a.latest_start, a.latest_finish, a.slack) == (0, 2, 0)


def test_node_is_critical_follows_slack():
    node = Node.for_task(Task("A", duration=1))
    assert not node.is_critical
    node.slack = 0
    assert node.is_critical
    node.slack = 2
    assert not node.is_critical
