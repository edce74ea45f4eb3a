import pytest

from cpmgraph.builder import build, find_root_tasks, find_terminal_tasks
from cpmgraph.errors import InvalidInput
from cpmgraph.models import END, START


@pytest.mark.parametrize("tasks", [None, [], ()])
def test_empty_input_is_rejected(tasks):
    with pytest.raises(InvalidInput, match="at least one task"):
        build(tasks)


def test_no_root_tasks(make_task):
    tasks = [make_task("A", ["B"]), make_task("B", ["A"])]
    with pytest.raises(InvalidInput, match="No root tasks"):
        build(tasks)


def test_single_task_with_dependency_is_rejected(make_task):
    with pytest.raises(InvalidInput):
        build([make_task("A", ["B"])])


def test_dangling_dependency(make_task):
    tasks = [make_task("A"), make_task("B", ["A", "ghost"])]
    with pytest.raises(InvalidInput, match="dangling dependency ghost"):
        build(tasks)


def test_self_dependency(make_task):
    tasks = [make_task("A"), make_task("B", ["B"])]
    with pytest.raises(InvalidInput, match="depends on itself"):
        build(tasks)


def test_duplicate_code(make_task):
    with pytest.raises(InvalidInput, match="Duplicate"):
        build([make_task("A"), make_task("A")])


@pytest.mark.parametrize("code", [START, END])
def test_reserved_code(make_task, code):
    with pytest.raises(InvalidInput, match="reserved"):
        build([make_task(code)])


def test_negative_numbers(make_task):
    with pytest.raises(InvalidInput, match="negative duration"):
        build([make_task("A", duration=-1)])
    with pytest.raises(InvalidInput, match="negative crew"):
        build([make_task("A", crew=-1)])


def test_roots_and_terminals(diamond_tasks):
    assert [t.code for t in find_root_tasks(diamond_tasks)] == ["firstRoot", "secondRoot", "thirdRoot"]
    assert len(find_terminal_tasks(diamond_tasks)) == 4

    result = build(diamond_tasks)
    assert result.root_codes == {"firstRoot", "secondRoot", "thirdRoot"}
    assert result.terminal_codes == {"firstTerminal", "secondTerminal", "thirdTerminal", "fourthTerminal"}


def test_anchors_are_synthesized(chain_tasks):
    result = build(chain_tasks)
    assert set(result.tasks) == {START, END, "first", "intermediate", "last"}

    start, end = result.tasks[START], result.tasks[END]
    assert start.duration == 0 and start.crew_size == 0 and not start.dependencies
    assert end.duration == 0 and end.crew_size == 0
    assert end.dependencies == {"last"}
    assert result.tasks["first"].dependencies == {START}


def test_adjacency_indexes(diamond_tasks):
    result = build(diamond_tasks)
    preds = [t.code for t in result.predecessors_by_code["intermediate"]]
    succs = [t.code for t in result.successors_by_code["intermediate"]]
    assert preds == ["firstRoot", "secondRoot", "thirdRoot"]
    assert succs == ["firstTerminal", "fourthTerminal", "secondTerminal", "thirdTerminal"]
    assert [t.code for t in result.successors_by_code[START]] == ["firstRoot", "secondRoot", "thirdRoot"]
    assert result.predecessors_by_code[START] == []
    assert result.successors_by_code[END] == []


def test_caller_tasks_are_not_mutated(chain_tasks):
    first = chain_tasks[0]
    result = build(chain_tasks)
    assert first.dependencies == frozenset()
    assert result.tasks["first"] is not first

    again = build(chain_tasks)
    assert again.tasks["first"].dependencies == {START}
    assert again.tasks[END].dependencies == {"last"}


def test_single_task(single_task):
    result = build(single_task)
    assert len(result.tasks) == 3
    assert result.root_codes == result.terminal_codes == {"first"}
