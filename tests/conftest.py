import pytest

from cpmgraph.models import Task


def _task(code, deps=(), duration=1, crew=1):
    return Task(code=code, duration=duration, crew_size=crew, dependencies=frozenset(deps))


@pytest.fixture
def make_task():
    return _task


@pytest.fixture
def single_task():
    return [_task("first")]


@pytest.fixture
def chain_tasks():
    return [
        _task("first"),
        _task("intermediate", ["first"]),
        _task("last", ["intermediate"]),
    ]


@pytest.fixture
def diamond_tasks():
    return [
        _task("firstRoot"),
        _task("secondRoot"),
        _task("thirdRoot"),
        _task("intermediate", ["firstRoot", "secondRoot", "thirdRoot"]),
        _task("firstTerminal", ["intermediate"]),
        _task("secondTerminal", ["intermediate"]),
        _task("thirdTerminal", ["intermediate"]),
        _task("fourthTerminal", ["intermediate"]),
    ]


@pytest.fixture
def complex_tasks():
    return [
        _task("firstRoot"),
        _task("secondRoot"),
        _task("firstIntermediateTask", ["secondRoot"]),
        _task("secondIntermediateTask", ["firstIntermediateTask"]),
        _task("thirdIntermediateTask", ["firstRoot"]),
        _task("fourthIntermediateTask", ["firstIntermediateTask", "thirdIntermediateTask"]),
        _task("firstTerminal", ["fourthIntermediateTask"]),
        _task("secondTerminal", ["secondRoot"]),
        _task("thirdTerminal", ["secondIntermediateTask"]),
        _task("fourthTerminal", ["thirdIntermediateTask", "firstIntermediateTask", "firstRoot"]),
    ]
