"""Critical path and crew statistics from a fully resolved graph."""

from __future__ import annotations

from cpmgraph.errors import InvalidGraph, InvalidInput
from cpmgraph.graph import DependencyGraph
from cpmgraph.models import EnrichedTask


def critical_path(graph: DependencyGraph) -> list[str]:
    """Codes of the zero-slack chain from START to END, anchors excluded.

    Where several successors have zero slack, the smallest task code wins.
    """
    path: list[str] = []
    current = graph.start
    while current is not graph.end:
        candidates = [s for s in graph.successors(current) if s.is_critical]
        if not candidates:
            raise InvalidGraph(f"Task {current.code} has no successor with zero slack")
        current = min(candidates, key=lambda n: n.code)
        if not current.is_anchor:
            path.append(current.code)
    return path


def resource_profile(graph: DependencyGraph) -> dict[int, int]:
    """Crew on site for each day from 0 to the project end, inclusive.

    A task occupies its crew from its earliest start up to, but not
    including, its latest finish: the worst case over every schedule that
    keeps the project duration.
    """
    nodes = [n for n in graph if not n.is_anchor]
    profile: dict[int, int] = {}
    for day in range(graph.end.latest_finish + 1):
        profile[day] = sum(
            n.task.crew_size for n in nodes if n.earliest_start <= day < n.latest_finish
        )
    return profile


def busiest_day(profile: dict[int, int]) -> tuple[int, int]:
    """(day, crew) with the largest crew; the earliest such day on ties."""
    if not profile:
        raise InvalidInput("Cannot find the busiest day of an empty profile")
    day = min(profile, key=lambda d: (-profile[d], d))
    return day, profile[day]


def enriched_tasks(graph: DependencyGraph) -> list[EnrichedTask]:
    """Caller tasks with start/finish windows, by earliest start then code."""
    nodes = sorted(
        (n for n in graph if not n.is_anchor),
        key=lambda n: (n.earliest_start, n.code),
    )
    return [n.enriched() for n in nodes]
