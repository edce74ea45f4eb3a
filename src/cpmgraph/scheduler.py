"""Build, resolve and summarize a CPM schedule."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from cpmgraph import builder, extractor
from cpmgraph.graph import DependencyGraph
from cpmgraph.models import ScheduleResult, Task
from cpmgraph.resolver import resolve

logger = logging.getLogger(__name__)


def build_graph(tasks: Iterable[Task] | None) -> DependencyGraph:
    """Construct the graph and run both passes.

    Raises InvalidInput for a bad task collection and CycleDetected when
    the dependencies loop.
    """
    result = builder.build(tasks)
    graph = DependencyGraph.from_build(result)
    return resolve(graph)


def calculate_schedule(tasks: Iterable[Task] | None) -> ScheduleResult:
    """Full pipeline: graph, forward + backward pass, path and statistics."""
    graph = build_graph(tasks)
    path = extractor.critical_path(graph)
    profile = extractor.resource_profile(graph)
    day, crew = extractor.busiest_day(profile)

    logger.info(
        "Scheduled %d tasks: duration %d, critical path %s",
        len(graph) - 2,
        graph.end.latest_finish,
        " -> ".join(path),
    )
    return ScheduleResult(
        project_duration=graph.end.latest_finish,
        busiest_day=day,
        max_crew_on_site=crew,
        critical_path=path,
        resource_profile=profile,
        tasks=extractor.enriched_tasks(graph),
    )
