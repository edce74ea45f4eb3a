"""MCP server for cpmgraph: exposes schedule analysis tools to AI assistants."""

from __future__ import annotations

import json
import os

from mcp.server.fastmcp import FastMCP

from cpmgraph.errors import ScheduleError
from cpmgraph.log import configure_logging
from cpmgraph.models import ScheduleResult
from cpmgraph.persistence import DEFAULT_TASKS_FILE, Store, parse_tasks
from cpmgraph.scheduler import calculate_schedule

mcp = FastMCP(
    "cpmgraph",
    instructions="""\
cpmgraph runs the Critical Path Method over a set of construction tasks. Each \
task has a code, a duration in days, a crew assignment (workers on site) and \
a list of task codes it depends on.

Key concepts:
- **Earliest/latest start and finish**: day numbers counted from day 0.
- **Slack**: how many days a task can slip without delaying the project.
- **Critical path**: the chain of zero-slack tasks from the first to the last \
day. Delaying any of them delays the whole project.
- **Workers on site**: crew demand per day, counting each task from its \
earliest start up to its latest finish (worst case).

Use get_schedule for the full result, get_critical_path for the critical \
chain only, get_resource_profile for day-by-day crew demand, and \
calculate_schedule_from_tasks when the tasks are given inline rather than \
in a file.\
""",
)


def _tasks_file(tasks_file: str | None) -> str:
    return tasks_file or os.environ.get("CPMGRAPH_FILE", DEFAULT_TASKS_FILE)


def _schedule_from_file(tasks_file: str | None) -> ScheduleResult:
    _, tasks = Store(_tasks_file(tasks_file)).load()
    return calculate_schedule(tasks)


# ---------------------------------------------------------------------------
# Read tools
# ---------------------------------------------------------------------------


@mcp.tool()
def get_schedule(tasks_file: str | None = None) -> str:
    """Compute the full CPM schedule for a task file.

    Args:
        tasks_file: Path to the JSON task file (defaults to $CPMGRAPH_FILE or tasks.json)
    """
    try:
        result = _schedule_from_file(tasks_file)
    except ScheduleError as e:
        return f"Error: {e}"
    return json.dumps(result.to_dict(), indent=2)


@mcp.tool()
def get_critical_path(tasks_file: str | None = None) -> str:
    """Get the ordered critical path: the zero-slack tasks that fix the project duration.

    Args:
        tasks_file: Path to the JSON task file (defaults to $CPMGRAPH_FILE or tasks.json)
    """
    try:
        result = _schedule_from_file(tasks_file)
    except ScheduleError as e:
        return f"Error: {e}"

    by_code = {t.task.code: t for t in result.tasks}
    payload = {
        "project_duration": result.project_duration,
        "task_count": len(result.critical_path),
        "tasks": [by_code[code].to_dict() for code in result.critical_path],
    }
    return json.dumps(payload, indent=2)


@mcp.tool()
def get_resource_profile(tasks_file: str | None = None) -> str:
    """Get workers on site for each project day and the busiest day.

    Args:
        tasks_file: Path to the JSON task file (defaults to $CPMGRAPH_FILE or tasks.json)
    """
    try:
        result = _schedule_from_file(tasks_file)
    except ScheduleError as e:
        return f"Error: {e}"

    payload = {
        "busiest_day": result.busiest_day,
        "max_workers_on_site": result.max_crew_on_site,
        "workers_by_day": {str(day): crew for day, crew in result.resource_profile.items()},
    }
    return json.dumps(payload, indent=2)


@mcp.tool()
def calculate_schedule_from_tasks(tasks: list[dict]) -> str:
    """Compute the CPM schedule for tasks passed inline.

    Args:
        tasks: Task objects with taskCode, duration, crew ({"assignment": n}) and
            dependencies (list of task codes). Missing duration or crew default to 0.
    """
    try:
        result = calculate_schedule(parse_tasks(tasks))
    except ScheduleError as e:
        return f"Error: {e}"
    return json.dumps(result.to_dict(), indent=2)


def main():
    """Entry point for the MCP server."""
    configure_logging(os.environ.get("CPMGRAPH_LOG_LEVEL", "WARNING"))
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
