"""Typer CLI for cpmgraph."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cpmgraph import builder
from cpmgraph.errors import ScheduleError
from cpmgraph.graph import DependencyGraph
from cpmgraph.log import configure_logging
from cpmgraph.models import ScheduleResult
from cpmgraph.persistence import DEFAULT_TASKS_FILE, Store
from cpmgraph.resolver import resolve
from cpmgraph.scheduler import calculate_schedule

app = typer.Typer(
    name="cpmgraph",
    help="Critical-path schedule analysis for task dependency files.",
    no_args_is_help=True,
)
console = Console()

FileOption = Annotated[
    Path,
    typer.Option("--file", "-f", envvar="CPMGRAPH_FILE", help="Task file (JSON)"),
]


def _fail(message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]", soft_wrap=True)
    raise typer.Exit(1)


def _load_schedule(path: Path) -> ScheduleResult:
    try:
        _, tasks = Store(path).load()
        return calculate_schedule(tasks)
    except ScheduleError as e:
        _fail(str(e))


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option("--log-level", envvar="CPMGRAPH_LOG_LEVEL", help="DEBUG, INFO, WARNING or ERROR"),
    ] = "WARNING",
) -> None:
    """Compute earliest/latest dates, slack, the critical path and crew demand."""
    configure_logging(log_level)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def process(
    file: FileOption = Path(DEFAULT_TASKS_FILE),
    as_json: Annotated[bool, typer.Option("--json", help="Print the full result as JSON")] = False,
) -> None:
    """Summarize the schedule: duration, busiest day and critical path."""
    result = _load_schedule(file)

    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    console.print(f"[bold]Project duration:[/bold] {result.project_duration} days")
    console.print(
        f"[bold]Busiest day:[/bold] day {result.busiest_day} "
        f"with {result.max_crew_on_site} workers on site"
    )
    console.print(f"[bold]Critical path:[/bold] {escape(' -> '.join(result.critical_path)) or '-'}")


@app.command("tasks")
def list_tasks(
    file: FileOption = Path(DEFAULT_TASKS_FILE),
    critical_only: Annotated[bool, typer.Option("--critical", "-c", help="Only show zero-slack tasks")] = False,
    csv: Annotated[Optional[str], typer.Option("--csv", help="Export tasks to CSV file")] = None,
) -> None:
    """List tasks with their start and finish windows."""
    result = _load_schedule(file)
    enriched = [t for t in result.tasks if t.is_critical] if critical_only else result.tasks

    if csv:
        import csv as csv_mod

        with Path(csv).open("w", newline="") as f:
            writer = csv_mod.writer(f)
            writer.writerow([
                "Code", "Operation", "Element", "Duration", "Crew",
                "Start From", "Start To", "Finish From", "Finish To", "Slack", "Flags",
            ])
            for t in enriched:
                writer.writerow([
                    t.task.code,
                    t.task.operation_name or "",
                    t.task.element_name or "",
                    t.task.duration,
                    t.task.crew_size,
                    t.start_interval.start,
                    t.start_interval.end,
                    t.end_interval.start,
                    t.end_interval.end,
                    t.slack,
                    "CRITICAL" if t.is_critical else "",
                ])
        console.print(f"[green]Exported {len(enriched)} tasks to {csv}[/green]")
        return

    table = Table(title="Tasks")
    table.add_column("Code")
    table.add_column("Operation")
    table.add_column("Days")
    table.add_column("Crew")
    table.add_column("Start")
    table.add_column("Finish")
    table.add_column("Slack")
    table.add_column("Flags")

    for t in enriched:
        table.add_row(
            t.task.code,
            t.task.operation_name or "-",
            str(t.task.duration),
            str(t.task.crew_size),
            f"{t.start_interval.start}-{t.start_interval.end}",
            f"{t.end_interval.start}-{t.end_interval.end}",
            str(t.slack),
            "CRITICAL" if t.is_critical else "-",
            style="bold yellow" if t.is_critical else None,
        )

    console.print(table)


@app.command("critical-path")
def critical_path(file: FileOption = Path(DEFAULT_TASKS_FILE)) -> None:
    """Display the tasks on the critical path in order."""
    result = _load_schedule(file)
    by_code = {t.task.code: t for t in result.tasks}

    table = Table(title=f"Critical Path ({result.project_duration} days)")
    table.add_column("#")
    table.add_column("Code")
    table.add_column("Operation")
    table.add_column("Days")
    table.add_column("Start")
    table.add_column("Finish")

    for i, code in enumerate(result.critical_path, start=1):
        t = by_code[code]
        table.add_row(
            str(i),
            code,
            t.task.operation_name or "-",
            str(t.task.duration),
            str(t.start_interval.start),
            str(t.end_interval.start),
        )

    console.print(table)


@app.command()
def resources(file: FileOption = Path(DEFAULT_TASKS_FILE)) -> None:
    """Show crew demand for every project day."""
    result = _load_schedule(file)

    table = Table(title="Workers on site")
    table.add_column("Day")
    table.add_column("Crew")
    table.add_column("Load")

    for day, crew in result.resource_profile.items():
        table.add_row(
            str(day),
            str(crew),
            "█" * crew,
            style="bold yellow" if day == result.busiest_day else None,
        )

    console.print(table)
    console.print(f"[dim]Busiest day: {result.busiest_day} ({result.max_crew_on_site} workers)[/dim]")


@app.command()
def validate(file: FileOption = Path(DEFAULT_TASKS_FILE)) -> None:
    """Check that the task file forms a valid, acyclic project."""
    try:
        _, tasks = Store(file).load()
        built = builder.build(tasks)
        graph = resolve(DependencyGraph.from_build(built))
    except ScheduleError as e:
        _fail(str(e))

    console.print(
        f"[green]Valid: {len(built.tasks) - 2} tasks, "
        f"{len(built.root_codes)} root, {len(built.terminal_codes)} terminal, "
        f"duration {graph.end.latest_finish} days[/green]"
    )


if __name__ == "__main__":
    app()
