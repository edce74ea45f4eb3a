"""JSON task-file loading."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from cpmgraph.errors import InvalidInput
from cpmgraph.models import ScheduleConfig, Task

logger = logging.getLogger(__name__)

DEFAULT_TASKS_FILE = "tasks.json"


def parse_tasks(entries: list, config: ScheduleConfig | None = None) -> list[Task]:
    """Turn raw task-file entries into tasks, filling defaults from *config*."""
    config = config or ScheduleConfig()
    tasks: list[Task] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict) or not entry.get("taskCode"):
            raise InvalidInput(f"Task entry #{index} has no taskCode")
        code = entry["taskCode"]
        if not isinstance(code, str):
            raise InvalidInput(f"Task entry #{index} has a non-string taskCode {code!r}")
        dependencies = entry.get("dependencies") or []
        if not isinstance(dependencies, list) or not all(isinstance(d, str) for d in dependencies):
            raise InvalidInput(f"Task [{code}] dependencies must be a list of task codes")
        crew = entry.get("crew") or {}
        if not isinstance(crew, dict):
            raise InvalidInput(f"Task [{code}] crew must be an object")

        if entry.get("duration") is None:
            logger.warning(
                "Task [%s] had no duration in the provided file. Setting duration to %d.",
                code,
                config.default_duration,
            )
        if crew.get("assignment") is None:
            logger.warning(
                "Task [%s] had no crew in the provided file. Setting crew assignment to %d.",
                code,
                config.default_crew_size,
            )
        try:
            task = Task.from_dict(entry, config)
        except (TypeError, AttributeError) as e:
            raise InvalidInput(f"Task [{code}] is malformed: {e}") from e
        if not isinstance(task.duration, int) or not isinstance(task.crew_size, int):
            raise InvalidInput(f"Task [{code}] must have integer duration and crew assignment")
        tasks.append(task)
    return tasks


class Store:
    """Reads a task file: either a bare list of tasks or
    ``{"config": {...}, "tasks": [...]}``."""

    def __init__(self, path: str | Path = DEFAULT_TASKS_FILE):
        self.path = Path(path)

    def load(self) -> tuple[ScheduleConfig, list[Task]]:
        """Return (config, tasks)."""
        if not self.path.exists():
            raise InvalidInput(f"Task file {self.path} does not exist")

        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidInput(f"Task file {self.path} cannot be read: {e}") from e
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidInput(f"Task file {self.path} is not valid JSON: {e}") from e

        if isinstance(raw, list):
            config, entries = ScheduleConfig(), raw
        elif isinstance(raw, dict):
            config = ScheduleConfig.from_dict(raw.get("config") or {})
            entries = raw.get("tasks") or []
        else:
            raise InvalidInput(f"Task file {self.path} must hold a list of tasks")

        tasks = parse_tasks(entries, config)
        logger.debug("Loaded %d tasks from %s", len(tasks), self.path)
        return config, tasks
