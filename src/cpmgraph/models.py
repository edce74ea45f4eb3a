"""Task model, schedule results and configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

START = "START"
END = "END"
ANCHOR_CODES = frozenset({START, END})


@dataclass(frozen=True)
class ScheduleConfig:
    """Defaults applied to task entries that omit a field."""

    default_duration: int = 0
    default_crew_size: int = 0

    def to_dict(self) -> dict:
        return {
            "default_duration": self.default_duration,
            "default_crew_size": self.default_crew_size,
        }

    @classmethod
    def from_dict(cls, d: dict) -> ScheduleConfig:
        return cls(
            default_duration=d.get("default_duration", 0),
            default_crew_size=d.get("default_crew_size", 0),
        )


@dataclass(frozen=True)
class Equipment:
    name: str
    quantity: int = 0

    def to_dict(self) -> dict:
        return {"name": self.name, "quantity": self.quantity}

    @classmethod
    def from_dict(cls, d: dict) -> Equipment:
        return cls(name=d.get("name", ""), quantity=d.get("quantity") or 0)


@dataclass(frozen=True)
class Task:
    """A single unit of work. Never mutated once created."""

    code: str
    operation_name: str | None = None
    element_name: str | None = None
    duration: int = 0
    crew_size: int = 0
    crew_name: str | None = None
    equipment: tuple[Equipment, ...] = ()
    dependencies: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_anchor(self) -> bool:
        return self.code in ANCHOR_CODES

    def to_dict(self) -> dict:
        d = {
            "taskCode": self.code,
            "operationName": self.operation_name,
            "elementName": self.element_name,
            "duration": self.duration,
            "crew": {"name": self.crew_name, "assignment": self.crew_size},
            "equipment": [e.to_dict() for e in self.equipment],
            "dependencies": sorted(self.dependencies),
        }
        return d

    @classmethod
    def from_dict(cls, d: dict, config: ScheduleConfig | None = None) -> Task:
        """Build a task from a task-file entry, filling a missing duration
        or crew assignment from *config*."""
        config = config or ScheduleConfig()
        crew = d.get("crew") or {}
        duration = d.get("duration")
        crew_size = crew.get("assignment")
        return cls(
            code=d["taskCode"],
            operation_name=d.get("operationName"),
            element_name=d.get("elementName"),
            duration=config.default_duration if duration is None else duration,
            crew_size=config.default_crew_size if crew_size is None else crew_size,
            crew_name=crew.get("name"),
            equipment=tuple(Equipment.from_dict(e) for e in d.get("equipment") or []),
            dependencies=frozenset(d.get("dependencies") or []),
        )


@dataclass(frozen=True)
class Interval:
    start: int
    end: int

    def to_dict(self) -> dict:
        return {"from": self.start, "to": self.end}


@dataclass(frozen=True)
class EnrichedTask:
    """A task with the day ranges it may start and finish in without
    delaying the project."""

    task: Task
    start_interval: Interval
    end_interval: Interval

    @property
    def slack(self) -> int:
        return self.end_interval.end - self.end_interval.start

    @property
    def is_critical(self) -> bool:
        return self.slack == 0

    def to_dict(self) -> dict:
        d = self.task.to_dict()
        d["startInterval"] = self.start_interval.to_dict()
        d["endInterval"] = self.end_interval.to_dict()
        d["slack"] = self.slack
        return d


@dataclass
class ScheduleResult:
    """Everything a consumer needs from one computation."""

    project_duration: int
    busiest_day: int
    max_crew_on_site: int
    critical_path: list[str]
    resource_profile: dict[int, int]
    tasks: list[EnrichedTask]

    def to_dict(self) -> dict:
        return {
            "estimatedProjectDuration": self.project_duration,
            "mostBusyDay": self.busiest_day,
            "maxWorkersOnSite": self.max_crew_on_site,
            "criticalPath": list(self.critical_path),
            "workersOnSiteByDay": {str(day): crew for day, crew in self.resource_profile.items()},
            "tasksWithStartAndEndDates": [t.to_dict() for t in self.tasks],
        }
