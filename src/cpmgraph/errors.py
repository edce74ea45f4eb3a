"""Exceptions raised while building and resolving a schedule."""

from __future__ import annotations


class ScheduleError(Exception):
    """Base class for errors caused by the task input."""


class InvalidInput(ScheduleError, ValueError):
    """The task collection cannot describe a finite project."""


class CycleDetected(ScheduleError, ValueError):
    """A pass could not resolve every node, so the dependencies loop."""

    def __init__(self, direction: str, unresolved: list[str], cycle: list[str] | None = None):
        self.direction = direction
        self.unresolved = unresolved
        self.cycle = cycle or []
        message = f"Circular dependency detected in {direction} pass; unresolved tasks: {', '.join(unresolved)}"
        if self.cycle:
            message += f" (cycle: {' -> '.join(self.cycle + self.cycle[:1])})"
        super().__init__(message)


class InvalidGraph(ScheduleError, RuntimeError):
    """The resolved graph has no zero-slack route from START to END."""


class InvariantViolation(AssertionError):
    """Internal contract broken. Indicates a bug, not bad input."""
