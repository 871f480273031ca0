"""Data models for SpecFlow.

This module contains the immutable snapshots the rest of the system passes
around: generated specifications and the tasks of their implementation
plans, plus the pure helpers that derive progress and status from tasks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .errors import InvalidTransitionError

PENDING = "pending"
IN_PROGRESS = "in-progress"
COMPLETED = "completed"

STATUSES: Tuple[str, ...] = (PENDING, IN_PROGRESS, COMPLETED)

_SUCCESSORS: Dict[str, Optional[str]] = {
    PENDING: IN_PROGRESS,
    IN_PROGRESS: COMPLETED,
    COMPLETED: None,
}


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


@dataclass(frozen=True, slots=True)
class Task:
    """One actionable unit of work within a specification."""

    id: int
    title: str
    description: str
    status: str = PENDING

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create from dictionary representation."""
        return cls(
            id=int(data["id"]),
            title=data["title"],
            description=data.get("description", ""),
            status=data.get("status", PENDING),
        )

    def validate(self) -> List[str]:
        """Validate task data and return any issues."""
        issues = []

        if self.id < 1:
            issues.append(f"Task ID must be positive, got: {self.id}")
        if not self.title:
            issues.append("Task title is required")
        if self.status not in STATUSES:
            issues.append(f"Invalid status: {self.status}")

        return issues

    @property
    def is_open(self) -> bool:
        return self.status != COMPLETED


@dataclass(frozen=True, slots=True)
class Specification:
    """A requirements/design/tasks bundle generated from a single prompt."""

    id: int
    title: str
    requirements: str
    design: str
    tasks: Tuple[Task, ...]
    status: str = IN_PROGRESS
    prompt: str = ""
    created_at: str = field(default_factory=_utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "prompt": self.prompt,
            "created_at": self.created_at,
            "requirements": self.requirements,
            "design": self.design,
            "tasks": [task.to_dict() for task in self.tasks],
            "progress": self.progress,
        }

    def to_summary(self) -> Dict[str, Any]:
        """Short form used for listings."""
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "progress": self.progress,
            "completed_tasks": completed_count(self),
            "total_tasks": len(self.tasks),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Specification":
        """Create from dictionary representation."""
        return cls(
            id=int(data["id"]),
            title=data["title"],
            requirements=data.get("requirements", ""),
            design=data.get("design", ""),
            tasks=tuple(Task.from_dict(item) for item in data.get("tasks", [])),
            status=data.get("status", IN_PROGRESS),
            prompt=data.get("prompt", ""),
            created_at=data.get("created_at") or _utc_timestamp(),
        )

    def validate(self) -> List[str]:
        """Validate the specification and its tasks and return any issues."""
        issues = []

        if not self.title:
            issues.append("Specification title is required")
        if self.status not in STATUSES:
            issues.append(f"Invalid status: {self.status}")

        seen = set()
        for task in self.tasks:
            if task.id in seen:
                issues.append(f"Duplicate task ID: {task.id}")
            seen.add(task.id)
            issues.extend(f"Task {task.id}: {issue}" for issue in task.validate())

        return issues

    def find_task(self, task_id: int) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    @property
    def progress(self) -> str:
        """Completed over total tasks, e.g. ``"3/7"``."""
        return f"{completed_count(self)}/{len(self.tasks)}"


def next_status(status: str) -> Optional[str]:
    """Return the stage that follows ``status``, or None once completed."""
    if status not in _SUCCESSORS:
        raise InvalidTransitionError(None, status)
    return _SUCCESSORS[status]


def derive_status(tasks: Iterable[Task]) -> str:
    """Aggregate status of a task list.

    ``completed`` when every task is completed, ``pending`` when every task
    is pending (or there are none), otherwise ``in-progress``.
    """
    statuses = [task.status for task in tasks]
    if statuses and all(status == COMPLETED for status in statuses):
        return COMPLETED
    if all(status == PENDING for status in statuses):
        return PENDING
    return IN_PROGRESS


def completed_count(spec: Specification) -> int:
    return sum(1 for task in spec.tasks if task.status == COMPLETED)


def next_open_task(spec: Specification) -> Optional[Task]:
    """First task in execution order that is not completed yet."""
    for task in spec.tasks:
        if task.is_open:
            return task
    return None
