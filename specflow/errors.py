"""Error types raised by the SpecFlow core.

Each error also derives from the closest builtin exception so callers that
only know about ``ValueError`` or ``LookupError`` keep working.
"""

from __future__ import annotations

from typing import Optional


class SpecFlowError(Exception):
    """Base class for all SpecFlow errors."""

    suggestion: str = ""
    next_suggested_step: Optional[str] = None


class EmptyPromptError(SpecFlowError, ValueError):
    """A specification was requested from a blank prompt."""

    suggestion = "Describe the feature you want to build before generating a specification"
    next_suggested_step = "create_spec"

    def __init__(self) -> None:
        super().__init__("Prompt cannot be empty")


class NoActiveSpecificationError(SpecFlowError, RuntimeError):
    """A task operation was requested while no specification is selected."""

    suggestion = "Select a specification with select_spec or create one with create_spec"
    next_suggested_step = "select_spec"

    def __init__(self) -> None:
        super().__init__("No active specification")


class SpecificationNotFoundError(SpecFlowError, LookupError):
    """The requested specification id is not in the store."""

    suggestion = "Use list_specs to see the available specification ids"
    next_suggested_step = "list_specs"

    def __init__(self, spec_id: int) -> None:
        self.spec_id = spec_id
        super().__init__(f"Specification '{spec_id}' not found")


class TaskNotFoundError(SpecFlowError, LookupError):
    """The requested task id is not part of the active specification."""

    suggestion = "Use list_tasks to see the task ids of the active specification"
    next_suggested_step = "list_tasks"

    def __init__(self, task_id: Optional[int], spec_id: Optional[int] = None) -> None:
        self.task_id = task_id
        self.spec_id = spec_id
        if task_id is None:
            message = f"No open tasks remain in specification '{spec_id}'"
        elif spec_id is None:
            message = f"Task '{task_id}' not found"
        else:
            message = f"Task '{task_id}' not found in specification '{spec_id}'"
        super().__init__(message)


class InvalidTransitionError(SpecFlowError, ValueError):
    """A task status change that skips or reverses a lifecycle stage."""

    suggestion = "Tasks move pending -> in-progress -> completed, one stage at a time"
    next_suggested_step = "list_tasks"

    def __init__(self, current: Optional[str], target: str, task_id: Optional[int] = None) -> None:
        self.current = current
        self.target = target
        self.task_id = task_id
        if current is None:
            message = f"Unknown task status '{target}'"
        elif task_id is None:
            message = f"Cannot move from '{current}' to '{target}'"
        else:
            message = f"Cannot move task '{task_id}' from '{current}' to '{target}'"
        super().__init__(message)
