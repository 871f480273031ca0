"""SpecFlow - prompt-to-specification workflow with task tracking."""

from .config import SpecFlowSettings
from .controller import TaskController
from .errors import (
    EmptyPromptError,
    InvalidTransitionError,
    NoActiveSpecificationError,
    SpecFlowError,
    SpecificationNotFoundError,
    TaskNotFoundError,
)
from .models import (
    COMPLETED,
    IN_PROGRESS,
    PENDING,
    STATUSES,
    Specification,
    Task,
    completed_count,
    derive_status,
    next_open_task,
    next_status,
)
from .store import SpecStore
from .workflow import WorkflowManager

__all__ = [
    "SpecFlowSettings",
    "TaskController",
    "SpecStore",
    "WorkflowManager",
    "Specification",
    "Task",
    "PENDING",
    "IN_PROGRESS",
    "COMPLETED",
    "STATUSES",
    "completed_count",
    "derive_status",
    "next_open_task",
    "next_status",
    "SpecFlowError",
    "EmptyPromptError",
    "NoActiveSpecificationError",
    "SpecificationNotFoundError",
    "TaskNotFoundError",
    "InvalidTransitionError",
]
