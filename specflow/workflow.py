"""Workflow management for SpecFlow.

This module composes the specification store and the task controller into
the request/response surface used by tool callers: every method returns a
plain dictionary with the payload, a human readable message and a hint for
the next step. Domain errors are reported in the payload instead of raised.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .config import SpecFlowSettings
from .controller import TaskController
from .errors import EmptyPromptError, NoActiveSpecificationError, SpecFlowError
from .models import COMPLETED, IN_PROGRESS, Specification, completed_count, next_open_task
from .store import SpecStore

logger = logging.getLogger("specflow.workflow")


def _error_payload(error: SpecFlowError, **extra: Any) -> Dict[str, Any]:
    return {
        "error": str(error),
        "error_type": type(error).__name__,
        "suggestion": error.suggestion,
        "next_suggested_step": error.next_suggested_step,
        "message": f"Error: {error}",
        **extra,
    }


def _task_hint(spec: Specification) -> Dict[str, Any]:
    task = next_open_task(spec)
    if task is None:
        return {
            "next_task": None,
            "next_suggested_step": "create_spec",
            "workflow_tip": "All tasks are completed. Create another specification when ready",
        }
    action = "complete_task" if task.status == IN_PROGRESS else "start_task"
    return {
        "next_task": task.to_dict(),
        "next_suggested_step": action,
        "workflow_tip": f"Next: {action} with task_id={task.id} ({task.title})",
    }


class WorkflowManager:
    """Manages the specification workflow for one process."""

    def __init__(self, settings: Optional[SpecFlowSettings] = None, *, store: Optional[SpecStore] = None):
        self.settings = settings or (store.settings if store else SpecFlowSettings())
        self.store = store or SpecStore(self.settings)
        self.controller = TaskController(self.store)

    # ------------------------------------------------------------------
    # Specification management
    # ------------------------------------------------------------------

    def create_spec(self, prompt: str) -> Dict[str, Any]:
        """Generate a specification from a prompt and open it."""
        spec = self.store.create_from_prompt(prompt)
        if spec is None:
            # The store ignores blank prompts silently; tool callers get a typed rejection
            return _error_payload(EmptyPromptError(), spec=None)

        logger.info(f"Created specification '{spec.id}': {spec.title}")
        return {
            "spec": spec.to_dict(),
            "next_suggested_step": "start_task",
            "workflow_tip": "Next: review requirements and design, then start task 1",
            "message": f"Specification '{spec.title}' generated with {len(spec.tasks)} tasks.",
        }

    def list_specs(self) -> Dict[str, Any]:
        """List all specifications with their progress."""
        active_id = self.store.active_id
        specs = []
        for spec in self.store.list_specs():
            summary = spec.to_summary()
            summary["active"] = spec.id == active_id
            specs.append(summary)
        return {
            "specs": specs,
            "count": len(specs),
            "active_spec_id": active_id,
            "message": f"Found {len(specs)} specifications" if specs else "No specs yet. Use create_spec to get started.",
        }

    def select_spec(self, spec_id: int) -> Dict[str, Any]:
        """Open an existing specification."""
        try:
            spec = self.store.select(spec_id)
        except SpecFlowError as e:
            return _error_payload(e, spec=None)

        return {
            "spec": spec.to_dict(),
            **_task_hint(spec),
            "message": f"Specification '{spec.title}' is now active ({spec.progress} tasks completed).",
        }

    def close_spec(self) -> Dict[str, Any]:
        """Return to the "no specification open" state."""
        previous = self.store.active_id
        self.store.deselect()
        return {
            "active_spec_id": None,
            "previous_spec_id": previous,
            "next_suggested_step": "create_spec",
            "workflow_tip": "Next: describe a new feature with create_spec or reopen one with select_spec",
            "message": "Specification closed." if previous is not None else "No specification was open.",
        }

    def get_active_spec(self) -> Dict[str, Any]:
        """Return the full active specification."""
        spec = self.store.get_active()
        if spec is None:
            return _error_payload(NoActiveSpecificationError(), spec=None)
        return {
            "spec": spec.to_dict(),
            **_task_hint(spec),
            "message": f"Active specification: {spec.title}",
        }

    # ------------------------------------------------------------------
    # Task management
    # ------------------------------------------------------------------

    def list_tasks(self) -> Dict[str, Any]:
        """List the tasks of the active specification."""
        spec = self.store.get_active()
        if spec is None:
            return _error_payload(NoActiveSpecificationError(), tasks=[])
        return {
            "spec_id": spec.id,
            "tasks": [task.to_dict() for task in spec.tasks],
            "completed": completed_count(spec),
            "total": len(spec.tasks),
            "message": f"{spec.progress} tasks completed",
        }

    def advance_task(self, task_id: int, target_status: str) -> Dict[str, Any]:
        """Move one task of the active specification to a new status."""
        try:
            spec = self.controller.advance_task(task_id, target_status)
        except SpecFlowError as e:
            return _error_payload(e, task=None)

        task = spec.find_task(task_id)
        message = f"Task {task_id} is now {task.status}. {spec.progress} tasks completed."
        if spec.status == COMPLETED:
            message += " Specification completed."
        return {
            "spec_id": spec.id,
            "spec_status": spec.status,
            "task": task.to_dict(),
            "progress": spec.progress,
            "all_completed": spec.status == COMPLETED,
            **_task_hint(spec),
            "message": message,
        }

    def start_task(self, task_id: int) -> Dict[str, Any]:
        return self.advance_task(task_id, IN_PROGRESS)

    def complete_task(self, task_id: int) -> Dict[str, Any]:
        return self.advance_task(task_id, COMPLETED)

    def next_task(self) -> Dict[str, Any]:
        """Report the next open task of the active specification."""
        spec = self.store.get_active()
        if spec is None:
            return _error_payload(NoActiveSpecificationError(), task=None)
        hint = _task_hint(spec)
        return {
            "spec_id": spec.id,
            "task": hint.pop("next_task"),
            "remaining": len(spec.tasks) - completed_count(spec),
            **hint,
            "message": "All tasks completed" if spec.status == COMPLETED else f"{spec.progress} tasks completed",
        }
