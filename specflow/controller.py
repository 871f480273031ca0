"""Task status transitions for the active specification."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from .errors import InvalidTransitionError, NoActiveSpecificationError, TaskNotFoundError
from .models import (
    COMPLETED,
    IN_PROGRESS,
    STATUSES,
    Specification,
    derive_status,
    next_open_task,
    next_status,
)
from .specflow_logging import (
    log_error_with_context,
    log_operation,
    log_performance,
    log_task_advanced,
)
from .store import SpecStore

logger = logging.getLogger("specflow.controller")


class TaskController:
    """Apply forward status transitions to tasks of the active specification."""

    def __init__(self, store: SpecStore, *, strict: Optional[bool] = None):
        self.store = store
        self.strict = store.settings.strict_transitions if strict is None else strict

    def _check_transition(self, task_id: int, current: str, target: str) -> None:
        if target not in STATUSES:
            raise InvalidTransitionError(None, target, task_id)
        if self.strict and next_status(current) != target:
            raise InvalidTransitionError(current, target, task_id)

    @log_performance("advance_task")
    def advance_task(self, task_id: int, target_status: str) -> Specification:
        """Move one task of the active specification to ``target_status``.

        Returns the new active snapshot. Requesting the status a task already
        has is a no-op.
        """
        try:
            with self.store.lock:
                spec = self.store.get_active()
                if spec is None:
                    raise NoActiveSpecificationError()

                task = spec.find_task(task_id)
                if task is None:
                    raise TaskNotFoundError(task_id, spec.id)

                if task.status == target_status:
                    logger.debug(f"Task {task_id} already {target_status}; nothing to do")
                    return spec

                self._check_transition(task_id, task.status, target_status)

                with log_operation("commit_transition", spec_id=spec.id, task_id=task_id,
                                   target_status=target_status):
                    tasks = tuple(
                        replace(item, status=target_status) if item.id == task_id else item
                        for item in spec.tasks
                    )
                    updated = replace(spec, tasks=tasks, status=derive_status(tasks))
                    self.store.commit(updated)

        except (NoActiveSpecificationError, TaskNotFoundError, InvalidTransitionError) as e:
            log_error_with_context(e, {
                "operation": "advance_task",
                "task_id": task_id,
                "target_status": target_status,
                "spec_id": self.store.active_id,
            })
            raise

        log_task_advanced(updated.id, task_id, task.status, target_status,
                          spec_status=updated.status, progress=updated.progress)
        if updated.status == COMPLETED and spec.status != COMPLETED:
            logger.info(f"All tasks of specification '{updated.id}' completed")
        return updated

    def start_task(self, task_id: int) -> Specification:
        return self.advance_task(task_id, IN_PROGRESS)

    def complete_task(self, task_id: int) -> Specification:
        return self.advance_task(task_id, COMPLETED)

    def advance_next(self) -> Specification:
        """Advance the first open task of the active specification by one stage."""
        with self.store.lock:
            try:
                spec = self.store.get_active()
                if spec is None:
                    raise NoActiveSpecificationError()
                task = next_open_task(spec)
                if task is None:
                    raise TaskNotFoundError(None, spec.id)
            except (NoActiveSpecificationError, TaskNotFoundError) as e:
                log_error_with_context(e, {
                    "operation": "advance_next",
                    "spec_id": self.store.active_id,
                })
                raise
            return self.advance_task(task.id, next_status(task.status))
