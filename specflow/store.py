"""Ownership of generated specifications and the active selection."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Iterator, List, Optional, Sequence

from . import templates
from .config import SpecFlowSettings
from .errors import SpecificationNotFoundError
from .models import IN_PROGRESS, Specification, Task
from .specflow_logging import (
    log_error_with_context,
    log_operation,
    log_spec_created,
    log_spec_selected,
)

logger = logging.getLogger("specflow.store")


class SpecStore:
    """Keep the specification collection and the active pointer consistent.

    ``specs`` is append-only in creation order. ``active`` refers to at most
    one member by id. Every mutation runs under ``lock`` so the store can sit
    behind a server that dispatches calls from worker threads.
    """

    def __init__(
        self,
        settings: Optional[SpecFlowSettings] = None,
        *,
        clock: Callable[[], float] = time.time,
        requirements_generator: Callable[[str], str] = templates.generate_requirements,
        design_generator: Callable[[str], str] = templates.generate_design,
        task_generator: Callable[[str], Sequence[Task]] = templates.generate_task_list,
    ):
        self.settings = settings or SpecFlowSettings()
        self.lock = threading.RLock()
        self._clock = clock
        self._generate_requirements = requirements_generator
        self._generate_design = design_generator
        self._generate_tasks = task_generator
        self._specs: List[Specification] = []
        self._active_id: Optional[int] = None
        self._last_id = 0

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def _next_id(self) -> int:
        # Millisecond timestamps, bumped when two specs land in the same tick
        candidate = int(self._clock() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    def _make_title(self, prompt: str) -> str:
        return prompt[: self.settings.title_max_length]

    def create_from_prompt(self, prompt_text: Optional[str]) -> Optional[Specification]:
        """Generate a specification from a prompt and make it active.

        Blank prompts are ignored: nothing changes and ``None`` is returned.
        """
        prompt = (prompt_text or "").strip()
        if not prompt:
            logger.debug("Ignoring empty prompt")
            return None

        with self.lock, log_operation("create_from_prompt", prompt_length=len(prompt)):
            spec = Specification(
                id=self._next_id(),
                title=self._make_title(prompt),
                requirements=self._generate_requirements(prompt),
                design=self._generate_design(prompt),
                tasks=tuple(self._generate_tasks(prompt)),
                status=IN_PROGRESS,
                prompt=prompt,
            )
            self._specs.append(spec)
            self._active_id = spec.id

        log_spec_created(spec.id, spec.title, task_count=len(spec.tasks))
        return spec

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select(self, spec_id: int) -> Specification:
        """Make the specification with ``spec_id`` the active one."""
        with self.lock:
            try:
                spec = self.get(spec_id)
            except SpecificationNotFoundError as e:
                log_error_with_context(e, {"operation": "select", "spec_id": spec_id})
                raise
            self._active_id = spec.id

        log_spec_selected(spec.id)
        return spec

    def deselect(self) -> None:
        """Clear the active specification."""
        with self.lock:
            previous = self._active_id
            self._active_id = None

        if previous is not None:
            log_spec_selected(None, previous_spec_id=previous)

    def get_active(self) -> Optional[Specification]:
        with self.lock:
            if self._active_id is None:
                return None
            return self._find(self._active_id)

    @property
    def active_id(self) -> Optional[int]:
        return self._active_id

    # ------------------------------------------------------------------
    # Collection access
    # ------------------------------------------------------------------

    def _find(self, spec_id: int) -> Optional[Specification]:
        for spec in self._specs:
            if spec.id == spec_id:
                return spec
        return None

    def get(self, spec_id: int) -> Specification:
        with self.lock:
            spec = self._find(spec_id)
        if spec is None:
            raise SpecificationNotFoundError(spec_id)
        return spec

    def list_specs(self) -> List[Specification]:
        """Snapshot of all specifications in creation order."""
        with self.lock:
            return list(self._specs)

    def commit(self, spec: Specification) -> Specification:
        """Replace the stored member with the same id and make it active."""
        with self.lock:
            for index, existing in enumerate(self._specs):
                if existing.id == spec.id:
                    self._specs[index] = spec
                    self._active_id = spec.id
                    return spec
        raise SpecificationNotFoundError(spec.id)

    def __len__(self) -> int:
        return len(self._specs)

    def __iter__(self) -> Iterator[Specification]:
        return iter(self.list_specs())

    def __contains__(self, spec_id: object) -> bool:
        with self.lock:
            return any(spec.id == spec_id for spec in self._specs)
