"""Unit tests for SpecStore.

This module tests specification creation from prompts, the active
selection pointer and collection access.
"""

import logging

import pytest

from specflow.config import SpecFlowSettings
from specflow.errors import SpecificationNotFoundError
from specflow.models import IN_PROGRESS, PENDING, Specification
from specflow.specflow_logging import observability_hooks
from specflow.store import SpecStore


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now=1700000000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def store():
    return SpecStore(clock=FrozenClock())


class TestCreateFromPrompt:
    """Test cases for create_from_prompt."""

    def test_creates_and_activates(self, store):
        """Test that a new spec is appended and made active."""
        spec = store.create_from_prompt("Build login page")

        assert len(store) == 1
        assert store.active_id == spec.id
        assert store.get_active() == spec

    def test_initial_fields(self, store):
        """Test the fields of a freshly generated spec."""
        spec = store.create_from_prompt("Build login page")

        assert spec.title == "Build login page"
        assert spec.status == IN_PROGRESS
        assert spec.prompt == "Build login page"
        assert spec.requirements.startswith("# Requirements")
        assert spec.design.startswith("# Design Document")
        assert len(spec.tasks) == 7
        assert [task.id for task in spec.tasks] == list(range(1, 8))
        assert all(task.status == PENDING for task in spec.tasks)

    @pytest.mark.parametrize("prompt", ["", "   ", "\n\t", None])
    def test_blank_prompt_is_ignored(self, store, prompt):
        """Test that blank prompts change nothing."""
        existing = store.create_from_prompt("Existing feature")

        assert store.create_from_prompt(prompt) is None
        assert store.list_specs() == [existing]
        assert store.active_id == existing.id

    def test_blank_prompt_on_empty_store(self, store):
        """Test that a blank prompt leaves an empty store empty and unselected."""
        store.create_from_prompt("")

        assert len(store) == 0
        assert store.get_active() is None

    def test_title_truncated_to_fifty_characters(self, store):
        """Test that long prompts are truncated for the title."""
        prompt = "Build a user authentication system with email/password login and JWT"

        spec = store.create_from_prompt(prompt)

        assert spec.title == prompt[:50]
        assert len(spec.title) == 50
        assert spec.prompt == prompt

    def test_title_at_exact_limit_is_kept_whole(self, store):
        """Test that a prompt of exactly fifty characters becomes the whole title."""
        prompt = "x" * 50

        spec = store.create_from_prompt(prompt)

        assert spec.title == prompt
        assert spec.prompt == prompt

    def test_title_uses_trimmed_prompt(self, store):
        """Test that surrounding whitespace is not part of the title."""
        spec = store.create_from_prompt("   Build login page  ")

        assert spec.title == "Build login page"

    def test_title_length_from_settings(self):
        """Test a configured title length."""
        store = SpecStore(SpecFlowSettings(title_max_length=5))

        assert store.create_from_prompt("Build login page").title == "Build"

    def test_ids_unique_within_same_millisecond(self, store):
        """Test that ids stay unique and increasing when the clock stands still."""
        first = store.create_from_prompt("one")
        second = store.create_from_prompt("two")
        third = store.create_from_prompt("three")

        assert first.id == 1700000000000
        assert first.id < second.id < third.id

    def test_creation_steals_focus(self, store):
        """Test that creating a spec moves the active pointer to it."""
        first = store.create_from_prompt("one")
        store.create_from_prompt("two")
        store.select(first.id)

        newest = store.create_from_prompt("three")

        assert store.active_id == newest.id
        assert [spec.id for spec in store] == [first.id, first.id + 1, newest.id]

    def test_uses_injected_generators(self):
        """Test that document generators can be replaced."""
        store = SpecStore(
            requirements_generator=lambda prompt: f"req:{prompt}",
            design_generator=lambda prompt: "design",
            task_generator=lambda prompt: [],
        )

        spec = store.create_from_prompt("feature")

        assert spec.requirements == "req:feature"
        assert spec.design == "design"
        assert spec.tasks == ()

    def test_emits_spec_created_event(self, store):
        """Test that creation triggers the spec_created hook."""
        events = []

        def capture(**data):
            events.append(data)

        observability_hooks.register_hook("spec_created", capture)
        try:
            spec = store.create_from_prompt("Build login page")
        finally:
            observability_hooks.unregister_hook("spec_created", capture)

        assert len(events) == 1
        assert events[0]["spec_id"] == spec.id
        assert events[0]["title"] == "Build login page"
        assert events[0]["task_count"] == 7

    def test_creation_logged_once(self, store, caplog):
        """Test that one creation produces one completed-operation record."""
        caplog.set_level(logging.DEBUG, logger="specflow")

        store.create_from_prompt("Build login page")

        completed = [
            r for r in caplog.records
            if r.getMessage().startswith("Completed operation: create_from_prompt")
        ]
        assert len(completed) == 1


class TestSelection:
    """Test cases for select, deselect and get_active."""

    def test_select_existing(self, store):
        """Test selecting an older specification."""
        first = store.create_from_prompt("one")
        store.create_from_prompt("two")

        selected = store.select(first.id)

        assert selected == first
        assert store.get_active() == first

    def test_select_unknown_raises(self, store):
        """Test that selecting an unknown id is rejected without side effects."""
        spec = store.create_from_prompt("one")

        with pytest.raises(SpecificationNotFoundError, match="Specification '42' not found"):
            store.select(42)

        assert store.active_id == spec.id

    def test_deselect(self, store):
        """Test clearing the active specification."""
        spec = store.create_from_prompt("one")

        store.deselect()

        assert store.get_active() is None
        assert spec.id in store

    def test_deselect_when_nothing_active(self, store):
        """Test that deselecting twice is harmless."""
        store.deselect()
        store.deselect()

        assert store.get_active() is None


class TestCollectionAccess:
    """Test cases for get, commit and iteration."""

    def test_get_unknown_raises(self, store):
        """Test looking up an unknown id."""
        with pytest.raises(SpecificationNotFoundError):
            store.get(1)

    def test_list_specs_is_a_copy(self, store):
        """Test that callers cannot mutate the stored collection."""
        store.create_from_prompt("one")

        specs = store.list_specs()
        specs.clear()

        assert len(store) == 1

    def test_commit_replaces_and_activates(self, store):
        """Test that commit swaps the stored member and repoints active."""
        first = store.create_from_prompt("one")
        store.create_from_prompt("two")

        completed = Specification.from_dict({**first.to_dict(), "status": "completed"})
        store.commit(completed)

        assert store.get(first.id).status == "completed"
        assert store.active_id == first.id
        assert len(store) == 2

    def test_commit_unknown_raises(self, store):
        """Test that commit does not append unknown specs."""
        spec = store.create_from_prompt("one")
        store.deselect()
        other = Specification.from_dict({**spec.to_dict(), "id": 7})

        with pytest.raises(SpecificationNotFoundError):
            store.commit(other)

        assert store.get_active() is None
        assert len(store) == 1
