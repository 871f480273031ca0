"""MCP server exposing the SpecFlow specification and task workflow."""

from __future__ import annotations

from typing import Any, Dict

from mcp.server.fastmcp import FastMCP

from specflow import SpecFlowSettings, WorkflowManager
from specflow.specflow_logging import setup_logging

mcp = FastMCP("specflow")

settings = SpecFlowSettings.from_env()
manager = WorkflowManager(settings)


@mcp.tool()
def create_spec(prompt: str) -> Dict[str, Any]:
    """STEP 1: Generate requirements, design and a task list from a feature description.
    The new specification becomes the active one. Blank prompts are rejected."""

    return manager.create_spec(prompt)


@mcp.tool()
def list_specs() -> Dict[str, Any]:
    """Enumerate generated specifications with status and task progress."""

    return manager.list_specs()


@mcp.tool()
def select_spec(spec_id: int) -> Dict[str, Any]:
    """Open an existing specification so its tasks can be worked on."""

    return manager.select_spec(spec_id)


@mcp.tool()
def close_spec() -> Dict[str, Any]:
    """Close the active specification without removing it."""

    return manager.close_spec()


@mcp.tool()
def get_active_spec() -> Dict[str, Any]:
    """Return the requirements, design and tasks of the active specification."""

    return manager.get_active_spec()


@mcp.resource("specflow://specs")
def resource_specs() -> str:
    """Resource view listing generated specifications and their progress."""

    specs = manager.store.list_specs()
    if not specs:
        return "No specs yet. Create one with create_spec to get started."

    active_id = manager.store.active_id
    lines = ["SpecFlow Specifications"]
    for spec in specs:
        marker = "*" if spec.id == active_id else "-"
        lines.append("")
        lines.append(f"{marker} {spec.id}: {spec.title} [{spec.status}]")
        lines.append(f"  Tasks: {spec.progress} completed")
    return "\n".join(lines)


@mcp.tool()
def list_tasks() -> Dict[str, Any]:
    """STEP 2: Return the task list of the active specification with each task's status."""

    return manager.list_tasks()


@mcp.tool()
def next_task() -> Dict[str, Any]:
    """Retrieve the first task of the active specification that is not completed yet."""

    return manager.next_task()


@mcp.tool()
def advance_task(task_id: int, target_status: str) -> Dict[str, Any]:
    """Move a task of the active specification to 'in-progress' or 'completed'.
    Tasks go pending -> in-progress -> completed one stage at a time."""

    return manager.advance_task(task_id, target_status)


@mcp.tool()
def start_task(task_id: int) -> Dict[str, Any]:
    """STEP 3: Move a pending task to in-progress."""

    return manager.start_task(task_id)


@mcp.tool()
def complete_task(task_id: int) -> Dict[str, Any]:
    """STEP 4: Move an in-progress task to completed."""

    return manager.complete_task(task_id)


@mcp.tool()
def get_workflow_guide() -> Dict[str, Any]:
    """Get guidance on the recommended SpecFlow workflow."""
    return {
        "workflow_overview": "Specification workflow in recommended order",
        "steps": [
            {
                "step": 1,
                "tool": "create_spec",
                "description": "Describe a feature in free text",
                "purpose": "Generate requirements (EARS notation), a design document and seven tasks"
            },
            {
                "step": 2,
                "tools": ["list_tasks", "next_task"],
                "description": "Review the implementation plan",
                "purpose": "Find the next task to work on"
            },
            {
                "step": 3,
                "tool": "start_task",
                "description": "Move a pending task to in-progress",
                "purpose": "Track what is currently being worked on"
            },
            {
                "step": 4,
                "tool": "complete_task",
                "description": "Move an in-progress task to completed",
                "purpose": "Record finished work; the spec completes when every task does"
            },
        ],
        "tips": [
            "Creating a specification always makes it the active one",
            "Use select_spec to switch between specifications and close_spec to start fresh",
            "Tasks cannot skip a stage or move backwards",
            "Specifications live only as long as the server process"
        ]
    }


if __name__ == "__main__":
    setup_logging(settings.log_level, settings.log_file)
    mcp.run(transport="stdio")
