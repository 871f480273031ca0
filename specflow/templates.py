"""Document generators for new specifications.

Each generator is a pure function of the prompt. Only the shape of the
output matters to the rest of the system: Markdown text for requirements
and design, and a fixed list of pending tasks for the implementation plan.
"""

from __future__ import annotations

import textwrap
from typing import List, Tuple

from .models import PENDING, Task

EARS_CRITERIA: Tuple[Tuple[str, str], ...] = (
    ("a user initiates the feature", "respond with appropriate feedback"),
    ("the feature is activated", "validate all inputs before processing"),
    ("an error occurs", "display a clear error message to the user"),
    ("the operation completes successfully", "update the UI to reflect the changes"),
)

DESIGN_SECTIONS: Tuple[str, ...] = (
    "Architecture Overview",
    "Components",
    "Data Flow",
    "Data Models",
    "API Specifications",
    "Error Handling",
    "Security Considerations",
    "Performance Requirements",
)

DEFAULT_TASKS: Tuple[Tuple[str, str], ...] = (
    ("Set up project structure", "Initialize repository and configure build tools"),
    ("Implement data models", "Create TypeScript interfaces and database schemas"),
    ("Build API endpoints", "Develop RESTful API with validation"),
    ("Create UI components", "Build React components with proper state management"),
    ("Write unit tests", "Achieve 80%+ code coverage"),
    ("Integration testing", "Test end-to-end workflows"),
    ("Documentation", "Write API docs and user guides"),
)


def generate_requirements(prompt: str) -> str:
    """Render the requirements document: one user story plus EARS criteria."""
    criteria_block = "\n\n".join(
        f"**WHEN** {trigger}  \n**THE SYSTEM SHALL** {response}"
        for trigger, response in EARS_CRITERIA
    )

    # Built line by line: a multi-line prompt would defeat textwrap.dedent.
    lines = [
        "# Requirements",
        "",
        "## User Stories",
        "",
        f"### Story 1: {prompt}",
        "",
        "**As a** developer  ",
        f"**I want** to implement {prompt}  ",
        "**So that** users can benefit from this feature",
        "",
        "## Acceptance Criteria (EARS Notation)",
        "",
        criteria_block,
    ]
    return "\n".join(lines) + "\n"


_DESIGN_DOCUMENT = textwrap.dedent(
    """
    # Design Document

    ## Architecture Overview

    This feature will be implemented using a modular architecture with clear separation of concerns.

    ## Components

    ### Frontend Components
    - **UI Layer**: React components with TypeScript
    - **State Management**: Context API / Redux
    - **API Client**: Axios for HTTP requests

    ### Backend Services
    - **API Endpoints**: RESTful API design
    - **Business Logic**: Service layer
    - **Data Access**: Repository pattern

    ## Data Flow

    ```
    User Input → Validation → API Request → Business Logic → Database → Response → UI Update
    ```

    ## Data Models

    ### Primary Entity
    ```typescript
    interface Feature {
      id: string;
      name: string;
      status: 'pending' | 'in-progress' | 'completed';
      createdAt: Date;
      updatedAt: Date;
    }
    ```

    ## API Specifications

    ### Endpoints

    **POST /api/features**
    - Creates a new feature
    - Request body: `{ name: string, description: string }`
    - Response: `{ id: string, ...Feature }`

    **GET /api/features/:id**
    - Retrieves feature details
    - Response: `Feature`

    ## Error Handling

    - Input validation errors: 400 Bad Request
    - Authentication errors: 401 Unauthorized
    - Resource not found: 404 Not Found
    - Server errors: 500 Internal Server Error

    ## Security Considerations

    - Input sanitization
    - Authentication and authorization
    - Rate limiting
    - CORS configuration

    ## Performance Requirements

    - API response time: < 200ms
    - Database query optimization
    - Caching strategy for frequently accessed data
    """
).strip() + "\n"


def generate_design(prompt: str) -> str:
    """Render the design document.

    The content is illustrative and does not depend on the prompt.
    """
    return _DESIGN_DOCUMENT


def generate_task_list(prompt: str) -> List[Task]:
    """Return the fixed seven-step implementation plan, all tasks pending."""
    return [
        Task(id=idx, title=title, description=description, status=PENDING)
        for idx, (title, description) in enumerate(DEFAULT_TASKS, start=1)
    ]
