"""Sample board for first runs."""

from datetime import date, timedelta

from taskboard.model.mutations import MutationService

DEMO_TASKS = {
    "To Do": [
        ("Plan project architecture", "Design the overall structure and components needed for the project",
         "John Doe", "high", 7),
        ("Research best practices", "Look into industry standards and best practices for similar projects",
         "Jane Smith", "medium", 5),
    ],
    "In Progress": [
        ("Set up development environment", "Configure local development environment with all necessary tools",
         "Bob Johnson", "high", 3),
    ],
    "Done": [
        ("Initial project setup", "Created project repository and basic folder structure",
         "Alice Brown", "low", -2),
    ],
}


def seed_demo_board(mutations: MutationService, today: date | None = None) -> str:
    """Create "My First Board" with three columns and sample tasks.

    Due dates are relative to today. Returns the board id.
    """
    today = today or date.today()
    board = mutations.create_board(
        "My First Board",
        "Welcome to your task board! Start by creating tasks and organizing them.",
    )
    for column_title, tasks in DEMO_TASKS.items():
        col = mutations.create_column(board.id, column_title)
        for title, description, assignee, priority, due_in in tasks:
            mutations.create_task(
                board.id,
                col.id,
                title,
                description=description,
                assignee=assignee,
                priority=priority,
                due_date=today + timedelta(days=due_in),
            )
    return board.id
