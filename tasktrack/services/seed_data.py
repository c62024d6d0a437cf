"""Sample Data — demo records loaded on startup when SEED_SAMPLE_DATA is set.

Seeds go through the services, so they obey the same validation rules as
client requests (the high-priority sample therefore carries a due date).
"""

import logging
from datetime import timedelta

from tasktrack.schemas.user import UserCreate
from tasktrack.services.task_service import TaskService, utc_now
from tasktrack.services.user_service import UserService

logger = logging.getLogger(__name__)


def seed_sample_data(tasks: TaskService, users: UserService) -> None:
    now = utc_now()
    tasks.create_task({
        "title": "Complete project documentation",
        "description": "Write comprehensive documentation for the API",
        "status": "in-progress",
        "priority": "high",
        "dueDate": (now + timedelta(days=3)).isoformat(),
    })
    tasks.create_task({
        "title": "Review pull requests",
        "description": "Review and merge pending pull requests",
        "status": "pending",
        "priority": "medium",
    })
    users.create_user(UserCreate(
        name="John Doe",
        email="john@example.com",
        password="Password123",
        role="customer",
        phone="+1234567890",
    ))
    logger.info(
        f"Seeded {tasks.count_tasks()} task(s) and {users.count_users()} user(s)",
    )
