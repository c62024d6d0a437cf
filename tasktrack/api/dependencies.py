"""Dependencies — hand the services built by the lifespan to route handlers.

The services live on app.state; tests swap them through
app.dependency_overrides instead of patching module globals.
"""

from fastapi import Request

from tasktrack.services.task_service import TaskService
from tasktrack.services.user_service import UserService


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service
