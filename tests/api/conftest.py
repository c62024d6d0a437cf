"""API test fixtures — isolated FastAPI app + httpx client per test.

Invariants:
    - Every test gets fresh, empty stores (no sample data)
    - Services are placed on app.state directly: ASGITransport does not run the
      lifespan, and build_services leaves injected services alone anyway
"""

import pytest
from httpx import ASGITransport, AsyncClient

from tasktrack.config import Settings
from tasktrack.infrastructure.task_store import InMemoryTaskStore
from tasktrack.infrastructure.user_store import InMemoryUserStore
from tasktrack.main import create_app
from tasktrack.services.task_service import TaskService
from tasktrack.services.user_service import UserService


@pytest.fixture
def test_app():
    app = create_app(Settings(seed_sample_data=False, log_format="text"))
    app.state.task_service = TaskService(InMemoryTaskStore())
    app.state.user_service = UserService(InMemoryUserStore())
    return app


@pytest.fixture
async def client(test_app):
    async with AsyncClient(
        transport=ASGITransport(app=test_app), base_url="http://test",
    ) as c:
        yield c
