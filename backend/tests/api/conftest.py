"""API test fixtures - FastAPI test client over the per-test database.

Invariants:
    - app.state carries the test db_manager and controllers (the lifespan is not run)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from media_tracker.main import app


@pytest.fixture
async def client(db_manager, controllers):
    app.state.db_manager = db_manager
    app.state.controllers = controllers
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    del app.state.db_manager
    del app.state.controllers
