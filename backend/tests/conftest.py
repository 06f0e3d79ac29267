"""Root conftest - database, controllers and seed data shared by every test.

Invariants:
    - Every test gets a fresh SQLite file database (tables from Base.metadata)
    - Controllers are wired exactly as in production (services/assembly.py)

Design Decisions:
    - SQLite file over :memory: so concurrent sessions in asyncio.gather share the data
"""

import os

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")

from media_tracker.core.domain_types import MediaType, Unresolved  # noqa: E402
from media_tracker.core.entities import Category, User  # noqa: E402
from media_tracker.infrastructure.database import DatabaseSessionManager  # noqa: E402
from media_tracker.services.assembly import build_controllers  # noqa: E402


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'media_tracker.db'}",
    )
    await manager.create_all()
    yield manager
    await manager.close()


@pytest.fixture
def controllers(db_manager):
    return build_controllers(db_manager)


@pytest.fixture
async def user(controllers):
    return await controllers.users.save_user(User(name="alice"))


@pytest.fixture
async def other_user(controllers):
    return await controllers.users.save_user(User(name="bob"))


@pytest.fixture
def make_category(controllers):
    """Save a category of the given media type for a user."""
    async def _make(owner: User, media_type: MediaType = MediaType.MOVIE, name: str = "Films"):
        return await controllers.categories.save_category(
            Category(name=name, media_type=media_type, owner=Unresolved(owner.id)),
        )
    return _make


@pytest.fixture
async def movie_category(make_category, user):
    return await make_category(user, MediaType.MOVIE, "Films")
