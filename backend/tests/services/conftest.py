"""Service test fixtures - builders for groups, own platforms and media items.

Invariants:
    - Builders go through the controllers (preconditions included), never the ORM
"""

import pytest

from media_tracker.core.domain_types import Unresolved
from media_tracker.core.entities import Category, Group, Movie, OwnPlatform


@pytest.fixture
def make_group(controllers):
    async def _make(category: Category, name: str = "Saga"):
        return await controllers.groups.save_group(Group(
            name=name,
            owner=category.owner,
            category=Unresolved(category.id),
        ))
    return _make


@pytest.fixture
def make_own_platform(controllers):
    async def _make(category: Category, name: str = "Shelf", **fields):
        return await controllers.own_platforms.save_own_platform(OwnPlatform(
            name=name,
            owner=category.owner,
            category=Unresolved(category.id),
            **fields,
        ))
    return _make


@pytest.fixture
def make_movie(controllers):
    async def _make(category: Category, name: str, **fields):
        return await controllers.movies.save_media_item(Movie(
            name=name,
            owner=category.owner,
            category=Unresolved(category.id),
            **fields,
        ))
    return _make
