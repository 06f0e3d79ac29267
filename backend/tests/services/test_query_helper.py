"""Query Helper - verifies the store primitives against a real SQLite database.

Tests:
    - save inserts with a fresh id and updates in place
    - Updating a missing id is a SaveError
    - find_one is strict about multiple matches
    - Uniqueness checks ignore the entity being updated
    - delete_by_id on a missing id is a DeleteError, delete() counts
    - Store failures surface as typed errors carrying the cause
"""

import logging
from uuid import uuid4

import pytest

from media_tracker.core.conditions import SortSpec, eq, icontains
from media_tracker.core.entities import User
from media_tracker.core.errors import (
    DatabaseError, DeleteError, FindError, SaveError, SaveUniquenessError,
)
from media_tracker.infrastructure.observability import PERFORMANCE_LOGGER_NAME
from media_tracker.infrastructure.query_helper import QueryHelper
from media_tracker.models import UserRecord


@pytest.fixture
def users(db_manager):
    return QueryHelper(db_manager, UserRecord)


async def test_save_inserts_with_fresh_id(users):
    saved = await users.save(User(name="alice"), UserRecord())

    assert saved.id is not None
    assert await users.find_one(eq("id", saved.id)) == saved


async def test_save_updates_existing_record(users):
    saved = await users.save(User(name="alice"), UserRecord())

    updated = await users.save(User(name="alicia", id=saved.id), UserRecord())

    assert updated.id == saved.id
    assert [u.name for u in await users.find()] == ["alicia"]


async def test_update_of_missing_id_is_save_error(users):
    with pytest.raises(SaveError):
        await users.save(User(name="ghost", id=uuid4()), UserRecord())
    assert await users.find() == []


async def test_find_one_returns_none_without_match(users):
    assert await users.find_one(eq("name", "nobody")) is None


async def test_find_one_with_many_matches_is_find_error(users):
    await users.save(User(name="twin"), UserRecord())
    await users.save(User(name="twin"), UserRecord())

    with pytest.raises(FindError):
        await users.find_one(eq("name", "twin"))


async def test_find_applies_sort_in_order(users):
    for name in ("carol", "Bob", "alice"):
        await users.save(User(name=name), UserRecord())

    found = await users.find(sort=[SortSpec("name", ascending=False)])

    assert [u.name for u in found] == ["carol", "Bob", "alice"]


async def test_find_with_literal_wildcards(users):
    await users.save(User(name="100% done"), UserRecord())
    await users.save(User(name="1000 done"), UserRecord())

    found = await users.find(icontains("name", "0%"))

    assert [u.name for u in found] == ["100% done"]


async def test_uniqueness_violation_reports_duplicates(users):
    first = await users.save(User(name="alice"), UserRecord())

    with pytest.raises(SaveUniquenessError) as exc_info:
        await users.check_uniqueness_and_save(
            User(name="alice"), UserRecord(), eq("name", "alice"),
        )
    assert exc_info.value.duplicate_ids == [first.id]


async def test_uniqueness_ignores_the_entity_itself(users):
    first = await users.save(User(name="alice"), UserRecord())

    saved = await users.check_uniqueness_and_save(
        User(name="alice", id=first.id), UserRecord(), eq("name", "alice"),
    )

    assert saved.id == first.id


async def test_update_selective_many_returns_match_count(users):
    await users.save(User(name="a"), UserRecord())
    await users.save(User(name="a"), UserRecord())
    await users.save(User(name="b"), UserRecord())

    updated = await users.update_selective_many({"name": "c"}, eq("name", "a"))

    assert updated == 2
    assert sorted(u.name for u in await users.find()) == ["b", "c", "c"]


async def test_delete_by_id_of_missing_record_is_delete_error(users):
    with pytest.raises(DeleteError):
        await users.delete_by_id(uuid4())


async def test_delete_counts_matches(users):
    await users.save(User(name="a"), UserRecord())
    await users.save(User(name="a"), UserRecord())

    assert await users.delete(eq("name", "a")) == 2
    assert await users.delete(eq("name", "a")) == 0


async def test_store_failure_becomes_find_error(users, db_manager, monkeypatch):
    def broken_session():
        raise DatabaseError("Connection or operational error", "execute")

    monkeypatch.setattr(db_manager, "session", broken_session)

    with pytest.raises(FindError) as exc_info:
        await users.find()
    assert isinstance(exc_info.value.details, DatabaseError)


async def test_performance_logging(db_manager, caplog):
    users = QueryHelper(db_manager, UserRecord, log_performance=True)

    with caplog.at_level(logging.DEBUG, logger=PERFORMANCE_LOGGER_NAME):
        await users.find()

    timings = [r for r in caplog.records if r.name == PERFORMANCE_LOGGER_NAME]
    assert timings
    assert timings[0].operation == "find"
    assert timings[0].table == "users"
