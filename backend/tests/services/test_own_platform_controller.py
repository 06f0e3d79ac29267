"""Own Platform Controller - verifies merging and deletion.

Tests:
    - Merge keeps the first id with the merged data and re-points media items
    - Merge refuses ids outside the user/category and repeated ids
    - Own platforms outside the merge, and their items, are left untouched
    - A failed merge step reports the steps that already completed
    - Delete clears the own platform from its media items
"""

from uuid import uuid4

import pytest

from media_tracker.core.domain_types import Unresolved
from media_tracker.core.entities import OwnPlatform
from media_tracker.core.errors import GenericError, SaveError


def _merged_data(category, name="Streaming"):
    return OwnPlatform(
        name=name, owner=category.owner, category=Unresolved(category.id),
        color="#ff0000",
    )


async def test_merge_repoints_media_items(
    controllers, user, movie_category, make_category, make_own_platform, make_movie,
):
    first = await make_own_platform(movie_category, "Netflix")
    second = await make_own_platform(movie_category, "Prime")
    third = await make_own_platform(movie_category, "Disc")
    unlisted = await make_own_platform(movie_category, "Vinyl", color="#00ff00")
    on_second = await make_movie(movie_category, "Alien", own_platform=Unresolved(second.id))
    on_third = await make_movie(movie_category, "Heat", own_platform=Unresolved(third.id))
    on_unlisted = await make_movie(
        movie_category, "Ran", own_platform=Unresolved(unlisted.id),
    )
    other_category = await make_category(user, name="More films")
    elsewhere = await make_own_platform(other_category, "Prime")
    on_elsewhere = await make_movie(
        other_category, "Jaws", own_platform=Unresolved(elsewhere.id),
    )

    deleted = await controllers.own_platforms.merge_own_platforms(
        [first.id, second.id, third.id], _merged_data(movie_category),
    )

    assert deleted == 2
    remaining = await controllers.own_platforms.get_all_own_platforms(
        user.id, movie_category.id,
    )
    assert [(p.id, p.name, p.color) for p in remaining] == [
        (first.id, "Streaming", "#ff0000"),
        (unlisted.id, "Vinyl", "#00ff00"),
    ]
    for movie in (on_second, on_third):
        stored = await controllers.movies.get_media_item(user.id, movie_category.id, movie.id)
        assert stored.own_platform == Unresolved(first.id)
    stored = await controllers.movies.get_media_item(
        user.id, movie_category.id, on_unlisted.id,
    )
    assert stored.own_platform == Unresolved(unlisted.id)
    stored = await controllers.movies.get_media_item(
        user.id, other_category.id, on_elsewhere.id,
    )
    assert stored.own_platform == Unresolved(elsewhere.id)
    assert await controllers.own_platforms.get_own_platform(
        user.id, other_category.id, elsewhere.id,
    ) is not None


async def test_merge_refuses_duplicate_ids(controllers, movie_category, make_own_platform):
    only = await make_own_platform(movie_category)

    with pytest.raises(GenericError):
        await controllers.own_platforms.merge_own_platforms(
            [only.id, only.id], _merged_data(movie_category),
        )
    stored = await controllers.own_platforms.get_own_platform(
        movie_category.owner.id, movie_category.id, only.id,
    )
    assert stored.name == "Shelf"


async def test_merge_needs_two_ids(controllers, movie_category, make_own_platform):
    only = await make_own_platform(movie_category)
    with pytest.raises(GenericError):
        await controllers.own_platforms.merge_own_platforms(
            [only.id], _merged_data(movie_category),
        )


async def test_merge_refuses_unknown_ids(controllers, movie_category, make_own_platform):
    first = await make_own_platform(movie_category)

    with pytest.raises(SaveError):
        await controllers.own_platforms.merge_own_platforms(
            [first.id, uuid4()], _merged_data(movie_category),
        )
    stored = await controllers.own_platforms.get_own_platform(
        movie_category.owner.id, movie_category.id, first.id,
    )
    assert stored.name == "Shelf"


async def test_merge_refuses_other_users_own_platforms(
    controllers, other_user, make_category, movie_category, make_own_platform,
):
    mine = await make_own_platform(movie_category)
    foreign_category = await make_category(other_user)
    foreign = await make_own_platform(foreign_category)

    with pytest.raises(SaveError):
        await controllers.own_platforms.merge_own_platforms(
            [mine.id, foreign.id], _merged_data(movie_category),
        )


async def test_failed_merge_reports_completed_steps(
    controllers, user, movie_category, make_own_platform, make_movie, monkeypatch,
):
    first = await make_own_platform(movie_category, "Netflix")
    second = await make_own_platform(movie_category, "Prime")

    async def failing_replace(*args, **kwargs):
        raise SaveError("Bulk update not acknowledged")

    monkeypatch.setattr(
        controllers.movies, "replace_own_platform_in_all_media_items", failing_replace,
    )

    with pytest.raises(SaveError) as exc_info:
        await controllers.own_platforms.merge_own_platforms(
            [first.id, second.id], _merged_data(movie_category),
        )

    debug_info = exc_info.value.context.debug_info
    assert debug_info["failed_step"] == "replace_references"
    assert debug_info["completed_steps"] == ["save_survivor"]
    remaining = await controllers.own_platforms.get_all_own_platforms(
        user.id, movie_category.id,
    )
    assert {p.name for p in remaining} == {"Streaming", "Prime"}


async def test_delete_clears_media_items(
    controllers, user, movie_category, make_own_platform, make_movie,
):
    own_platform = await make_own_platform(movie_category)
    movie = await make_movie(
        movie_category, "Alien", own_platform=Unresolved(own_platform.id),
    )

    deleted = await controllers.own_platforms.delete_own_platform(
        user.id, movie_category.id, own_platform.id,
    )

    assert deleted == 1
    stored = await controllers.movies.get_media_item(user.id, movie_category.id, movie.id)
    assert stored.own_platform is None
