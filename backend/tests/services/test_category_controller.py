"""Category Controller - verifies preconditions, media type changes and deletion.

Tests:
    - Categories need an existing user; updates need an existing category
    - Changing the media type is refused while the category holds media items
    - Non-forced delete is refused when media items exist; forced delete cascades
    - Categories of one user are invisible to another
"""

from dataclasses import replace
from uuid import uuid4

import pytest

from media_tracker.core.domain_types import MediaType, Unresolved
from media_tracker.core.entities import Category, NameFilter
from media_tracker.core.errors import DeleteError, DeleteNotEmptyError, SaveError


async def test_category_needs_existing_user(controllers):
    with pytest.raises(SaveError) as exc_info:
        await controllers.categories.save_category(Category(
            name="Films", media_type=MediaType.MOVIE, owner=Unresolved(uuid4()),
        ))
    assert exc_info.value.details == "User does not exist"


async def test_update_of_missing_category_is_save_error(controllers, user):
    with pytest.raises(SaveError):
        await controllers.categories.save_category(Category(
            name="Films", media_type=MediaType.MOVIE,
            owner=Unresolved(user.id), id=uuid4(),
        ))


async def test_media_type_change_of_empty_category(controllers, movie_category):
    changed = await controllers.categories.save_category(
        replace(movie_category, media_type=MediaType.BOOK),
    )
    assert changed.media_type == MediaType.BOOK


async def test_media_type_change_refused_with_media_items(
    controllers, movie_category, make_movie,
):
    await make_movie(movie_category, "Alien")

    with pytest.raises(SaveError):
        await controllers.categories.save_category(
            replace(movie_category, media_type=MediaType.BOOK),
        )
    stored = await controllers.categories.get_category(
        movie_category.owner.id, movie_category.id,
    )
    assert stored.media_type == MediaType.MOVIE


async def test_rename_keeps_media_items(controllers, movie_category, make_movie):
    await make_movie(movie_category, "Alien")

    renamed = await controllers.categories.save_category(
        replace(movie_category, name="Cinema"),
    )

    assert renamed.name == "Cinema"


async def test_filter_categories_by_name(controllers, user, make_category):
    films = await make_category(user, MediaType.MOVIE, "Films")
    await make_category(user, MediaType.BOOK, "Books")

    found = await controllers.categories.filter_categories(
        user.id, NameFilter(name="films"),
    )

    assert [c.id for c in found] == [films.id]


async def test_categories_are_tenant_isolated(
    controllers, user, other_user, movie_category,
):
    assert await controllers.categories.get_category(other_user.id, movie_category.id) is None
    assert await controllers.categories.get_all_categories(other_user.id) == []
    with pytest.raises(DeleteError):
        await controllers.categories.delete_category(other_user.id, movie_category.id)


async def test_delete_empty_category(controllers, user, movie_category):
    deleted = await controllers.categories.delete_category(user.id, movie_category.id)

    assert deleted == 1
    assert await controllers.categories.get_category(user.id, movie_category.id) is None


async def test_delete_non_empty_category_needs_force(
    controllers, user, movie_category, make_movie,
):
    await make_movie(movie_category, "Alien")

    with pytest.raises(DeleteNotEmptyError):
        await controllers.categories.delete_category(user.id, movie_category.id)
    assert await controllers.categories.get_category(user.id, movie_category.id)


async def test_forced_delete_cascades(
    controllers, user, movie_category, make_movie, make_group, make_own_platform,
):
    await make_group(movie_category)
    await make_own_platform(movie_category)
    await make_movie(movie_category, "Alien")
    await make_movie(movie_category, "Aliens")

    deleted = await controllers.categories.delete_category(
        user.id, movie_category.id, force=True,
    )

    assert deleted == 5
    assert await controllers.groups.get_all_groups(user.id, movie_category.id) == []
    assert await controllers.own_platforms.get_all_own_platforms(
        user.id, movie_category.id,
    ) == []
    assert await controllers.movies.get_all_media_items_in_category(movie_category.id) == []
