"""Media Item Subtypes - verifies per media type fields, sorts and validation.

Tests:
    - TV show seasons round-trip and are validated (positive, strictly increasing)
    - Each media type sorts and searches on its own people field
"""

from datetime import date

import pytest

from media_tracker.core.domain_types import MediaItemSortField, MediaType, Unresolved
from media_tracker.core.entities import (
    Book, MediaItemSortBy, TvShow, TvShowSeason, Videogame,
)
from media_tracker.core.errors import GenericError, SaveError


@pytest.fixture
async def show_category(make_category, user):
    return await make_category(user, MediaType.TV_SHOW, "Shows")


def _tv_show(category, name="Dark", **fields):
    return TvShow(
        name=name, owner=category.owner, category=Unresolved(category.id), **fields,
    )


async def test_tv_show_seasons_round_trip(controllers, show_category):
    saved = await controllers.tv_shows.save_media_item(_tv_show(
        show_category,
        seasons=[TvShowSeason(1, 10, 10), TvShowSeason(2, 8, 3)],
        creators=["Baran bo Odar"],
        in_production=False,
        next_episode_air_date=date(2030, 1, 1),
    ))

    stored = await controllers.tv_shows.get_media_item(
        show_category.owner.id, show_category.id, saved.id,
    )

    assert stored.seasons == [TvShowSeason(1, 10, 10), TvShowSeason(2, 8, 3)]
    assert stored.creators == ["Baran bo Odar"]
    assert stored.in_production is False
    assert stored.next_episode_air_date == date(2030, 1, 1)


@pytest.mark.parametrize("numbers", [[0, 1], [1, 1], [2, 1], [-1]])
async def test_tv_show_invalid_season_numbers(controllers, show_category, numbers):
    with pytest.raises(SaveError):
        await controllers.tv_shows.save_media_item(_tv_show(
            show_category, seasons=[TvShowSeason(n) for n in numbers],
        ))
    assert await controllers.tv_shows.get_all_media_items_in_category(show_category.id) == []


async def test_tv_show_search_matches_creators(controllers, show_category):
    await controllers.tv_shows.save_media_item(_tv_show(show_category, creators=["Jantje Friese"]))
    await controllers.tv_shows.save_media_item(_tv_show(show_category, name="Lost"))

    found = await controllers.tv_shows.search_media_items(
        show_category.owner.id, show_category.id, "friese",
    )

    assert [s.name for s in found] == ["Dark"]


async def test_book_sort_by_author(controllers, user, make_category):
    books = await make_category(user, MediaType.BOOK, "Books")
    for name, author in (("Dune", "Herbert"), ("Emma", "Austen"), ("Solaris", "lem")):
        await controllers.books.save_media_item(Book(
            name=name, owner=Unresolved(user.id), category=Unresolved(books.id),
            authors=[author], pages_number=300,
        ))

    items = await controllers.books.filter_and_order_media_items(
        user.id, books.id, sort_by=[MediaItemSortBy(MediaItemSortField.AUTHOR)],
    )

    assert [b.name for b in items] == ["Emma", "Dune", "Solaris"]
    with pytest.raises(GenericError):
        await controllers.books.filter_and_order_media_items(
            user.id, books.id, sort_by=[MediaItemSortBy(MediaItemSortField.DIRECTOR)],
        )


async def test_videogame_fields_and_developer_search(controllers, user, make_category):
    games = await make_category(user, MediaType.VIDEOGAME, "Games")
    saved = await controllers.videogames.save_media_item(Videogame(
        name="Hades", owner=Unresolved(user.id), category=Unresolved(games.id),
        developers=["Supergiant Games"], publishers=["Supergiant Games"],
        platforms=["PC", "Switch"], average_length_hours=22.5,
    ))

    found = await controllers.videogames.search_media_items(user.id, games.id, "supergiant")

    assert [g.id for g in found] == [saved.id]
    assert found[0].platforms == ["PC", "Switch"]
    assert found[0].average_length_hours == 22.5
