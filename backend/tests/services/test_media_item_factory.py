"""Media Item Factory - verifies controller resolution per media type and category.

Tests:
    - Every media type resolves to the controller linked to it
    - Missing categories are FindError, unbound catalogs are GenericError
    - Catalog controllers bound at assembly are returned per media type
"""

from uuid import uuid4

import pytest

from media_tracker.core.domain_types import MediaType
from media_tracker.core.errors import FindError, GenericError
from media_tracker.core.repository_protocols import (
    CatalogMediaItem, CatalogSearchResult,
)
from media_tracker.services.assembly import build_controllers


class FakeMovieCatalog:
    async def search_media_item_catalog_by_term(self, search_term):
        return [CatalogSearchResult(catalog_id="tt0078748", name="Alien")]

    async def get_media_item_from_catalog(self, catalog_item_id):
        return CatalogMediaItem(name="Alien", catalog_id=catalog_item_id)


def test_each_media_type_has_its_controller(controllers):
    factory = controllers.media_items
    for media_type in MediaType:
        controller = factory.get_entity_controller_from_media_type(media_type)
        assert controller.linked_media_type == media_type
    assert len(factory.get_all_entity_controllers()) == len(MediaType)


async def test_controller_from_category_id(controllers, user, make_category):
    books = await make_category(user, MediaType.BOOK, "Books")

    controller = await controllers.media_items.get_entity_controller_from_category_id(
        user.id, books.id,
    )

    assert controller is controllers.books


async def test_missing_category_is_find_error(controllers, user):
    with pytest.raises(FindError):
        await controllers.media_items.get_entity_controller_from_category_id(
            user.id, uuid4(),
        )


async def test_other_users_category_is_find_error(controllers, other_user, movie_category):
    with pytest.raises(FindError):
        await controllers.media_items.get_entity_controller_from_category_id(
            other_user.id, movie_category.id,
        )


def test_unbound_catalog_is_generic_error(controllers):
    assert controllers.media_items.get_all_catalog_controllers() == []
    with pytest.raises(GenericError):
        controllers.media_items.get_catalog_controller_from_media_type(MediaType.MOVIE)


async def test_bound_catalog_is_resolved(db_manager, user, make_category):
    catalog = FakeMovieCatalog()
    wired = build_controllers(db_manager, catalogs={MediaType.MOVIE: catalog})
    films = await make_category(user)

    resolved = await wired.media_items.get_catalog_controller_from_category_id(
        user.id, films.id,
    )

    assert resolved is catalog
    assert wired.media_items.get_all_catalog_controllers() == [catalog]
    hits = await resolved.search_media_item_catalog_by_term("alien")
    assert hits[0].name == "Alien"
