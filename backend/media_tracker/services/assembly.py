"""Controller Assembly - the single place where every controller is built and wired.

Invariants:
    - One QueryHelper per record class, all sharing the same DatabaseSessionManager
    - Dependencies are constructor-injected; the only cycles (category <-> factory,
      user -> everything it owns) are closed by one explicit late-binding step
"""

from dataclasses import dataclass

from media_tracker.core.domain_types import MediaType
from media_tracker.core.repository_protocols import MediaItemCatalogController
from media_tracker.infrastructure.database import DatabaseSessionManager
from media_tracker.infrastructure.query_helper import QueryHelper
from media_tracker.models import (
    BookRecord, CategoryRecord, GroupRecord, MovieRecord, OwnPlatformRecord,
    TvShowRecord, UserRecord, VideogameRecord,
)
from media_tracker.services.category_controller import CategoryController
from media_tracker.services.group_controller import GroupController
from media_tracker.services.media_item_factory import MediaItemBinding, MediaItemFactory
from media_tracker.services.media_items.book import BookEntityController
from media_tracker.services.media_items.movie import MovieEntityController
from media_tracker.services.media_items.tv_show import TvShowEntityController
from media_tracker.services.media_items.videogame import VideogameEntityController
from media_tracker.services.own_platform_controller import OwnPlatformController
from media_tracker.services.user_controller import UserController


@dataclass(frozen=True)
class Controllers:
    users: UserController
    categories: CategoryController
    groups: GroupController
    own_platforms: OwnPlatformController
    movies: MovieEntityController
    books: BookEntityController
    tv_shows: TvShowEntityController
    videogames: VideogameEntityController
    media_items: MediaItemFactory


def build_controllers(
    db: DatabaseSessionManager,
    catalogs: dict[MediaType, MediaItemCatalogController] | None = None,
    log_query_performance: bool = False,
) -> Controllers:
    """Build every controller over the given database."""
    catalogs = catalogs or {}

    def helper(record_class: type) -> QueryHelper:
        return QueryHelper(db, record_class, log_query_performance)

    users = UserController(helper(UserRecord))
    categories = CategoryController(helper(CategoryRecord), users)
    groups = GroupController(helper(GroupRecord), categories)
    own_platforms = OwnPlatformController(helper(OwnPlatformRecord), categories)

    def media_item_controller(controller_class, record_class):
        return controller_class(
            helper(record_class), categories, groups, own_platforms,
        )

    movies = media_item_controller(MovieEntityController, MovieRecord)
    books = media_item_controller(BookEntityController, BookRecord)
    tv_shows = media_item_controller(TvShowEntityController, TvShowRecord)
    videogames = media_item_controller(VideogameEntityController, VideogameRecord)

    media_items = MediaItemFactory(categories, {
        controller.linked_media_type: MediaItemBinding(
            controller, catalogs.get(controller.linked_media_type),
        )
        for controller in (movies, books, tv_shows, videogames)
    })

    # Late binding
    groups.bind_media_items(media_items)
    own_platforms.bind_media_items(media_items)
    categories.bind_dependents(groups, own_platforms, media_items)
    users.bind_dependents(categories, groups, own_platforms, media_items)

    return Controllers(
        users=users,
        categories=categories,
        groups=groups,
        own_platforms=own_platforms,
        movies=movies,
        books=books,
        tv_shows=tv_shows,
        videogames=videogames,
        media_items=media_items,
    )
