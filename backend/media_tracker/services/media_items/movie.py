"""Movie Entity Controller - media items of MOVIE categories."""

from media_tracker.core.conditions import Condition, icontains
from media_tracker.core.domain_types import MediaItemSortField, MediaType
from media_tracker.core.entities import MediaItemSortBy, Movie
from media_tracker.models.movie import MovieRecord
from media_tracker.services.media_items.media_item import MediaItemEntityController


class MovieEntityController(MediaItemEntityController[Movie]):
    linked_media_type = MediaType.MOVIE

    def default_sort_by(self) -> list[MediaItemSortBy]:
        return [MediaItemSortBy(MediaItemSortField.NAME)]

    def new_blank_record(self) -> MovieRecord:
        return MovieRecord()

    def sort_fields_for(self, field: MediaItemSortField) -> tuple[str, ...]:
        if field == MediaItemSortField.DIRECTOR:
            return ("directors",)
        return self.common_sort_fields(field)

    def search_conditions(self, term: str) -> list[Condition]:
        return [icontains("directors", term)]
