"""Videogame Entity Controller - media items of VIDEOGAME categories."""

from media_tracker.core.conditions import Condition, icontains
from media_tracker.core.domain_types import MediaItemSortField, MediaType
from media_tracker.core.entities import MediaItemSortBy, Videogame
from media_tracker.models.videogame import VideogameRecord
from media_tracker.services.media_items.media_item import MediaItemEntityController


class VideogameEntityController(MediaItemEntityController[Videogame]):
    linked_media_type = MediaType.VIDEOGAME

    def default_sort_by(self) -> list[MediaItemSortBy]:
        return [MediaItemSortBy(MediaItemSortField.NAME)]

    def new_blank_record(self) -> VideogameRecord:
        return VideogameRecord()

    def sort_fields_for(self, field: MediaItemSortField) -> tuple[str, ...]:
        if field == MediaItemSortField.DEVELOPER:
            return ("developers",)
        return self.common_sort_fields(field)

    def search_conditions(self, term: str) -> list[Condition]:
        return [icontains("developers", term)]
