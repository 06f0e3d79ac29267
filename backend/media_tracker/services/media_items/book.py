"""Book Entity Controller - media items of BOOK categories."""

from media_tracker.core.conditions import Condition, icontains
from media_tracker.core.domain_types import MediaItemSortField, MediaType
from media_tracker.core.entities import Book, MediaItemSortBy
from media_tracker.models.book import BookRecord
from media_tracker.services.media_items.media_item import MediaItemEntityController


class BookEntityController(MediaItemEntityController[Book]):
    linked_media_type = MediaType.BOOK

    def default_sort_by(self) -> list[MediaItemSortBy]:
        return [MediaItemSortBy(MediaItemSortField.NAME)]

    def new_blank_record(self) -> BookRecord:
        return BookRecord()

    def sort_fields_for(self, field: MediaItemSortField) -> tuple[str, ...]:
        if field == MediaItemSortField.AUTHOR:
            return ("authors",)
        return self.common_sort_fields(field)

    def search_conditions(self, term: str) -> list[Condition]:
        return [icontains("authors", term)]
