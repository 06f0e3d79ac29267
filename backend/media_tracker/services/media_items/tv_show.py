"""TV Show Entity Controller - media items of TV_SHOW categories.

Invariants:
    - Season numbers are positive, unique and strictly increasing (SaveError otherwise)
"""

import logging

from media_tracker.core.conditions import Condition, icontains
from media_tracker.core.domain_types import MediaItemSortField, MediaType
from media_tracker.core.entities import MediaItemSortBy, TvShow
from media_tracker.core.errors import SaveError
from media_tracker.models.tv_show import TvShowRecord
from media_tracker.services.media_items.media_item import MediaItemEntityController

logger = logging.getLogger(__name__)


class TvShowEntityController(MediaItemEntityController[TvShow]):
    linked_media_type = MediaType.TV_SHOW

    def default_sort_by(self) -> list[MediaItemSortBy]:
        return [MediaItemSortBy(MediaItemSortField.NAME)]

    def new_blank_record(self) -> TvShowRecord:
        return TvShowRecord()

    def sort_fields_for(self, field: MediaItemSortField) -> tuple[str, ...]:
        if field == MediaItemSortField.CREATOR:
            return ("creators",)
        return self.common_sort_fields(field)

    def search_conditions(self, term: str) -> list[Condition]:
        return [icontains("creators", term)]

    def validate_media_item(self, media_item: TvShow) -> None:
        numbers = [season.number for season in media_item.seasons]
        if any(number < 1 for number in numbers):
            logger.warning(f"Invalid TV show season numbers: {numbers}")
            raise SaveError("TV show season numbers must be positive")
        if any(a >= b for a, b in zip(numbers, numbers[1:])):
            logger.warning(f"Invalid TV show season numbers: {numbers}")
            raise SaveError(
                "TV show season numbers must be unique and in increasing order",
            )
