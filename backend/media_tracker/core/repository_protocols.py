"""Boundary Protocols - contracts for collaborators the core does not implement.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - External media catalogs (movie databases, book APIs...) are reached only
      through MediaItemCatalogController

Design Decisions:
    - Protocol over ABC: structural subtyping, any client with the right async
      methods can be bound to a media type in MediaItemFactory
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Protocol


@dataclass(frozen=True)
class CatalogSearchResult:
    """One hit of a catalog search by term."""
    catalog_id: str
    name: str
    release_date: date | None = None


@dataclass
class CatalogMediaItem:
    """Catalog details of a media item, used to pre-fill a new entity."""
    name: str
    genres: list[str] = field(default_factory=list)
    description: str | None = None
    release_date: date | None = None
    image_url: str | None = None
    catalog_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


class MediaItemCatalogController(Protocol):
    """Contract for an external media catalog, one per media type."""
    async def search_media_item_catalog_by_term(
        self, search_term: str,
    ) -> list[CatalogSearchResult]: ...
    async def get_media_item_from_catalog(
        self, catalog_item_id: str,
    ) -> CatalogMediaItem: ...
