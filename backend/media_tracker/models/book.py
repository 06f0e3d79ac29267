"""Book ORM - media item table for the BOOK media type."""

from sqlalchemy import Integer, JSON
from sqlalchemy.orm import Mapped, mapped_column

from media_tracker.core.entities import Book
from media_tracker.db.base import Base, TimestampedRecord
from media_tracker.models.media_item import MediaItemRecordMixin


class BookRecord(MediaItemRecordMixin, TimestampedRecord, Base):
    __tablename__ = "books"

    authors: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    pages_number: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def assign_from(self, book: Book) -> None:
        self.assign_common(book)
        self.authors = list(book.authors)
        self.pages_number = book.pages_number

    def to_internal(self, populate: frozenset[str] = frozenset()) -> Book:
        return Book(
            **self.common_fields(populate),
            authors=list(self.authors or []),
            pages_number=self.pages_number,
        )
