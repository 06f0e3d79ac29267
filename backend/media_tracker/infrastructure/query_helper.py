"""Query Helper - the five store primitives every entity controller is built on.

Invariants:
    - One short-lived AsyncSession per primitive call: independent calls can run
      concurrently under asyncio.gather
    - Store failures are never swallowed: find -> FindError, save / update ->
      SaveError, delete -> DeleteError, each carrying the original DatabaseError
    - save() inserts when entity.id is None (fresh UUID), otherwise updates by id;
      updating a missing id is a SaveError
    - Returned values are core entities, never ORM records

Design Decisions:
    - Generic over the core entity type; the ORM record class is passed in once
      (one QueryHelper per table, built in services/assembly.py)
    - Conditions are store-agnostic trees compiled by query_compiler
    - Optional elapsed-time logging per primitive on the performance logger
"""

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Any, Generic, Iterable, Iterator, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.orm import selectinload

from media_tracker.core.conditions import Condition, SortSpec
from media_tracker.core.errors import (
    DatabaseError, DeleteError, FindError, SaveError, SaveUniquenessError,
)
from media_tracker.infrastructure.database import DatabaseSessionManager
from media_tracker.infrastructure.observability import performance_logger
from media_tracker.infrastructure.query_compiler import (
    compile_condition, compile_sort,
)

logger = logging.getLogger(__name__)

TEntity = TypeVar("TEntity")


class QueryHelper(Generic[TEntity]):
    """Store access for one record class, speaking in core entities."""

    def __init__(
        self,
        db: DatabaseSessionManager,
        record_class: type,
        log_performance: bool = False,
    ):
        self.db = db
        self.record_class = record_class
        self.log_performance = log_performance

    @property
    def table(self) -> str:
        return self.record_class.__tablename__

    async def find(
        self,
        conditions: Condition | None = None,
        sort: Iterable[SortSpec] | None = None,
        populate: Iterable[str] | None = None,
    ) -> list[TEntity]:
        """All entities matching conditions (all entities when None)."""
        populated = frozenset(populate or ())
        statement = select(self.record_class)
        if conditions is not None:
            statement = statement.where(
                compile_condition(self.record_class, conditions),
            )
        if sort:
            statement = statement.order_by(
                *compile_sort(self.record_class, sort),
            )
        for name in sorted(populated):
            statement = statement.options(
                selectinload(getattr(self.record_class, name)),
            )
        with self._timed("find"):
            try:
                async with self.db.session() as session:
                    result = await session.execute(statement)
                    records = result.scalars().all()
                    return [record.to_internal(populated) for record in records]
            except DatabaseError as e:
                logger.error(
                    f"Database find error: {e}",
                    extra={"table": self.table, "operation": "find"},
                )
                raise FindError(e) from e

    async def find_one(
        self,
        conditions: Condition | None,
        populate: Iterable[str] | None = None,
    ) -> TEntity | None:
        """The single matching entity, None if no match, FindError if more than one."""
        with self._timed("find_one"):
            results = await self.find(conditions, populate=populate)
            if len(results) > 1:
                logger.error(
                    f"find_one matched {len(results)} records",
                    extra={"table": self.table, "operation": "find_one"},
                )
                raise FindError("find_one conditions matched more than one element")
            return results[0] if results else None

    async def check_uniqueness_and_save(
        self,
        entity: TEntity,
        blank_record: Any,
        uniqueness_conditions: Condition,
    ) -> TEntity:
        """Save entity unless another record matches the uniqueness conditions."""
        with self._timed("check_uniqueness_and_save"):
            try:
                matches = await self.find(uniqueness_conditions)
            except FindError as e:
                logger.error(
                    f"Database uniqueness check error: {e}",
                    extra={"table": self.table, "operation": "check_uniqueness"},
                )
                raise SaveError(e) from e
            duplicate_ids = [
                match.id for match in matches
                if entity.id is None or match.id != entity.id
            ]
            if duplicate_ids:
                logger.warning(
                    f"Uniqueness constraint violated, duplicates: {duplicate_ids}",
                    extra={"table": self.table, "operation": "check_uniqueness"},
                )
                raise SaveUniquenessError(duplicate_ids=duplicate_ids)
            return await self.save(entity, blank_record)

    async def save(self, entity: TEntity, blank_record: Any) -> TEntity:
        """Insert (id is None) or update (id set) an entity."""
        with self._timed("save"):
            try:
                async with self.db.session() as session:
                    if entity.id is None:
                        record = blank_record
                        record.assign_from(entity)
                        record.id = uuid.uuid4()
                        session.add(record)
                    else:
                        record = await session.get(self.record_class, entity.id)
                        if record is None:
                            logger.error(
                                f"Save error, cannot find record {entity.id}",
                                extra={"table": self.table, "operation": "save"},
                            )
                            raise SaveError(
                                f"Cannot find {self.table} record {entity.id} to update",
                            )
                        record.assign_from(entity)
                    await session.commit()
                    return record.to_internal()
            except DatabaseError as e:
                logger.error(
                    f"Database save error: {e}",
                    extra={"table": self.table, "operation": "save"},
                )
                raise SaveError(e) from e

    async def update_selective_many(
        self, values: dict[str, Any], conditions: Condition | None = None,
    ) -> int:
        """Set the given columns on every matching record; returns the match count."""
        statement = update(self.record_class).values(**values)
        if conditions is not None:
            statement = statement.where(
                compile_condition(self.record_class, conditions),
            )
        statement = statement.execution_options(synchronize_session=False)
        with self._timed("update_selective_many"):
            try:
                async with self.db.session() as session:
                    result = await session.execute(statement)
                    await session.commit()
            except DatabaseError as e:
                logger.error(
                    f"Database bulk update error: {e}",
                    extra={"table": self.table, "operation": "update_selective_many"},
                )
                raise SaveError(e) from e
            if result.rowcount is None or result.rowcount < 0:
                logger.error(
                    "Bulk update not acknowledged",
                    extra={"table": self.table, "operation": "update_selective_many"},
                )
                raise SaveError("Bulk update not acknowledged")
            return result.rowcount

    async def delete_by_id(self, entity_id: uuid.UUID) -> int:
        """Delete one record; DeleteError if nothing matched."""
        statement = delete(self.record_class).where(
            self.record_class.id == entity_id,
        )
        with self._timed("delete_by_id"):
            deleted = await self._execute_delete(statement)
            if deleted == 0:
                logger.error(
                    f"Delete error, cannot find record {entity_id}",
                    extra={"table": self.table, "operation": "delete_by_id"},
                )
                raise DeleteError("Cannot find record")
            return 1

    async def delete(self, conditions: Condition | None) -> int:
        """Delete every matching record; returns the count (0 on no match)."""
        statement = delete(self.record_class)
        if conditions is not None:
            statement = statement.where(
                compile_condition(self.record_class, conditions),
            )
        with self._timed("delete"):
            return await self._execute_delete(statement)

    async def _execute_delete(self, statement) -> int:
        try:
            async with self.db.session() as session:
                result = await session.execute(
                    statement.execution_options(synchronize_session=False),
                )
                await session.commit()
                return max(result.rowcount or 0, 0)
        except DatabaseError as e:
            logger.error(
                f"Database delete error: {e}",
                extra={"table": self.table, "operation": "delete"},
            )
            raise DeleteError(e) from e

    @contextmanager
    def _timed(self, operation: str) -> Iterator[None]:
        if not self.log_performance:
            yield
            return
        start_ns = time.perf_counter_ns()
        try:
            yield
        finally:
            elapsed_ns = time.perf_counter_ns() - start_ns
            performance_logger.debug(
                f"Query {operation} on {self.table} took "
                f"{elapsed_ns // 1_000_000} ms [{elapsed_ns} ns]",
                extra={
                    "operation": operation,
                    "table": self.table,
                    "elapsed_ms": elapsed_ns / 1_000_000,
                },
            )
