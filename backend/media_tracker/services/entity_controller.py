"""Entity Controller Helpers - precondition, cascade and multi-step workflow primitives.

Invariants:
    - check_existence_preconditions raises the caller-supplied error when any checked
      entity is missing, and error.with_details(cause) when the check itself fails
    - cleanup_with_empty_check refuses a non-forced delete while sub-items exist
    - run_steps never rolls back: completed steps stay, and the raised error carries
      their names in context.debug_info["completed_steps"]

Design Decisions:
    - Plain base class with async helpers, shared by every controller: the store has no
      foreign keys or multi-record transactions, so integrity lives here
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Sequence

from media_tracker.core.errors import (
    DeleteError, DeleteNotEmptyError, GenericError, MediaTrackerError,
)

logger = logging.getLogger(__name__)

Step = tuple[str, Callable[[], Awaitable[Any]]]


async def sum_results(*awaitables: Awaitable[int]) -> int:
    """Await counts concurrently and add them up; the first failure surfaces."""
    results = await asyncio.gather(*awaitables)
    return sum(results)


class AbstractEntityController:
    """Shared helpers for entity controllers."""

    async def check_existence_preconditions(
        self,
        error: MediaTrackerError,
        check: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Run check(); pass if it returned an entity or a list with no None entries."""
        try:
            result = await check()
        except Exception as e:
            logger.warning(
                f"Precondition check failed: {e}",
                extra={"error_code": error.code},
            )
            raise error.with_details(e) from e
        if isinstance(result, (list, tuple)):
            passed = all(value is not None for value in result)
        else:
            passed = result is not None
        if not passed:
            logger.warning(
                f"Precondition not met: {error.details}",
                extra={"error_code": error.code},
            )
            raise error
        logger.debug("Preconditions passed")
        return result

    async def cleanup_with_empty_check(
        self,
        force: bool,
        list_sub_items: Callable[[], Awaitable[Sequence[Any]]],
        delete_fns: Sequence[Callable[[], Awaitable[int]]],
    ) -> int:
        """Delete via delete_fns (concurrently), refusing while sub-items exist unless forced."""
        if not force:
            sub_items = await list_sub_items()
            if sub_items:
                logger.warning(
                    f"Refusing delete, {len(sub_items)} sub-items found",
                    extra={"error_code": "DELETE_NOT_EMPTY"},
                )
                raise DeleteNotEmptyError(f"{len(sub_items)} sub-items found")
        try:
            return await sum_results(*(delete_fn() for delete_fn in delete_fns))
        except MediaTrackerError:
            raise
        except Exception as e:
            logger.error(f"Cleanup failed: {e}", exc_info=True)
            raise DeleteError(e) from e

    async def run_steps(self, operation: str, steps: Sequence[Step]) -> list[Any]:
        """Await steps in order, returning their results."""
        completed: list[str] = []
        results: list[Any] = []
        for name, step in steps:
            try:
                results.append(await step())
            except Exception as e:
                error = e if isinstance(e, MediaTrackerError) else GenericError(e)
                error.context.debug_info = {
                    **(error.context.debug_info or {}),
                    "failed_step": name,
                    "completed_steps": list(completed),
                }
                logger.error(
                    f"{operation} failed at step '{name}' after {completed}, "
                    "manual reconciliation may be needed",
                    extra={
                        "operation": operation,
                        "error_code": error.code,
                        "completed_steps": list(completed),
                    },
                )
                if error is e:
                    raise
                raise error from e
            completed.append(name)
        return results
