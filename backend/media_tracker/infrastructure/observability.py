"""Logging setup - one root handler, JSON lines or plain text.

Invariants:
    - Every JSON line has timestamp, level, logger and message
    - Tenant ids (user_id, category_id), store fields (table, operation, elapsed_ms)
      and workflow fields (failed_step, completed_steps) are copied from `extra`
    - Query timings go to PERFORMANCE_LOGGER_NAME, which only reaches the handler
      when query performance logging is switched on
    - setup_logging replaces root handlers, so calling it twice does not duplicate lines
"""

import logging
import json
from datetime import datetime, timezone

PERFORMANCE_LOGGER_NAME = "media_tracker.performance"

performance_logger = logging.getLogger(PERFORMANCE_LOGGER_NAME)

LOG_FIELDS = (
    "user_id", "category_id", "error_code", "path",
    "table", "operation", "elapsed_ms",
    "failed_step", "completed_steps", "duplicate_ids", "checks",
)


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, record.__dict__[key]) for key in LOG_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(
    level: str = "INFO", fmt: str = "json", query_performance: bool = False,
) -> None:
    """Install the root handler; called once from the lifespan."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.handlers = [handler]
    logging.root.setLevel(level)
    performance_logger.setLevel(logging.DEBUG if query_performance else logging.WARNING)
