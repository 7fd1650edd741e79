"""
Structured logging for zonelink.

Provides a pre-configured logger that emits JSON-structured log records
with reconciliation context (run, VPC, zone, operation) for easy
filtering in CloudWatch Logs Insights or any other aggregator.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

_CONTEXT_KEYS = ("run_id", "operation", "region", "vpc_id", "zone_id")


def _level_from_env(default: int = logging.INFO) -> int:
    """Level named by ZONELINK_LOG_LEVEL, or ``default`` if unset or unknown."""
    name = os.environ.get("ZONELINK_LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _CONTEXT_KEYS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry, default=str)


class ZonelinkLogger:
    """Convenience wrapper around :mod:`logging` for reconciliation runs."""

    def __init__(self, name: str = "zonelink") -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(_level_from_env())

    def log_operation(
        self,
        level: int,
        message: str,
        *args: Any,
        run_id: str | None = None,
        operation: str | None = None,
        region: str | None = None,
        vpc_id: str | None = None,
        zone_id: str | None = None,
        exc_info: bool = False,
    ) -> None:
        """Emit a structured log record with reconciliation context.

        Args:
            level: Logging level (e.g. logging.INFO).
            message: %-style message; ``args`` are interpolated lazily.
            run_id: Correlation ID of the current run.
            operation: API call or step name (e.g. 'associate_vpc').
            region: Member region being reconciled.
            vpc_id: VPC the record concerns.
            zone_id: Hosted zone the record concerns.
            exc_info: Whether to include exception info.
        """
        extra = {
            "run_id": run_id,
            "operation": operation,
            "region": region,
            "vpc_id": vpc_id,
            "zone_id": zone_id,
        }
        self.logger.log(level, message, *args, extra=extra, exc_info=exc_info)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.log_operation(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.log_operation(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.log_operation(logging.ERROR, message, *args, **kwargs)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.log_operation(logging.DEBUG, message, *args, **kwargs)


# Module-level singleton
zl_logger = ZonelinkLogger()
