"""Structured logging for depoverride operations.

Conventions:
- All log messages include a correlation ID for tracing one build invocation
- Log levels: DEBUG (every override decision), INFO (user-facing progress),
  WARNING (non-fatal), ERROR (skipped input, e.g. a malformed override key)
- Timing hooks on loading, rewriting and writing phases
- Logs go to stderr (stdout reserved for the rewritten model)

Usage:
    from depoverride.logging import get_logger, timed_operation

    log = get_logger("rewriter")
    log.debug("New dependency added", extra={"group_id": "junit"})

    with timed_operation(log, "rewrite"):
        # ... work ...
        pass
"""

from __future__ import annotations

import json
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from typing import Any, Generator

ROOT_LOGGER = "depoverride"

EXTRA_FIELDS = (
    "group_id",
    "artifact_id",
    "old_version",
    "new_version",
    "property_name",
    "override_count",
    "dependency_count",
    "elapsed_ms",
    "phase",
)

# Correlation ID for the current run
_correlation_id: str = ""


def new_correlation_id() -> str:
    """Generate a new correlation ID for a build invocation."""
    global _correlation_id
    _correlation_id = uuid.uuid4().hex[:8]
    return _correlation_id


def get_correlation_id() -> str:
    """Get the current correlation ID."""
    return _correlation_id or "no-corr"


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs structured JSON log lines."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "corr_id": get_correlation_id(),
        }
        for key in EXTRA_FIELDS + ("error",):
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val
        return json.dumps(entry)


class HumanFormatter(logging.Formatter):
    """Formatter for human-readable output."""

    COLORS = {
        "DEBUG": "\033[90m",
        "INFO": "\033[36m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        reset = self.RESET
        corr = get_correlation_id()
        timestamp = self.formatTime(record, "%H:%M:%S")
        msg = record.getMessage()

        extras = []
        for key in ("override_count", "dependency_count", "elapsed_ms", "phase"):
            val = getattr(record, key, None)
            if val is not None:
                extras.append(f"{key}={val}")
        extra_str = f" [{', '.join(extras)}]" if extras else ""

        return f"{color}{timestamp} [{corr}] {record.levelname:7s}{reset} {record.name}: {msg}{extra_str}"


def configure_logging(level: int = logging.INFO, structured: bool = False) -> logging.Logger:
    """Attach the stderr handler to the package logger and set its level.

    Child loggers from ``get_logger`` inherit both, so this is the one place
    the CLI adjusts verbosity.
    """
    root = logging.getLogger(ROOT_LOGGER)
    formatter: logging.Formatter = StructuredFormatter() if structured else HumanFormatter()

    handler = next((h for h in root.handlers if getattr(h, "_depoverride", False)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler._depoverride = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    handler.setFormatter(formatter)
    root.setLevel(level)
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger with depoverride conventions.

    Args:
        name: Logger name (e.g., "table", "rewriter", "cli").

    Returns:
        Logger named ``depoverride.<name>``.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


@contextmanager
def timed_operation(
    logger: logging.Logger,
    operation: str,
    **extra: Any,
) -> Generator[dict[str, Any], None, None]:
    """Context manager that logs timing for an operation.

    Usage:
        with timed_operation(log, "rewrite", dependency_count=12) as ctx:
            # do work
            ctx["override_count"] = 3  # add metrics to the completion log

    Args:
        logger: Logger instance.
        operation: Name of the operation.
        **extra: Additional fields to log.
    """
    ctx: dict[str, Any] = {}
    start = time.monotonic()
    logger.info(f"Starting {operation}", extra={"phase": f"{operation}:start", **extra})
    try:
        yield ctx
        elapsed_ms = round((time.monotonic() - start) * 1000)
        logger.info(
            f"Completed {operation}",
            extra={"phase": f"{operation}:done", "elapsed_ms": elapsed_ms, **ctx, **extra},
        )
    except Exception as e:
        elapsed_ms = round((time.monotonic() - start) * 1000)
        logger.error(
            f"Failed {operation}: {e}",
            extra={"phase": f"{operation}:error", "elapsed_ms": elapsed_ms, "error": str(e), **extra},
        )
        raise
