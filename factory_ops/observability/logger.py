"""
Structured logging for factory-ops

All modules log through get_logger(__name__), which hangs them under the
"factory_ops" logger. That logger writes one JSON object per line
(python-json-logger) to stderr, so import runs and insight refreshes can be
filtered on fields such as data_kind or batch_id. LOG_FORMAT=text gives a
plain format for terminals.
"""
import logging
import os
import sys
import time
from contextlib import contextmanager

from pythonjsonlogger import jsonlogger

APP_LOGGER_NAME = "factory_ops"

JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"
TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class FactoryJsonFormatter(jsonlogger.JsonFormatter):
    """
    Renames the standard attributes to short keys (ts, level, logger) and
    adds the code location as "where".
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["ts"] = log_record.pop("asctime", None) or self.formatTime(record, self.datefmt)
        log_record["level"] = log_record.pop("levelname", record.levelname)
        log_record["logger"] = log_record.pop("name", record.name)
        log_record["where"] = f"{record.module}.{record.funcName}:{record.lineno}"


def _formatter(format_type: str) -> logging.Formatter:
    if format_type == "text":
        return logging.Formatter(TEXT_FORMAT, datefmt="%H:%M:%S")
    return FactoryJsonFormatter(JSON_FIELDS, datefmt="%Y-%m-%dT%H:%M:%S%z")


def configure_logging(level: str | None = None, format_type: str | None = None) -> logging.Logger:
    """
    (Re)configure the application logger.

    Args:
        level: Level name (default: LOG_LEVEL env var, then INFO); unknown names mean INFO
        format_type: "json" or "text" (default: LOG_FORMAT env var, then json)

    Returns:
        The "factory_ops" logger
    """
    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter((format_type or os.getenv("LOG_FORMAT") or "json").lower()))

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(numeric_level)
    # Replace rather than add, so reconfiguring never duplicates output
    app_logger.handlers = [handler]
    app_logger.propagate = False
    return app_logger


def get_logger(name: str = APP_LOGGER_NAME) -> logging.Logger:
    """Logger under "factory_ops"; configures the application logger on first use."""
    if not logging.getLogger(APP_LOGGER_NAME).handlers:
        configure_logging()

    if name != APP_LOGGER_NAME and not name.startswith(APP_LOGGER_NAME + "."):
        name = f"{APP_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


@contextmanager
def log_operation(operation: str, logger: logging.Logger | None = None, **context):
    """
    Log the duration and outcome of a block.

    Usage:
        with log_operation("Importing records", logger=logger, data_kind="sales"):
            ...

    Exceptions are logged and re-raised.
    """
    logger = logger or get_logger()
    started = time.perf_counter()
    logger.debug(f"{operation} started", extra={"operation": operation, **context})

    try:
        yield
    except Exception as e:
        logger.error(
            f"{operation} failed: {e}",
            extra={
                "operation": operation,
                "elapsed_ms": round((time.perf_counter() - started) * 1000, 1),
                "error_type": type(e).__name__,
                **context,
            },
            exc_info=True,
        )
        raise

    logger.info(
        f"{operation} done",
        extra={
            "operation": operation,
            "elapsed_ms": round((time.perf_counter() - started) * 1000, 1),
            **context,
        },
    )
