"""
Logging and metrics for factory-ops.
"""

from .logger import configure_logging, get_logger, log_operation

__all__ = [
    "configure_logging",
    "get_logger",
    "log_operation",
]
