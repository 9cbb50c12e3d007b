"""
Row schemas, the row validator and insight threshold configuration.
"""

from .row_schema import ROW_SCHEMAS, RowSchema, get_row_schema
from .rule_config import (
    InsightThresholds,
    ThresholdConfigBuilder,
    ThresholdConfigLoader,
    load_thresholds,
)
from .rule_engine import RowRejected, RowValidator

__all__ = [
    "InsightThresholds",
    "ROW_SCHEMAS",
    "RowRejected",
    "RowSchema",
    "RowValidator",
    "ThresholdConfigBuilder",
    "ThresholdConfigLoader",
    "get_row_schema",
    "load_thresholds",
]
