"""
Insight threshold configuration.

Loads the constants used by the insights engine from YAML files and
provides a builder for overriding them programmatically.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = "config/insights.yaml"


class InsightThresholds(BaseModel):
    """
    Constants of the anomaly, forecast and recommendation heuristics.

    Defaults are the production values; a YAML file may override any subset.
    """

    # Anomaly detection
    trend_window: int = Field(7, ge=1)
    min_history: int = Field(14, ge=2)
    decrease_pct: float = -10.0
    severe_decrease_pct: float = -20.0
    waste_growth_factor: float = Field(1.2, gt=0)

    # Inventory depletion
    consumption_rate: float = Field(0.05, gt=0)
    consumption_floor: float = Field(0.1, gt=0)
    depletion_horizon_days: float = Field(30, gt=0)
    inventory_confidence: float = Field(0.75, ge=0, le=1)

    # Production trend
    slope_threshold: float = Field(5.0, ge=0)
    trend_confidence: float = Field(0.65, ge=0, le=1)

    # Recommendations
    reorder_within_days: float = Field(14, gt=0)


class ThresholdConfigLoader:
    """
    Loads insight thresholds from a YAML configuration file.

    Expected YAML format:
    ```yaml
    insights:
      decrease_pct: -10
      severe_decrease_pct: -20
      consumption_rate: 0.05
    ```
    """

    def __init__(self, config_path: str | Path):
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Insights configuration file not found: {config_path}")

    def load(self) -> InsightThresholds:
        """
        Parse the file into thresholds.

        Raises:
            ValueError: If the file has no 'insights' mapping or a value is invalid
        """
        with open(self.config_path) as f:
            config = yaml.safe_load(f)

        if not config or "insights" not in config:
            raise ValueError("Configuration file must contain 'insights' section")

        section = config["insights"] or {}
        if not isinstance(section, dict):
            raise ValueError("'insights' section must be a mapping")

        unknown = set(section) - set(InsightThresholds.model_fields)
        if unknown:
            raise ValueError(f"Unknown insight settings: {', '.join(sorted(unknown))}")

        return InsightThresholds(**section)


def load_thresholds(config_path: str | Path | None = None) -> InsightThresholds:
    """
    Thresholds from an explicit path, the INSIGHTS_CONFIG env var, or the
    default config file; built-in defaults when none of them exists.
    """
    path = config_path or os.getenv("INSIGHTS_CONFIG") or DEFAULT_CONFIG_PATH
    if config_path is None and not Path(path).exists():
        return InsightThresholds()
    return ThresholdConfigLoader(path).load()


class ThresholdConfigBuilder:
    """
    Programmatically build thresholds (for testing or per-site tuning).
    """

    def __init__(self, base: InsightThresholds | None = None):
        self.values: dict[str, Any] = (base or InsightThresholds()).model_dump()

    def with_trend_window(self, window: int, min_history: int | None = None) -> "ThresholdConfigBuilder":
        self.values["trend_window"] = window
        self.values["min_history"] = min_history if min_history is not None else window * 2
        return self

    def with_decrease_limits(self, warn_pct: float, severe_pct: float) -> "ThresholdConfigBuilder":
        self.values["decrease_pct"] = warn_pct
        self.values["severe_decrease_pct"] = severe_pct
        return self

    def with_consumption(self, rate: float, floor: float | None = None) -> "ThresholdConfigBuilder":
        self.values["consumption_rate"] = rate
        if floor is not None:
            self.values["consumption_floor"] = floor
        return self

    def with_horizons(self, depletion_days: float, reorder_days: float) -> "ThresholdConfigBuilder":
        self.values["depletion_horizon_days"] = depletion_days
        self.values["reorder_within_days"] = reorder_days
        return self

    def build(self) -> InsightThresholds:
        return InsightThresholds(**self.values)
