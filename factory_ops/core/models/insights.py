"""
Insight models: anomalies, forecasts, recommendations and the combined report.

All of them are recomputed on every request and never stored.
"""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

Severity = Literal["low", "medium", "high"]
Difficulty = Literal["low", "medium", "high"]
ForecastType = Literal["inventory", "production"]


class InsightModel(BaseModel):
    """Serialized with camelCase names (immediateAction, daysToDepletion, ...)."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class Anomaly(InsightModel):
    """
    A heuristically detected deviation from the normal operating pattern.

    Attributes:
        issue: Headline of the problem
        evidence: The numbers that triggered the rule
        likely_causes: Advisory list of probable causes
        immediate_action: What to do first
        severity: low, medium or high
    """

    issue: str
    evidence: str
    likely_causes: list[str] = Field(default_factory=list)
    immediate_action: str
    severity: Severity


class Forecast(InsightModel):
    """
    A depletion or trend projection.

    days_to_depletion is meaningful for inventory forecasts only and is 0 for
    the production trend entry.
    """

    item: str
    days_to_depletion: int = Field(..., ge=0)
    confidence: float = Field(..., ge=0.0, le=1.0)
    type: ForecastType


class Recommendation(InsightModel):
    action: str
    estimated_impact: str
    difficulty: Difficulty = "low"
    priority: int = Field(..., ge=1)


class Insights(InsightModel):
    anomalies: list[Anomaly] = Field(default_factory=list)
    forecasts: list[Forecast] = Field(default_factory=list)
    recommendations: list[Recommendation] = Field(default_factory=list)
    summary: str

    class Config:
        json_schema_extra = {
            "example": {
                "anomalies": [
                    {
                        "issue": "Paint stock critically low",
                        "evidence": "Current: 40L, Minimum: 100L",
                        "likelyCauses": ["Increased consumption rate"],
                        "immediateAction": "Reorder Paint immediately - production may be affected",
                        "severity": "high",
                    }
                ],
                "forecasts": [
                    {"item": "Paint", "daysToDepletion": 8, "confidence": 0.75, "type": "inventory"}
                ],
                "recommendations": [
                    {
                        "action": "Reorder Paint immediately - production may be affected",
                        "estimatedImpact": "Critical - prevent production stoppage",
                        "difficulty": "low",
                        "priority": 1,
                    }
                ],
                "summary": (
                    "Factory operations overview: 1 issue detected requiring attention. "
                    "1 forecast alert for inventory management. "
                ),
            }
        }
