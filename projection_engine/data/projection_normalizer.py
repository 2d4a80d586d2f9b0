"""
Projection data normalization for converting raw records to RevenueProjection.

Callers hand over plain mappings, often straight from JSON with camelCase
keys. This module maps both camelCase and snake_case field names onto the
immutable projection models without judging business rules; that is the
validator's job.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..models.enums import PeriodType
from ..models.projection import ProjectionPeriod, RevenueProjection, RevenueScenario

logger = logging.getLogger(__name__)

# camelCase input name -> model field name
FIELD_ALIASES = {
    "planId": "plan_id",
    "totalRevenue": "total_revenue",
    "revenueBreakdown": "revenue_breakdown",
    "startDate": "start_date",
    "endDate": "end_date",
    "periodType": "period_type",
    "projectedRevenue": "projected_revenue",
    "probabilityPercentage": "probability_percentage",
    "isPreferred": "is_preferred",
}


def _snake_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {FIELD_ALIASES.get(key, key): value for key, value in data.items()}


def _number(value: Any, field: str, default: float = 0.0) -> float:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field} must be a number, got {value!r}")
    return float(value)


@dataclass
class ProjectionNormalizationResult:
    """Result of projection normalization."""
    projection: Optional[RevenueProjection] = None
    success: bool = True
    error_msg: Optional[str] = None

    @classmethod
    def ok(cls, projection: RevenueProjection) -> "ProjectionNormalizationResult":
        return cls(projection=projection, success=True)

    @classmethod
    def error(cls, error_msg: str) -> "ProjectionNormalizationResult":
        return cls(success=False, error_msg=error_msg)


class ProjectionNormalizer:
    """Builds RevenueProjection models from raw mappings or JSON strings."""

    def __init__(self):
        self.logger = logger

    def normalize_projection(
        self, data: Union[RevenueProjection, Mapping[str, Any], str]
    ) -> ProjectionNormalizationResult:
        """
        Normalize a revenue projection from raw format.

        Args:
            data: RevenueProjection, mapping or JSON object string

        Returns:
            ProjectionNormalizationResult with the projection or error information
        """
        if isinstance(data, RevenueProjection):
            return ProjectionNormalizationResult.ok(data)

        if isinstance(data, str):
            try:
                data = json.loads(data)
            except (json.JSONDecodeError, TypeError) as e:
                return ProjectionNormalizationResult.error(f"Failed to parse projection JSON: {e}")

        if not isinstance(data, Mapping):
            return ProjectionNormalizationResult.error(
                f"Projection must be a mapping, got {type(data).__name__}"
            )

        try:
            raw = _snake_keys(data)
            scenarios = tuple(self.normalize_scenario(s) for s in (raw.get("scenarios") or ()))
            projection = RevenueProjection(
                id=raw.get("id") or None,
                plan_id=raw.get("plan_id") or None,
                period=self.normalize_period(raw.get("period")),
                total_revenue=_number(raw.get("total_revenue"), "total_revenue"),
                scenarios=scenarios,
                revenue_breakdown=dict(raw.get("revenue_breakdown") or {}),
            )
        except (TypeError, ValueError) as e:
            self.logger.warning("Projection normalization failed: %s", e)
            return ProjectionNormalizationResult.error(str(e))

        return ProjectionNormalizationResult.ok(projection)

    def normalize_period(self, period: Any) -> Optional[ProjectionPeriod]:
        if period is None or isinstance(period, ProjectionPeriod):
            return period
        if not isinstance(period, Mapping):
            raise ValueError(f"period must be a mapping, got {type(period).__name__}")

        raw = _snake_keys(period)
        return ProjectionPeriod(
            start_date=str(raw.get("start_date", "")),
            end_date=str(raw.get("end_date", "")),
            period_type=PeriodType(raw.get("period_type", PeriodType.ANNUAL.value)),
        )

    def normalize_scenario(self, scenario: Any) -> RevenueScenario:
        if isinstance(scenario, RevenueScenario):
            return scenario
        if not isinstance(scenario, Mapping):
            raise ValueError(f"scenario must be a mapping, got {type(scenario).__name__}")

        raw = _snake_keys(scenario)
        return RevenueScenario(
            id=str(raw.get("id", "")),
            name=str(raw.get("name", "")),
            projected_revenue=_number(raw.get("projected_revenue"), "projected_revenue"),
            probability_percentage=_number(raw.get("probability_percentage"), "probability_percentage"),
            is_preferred=bool(raw.get("is_preferred", False)),
            description=str(raw.get("description", "")),
            assumptions=tuple(raw.get("assumptions") or ()),
        )
