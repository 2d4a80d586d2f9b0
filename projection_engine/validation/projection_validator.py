"""Business-rule validation of revenue projection records."""

import logging
from typing import Any, Mapping, Optional, Union

from ..config.defaults import ValidationParams
from ..data.projection_normalizer import ProjectionNormalizer
from ..models.projection import RevenueProjection
from ..models.results import ValidationResult

logger = logging.getLogger(__name__)

MISSING_PROJECTION_ID = "Missing projection ID"
MISSING_PLAN_ID = "Missing plan ID"
NEGATIVE_TOTAL_REVENUE = "Total revenue cannot be negative"
NO_SCENARIOS = "At least one scenario is required"
NO_PREFERRED_SCENARIO = "At least one scenario must be marked as preferred"
PROBABILITY_SUM = "Scenario probabilities should sum to 100%"


class ProjectionValidator:
    """Validates revenue projections and reports every failed rule."""

    def __init__(self, params: Optional[ValidationParams] = None):
        self.params = params or ValidationParams()
        self.normalizer = ProjectionNormalizer()
        self.logger = logger

    def validate(self, projection: Union[RevenueProjection, Mapping[str, Any]]) -> ValidationResult:
        """
        Validate a projection.

        Rules are checked in a fixed order and all failures are collected:
        projection ID, plan ID, non-negative total revenue, at least one
        scenario, a preferred scenario, and probabilities summing to 100%.

        A projection that cannot be normalized (unparseable JSON, a
        non-mapping, a non-numeric amount) fails with the normalizer's
        message as its only error; the rules above are not checked.

        Args:
            projection: RevenueProjection or raw mapping

        Returns:
            ValidationResult whose errors keep the rule order
        """
        normalized = self.normalizer.normalize_projection(projection)
        if not normalized.success:
            return ValidationResult(is_valid=False, errors=(normalized.error_msg,))

        errors = self._collect_errors(normalized.projection)

        if errors:
            self.logger.info("Projection %s failed validation: %s",
                             normalized.projection.id, "; ".join(errors))

        return ValidationResult(is_valid=not errors, errors=tuple(errors))

    def _collect_errors(self, projection: RevenueProjection) -> list[str]:
        errors = []

        if not projection.id:
            errors.append(MISSING_PROJECTION_ID)
        if not projection.plan_id:
            errors.append(MISSING_PLAN_ID)

        if projection.total_revenue < 0:
            errors.append(NEGATIVE_TOTAL_REVENUE)

        if not projection.scenarios:
            errors.append(NO_SCENARIOS)
            return errors

        if not projection.preferred_scenarios:
            errors.append(NO_PREFERRED_SCENARIO)

        total_probability = projection.total_probability
        if abs(total_probability - 100) > self.params.probability_tolerance:
            errors.append(f"{PROBABILITY_SUM} (current: {total_probability:g}%)")

        return errors


def validate_revenue_projection(projection: Union[RevenueProjection, Mapping[str, Any]]) -> ValidationResult:
    """Validate with default tolerances."""
    return ProjectionValidator().validate(projection)
