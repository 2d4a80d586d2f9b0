"""Unit tests for the projection data normalizer."""

import pytest
import json

from projection_engine.data.projection_normalizer import (
    ProjectionNormalizationResult,
    ProjectionNormalizer,
)
from projection_engine.models.enums import PeriodType
from projection_engine.models.projection import RevenueProjection


class TestProjectionNormalizer:
    """Test suite for the ProjectionNormalizer class."""

    def test_normalize_camel_case_mapping(self, sample_projection) -> None:
        """Test normalizing a projection with camelCase keys."""
        normalizer = ProjectionNormalizer()

        result = normalizer.normalize_projection(sample_projection)

        assert result.success is True
        assert result.error_msg is None
        projection = result.projection
        assert projection.id == "proj-001"
        assert projection.plan_id == "plan-001"
        assert projection.total_revenue == 1200000.0
        assert projection.period.period_type is PeriodType.ANNUAL
        assert projection.period.start_date == "2024-01-01"
        assert len(projection.scenarios) == 3
        assert projection.scenarios[0].is_preferred is True
        assert projection.scenarios[0].assumptions == ("Steady customer acquisition",)
        assert projection.revenue_breakdown["services"] == 400000.0
        assert projection.total_probability == pytest.approx(100)

    def test_normalize_snake_case_mapping(self) -> None:
        """Test that snake_case keys are accepted as well."""
        normalizer = ProjectionNormalizer()
        data = {
            "id": "p1",
            "plan_id": "plan1",
            "total_revenue": 500,
            "scenarios": [{"id": "s1", "name": "Only", "projected_revenue": 500,
                           "probability_percentage": 100, "is_preferred": True}],
        }

        result = normalizer.normalize_projection(data)

        assert result.success is True
        assert result.projection.total_revenue == 500.0
        assert result.projection.period is None
        assert len(result.projection.preferred_scenarios) == 1

    def test_normalize_json_string(self, sample_projection) -> None:
        """Test normalizing a JSON document."""
        normalizer = ProjectionNormalizer()
        result = normalizer.normalize_projection(json.dumps(sample_projection))

        assert result.success is True
        assert result.projection.id == "proj-001"

    def test_model_passes_through(self) -> None:
        """Test that RevenueProjection instances are returned unchanged."""
        projection = RevenueProjection(id="p", plan_id="q", period=None, total_revenue=1.0)
        result = ProjectionNormalizer().normalize_projection(projection)
        assert result.projection is projection

    def test_missing_fields_default(self) -> None:
        """Test that absent identifiers and amounts default."""
        result = ProjectionNormalizer().normalize_projection({})

        assert result.success is True
        assert result.projection.id is None
        assert result.projection.plan_id is None
        assert result.projection.total_revenue == 0.0
        assert result.projection.scenarios == ()

    def test_invalid_json(self) -> None:
        """Test error reporting for malformed JSON."""
        result = ProjectionNormalizer().normalize_projection("{not json")

        assert result.success is False
        assert "Failed to parse projection JSON" in result.error_msg

    def test_non_numeric_revenue(self) -> None:
        """Test error reporting for non-numeric amounts."""
        result = ProjectionNormalizer().normalize_projection({"totalRevenue": "a lot"})

        assert result.success is False
        assert "total_revenue" in result.error_msg

    def test_invalid_period_type(self) -> None:
        """Test error reporting for unknown period types."""
        result = ProjectionNormalizer().normalize_projection(
            {"period": {"startDate": "2024-01-01", "periodType": "weekly"}}
        )
        assert result.success is False

    def test_scenario_must_be_mapping(self) -> None:
        """Test error reporting for malformed scenarios."""
        result = ProjectionNormalizer().normalize_projection({"scenarios": ["base"]})
        assert result.success is False
        assert "scenario" in result.error_msg


class TestProjectionNormalizationResult:
    """Test suite for the result wrapper."""

    def test_error_result(self) -> None:
        result = ProjectionNormalizationResult.error("bad")
        assert result.success is False
        assert result.projection is None
        assert result.error_msg == "bad"
