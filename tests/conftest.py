"""Pytest configuration and shared fixtures."""

import pytest
from typing import Dict, Any
from datetime import date

from projection_engine.cache import ResultCache
from projection_engine.engine import ProjectionEngine


@pytest.fixture
def result_cache() -> ResultCache:
    """Empty, enabled result cache."""
    return ResultCache()


@pytest.fixture
def engine(tmp_path) -> ProjectionEngine:
    """Engine using built-in defaults only (empty config directory)."""
    return ProjectionEngine(config_dir=tmp_path)


@pytest.fixture
def start_date() -> date:
    return date(2024, 1, 15)


@pytest.fixture
def sample_projection() -> Dict[str, Any]:
    """Valid revenue projection as received from a JSON API."""
    return {
        "id": "proj-001",
        "planId": "plan-001",
        "period": {
            "startDate": "2024-01-01",
            "endDate": "2024-12-31",
            "periodType": "annual",
        },
        "totalRevenue": 1200000.0,
        "scenarios": [
            {
                "id": "scn-base",
                "name": "Base case",
                "projectedRevenue": 1200000.0,
                "probabilityPercentage": 60.0,
                "isPreferred": True,
                "assumptions": ["Steady customer acquisition"],
            },
            {
                "id": "scn-low",
                "name": "Pessimistic",
                "projectedRevenue": 900000.0,
                "probabilityPercentage": 25.0,
            },
            {
                "id": "scn-high",
                "name": "Optimistic",
                "projectedRevenue": 1500000.0,
                "probabilityPercentage": 15.0,
            },
        ],
        "revenueBreakdown": {"subscriptions": 800000.0, "services": 400000.0},
    }
