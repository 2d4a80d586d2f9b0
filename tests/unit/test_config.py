"""Unit tests for configuration management."""

import pytest
from pathlib import Path

from projection_engine.config.defaults import get_default_config
from projection_engine.config.loader import ConfigLoader
from projection_engine.config.validation import ConfigValidator


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test that default configuration can be created."""
        config = get_default_config()
        assert config is not None
        assert config.growth.confidence_factors == {"low": 0.8, "medium": 1.0, "high": 1.2}
        assert config.irr.lower_bound == -99.0
        assert config.irr.upper_bound == 100.0
        assert config.break_even.fallback_months == 12
        assert config.validation.probability_tolerance == 0.01
        assert config.cache.enabled is True


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        """Test that ConfigLoader can be created."""
        loader = ConfigLoader.create()
        assert loader is not None
        assert isinstance(loader.config_dir, Path)

    def test_bundled_config_file_is_valid(self) -> None:
        """Test that the shipped engine.yaml merges into a valid config."""
        loader = ConfigLoader.create()
        config = loader.merge_config()
        assert ConfigValidator.validate_config(config) == []
        assert config["irr"]["max_iterations"] == 200

    def test_merge_config_defaults_only(self, tmp_path) -> None:
        """Test config merging without a config file."""
        loader = ConfigLoader.create(tmp_path)
        config = loader.merge_config()

        assert config["irr"]["upper_bound"] == 100.0
        assert config["growth"]["period_exponents"]["monthly"] == pytest.approx(1 / 12)

    def test_file_config_overrides_defaults(self, tmp_path) -> None:
        """Test that engine.yaml takes precedence over defaults."""
        (tmp_path / "engine.yaml").write_text("irr:\n  upper_bound: 250.0\n")
        loader = ConfigLoader.create(tmp_path)
        config = loader.merge_config()

        assert config["irr"]["upper_bound"] == 250.0
        # Other defaults should remain
        assert config["irr"]["lower_bound"] == -99.0

    def test_merge_config_with_overrides(self, tmp_path) -> None:
        """Test that caller overrides beat the file."""
        (tmp_path / "engine.yaml").write_text("irr:\n  upper_bound: 250.0\n")
        loader = ConfigLoader.create(tmp_path)
        overrides = {
            "irr": {"upper_bound": 300.0},
            "growth": {"confidence_factors": {"high": 1.5}},
        }

        config = loader.merge_config(overrides)

        assert config["irr"]["upper_bound"] == 300.0
        assert config["growth"]["confidence_factors"] == {"low": 0.8, "medium": 1.0, "high": 1.5}

    def test_build_config(self, tmp_path) -> None:
        """Test typed config rebuilt from merged tiers."""
        loader = ConfigLoader.create(tmp_path)
        config = loader.build_config({"break_even": {"fallback_months": 6}})

        assert config.break_even.fallback_months == 6
        assert config.irr.max_iterations == 200

    def test_empty_config_file(self, tmp_path) -> None:
        """Test that an empty engine.yaml is ignored."""
        (tmp_path / "engine.yaml").write_text("")
        loader = ConfigLoader.create(tmp_path)
        assert loader.load_file_config() == {}


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_irr_params(self) -> None:
        """Test validation of valid IRR parameters."""
        params = {
            "lower_bound": -99.0,
            "upper_bound": 100.0,
            "max_iterations": 200,
            "tolerance": 1e-7,
        }

        errors = ConfigValidator.validate_irr_params(params)
        assert len(errors) == 0

    def test_lower_bound_at_minus_100(self) -> None:
        """Test that a -100% bound is rejected."""
        errors = ConfigValidator.validate_irr_params({"lower_bound": -100.0})
        assert len(errors) == 1
        assert errors[0].field == "lower_bound"

    def test_inverted_bounds(self) -> None:
        """Test that upper bound must exceed lower bound."""
        errors = ConfigValidator.validate_irr_params({"lower_bound": 50.0, "upper_bound": 10.0})
        assert len(errors) == 1
        assert errors[0].field == "upper_bound"

    def test_invalid_max_iterations(self) -> None:
        """Test validation of invalid max_iterations."""
        errors = ConfigValidator.validate_irr_params({"max_iterations": 0})
        assert len(errors) == 1
        assert errors[0].field == "max_iterations"

    def test_decreasing_confidence_factors(self) -> None:
        """Test that confidence multipliers must not decrease."""
        errors = ConfigValidator.validate_growth_params(
            {"confidence_factors": {"low": 1.2, "medium": 1.0, "high": 0.8}}
        )
        assert len(errors) == 1
        assert errors[0].field == "confidence_factors"

    def test_missing_confidence_level(self) -> None:
        """Test that every confidence level needs a multiplier."""
        errors = ConfigValidator.validate_growth_params({"confidence_factors": {"low": 0.8}})
        assert len(errors) == 1

    def test_invalid_period_exponents(self) -> None:
        """Test validation of period exponents."""
        errors = ConfigValidator.validate_growth_params(
            {"period_exponents": {"annual": 1.0, "quarterly": 0.25}}
        )
        assert len(errors) == 1
        assert errors[0].field == "period_exponents"

    def test_invalid_fallback_months(self) -> None:
        """Test validation of break-even fallback."""
        errors = ConfigValidator.validate_break_even_params({"fallback_months": -1})
        assert len(errors) == 1

    def test_negative_tolerance(self) -> None:
        """Test validation of projection tolerances."""
        errors = ConfigValidator.validate_validation_params({"probability_tolerance": -0.5})
        assert len(errors) == 1
        assert errors[0].field == "probability_tolerance"

    def test_invalid_cache_flag(self) -> None:
        """Test validation of cache parameters."""
        errors = ConfigValidator.validate_cache_params({"enabled": "yes"})
        assert len(errors) == 1

    def test_validate_complete_config(self) -> None:
        """Test validation of complete configuration."""
        config = {
            "irr": {"max_iterations": -5},
            "break_even": {"fallback_months": 0},
            "cache": {"enabled": True},
        }

        errors = ConfigValidator.validate_config(config)
        assert [e.field for e in errors] == ["max_iterations", "fallback_months"]
