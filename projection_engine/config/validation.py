"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

CONFIDENCE_ORDER = ("low", "medium", "high")
PERIOD_TYPES = ("annual", "quarterly", "monthly")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_growth_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate growth parameters."""
        errors = []

        if "confidence_factors" in params:
            factors = params["confidence_factors"]
            if not isinstance(factors, dict):
                errors.append(ValidationError(
                    field="confidence_factors",
                    message="Must be a mapping of confidence level to multiplier",
                    value=factors
                ))
            else:
                missing = [level for level in CONFIDENCE_ORDER if level not in factors]
                if missing:
                    errors.append(ValidationError(
                        field="confidence_factors",
                        message=f"Missing levels: {missing}",
                        value=factors
                    ))
                elif not all(_is_number(factors[level]) and factors[level] > 0
                             for level in CONFIDENCE_ORDER):
                    errors.append(ValidationError(
                        field="confidence_factors",
                        message="Multipliers must be positive numbers",
                        value=factors
                    ))
                elif not (factors["low"] <= factors["medium"] <= factors["high"]):
                    errors.append(ValidationError(
                        field="confidence_factors",
                        message="Multipliers must not decrease from low to high",
                        value=factors
                    ))

        if "period_exponents" in params:
            exponents = params["period_exponents"]
            if not isinstance(exponents, dict) or any(
                    period not in exponents or not _is_number(exponents[period])
                    or exponents[period] <= 0
                    for period in PERIOD_TYPES):
                errors.append(ValidationError(
                    field="period_exponents",
                    message="Must map annual, quarterly and monthly to positive numbers",
                    value=exponents
                ))

        return errors

    @staticmethod
    def validate_irr_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate IRR search parameters."""
        errors = []

        lower = params.get("lower_bound")
        upper = params.get("upper_bound")

        if "lower_bound" in params and (not _is_number(lower) or lower <= -100):
            errors.append(ValidationError(
                field="lower_bound",
                message="Must be a number greater than -100",
                value=lower
            ))

        if "upper_bound" in params and not _is_number(upper):
            errors.append(ValidationError(
                field="upper_bound",
                message="Must be a number",
                value=upper
            ))

        if _is_number(lower) and _is_number(upper) and lower >= upper:
            errors.append(ValidationError(
                field="upper_bound",
                message="Must be greater than lower_bound",
                value=upper
            ))

        if "max_iterations" in params:
            value = params["max_iterations"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="max_iterations",
                    message="Must be a positive integer",
                    value=value
                ))

        if "tolerance" in params:
            value = params["tolerance"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="tolerance",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_break_even_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate break-even parameters."""
        errors = []

        if "fallback_months" in params:
            value = params["fallback_months"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="fallback_months",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_validation_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate projection validation tolerances."""
        errors = []

        for name in ("probability_tolerance", "sales_mix_tolerance"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative number",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_cache_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate cache parameters."""
        errors = []

        if "enabled" in params and not isinstance(params["enabled"], bool):
            errors.append(ValidationError(
                field="enabled",
                message="Must be a boolean",
                value=params["enabled"]
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "growth" in config:
            errors.extend(ConfigValidator.validate_growth_params(config["growth"]))

        if "irr" in config:
            errors.extend(ConfigValidator.validate_irr_params(config["irr"]))

        if "break_even" in config:
            errors.extend(ConfigValidator.validate_break_even_params(config["break_even"]))

        if "validation" in config:
            errors.extend(ConfigValidator.validate_validation_params(config["validation"]))

        if "cache" in config:
            errors.extend(ConfigValidator.validate_cache_params(config["cache"]))

        return errors
