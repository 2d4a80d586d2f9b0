"""Revenue projection validation."""

from .projection_validator import ProjectionValidator, validate_revenue_projection

__all__ = ["ProjectionValidator", "validate_revenue_projection"]
