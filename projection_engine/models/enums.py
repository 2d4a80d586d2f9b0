"""Enumerations accepted by the projection calculations."""

from enum import Enum
from typing import Type, TypeVar, Union

from ..errors import InvalidInputError

E = TypeVar("E", bound=Enum)


class PeriodType(str, Enum):
    """Length of the period a growth rate is compounded to."""
    ANNUAL = "annual"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"


class ConfidenceLevel(str, Enum):
    """Forecast conservatism applied to a growth assumption."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CalculationMethod(str, Enum):
    """Growth projection algorithm."""
    LINEAR = "linear"
    COMPOUND = "compound"
    HISTORICAL = "historical"


def coerce_enum(enum_type: Type[E], value: Union[E, str], field: str) -> E:
    """Accept an enum member or its string literal."""
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        allowed = [member.value for member in enum_type]
        raise InvalidInputError(
            f"Invalid {field}: {value!r} (expected one of {allowed})",
            field=field,
            value=value,
        ) from None
