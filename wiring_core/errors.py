"""Error types raised by the calculators."""
from typing import Optional


class CalculationError(ValueError):
    """Base class for every calculator failure."""


class InvalidInputError(CalculationError):
    """Raised when a field is missing, non-positive, out of range or not in its closed set."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class MissingCategoryError(InvalidInputError):
    """Raised when the aggregator is missing a category input or the installation type."""


class InvalidCountError(InvalidInputError):
    """Raised for negative item counts (e.g. socket outlets)."""


class ComputationBoundsExceededError(CalculationError):
    """
    Describes a cable run that no standard size can satisfy.
    Attached to the sizing result, never raised by the sizing engine.
    """

    def __init__(self, largest_size: float, voltage_drop_check: bool, thermal_check: bool):
        failed = []
        if not thermal_check:
            failed.append("current-carrying capacity")
        if not voltage_drop_check:
            failed.append("voltage drop")
        super().__init__(
            f"No standard cable size satisfies {' and '.join(failed)}; "
            f"largest available is {largest_size} mm²"
        )
        self.largest_size = largest_size
        self.voltage_drop_check = voltage_drop_check
        self.thermal_check = thermal_check
