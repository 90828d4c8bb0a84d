"""Validation helpers for calculator inputs."""
import math
from enum import Enum
from typing import Callable, Optional, Type, TypeVar

from wiring_core.errors import InvalidInputError

E = TypeVar("E", bound=Enum)


def _require_number(val, field: str) -> float:
    if val is None:
        raise InvalidInputError(f"{field} is required", field)
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise InvalidInputError(f"{field} must be a number", field)
    if not math.isfinite(val):
        raise InvalidInputError(f"{field} must be a finite number", field)
    return float(val)


def require_finite(val, field: str) -> float:
    return _require_number(val, field)


def require_positive(val, field: str) -> float:
    """Return val as float if finite and > 0; raise otherwise."""
    val = _require_number(val, field)
    if val <= 0:
        raise InvalidInputError(f"{field} must be greater than zero", field)
    return val


def require_non_negative(val, field: str) -> float:
    val = _require_number(val, field)
    if val < 0:
        raise InvalidInputError(f"{field} must not be negative", field)
    return val


def require_fraction(val, field: str) -> float:
    """Factors are accepted in (0, 1]."""
    val = _require_number(val, field)
    if val <= 0 or val > 1:
        raise InvalidInputError(f"{field} must be within (0, 1]", field)
    return val


def require_count(val, field: str, minimum: int = 1) -> int:
    if isinstance(val, bool) or not isinstance(val, int):
        raise InvalidInputError(f"{field} must be a whole number", field)
    if val < minimum:
        raise InvalidInputError(f"{field} must be at least {minimum}", field)
    return val


def require_name(val, field: str) -> str:
    if not isinstance(val, str) or not val.strip():
        raise InvalidInputError(f"{field} is required", field)
    return val


def require_item_list(val, field: str) -> list:
    """An item sequence may be empty but must be present."""
    if val is None:
        raise InvalidInputError(f"{field} is required", field)
    if not isinstance(val, (list, tuple)):
        raise InvalidInputError(f"{field} must be a list", field)
    return list(val)


def coerce_enum(enum_cls: Type[E], val, field: str) -> E:
    """Accepts a member or its string value."""
    if val is None:
        raise InvalidInputError(f"{field} is required", field)
    if isinstance(val, enum_cls):
        return val
    try:
        return enum_cls(val)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidInputError(f"{field} must be one of: {allowed} (got {val!r})", field) from None


def resolve_override(
    override: Optional[float],
    default: Callable[[], float],
    field: str,
    check: Callable[[float, str], float] = require_fraction,
) -> float:
    """
    Single precedence rule for every optional override:
    None -> computed default, otherwise the validated override.
    """
    if override is None:
        return default()
    return check(override, field)
