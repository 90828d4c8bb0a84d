import math
import re
from typing import Optional, Tuple

from wiring_core.errors import InvalidInputError

_QUANTITY = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*([a-zA-Z]*)\s*$")

POWER_MULTIPLIERS = {"W": 1.0, "KW": 1000.0, "MW": 1000000.0, "HP": 746.0}
APPARENT_MULTIPLIERS = {"VA": 1.0, "KVA": 1000.0, "MVA": 1000000.0}
LENGTH_MULTIPLIERS = {"m": 1.0, "ft": 0.3048, "yd": 0.9144}


def current_from_power(watts: float, voltage: float, phases: int, pf: float) -> float:
    """I = P / (V pf) single phase, P / (√3 V pf) three phase (V is line voltage)."""
    factor = math.sqrt(3) if phases == 3 else 1.0
    return watts / (voltage * factor * pf)


def convert_power_unit(val: float, unit: str, voltage: float, phases: int, pf: float) -> Tuple[float, Optional[float]]:
    """
    Converts a rating to (watts, design_current_override).
    The override is only set when the rating was given in amps.
    """
    unit = unit.strip().upper()
    if unit in POWER_MULTIPLIERS:
        return val * POWER_MULTIPLIERS[unit], None
    if unit in APPARENT_MULTIPLIERS:
        return val * APPARENT_MULTIPLIERS[unit] * pf, None
    if unit == "A":
        factor = math.sqrt(3) if phases == 3 else 1.0
        return val * voltage * factor * pf, val
    raise InvalidInputError(f"Unknown power unit: {unit!r}", "unit")


def convert_length_unit(val: float, unit: str) -> float:
    """Returns length in metres."""
    unit = unit.strip().lower()
    if unit not in LENGTH_MULTIPLIERS:
        raise InvalidInputError(f"Unknown length unit: {unit!r}", "unit")
    return val * LENGTH_MULTIPLIERS[unit]


def parse_quantity(text: str, default_unit: str) -> Tuple[float, str]:
    """'3.5 kW' -> (3.5, 'kW'); a bare number takes default_unit."""
    match = _QUANTITY.match(text or "")
    if not match:
        raise InvalidInputError(f"Cannot read a quantity from {text!r}", "quantity")
    return float(match.group(1)), match.group(2) or default_unit
