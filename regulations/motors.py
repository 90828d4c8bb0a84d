"""
Motor loads: full-load and starting current per motor, protection rating, and the
BS 7671 Appendix A motor allowance (largest motor at 100%, the rest at 80%).
"""
import math
from dataclasses import replace
from typing import List, Optional

from wiring_core.calculator import LoadCategoryCalculator, normalize_context
from wiring_core.components import LoadContribution
from wiring_core.converters import current_from_power
from wiring_core.errors import InvalidInputError
from wiring_core.models import Motor, MotorInput, MotorStartingMethod
from wiring_core.validation import (
    coerce_enum, require_count, require_fraction, require_name, require_positive,
)
from regulations.bs7671_tables import BREAKER_RATINGS
from regulations.diversity_tables import (
    MOTOR_LARGEST_FACTOR, MOTOR_REMAINDER_FACTOR, get_starting_multiplier,
)

SOFT_START_ADVISED_WATTS = 5500.0
DEDICATED_CIRCUIT_AMPS = 32.0


def line_voltage(supply_voltage: float, phases: int) -> float:
    """Context voltage is phase-to-neutral; three-phase motors see √3 of it."""
    return supply_voltage * math.sqrt(3) if phases == 3 else supply_voltage


def protection_rating(full_load_current: float, starting_current: float,
                      method: MotorStartingMethod) -> Optional[int]:
    # Regulation 552.1.3: pass the starting current, still protect against overload
    if method == MotorStartingMethod.VFD:
        required = full_load_current * 1.15
    else:
        required = max(full_load_current * 1.25, starting_current * 0.8)
    for rating in BREAKER_RATINGS:
        if rating >= required:
            return rating
    return None


class MotorLoadCalculator(LoadCategoryCalculator):
    category = "Motors"
    regulation = "BS 7671 Appendix A / Regulation 552.1 - Motor circuits"
    diversity_from_totals = True

    def validate(self, data: MotorInput) -> MotorInput:
        if not data.motors:
            raise InvalidInputError("At least one motor must be specified", "motors")
        motors = []
        for i, motor in enumerate(data.motors):
            prefix = f"motors[{i}]"
            require_name(motor.name, f"{prefix}.name")
            require_positive(motor.rated_power, f"{prefix}.rated_power")
            require_count(motor.quantity, f"{prefix}.quantity")
            require_fraction(motor.efficiency, f"{prefix}.efficiency")
            require_fraction(motor.power_factor, f"{prefix}.power_factor")
            method = coerce_enum(MotorStartingMethod, motor.starting_method, f"{prefix}.starting_method")
            motors.append(replace(motor, starting_method=method))
        return replace(data, motors=motors, context=normalize_context(data.context))

    def item_contributions(self, data: MotorInput) -> List[LoadContribution]:
        voltage = line_voltage(data.context.supply_voltage, data.context.phases)
        largest = max(range(len(data.motors)), key=lambda i: data.motors[i].rated_power / data.motors[i].efficiency)

        items = []
        for index, motor in enumerate(data.motors):
            unit_input = motor.rated_power / motor.efficiency
            connected = unit_input * motor.quantity
            if index == largest:
                demand = unit_input * MOTOR_LARGEST_FACTOR + unit_input * (motor.quantity - 1) * MOTOR_REMAINDER_FACTOR
            else:
                demand = connected * MOTOR_REMAINDER_FACTOR

            flc = current_from_power(unit_input, voltage, data.context.phases, motor.power_factor)
            starting = flc * get_starting_multiplier(motor.starting_method, motor.high_inertia)
            items.append(LoadContribution(
                name=motor.name,
                connected_load=connected,
                demand_load=demand,
                factor=demand / connected,
                details={
                    "rated_power": motor.rated_power,
                    "quantity": motor.quantity,
                    "full_load_current": flc,
                    "starting_current": starting,
                    "starting_method": motor.starting_method.value,
                    "protection_rating": protection_rating(flc, starting, motor.starting_method),
                },
            ))
        return items

    def recommendations(self, data: MotorInput, demand: float, current: float) -> List[str]:
        recs = [f"Total motor demand: {demand / 1000:.1f}kW"]
        for motor in data.motors:
            if motor.rated_power >= SOFT_START_ADVISED_WATTS and motor.starting_method == MotorStartingMethod.DIRECT:
                recs.append(f"{motor.name}: consider a soft starter or VFD to limit starting current")
            if motor.starting_method == MotorStartingMethod.VFD:
                recs.append(f"{motor.name}: consider harmonic filtering on the VFD supply")
        if current > DEDICATED_CIRCUIT_AMPS:
            recs.append("Motors need dedicated circuits with local isolation")
        recs.append("Fit overload protection to every motor above 0.37kW (Regulation 552.1.1)")
        return recs
