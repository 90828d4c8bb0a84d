"""Cable selection to BS 7671 Appendix 4: current-carrying capacity, voltage drop and protection."""
import logging
from dataclasses import replace
from typing import Optional, Tuple

from wiring_core.components import CableSizingResult, CircuitBreaker
from wiring_core.config import (
    LIGHTING_VOLTAGE_DROP_LIMIT, NOMINAL_VOLTAGE_SINGLE_PHASE, NOMINAL_VOLTAGE_THREE_PHASE,
)
from wiring_core.errors import ComputationBoundsExceededError, InvalidInputError
from wiring_core.models import CableSizingInput, InstallationMethod
from wiring_core.validation import coerce_enum, require_fraction, require_positive
from regulations.bs7671_tables import (
    BREAKER_RATINGS, CABLE_SIZES, get_capacity, get_voltage_drop_coefficient,
)

logger = logging.getLogger(__name__)

MIN_POWER_FACTOR = 0.1


class CableSizer:
    @staticmethod
    def validate(data: CableSizingInput) -> CableSizingInput:
        require_positive(data.design_current, "design_current")
        require_positive(data.length, "length")
        method = coerce_enum(InstallationMethod, data.installation_method, "installation_method")
        if data.phases not in (1, 3):
            raise InvalidInputError("phases must be 1 or 3", "phases")
        if require_fraction(data.power_factor, "power_factor") < MIN_POWER_FACTOR:
            raise InvalidInputError("power_factor must be between 0.1 and 1.0", "power_factor")
        require_fraction(data.grouping_factor, "grouping_factor")
        require_fraction(data.ambient_temp_factor, "ambient_temp_factor")
        require_fraction(data.thermal_insulation_factor, "thermal_insulation_factor")
        require_positive(data.voltage_drop_limit, "voltage_drop_limit")
        if data.supply_voltage is not None:
            require_positive(data.supply_voltage, "supply_voltage")
        return replace(data, installation_method=method)

    @staticmethod
    def nominal_voltage(data: CableSizingInput) -> float:
        if data.supply_voltage is not None:
            return data.supply_voltage
        return NOMINAL_VOLTAGE_THREE_PHASE if data.phases == 3 else NOMINAL_VOLTAGE_SINGLE_PHASE

    @staticmethod
    def calculate_voltage_drop(size: float, data: CableSizingInput) -> Tuple[float, float]:
        """Returns (volts, percent). mV/A/m x A x m / 1000 = V."""
        mv_per_am = get_voltage_drop_coefficient(size, data.phases, data.power_factor)
        volts = mv_per_am * data.design_current * data.length / 1000.0
        return volts, volts / CableSizer.nominal_voltage(data) * 100.0

    @staticmethod
    def select_protection(design_current: float, derated_capacity: float, phases: int) -> Optional[CircuitBreaker]:
        # Ib <= In <= Iz (Regulation 433.1.1)
        for rating in BREAKER_RATINGS:
            if design_current <= rating <= derated_capacity:
                return CircuitBreaker(rated_current=rating, poles=3 if phases == 3 else 1)
        return None

    @staticmethod
    def calculate(data: CableSizingInput) -> CableSizingResult:
        data = CableSizer.validate(data)
        correction = data.grouping_factor * data.ambient_temp_factor * data.thermal_insulation_factor
        effective_current = data.design_current / correction

        # First size on the ladder meeting both limits; otherwise the largest size
        selected = CABLE_SIZES[-1]
        thermal_ok = vd_ok = False
        for size in CABLE_SIZES:
            thermal_ok = get_capacity(data.installation_method, size) >= effective_current
            if not thermal_ok:
                continue
            vd_ok = CableSizer.calculate_voltage_drop(size, data)[1] <= data.voltage_drop_limit
            if vd_ok:
                selected = size
                break

        capacity = get_capacity(data.installation_method, selected)
        derated = capacity * correction
        vd_volts, vd_percent = CableSizer.calculate_voltage_drop(selected, data)
        thermal_ok = capacity >= effective_current
        vd_ok = vd_percent <= data.voltage_drop_limit

        bounds_error = None
        if not (thermal_ok and vd_ok):
            bounds_error = ComputationBoundsExceededError(selected, vd_ok, thermal_ok)
            logger.warning("%s (Ib=%.1f A, L=%.1f m, method %s)", bounds_error,
                           data.design_current, data.length, data.installation_method.value)

        protection = CableSizer.select_protection(data.design_current, derated, data.phases)
        logger.debug("Cable sizing: Ib=%.1f A -> %s mm² It=%.1f A Iz=%.1f A VD=%.2f%%",
                     data.design_current, selected, capacity, derated, vd_percent)

        return CableSizingResult(
            recommended_size=selected,
            current_carrying_capacity=capacity,
            derated_capacity=derated,
            effective_current=effective_current,
            voltage_drop_percent=vd_percent,
            voltage_drop_volts=vd_volts,
            voltage_drop_check=vd_ok,
            thermal_check=thermal_ok,
            protection_required=protection,
            bounds_error=bounds_error,
            recommendations=CableSizer.recommendations(selected, vd_percent, thermal_ok, vd_ok, protection),
        )

    @staticmethod
    def recommendations(size: float, vd_percent: float, thermal_ok: bool, vd_ok: bool,
                        protection: Optional[CircuitBreaker]) -> list:
        recs = [f"Use {size:g}mm² copper conductors"]
        if protection is None:
            recs.append("Custom protection required - no standard rating satisfies Ib <= In <= Iz")
        else:
            recs.append(f"Protect with a {protection.description}")
        if not thermal_ok:
            recs.append("Design current exceeds the largest standard cable - consider parallel conductors")
        if not vd_ok:
            recs.append("Voltage drop exceeds the limit - reduce the run length or use parallel conductors")
        elif vd_percent > LIGHTING_VOLTAGE_DROP_LIMIT:
            recs.append("Voltage drop exceeds 3% - not suitable for a lighting circuit")
        return recs
