# wiring_core/config.py
import logging
from dataclasses import dataclass

# ---------- Supply ----------
NOMINAL_VOLTAGE_SINGLE_PHASE = 230.0
NOMINAL_VOLTAGE_THREE_PHASE = 400.0   # line voltage
DEFAULT_POWER_FACTOR = 0.9
DEFAULT_VOLTAGE_DROP_LIMIT = 5.0      # % (BS 7671 Appendix 4, power circuits)
LIGHTING_VOLTAGE_DROP_LIMIT = 3.0     # % lighting circuits

# ---------- Advisory thresholds ----------
SINGLE_CIRCUIT_LIMIT_AMPS = 16.0
HIGH_CURRENT_LIMIT_AMPS = 32.0
THREE_PHASE_SUPPLY_AMPS = 100.0
SUPPLY_100A_AMPS = 80.0
SUPPLY_80A_AMPS = 60.0
DNO_APPROVAL_WATTS = 23000.0          # domestic total demand needing network-operator approval
LOAD_MANAGEMENT_WATTS = 50000.0
ENERGY_MONITORING_WATTS = 30000.0
CATEGORY_EFFICIENCY_WATTS = 10000.0


@dataclass(frozen=True)
class DiversityPolicy:
    """
    Floors and load-size breakpoints for the category diversity formulas.
    These are design policy, not values fixed by the tables.
    """
    lighting_floor: float = 0.6
    lighting_breakpoints: tuple = ((100000.0, 0.9), (50000.0, 0.95))

    space_heating_room_floor: float = 0.4
    space_heating_simultaneity_floor: float = 0.5
    space_heating_diversity_floor: float = 0.6
    space_heating_room_count_breakpoints: tuple = ((20, 0.85), (10, 0.9))

    water_heater_floor: float = 0.5
    water_heating_diversity_floor: float = 0.6
    water_heater_quantity_step: float = 0.1

    air_conditioning_system_floor: float = 0.4
    air_conditioning_diversity_floor: float = 0.5
    air_conditioning_breakpoints: tuple = ((100000.0, 0.85), (50000.0, 0.9))

    def load_size_multiplier(self, breakpoints: tuple, value: float) -> float:
        # breakpoints are ordered largest first; first exceeded one wins
        for limit, multiplier in breakpoints:
            if value > limit:
                return multiplier
        return 1.0


DEFAULT_POLICY = DiversityPolicy()


def configure_logging(level: int = logging.INFO) -> None:
    """Only the front ends call this; library modules just log."""
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")
