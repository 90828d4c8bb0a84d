"""Air conditioning load with per-system simultaneity and installation diversity."""
from dataclasses import replace
from typing import List

from wiring_core.calculator import LoadCategoryCalculator, normalize_context
from wiring_core.components import LoadContribution
from wiring_core.config import HIGH_CURRENT_LIMIT_AMPS, SINGLE_CIRCUIT_LIMIT_AMPS
from wiring_core.errors import InvalidInputError
from wiring_core.models import (
    AirConditioningInput, AirConditioningRoomType, AirConditioningSystem, AirConditioningType,
    BuildingType, ClimateControlSystem, InstallationType,
)
from wiring_core.validation import (
    coerce_enum, require_fraction, require_name, require_non_negative, require_positive,
    resolve_override,
)
from regulations.diversity_tables import (
    AIR_CONDITIONING_BASE_DIVERSITY, AIR_CONDITIONING_BUILDING_DIVERSITY,
    AIR_CONDITIONING_CONTROL_FACTORS, AIR_CONDITIONING_ROOM_FACTORS, AIR_CONDITIONING_TYPE_FACTORS,
    get_operating_hours_factor,
)

LOAD_SHEDDING_WATTS = 20000.0
COMMERCIAL_TYPES = frozenset({InstallationType.COMMERCIAL, InstallationType.RETAIL})


class AirConditioningLoadCalculator(LoadCategoryCalculator):
    category = "Air Conditioning"
    regulation = "BS 7671 Appendix A / CIBSE Guide B - Air conditioning diversity"

    def validate(self, data: AirConditioningInput) -> AirConditioningInput:
        if not data.systems:
            raise InvalidInputError("At least one air conditioning system must be specified", "systems")
        systems = []
        for i, system in enumerate(data.systems):
            prefix = f"systems[{i}]"
            require_name(system.name, f"{prefix}.name")
            system_type = coerce_enum(AirConditioningType, system.system_type, f"{prefix}.system_type")
            require_positive(system.cooling_capacity, f"{prefix}.cooling_capacity")
            require_positive(system.area, f"{prefix}.area")
            hours = require_positive(system.operating_hours, f"{prefix}.operating_hours")
            if hours > 24:
                raise InvalidInputError(f"{prefix}.operating_hours cannot exceed 24", f"{prefix}.operating_hours")
            if system.heating_capacity is not None:
                require_non_negative(system.heating_capacity, f"{prefix}.heating_capacity")
            if system.simultaneous_factor is not None:
                require_fraction(system.simultaneous_factor, f"{prefix}.simultaneous_factor")
            room_type = coerce_enum(AirConditioningRoomType, system.room_type, f"{prefix}.room_type")
            systems.append(replace(system, system_type=system_type, room_type=room_type))
        if data.diversity_factor_override is not None:
            require_fraction(data.diversity_factor_override, "diversity_factor_override")

        return replace(
            data,
            systems=systems,
            building_type=coerce_enum(BuildingType, data.building_type, "building_type"),
            control_system=coerce_enum(ClimateControlSystem, data.control_system, "control_system"),
            context=normalize_context(data.context),
        )

    def system_factor(self, system: AirConditioningSystem) -> float:
        factor = AIR_CONDITIONING_TYPE_FACTORS[system.system_type]
        factor *= get_operating_hours_factor(system.operating_hours)
        factor *= AIR_CONDITIONING_ROOM_FACTORS[system.room_type]
        return max(factor, self.policy.air_conditioning_system_floor)

    def item_contributions(self, data: AirConditioningInput) -> List[LoadContribution]:
        items = []
        for system in data.systems:
            # Reverse-cycle units are sized on whichever duty is larger
            load = max(system.cooling_capacity, system.heating_capacity or 0.0)
            factor = resolve_override(system.simultaneous_factor, lambda: self.system_factor(system),
                                      "simultaneous_factor")
            items.append(LoadContribution(
                name=system.name,
                connected_load=load,
                demand_load=load * factor,
                factor=factor,
                details={
                    "system_type": system.system_type.value,
                    "room_type": system.room_type.value,
                    "area": system.area,
                    "cooling_capacity": system.cooling_capacity,
                    "heating_capacity": system.heating_capacity,
                    "operating_hours": system.operating_hours,
                },
            ))
        return items

    def diversity(self, data: AirConditioningInput, items: List[LoadContribution]) -> float:
        connected = sum(i.connected_load for i in items)
        return resolve_override(data.diversity_factor_override,
                                lambda: self.default_diversity(data, connected), "diversity_factor_override")

    def default_diversity(self, data: AirConditioningInput, connected: float) -> float:
        factor = AIR_CONDITIONING_BASE_DIVERSITY[data.context.installation_type]
        factor *= AIR_CONDITIONING_BUILDING_DIVERSITY[data.building_type]
        factor *= AIR_CONDITIONING_CONTROL_FACTORS[data.control_system]
        factor *= self.policy.load_size_multiplier(self.policy.air_conditioning_breakpoints, connected)
        return max(factor, self.policy.air_conditioning_diversity_floor)

    def recommendations(self, data: AirConditioningInput, demand: float, current: float) -> List[str]:
        control = data.control_system
        recs = [f"Total air conditioning demand: {demand / 1000:.1f}kW ({current:.1f}A)"]
        if current > HIGH_CURRENT_LIMIT_AMPS:
            recs.append("High cooling load - consider a three-phase supply")
        if control == ClimateControlSystem.MANUAL and data.building_type != BuildingType.RESIDENTIAL:
            recs.append("Automatic controls would reduce simultaneous cooling demand")
        if current > SINGLE_CIRCUIT_LIMIT_AMPS:
            recs.append("Supply each indoor/outdoor unit from a dedicated circuit")
        if demand > LOAD_SHEDDING_WATTS:
            recs.append("Consider load shedding of air conditioning during peak demand")
        if data.context.installation_type in COMMERCIAL_TYPES and control != ClimateControlSystem.BMS:
            recs.append("Integrate air conditioning with a building management system")
        if data.building_type == BuildingType.OFFICE and control == ClimateControlSystem.MANUAL:
            recs.append("Occupancy sensors in offices would switch off cooling in empty rooms")
        recs.append("Provide a local means of isolation adjacent to each outdoor unit")
        recs.append("Inverter-driven units reduce starting current and running cost")
        return recs
