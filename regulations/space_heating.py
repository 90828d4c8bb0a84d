"""Space heating load with room control, simultaneity and diversity (BS 7671 Appendix A)."""
from dataclasses import replace
from typing import List

from wiring_core.calculator import LoadCategoryCalculator, normalize_context
from wiring_core.components import LoadContribution
from wiring_core.config import HIGH_CURRENT_LIMIT_AMPS, SINGLE_CIRCUIT_LIMIT_AMPS
from wiring_core.errors import InvalidInputError
from wiring_core.models import (
    BuildingType, ClimateControlSystem, HeatingRoom, InstallationType, OccupancySchedule,
    SpaceHeatingInput, SpaceHeatingMethod,
)
from wiring_core.validation import (
    coerce_enum, require_fraction, require_name, require_positive, resolve_override,
)
from regulations.diversity_tables import (
    HEATING_BASE_DIVERSITY, HEATING_BUILDING_DIVERSITY, HEATING_CONTROL_FACTORS,
    HEATING_SIMULTANEITY_BY_BUILDING, OCCUPANCY_FACTORS, THERMOSTAT_FACTOR, ZONE_CONTROL_FACTOR,
)

ECONOMY_7_DOMESTIC_WATTS = 15000.0
LOAD_SHEDDING_WATTS = 20000.0


class SpaceHeatingLoadCalculator(LoadCategoryCalculator):
    category = "Space Heating"
    regulation = "BS 7671 Appendix A - Diversity factors for space heating"

    def validate(self, data: SpaceHeatingInput) -> SpaceHeatingInput:
        if not data.rooms:
            raise InvalidInputError("At least one room must be specified", "rooms")
        rooms = []
        for i, room in enumerate(data.rooms):
            prefix = f"rooms[{i}]"
            require_name(room.name, f"{prefix}.name")
            require_positive(room.area, f"{prefix}.area")
            require_positive(room.volume, f"{prefix}.volume")
            require_positive(room.power, f"{prefix}.power")
            rooms.append(replace(
                room,
                heating_method=coerce_enum(SpaceHeatingMethod, room.heating_method, f"{prefix}.heating_method"),
                occupancy=coerce_enum(OccupancySchedule, room.occupancy, f"{prefix}.occupancy"),
            ))
        for name in ("simultaneity_factor", "diversity_factor_override"):
            if getattr(data, name) is not None:
                require_fraction(getattr(data, name), name)

        return replace(
            data,
            rooms=rooms,
            building_type=coerce_enum(BuildingType, data.building_type, "building_type"),
            control_system=coerce_enum(ClimateControlSystem, data.control_system, "control_system"),
            context=normalize_context(data.context),
        )

    def room_factor(self, room: HeatingRoom, control: ClimateControlSystem) -> float:
        factor = 1.0
        if room.has_thermostat:
            factor *= THERMOSTAT_FACTOR
        if room.has_zone_control:
            factor *= ZONE_CONTROL_FACTOR
        factor *= OCCUPANCY_FACTORS[room.occupancy]
        factor *= HEATING_CONTROL_FACTORS[control]
        return max(factor, self.policy.space_heating_room_floor)

    def item_contributions(self, data: SpaceHeatingInput) -> List[LoadContribution]:
        items = []
        for room in data.rooms:
            factor = self.room_factor(room, data.control_system)
            items.append(LoadContribution(
                name=room.name,
                connected_load=room.power,
                demand_load=room.power * factor,
                factor=factor,
                details={
                    "area": room.area,
                    "volume": room.volume,
                    "heating_method": room.heating_method.value,
                    "occupancy": room.occupancy.value,
                },
            ))
        return items

    def simultaneity(self, data: SpaceHeatingInput, items: List[LoadContribution]) -> float:
        return resolve_override(data.simultaneity_factor,
                                lambda: self.default_simultaneity(data), "simultaneity_factor")

    def default_simultaneity(self, data: SpaceHeatingInput) -> float:
        factor = HEATING_SIMULTANEITY_BY_BUILDING[data.building_type]
        factor *= HEATING_CONTROL_FACTORS[data.control_system]
        factor *= self.policy.load_size_multiplier(self.policy.space_heating_room_count_breakpoints,
                                                   len(data.rooms))
        return max(factor, self.policy.space_heating_simultaneity_floor)

    def diversity(self, data: SpaceHeatingInput, items: List[LoadContribution]) -> float:
        return resolve_override(data.diversity_factor_override,
                                lambda: self.default_diversity(data), "diversity_factor_override")

    def default_diversity(self, data: SpaceHeatingInput) -> float:
        if data.context.installation_type == InstallationType.DOMESTIC:
            # 100% for domestic heating
            return 1.0
        factor = HEATING_BASE_DIVERSITY[data.context.installation_type]
        factor *= HEATING_BUILDING_DIVERSITY[data.building_type]
        factor *= HEATING_CONTROL_FACTORS[data.control_system]
        return max(factor, self.policy.space_heating_diversity_floor)

    def recommendations(self, data: SpaceHeatingInput, demand: float, current: float) -> List[str]:
        installation = data.context.installation_type
        control = data.control_system
        recs = [f"Total space heating demand: {demand / 1000:.1f}kW ({current:.1f}A)"]
        if current > HIGH_CURRENT_LIMIT_AMPS:
            recs.append("High heating load - consider a three-phase supply or load management")
        if control == ClimateControlSystem.MANUAL and data.building_type != BuildingType.RESIDENTIAL:
            recs.append("Programmable or smart heating controls would reduce demand and running cost")
        if current > SINGLE_CIRCUIT_LIMIT_AMPS:
            recs.append("Distribute heaters across multiple circuits")
        if installation == InstallationType.DOMESTIC and demand > ECONOMY_7_DOMESTIC_WATTS:
            recs.append("Consider storage heating on an Economy 7 tariff")
        if data.building_type == BuildingType.OFFICE and control != ClimateControlSystem.BMS:
            recs.append("A building management system is recommended for office heating")
        recs.append("Fit thermostatic controls to every heated room")
        recs.append("Check insulation levels against Building Regulations Part L")
        if demand > LOAD_SHEDDING_WATTS:
            recs.append("Consider load shedding of heating circuits during peak demand")
        return recs
