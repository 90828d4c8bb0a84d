"""
Lighting load with diversity.
Illuminance targets per BS EN 12464-1, diversity per BS 7671 Appendix A.
"""
import math
from dataclasses import replace
from typing import List

from wiring_core.calculator import LoadCategoryCalculator, normalize_context
from wiring_core.components import LoadContribution
from wiring_core.config import SINGLE_CIRCUIT_LIMIT_AMPS
from wiring_core.errors import InvalidInputError
from wiring_core.models import (
    InstallationType, LightingControlSystem, LightingInput, LightingRoomType, LightingType,
)
from wiring_core.validation import (
    coerce_enum, require_fraction, require_name, require_positive, resolve_override,
)
from regulations.diversity_tables import (
    HIGH_OUTPUT_MULTIPLIER, HIGH_OUTPUT_ROOMS, LIGHTING_BASE_DIVERSITY, LIGHTING_CONTROL_FACTORS,
    LUMINAIRE_POWER, LUMINOUS_EFFICACY, MAINTENANCE_FACTORS, MIN_LIGHTING_DENSITY,
    RECOMMENDED_LUX, UTILIZATION_FACTORS,
)

PART_L_REVIEW_WATTS = 10000.0


def get_luminaire_power(lighting_type: LightingType, room_type: LightingRoomType) -> float:
    multiplier = HIGH_OUTPUT_MULTIPLIER if room_type in HIGH_OUTPUT_ROOMS else 1.0
    return LUMINAIRE_POWER[lighting_type] * multiplier


def get_power_density(lux: float, efficacy: float, utilization: float, maintenance: float) -> float:
    """W/m² = E / (efficacy x UF x MF), never below the minimum density."""
    return max(lux / (efficacy * utilization * maintenance), MIN_LIGHTING_DENSITY)


class LightingLoadCalculator(LoadCategoryCalculator):
    category = "Lighting"
    regulation = "BS EN 12464-1:2021 / BS 7671 Appendix A - Lighting diversity"

    def validate(self, data: LightingInput) -> LightingInput:
        if not data.rooms:
            raise InvalidInputError("At least one room must be specified", "rooms")
        rooms = []
        for i, room in enumerate(data.rooms):
            prefix = f"rooms[{i}]"
            require_name(room.name, f"{prefix}.name")
            require_positive(room.area, f"{prefix}.area")
            require_positive(room.ceiling_height, f"{prefix}.ceiling_height")
            room_type = coerce_enum(LightingRoomType, room.room_type, f"{prefix}.room_type")
            if room.custom_lux_level is not None:
                require_positive(room.custom_lux_level, f"{prefix}.custom_lux_level")
            if room.utilization_factor is not None:
                require_fraction(room.utilization_factor, f"{prefix}.utilization_factor")
            if room.maintenance_factor is not None:
                require_fraction(room.maintenance_factor, f"{prefix}.maintenance_factor")
            rooms.append(replace(room, room_type=room_type))

        if data.diversity_factor_override is not None:
            require_fraction(data.diversity_factor_override, "diversity_factor_override")

        return replace(
            data,
            rooms=rooms,
            lighting_type=coerce_enum(LightingType, data.lighting_type, "lighting_type"),
            control_system=coerce_enum(LightingControlSystem, data.control_system, "control_system"),
            context=normalize_context(data.context),
        )

    def item_contributions(self, data: LightingInput) -> List[LoadContribution]:
        items = []
        efficacy = LUMINOUS_EFFICACY[data.lighting_type]
        for room in data.rooms:
            lux = resolve_override(room.custom_lux_level, lambda: RECOMMENDED_LUX[room.room_type],
                                   "custom_lux_level", require_positive)
            uf = resolve_override(room.utilization_factor, lambda: UTILIZATION_FACTORS[room.room_type],
                                  "utilization_factor")
            mf = resolve_override(room.maintenance_factor, lambda: MAINTENANCE_FACTORS[data.lighting_type],
                                  "maintenance_factor")
            density = get_power_density(lux, efficacy, uf, mf)
            load = room.area * density
            luminaires = math.ceil(load / get_luminaire_power(data.lighting_type, room.room_type))
            items.append(LoadContribution(
                name=room.name,
                connected_load=load,
                demand_load=load,
                details={
                    "room_type": room.room_type.value,
                    "area": room.area,
                    "lux_level": lux,
                    "utilization_factor": uf,
                    "maintenance_factor": mf,
                    "power_density": density,
                    "luminaires": luminaires,
                },
            ))
        return items

    def diversity(self, data: LightingInput, items: List[LoadContribution]) -> float:
        return resolve_override(
            data.diversity_factor_override,
            lambda: self.default_diversity(data, sum(i.connected_load for i in items)),
            "diversity_factor_override",
        )

    def default_diversity(self, data: LightingInput, connected: float) -> float:
        factor = LIGHTING_BASE_DIVERSITY[data.context.installation_type]
        factor *= LIGHTING_CONTROL_FACTORS[data.control_system]
        factor *= self.policy.load_size_multiplier(self.policy.lighting_breakpoints, connected)
        return max(factor, self.policy.lighting_floor)

    def recommendations(self, data: LightingInput, demand: float, current: float) -> List[str]:
        domestic = data.context.installation_type == InstallationType.DOMESTIC
        recs = [f"Total lighting demand: {demand / 1000:.1f}kW ({current:.1f}A)"]
        if data.lighting_type != LightingType.LED:
            recs.append("Consider LED lighting for improved energy efficiency and lower demand")
        if data.control_system == LightingControlSystem.MANUAL and not domestic:
            recs.append("Automatic controls (occupancy or daylight sensing) would reduce energy use")
        if current > SINGLE_CIRCUIT_LIMIT_AMPS:
            recs.append("Split lighting across multiple circuits to keep each circuit within 16A")
        if not domestic:
            recs.append("Emergency lighting to BS 5266-1 is required for escape routes and open areas")
        if demand > PART_L_REVIEW_WATTS:
            recs.append("Lighting efficacy should be reviewed against Building Regulations Part L")
        return recs
