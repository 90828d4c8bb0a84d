from wiring_core.models import (
    AirConditioningRoomType, AirConditioningType, BuildingType, ClimateControlSystem,
    InstallationType, LightingControlSystem, LightingRoomType, LightingType,
    MotorStartingMethod, OccupancySchedule, WaterHeaterType, WaterHeatingMethod,
    WaterHeatingUsage,
)

# BS EN 12464-1 / CIBSE recommended maintained illuminance (lux)
RECOMMENDED_LUX = {
    LightingRoomType.LIVING_ROOM: 200,
    LightingRoomType.KITCHEN: 500,
    LightingRoomType.BEDROOM: 150,
    LightingRoomType.BATHROOM: 200,
    LightingRoomType.HALLWAY: 100,
    LightingRoomType.STUDY: 500,
    LightingRoomType.OFFICE: 500,
    LightingRoomType.MEETING_ROOM: 500,
    LightingRoomType.WAREHOUSE: 200,
    LightingRoomType.WORKSHOP: 500,
    LightingRoomType.RETAIL: 300,
    LightingRoomType.CLASSROOM: 500,
    LightingRoomType.HOSPITAL_WARD: 300,
    LightingRoomType.LABORATORY: 750,
    LightingRoomType.SPORTS_HALL: 300,
    LightingRoomType.CAR_PARK: 75,
    LightingRoomType.STAIRWAY: 150,
}

UTILIZATION_FACTORS = {
    LightingRoomType.LIVING_ROOM: 0.6,
    LightingRoomType.KITCHEN: 0.7,
    LightingRoomType.BEDROOM: 0.5,
    LightingRoomType.BATHROOM: 0.6,
    LightingRoomType.HALLWAY: 0.4,
    LightingRoomType.STUDY: 0.7,
    LightingRoomType.OFFICE: 0.8,
    LightingRoomType.MEETING_ROOM: 0.7,
    LightingRoomType.WAREHOUSE: 0.6,
    LightingRoomType.WORKSHOP: 0.7,
    LightingRoomType.RETAIL: 0.8,
    LightingRoomType.CLASSROOM: 0.8,
    LightingRoomType.HOSPITAL_WARD: 0.7,
    LightingRoomType.LABORATORY: 0.8,
    LightingRoomType.SPORTS_HALL: 0.7,
    LightingRoomType.CAR_PARK: 0.5,
    LightingRoomType.STAIRWAY: 0.4,
}

MAINTENANCE_FACTORS = {
    LightingType.LED: 0.9,
    LightingType.FLUORESCENT: 0.8,
    LightingType.INCANDESCENT: 0.9,
    LightingType.HALOGEN: 0.85,
    LightingType.METAL_HALIDE: 0.75,
    LightingType.MERCURY_VAPOR: 0.7,
}

# lm/W
LUMINOUS_EFFICACY = {
    LightingType.LED: 120,
    LightingType.FLUORESCENT: 80,
    LightingType.INCANDESCENT: 15,
    LightingType.HALOGEN: 20,
    LightingType.METAL_HALIDE: 90,
    LightingType.MERCURY_VAPOR: 50,
}

# Typical single luminaire wattage
LUMINAIRE_POWER = {
    LightingType.LED: 18,
    LightingType.FLUORESCENT: 36,
    LightingType.INCANDESCENT: 60,
    LightingType.HALOGEN: 50,
    LightingType.METAL_HALIDE: 150,
    LightingType.MERCURY_VAPOR: 125,
}
HIGH_OUTPUT_ROOMS = frozenset({
    LightingRoomType.OFFICE, LightingRoomType.CLASSROOM,
    LightingRoomType.WORKSHOP, LightingRoomType.LABORATORY,
})
HIGH_OUTPUT_MULTIPLIER = 1.5
MIN_LIGHTING_DENSITY = 5.0  # W/m²

LIGHTING_CONTROL_FACTORS = {
    LightingControlSystem.MANUAL: 1.0,
    LightingControlSystem.OCCUPANCY_SENSOR: 0.85,
    LightingControlSystem.DAYLIGHT_SENSOR: 0.8,
    LightingControlSystem.TIME_CLOCK: 0.9,
    LightingControlSystem.SMART_CONTROL: 0.75,
}

# Installation base diversity per category
LIGHTING_BASE_DIVERSITY = {
    InstallationType.DOMESTIC: 0.9,
    InstallationType.COMMERCIAL: 0.8,
    InstallationType.INDUSTRIAL: 0.75,
    InstallationType.AGRICULTURAL: 0.9,
    InstallationType.HEALTHCARE: 0.9,
    InstallationType.EDUCATIONAL: 0.9,
    InstallationType.RETAIL: 0.9,
}

HEATING_BASE_DIVERSITY = {
    InstallationType.DOMESTIC: 1.0,
    InstallationType.COMMERCIAL: 0.8,
    InstallationType.INDUSTRIAL: 0.75,
    InstallationType.AGRICULTURAL: 1.0,
    InstallationType.HEALTHCARE: 1.0,
    InstallationType.EDUCATIONAL: 1.0,
    InstallationType.RETAIL: 1.0,
}

AIR_CONDITIONING_BASE_DIVERSITY = {
    InstallationType.DOMESTIC: 0.8,
    InstallationType.COMMERCIAL: 0.75,
    InstallationType.INDUSTRIAL: 0.7,
    InstallationType.AGRICULTURAL: 0.8,
    InstallationType.HEALTHCARE: 0.8,
    InstallationType.EDUCATIONAL: 0.8,
    InstallationType.RETAIL: 0.8,
}

# --- Space heating ---

OCCUPANCY_FACTORS = {
    OccupancySchedule.CONTINUOUS: 1.0,
    OccupancySchedule.OFFICE_HOURS: 0.7,
    OccupancySchedule.EVENING_ONLY: 0.6,
    OccupancySchedule.INTERMITTENT: 0.5,
    OccupancySchedule.SEASONAL: 0.8,
}
THERMOSTAT_FACTOR = 0.9
ZONE_CONTROL_FACTOR = 0.85

HEATING_CONTROL_FACTORS = {
    ClimateControlSystem.MANUAL: 1.0,
    ClimateControlSystem.THERMOSTAT: 0.9,
    ClimateControlSystem.PROGRAMMABLE: 0.8,
    ClimateControlSystem.SMART_CONTROL: 0.75,
    ClimateControlSystem.ZONE_CONTROL: 0.8,
    ClimateControlSystem.BMS: 0.7,
}

HEATING_SIMULTANEITY_BY_BUILDING = {
    BuildingType.RESIDENTIAL: 0.8,
    BuildingType.OFFICE: 0.7,
    BuildingType.RETAIL: 0.85,
    BuildingType.INDUSTRIAL: 0.9,
    BuildingType.HEALTHCARE: 0.9,
    BuildingType.EDUCATIONAL: 0.75,
}

HEATING_BUILDING_DIVERSITY = {
    BuildingType.RESIDENTIAL: 1.0,
    BuildingType.OFFICE: 0.8,
    BuildingType.RETAIL: 0.85,
    BuildingType.INDUSTRIAL: 0.9,
    BuildingType.HEALTHCARE: 0.95,
    BuildingType.EDUCATIONAL: 0.8,
}

# --- Water heating ---

WATER_HEATER_SIMULTANEOUS = {
    WaterHeaterType.ELECTRIC_IMMERSION: 1.0,
    WaterHeaterType.GAS_STORAGE: 0.9,
    WaterHeaterType.ELECTRIC_STORAGE: 1.0,
    WaterHeaterType.INSTANTANEOUS_ELECTRIC: 0.8,
    WaterHeaterType.COMBINATION_BOILER: 0.7,
    WaterHeaterType.SOLAR_THERMAL: 0.6,
    WaterHeaterType.HEAT_PUMP_WATER: 0.8,
    WaterHeaterType.THERMAL_STORE: 0.9,
}

WATER_USAGE_FACTORS = {
    WaterHeatingUsage.DOMESTIC_LOW: 0.8,
    WaterHeatingUsage.DOMESTIC_MEDIUM: 0.9,
    WaterHeatingUsage.DOMESTIC_HIGH: 1.0,
    WaterHeatingUsage.COMMERCIAL_OFFICE: 0.7,
    WaterHeatingUsage.COMMERCIAL_RESTAURANT: 0.95,
    WaterHeatingUsage.INDUSTRIAL: 0.9,
    WaterHeatingUsage.HEALTHCARE: 0.9,
    WaterHeatingUsage.HOTEL: 0.8,
}

WATER_METHOD_FACTORS = {
    WaterHeatingMethod.STORAGE: 0.9,
    WaterHeatingMethod.INSTANTANEOUS: 1.0,
    WaterHeatingMethod.COMBINATION: 0.8,
    WaterHeatingMethod.SOLAR_THERMAL: 0.7,
    WaterHeatingMethod.HEAT_PUMP: 0.85,
}

# --- Air conditioning ---

AIR_CONDITIONING_TYPE_FACTORS = {
    AirConditioningType.SPLIT_SYSTEM: 0.8,
    AirConditioningType.MULTI_SPLIT: 0.75,
    AirConditioningType.VRV_VRF: 0.7,
    AirConditioningType.CENTRAL_SYSTEM: 0.9,
    AirConditioningType.PORTABLE: 0.6,
    AirConditioningType.WINDOW_UNIT: 0.7,
    AirConditioningType.CASSETTE: 0.8,
    AirConditioningType.DUCTED: 0.85,
    AirConditioningType.HEAT_PUMP: 0.8,
    AirConditioningType.CHILLER: 0.9,
}

AIR_CONDITIONING_ROOM_FACTORS = {
    AirConditioningRoomType.SERVER_ROOM: 1.0,
    AirConditioningRoomType.KITCHEN: 0.9,
    AirConditioningRoomType.OFFICE: 0.8,
    AirConditioningRoomType.MEETING_ROOM: 0.7,
    AirConditioningRoomType.RETAIL: 0.85,
    AirConditioningRoomType.RESTAURANT: 0.9,
    AirConditioningRoomType.LABORATORY: 0.95,
    AirConditioningRoomType.HOSPITAL_WARD: 0.9,
    AirConditioningRoomType.CLASSROOM: 0.7,
    AirConditioningRoomType.SPORTS_HALL: 0.8,
    AirConditioningRoomType.WAREHOUSE: 0.6,
    AirConditioningRoomType.WORKSHOP: 0.7,
    AirConditioningRoomType.BEDROOM: 0.6,
    AirConditioningRoomType.LIVING_ROOM: 0.7,
    AirConditioningRoomType.RECEPTION: 0.8,
}

# Format: {max_hours: factor}
OPERATING_HOURS_FACTORS = {8: 1.0, 12: 0.9, 16: 0.8, 24: 0.7}

AIR_CONDITIONING_BUILDING_DIVERSITY = {
    BuildingType.RESIDENTIAL: 0.8,
    BuildingType.OFFICE: 0.85,
    BuildingType.RETAIL: 0.9,
    BuildingType.INDUSTRIAL: 0.75,
    BuildingType.HEALTHCARE: 0.95,
    BuildingType.EDUCATIONAL: 0.8,
}

AIR_CONDITIONING_CONTROL_FACTORS = {
    ClimateControlSystem.MANUAL: 1.0,
    ClimateControlSystem.THERMOSTAT: 0.9,
    ClimateControlSystem.PROGRAMMABLE: 0.85,
    ClimateControlSystem.SMART_CONTROL: 0.8,
    ClimateControlSystem.ZONE_CONTROL: 0.85,
    ClimateControlSystem.BMS: 0.75,
}

# --- Fixed-rule categories (BS 7671 Appendix A / IET On-Site Guide) ---

SOCKET_OUTLET_LOAD = 100.0        # W assumed per outlet
SOCKET_TIERS_DOMESTIC = ((10, 100.0), (20, 50.0))   # (up to n outlets, W per outlet)
SOCKET_BEYOND_TIERS = 25.0
SOCKET_NON_DOMESTIC = 80.0

# Pooled cooking rating: (upper bound W, share of the slice)
COOKING_TIERS = ((10000.0, 1.0), (60000.0, 0.5))
COOKING_BEYOND_TIERS = 0.25

MOTOR_LARGEST_FACTOR = 1.0
MOTOR_REMAINDER_FACTOR = 0.8

# Starting current as a multiple of full-load current
MOTOR_STARTING_MULTIPLIERS = {
    MotorStartingMethod.DIRECT: 6.0,
    MotorStartingMethod.STAR_DELTA: 2.0,
    MotorStartingMethod.SOFT_START: 3.0,
    MotorStartingMethod.VFD: 1.5,
}
HIGH_INERTIA_DIRECT_MULTIPLIER = 8.0


def get_operating_hours_factor(hours: float) -> float:
    for limit in sorted(OPERATING_HOURS_FACTORS.keys()):
        if hours <= limit:
            return OPERATING_HOURS_FACTORS[limit]
    return OPERATING_HOURS_FACTORS[24]


def get_socket_demand(count: int, domestic: bool) -> float:
    if not domestic:
        return count * SOCKET_NON_DOMESTIC
    demand = 0.0
    lower = 0
    for upper, per_outlet in SOCKET_TIERS_DOMESTIC:
        in_tier = min(count, upper) - lower
        if in_tier <= 0:
            return demand
        demand += in_tier * per_outlet
        lower = upper
    return demand + max(count - lower, 0) * SOCKET_BEYOND_TIERS


def get_cooking_demand(pooled_rating: float) -> float:
    demand = 0.0
    lower = 0.0
    for upper, share in COOKING_TIERS:
        demand += (min(pooled_rating, upper) - lower) * share
        if pooled_rating <= upper:
            return demand
        lower = upper
    return demand + (pooled_rating - lower) * COOKING_BEYOND_TIERS


def get_starting_multiplier(method: MotorStartingMethod, high_inertia: bool) -> float:
    if method == MotorStartingMethod.DIRECT and high_inertia:
        return HIGH_INERTIA_DIRECT_MULTIPLIER
    if method == MotorStartingMethod.STAR_DELTA and high_inertia:
        return HIGH_INERTIA_DIRECT_MULTIPLIER / 3
    return MOTOR_STARTING_MULTIPLIERS[method]
