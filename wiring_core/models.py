from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class InstallationType(Enum):
    DOMESTIC = "domestic"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"
    AGRICULTURAL = "agricultural"
    HEALTHCARE = "healthcare"
    EDUCATIONAL = "educational"
    RETAIL = "retail"


class LightingRoomType(Enum):
    LIVING_ROOM = "living_room"
    KITCHEN = "kitchen"
    BEDROOM = "bedroom"
    BATHROOM = "bathroom"
    HALLWAY = "hallway"
    STUDY = "study"
    OFFICE = "office"
    MEETING_ROOM = "meeting_room"
    WAREHOUSE = "warehouse"
    WORKSHOP = "workshop"
    RETAIL = "retail"
    CLASSROOM = "classroom"
    HOSPITAL_WARD = "hospital_ward"
    LABORATORY = "laboratory"
    SPORTS_HALL = "sports_hall"
    CAR_PARK = "car_park"
    STAIRWAY = "stairway"


class LightingType(Enum):
    LED = "led"
    FLUORESCENT = "fluorescent"
    INCANDESCENT = "incandescent"
    HALOGEN = "halogen"
    METAL_HALIDE = "metal_halide"
    MERCURY_VAPOR = "mercury_vapor"


class LightingControlSystem(Enum):
    MANUAL = "manual"
    OCCUPANCY_SENSOR = "occupancy_sensor"
    DAYLIGHT_SENSOR = "daylight_sensor"
    TIME_CLOCK = "time_clock"
    SMART_CONTROL = "smart_control"


class BuildingType(Enum):
    RESIDENTIAL = "residential"
    OFFICE = "office"
    RETAIL = "retail"
    INDUSTRIAL = "industrial"
    HEALTHCARE = "healthcare"
    EDUCATIONAL = "educational"


class ClimateControlSystem(Enum):
    """Control systems shared by space heating and air conditioning."""
    MANUAL = "manual"
    THERMOSTAT = "thermostat"
    PROGRAMMABLE = "programmable"
    SMART_CONTROL = "smart_control"
    ZONE_CONTROL = "zone_control"
    BMS = "bms"


class OccupancySchedule(Enum):
    CONTINUOUS = "continuous"
    OFFICE_HOURS = "office_hours"
    EVENING_ONLY = "evening_only"
    INTERMITTENT = "intermittent"
    SEASONAL = "seasonal"


class SpaceHeatingMethod(Enum):
    ELECTRIC_RADIATOR = "electric_radiator"
    STORAGE_HEATER = "storage_heater"
    UNDERFLOOR = "underfloor"
    AIR_SOURCE_HEAT_PUMP = "air_source_heat_pump"
    GROUND_SOURCE_HEAT_PUMP = "ground_source_heat_pump"
    ELECTRIC_BOILER = "electric_boiler"


class WaterHeatingMethod(Enum):
    STORAGE = "storage"
    INSTANTANEOUS = "instantaneous"
    COMBINATION = "combination"
    SOLAR_THERMAL = "solar_thermal"
    HEAT_PUMP = "heat_pump"


class WaterHeaterType(Enum):
    ELECTRIC_IMMERSION = "electric_immersion"
    GAS_STORAGE = "gas_storage"
    ELECTRIC_STORAGE = "electric_storage"
    INSTANTANEOUS_ELECTRIC = "instantaneous_electric"
    COMBINATION_BOILER = "combination_boiler"
    SOLAR_THERMAL = "solar_thermal"
    HEAT_PUMP_WATER = "heat_pump_water"
    THERMAL_STORE = "thermal_store"


class WaterHeatingUsage(Enum):
    DOMESTIC_LOW = "domestic_low"
    DOMESTIC_MEDIUM = "domestic_medium"
    DOMESTIC_HIGH = "domestic_high"
    COMMERCIAL_OFFICE = "commercial_office"
    COMMERCIAL_RESTAURANT = "commercial_restaurant"
    INDUSTRIAL = "industrial"
    HEALTHCARE = "healthcare"
    HOTEL = "hotel"


class AirConditioningType(Enum):
    SPLIT_SYSTEM = "split_system"
    MULTI_SPLIT = "multi_split"
    VRV_VRF = "vrv_vrf"
    CENTRAL_SYSTEM = "central_system"
    PORTABLE = "portable"
    WINDOW_UNIT = "window_unit"
    CASSETTE = "cassette"
    DUCTED = "ducted"
    HEAT_PUMP = "heat_pump"
    CHILLER = "chiller"


class AirConditioningRoomType(Enum):
    SERVER_ROOM = "server_room"
    KITCHEN = "kitchen"
    OFFICE = "office"
    MEETING_ROOM = "meeting_room"
    RETAIL = "retail"
    RESTAURANT = "restaurant"
    LABORATORY = "laboratory"
    HOSPITAL_WARD = "hospital_ward"
    CLASSROOM = "classroom"
    SPORTS_HALL = "sports_hall"
    WAREHOUSE = "warehouse"
    WORKSHOP = "workshop"
    BEDROOM = "bedroom"
    LIVING_ROOM = "living_room"
    RECEPTION = "reception"


class MotorStartingMethod(Enum):
    DIRECT = "direct"
    STAR_DELTA = "star_delta"
    SOFT_START = "soft_start"
    VFD = "vfd"


class InstallationMethod(Enum):
    """BS 7671 Appendix 4 reference installation methods."""
    A = "A"   # enclosed in conduit in thermally insulating wall
    B = "B"   # enclosed in conduit/trunking on a wall
    C = "C"   # clipped direct
    D = "D"   # in ducts in the ground
    E = "E"   # free air, multicore on perforated tray
    F = "F"   # free air, single-core touching


@dataclass(frozen=True)
class InstallationContext:
    installation_type: InstallationType
    supply_voltage: float = 230.0
    phases: int = 1  # 1 or 3


# --- Lighting ---

@dataclass(frozen=True)
class LightingRoom:
    name: str
    area: float               # m²
    room_type: LightingRoomType
    ceiling_height: float = 2.4
    custom_lux_level: Optional[float] = None
    utilization_factor: Optional[float] = None
    maintenance_factor: Optional[float] = None


@dataclass(frozen=True)
class LightingInput:
    rooms: List[LightingRoom]
    lighting_type: LightingType
    control_system: LightingControlSystem
    context: Optional[InstallationContext] = None
    diversity_factor_override: Optional[float] = None


# --- Space heating ---

@dataclass(frozen=True)
class HeatingRoom:
    name: str
    area: float
    volume: float
    power: float              # rated heater power (W)
    heating_method: SpaceHeatingMethod = SpaceHeatingMethod.ELECTRIC_RADIATOR
    has_thermostat: bool = False
    has_zone_control: bool = False
    occupancy: OccupancySchedule = OccupancySchedule.CONTINUOUS


@dataclass(frozen=True)
class SpaceHeatingInput:
    rooms: List[HeatingRoom]
    building_type: BuildingType
    control_system: ClimateControlSystem
    context: Optional[InstallationContext] = None
    simultaneity_factor: Optional[float] = None
    diversity_factor_override: Optional[float] = None


# --- Water heating ---

@dataclass(frozen=True)
class WaterHeater:
    heater_type: WaterHeaterType
    capacity_litres: float
    power: float
    quantity: int = 1
    simultaneous_factor: Optional[float] = None


@dataclass(frozen=True)
class WaterHeatingInput:
    heaters: List[WaterHeater]
    heating_method: WaterHeatingMethod
    usage: WaterHeatingUsage
    context: Optional[InstallationContext] = None
    peak_demand_time: float = 2.0   # hours
    recovery_time: float = 1.0      # hours
    diversity_factor_override: Optional[float] = None


# --- Air conditioning ---

@dataclass(frozen=True)
class AirConditioningSystem:
    name: str
    system_type: AirConditioningType
    cooling_capacity: float   # electrical input (W)
    area: float
    room_type: AirConditioningRoomType
    operating_hours: float
    heating_capacity: Optional[float] = None
    simultaneous_factor: Optional[float] = None


@dataclass(frozen=True)
class AirConditioningInput:
    systems: List[AirConditioningSystem]
    building_type: BuildingType
    control_system: ClimateControlSystem
    context: Optional[InstallationContext] = None
    diversity_factor_override: Optional[float] = None


# --- Fixed-rule categories ---

@dataclass(frozen=True)
class SocketOutletInput:
    number_of_sockets: int
    context: Optional[InstallationContext] = None


@dataclass(frozen=True)
class CookingAppliance:
    name: str
    rating: float             # W
    quantity: int = 1
    diversity_factor: Optional[float] = None


@dataclass(frozen=True)
class CookingInput:
    appliances: List[CookingAppliance] = field(default_factory=list)
    context: Optional[InstallationContext] = None


@dataclass(frozen=True)
class SpecialLoad:
    name: str
    power: float
    diversity_factor: Optional[float] = None


@dataclass(frozen=True)
class SpecialLoadInput:
    loads: List[SpecialLoad] = field(default_factory=list)
    context: Optional[InstallationContext] = None


@dataclass(frozen=True)
class Motor:
    name: str
    rated_power: float        # shaft output (W)
    quantity: int = 1
    efficiency: float = 0.9
    power_factor: float = 0.85
    starting_method: MotorStartingMethod = MotorStartingMethod.DIRECT
    high_inertia: bool = False


@dataclass(frozen=True)
class MotorInput:
    motors: List[Motor]
    context: Optional[InstallationContext] = None


# --- Whole installation ---

@dataclass(frozen=True)
class InstallationLoadInput:
    context: Optional[InstallationContext]
    lighting: Optional[LightingInput]
    space_heating: Optional[SpaceHeatingInput]
    water_heating: Optional[WaterHeatingInput]
    air_conditioning: Optional[AirConditioningInput]
    number_of_sockets: Optional[int]
    cooking_appliances: List[CookingAppliance] = field(default_factory=list)
    special_loads: List[SpecialLoad] = field(default_factory=list)


# --- Cables ---

@dataclass(frozen=True)
class CableSizingInput:
    design_current: float
    length: float             # m
    installation_method: InstallationMethod
    phases: int = 1
    power_factor: float = 0.9
    grouping_factor: float = 1.0
    ambient_temp_factor: float = 1.0
    thermal_insulation_factor: float = 1.0
    voltage_drop_limit: float = 5.0   # %
    supply_voltage: Optional[float] = None


@dataclass(frozen=True)
class CableDeratingInput:
    original_rating: float
    installation_method: InstallationMethod
    total_length: float
    ambient_temperature: float = 30.0
    number_of_circuits: int = 1
    thermal_insulation_length: float = 0.0
    is_buried: bool = False
    soil_thermal_resistivity: Optional[float] = None
