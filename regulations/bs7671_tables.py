import math

from wiring_core.models import InstallationMethod

# Standard conductor cross-sections (mm²), ascending
CABLE_SIZES = [1.5, 2.5, 4, 6, 10, 16, 25, 35, 50, 70, 95, 120, 150, 185, 240, 300]

# BS 7671 Table 4D2A style - copper, 70°C thermoplastic, multicore
# Format: {Method: [Amps per CABLE_SIZES entry]}
CURRENT_CARRYING_CAPACITY = {
    InstallationMethod.A: [14.5, 19.5, 26, 34, 46, 61, 80, 99, 119, 151, 182, 210, 240, 273, 321, 367],
    InstallationMethod.B: [17.5, 24, 32, 41, 57, 76, 101, 125, 151, 192, 232, 269, 300, 341, 400, 458],
    InstallationMethod.C: [20, 27, 37, 47, 64, 85, 112, 138, 168, 213, 258, 299, 344, 392, 461, 530],
    InstallationMethod.D: [22, 29, 37, 46, 61, 79, 101, 122, 144, 178, 211, 240, 271, 304, 351, 396],
    InstallationMethod.E: [22, 30, 40, 51, 70, 94, 119, 148, 180, 232, 282, 328, 379, 434, 514, 593],
    InstallationMethod.F: [24, 33, 45, 58, 80, 107, 138, 171, 209, 269, 328, 382, 441, 506, 599, 693],
}

# BS 7671 Table 4D2B style - voltage drop mV/A/m
# Format: {Size: (r, x)}; up to 16 mm² the tabulated value is resistive only
VOLTAGE_DROP_SINGLE_PHASE = {
    1.5: (29.0, 0.0),
    2.5: (18.0, 0.0),
    4: (11.0, 0.0),
    6: (7.3, 0.0),
    10: (4.4, 0.0),
    16: (2.8, 0.0),
    25: (1.75, 0.170),
    35: (1.25, 0.165),
    50: (0.93, 0.165),
    70: (0.63, 0.160),
    95: (0.46, 0.155),
    120: (0.36, 0.155),
    150: (0.29, 0.155),
    185: (0.23, 0.150),
    240: (0.180, 0.150),
    300: (0.145, 0.145),
}

VOLTAGE_DROP_THREE_PHASE = {
    1.5: (25.0, 0.0),
    2.5: (15.0, 0.0),
    4: (9.5, 0.0),
    6: (6.4, 0.0),
    10: (3.8, 0.0),
    16: (2.4, 0.0),
    25: (1.50, 0.145),
    35: (1.10, 0.145),
    50: (0.80, 0.140),
    70: (0.55, 0.140),
    95: (0.41, 0.135),
    120: (0.33, 0.135),
    150: (0.26, 0.130),
    185: (0.21, 0.130),
    240: (0.165, 0.130),
    300: (0.135, 0.130),
}

# BS EN 60898 / 61009 standard device ratings (Amps)
BREAKER_RATINGS = [6, 10, 16, 20, 25, 32, 40, 50, 63, 80, 100, 125, 160, 250, 400, 630]

# BS 7671 Table C1 - grouping factors by method family
# Format: {circuits: factor}; counts between keys take the next key
GROUPING_ENCLOSED = {1: 1.00, 2: 0.80, 3: 0.70, 4: 0.65, 5: 0.60, 6: 0.57, 7: 0.54,
                     8: 0.52, 9: 0.50, 10: 0.48, 12: 0.45, 16: 0.41, 20: 0.38}
GROUPING_SURFACE = {1: 1.00, 2: 0.85, 3: 0.79, 4: 0.75, 6: 0.73, 9: 0.72}
GROUPING_TRAY = {1: 1.00, 2: 0.88, 3: 0.82, 4: 0.77, 6: 0.75, 9: 0.73, 12: 0.72}

GROUPING_TABLE_BY_METHOD = {
    InstallationMethod.A: GROUPING_ENCLOSED,
    InstallationMethod.B: GROUPING_ENCLOSED,
    InstallationMethod.C: GROUPING_SURFACE,
    InstallationMethod.D: GROUPING_ENCLOSED,
    InstallationMethod.E: GROUPING_TRAY,
    InstallationMethod.F: GROUPING_TRAY,
}

# BS 7671 Table B1 - ambient correction, 70°C thermoplastic, 30°C reference
# Format: {max_temp_c: factor}
AMBIENT_TEMP_FACTORS = {30: 1.00, 35: 0.94, 40: 0.87, 45: 0.79, 50: 0.71, 55: 0.61, 60: 0.50, 70: 0.35}
MAX_AMBIENT_TEMP = 70.0

# Regulation 523.9 - cable enclosed in thermal insulation
# Format: (min ratio of enclosed length, factor); checked from the top
THERMAL_INSULATION_FACTORS = [(1.0, 0.50), (0.5, 0.55), (0.2, 0.75), (0.1, 0.85)]
PARTIAL_INSULATION_FACTOR = 0.90

# Soil thermal resistivity (K.m/W) correction, 2.5 K.m/W reference
# Format: {max_resistivity: factor}
SOIL_RESISTIVITY_FACTORS = {1.0: 1.18, 1.5: 1.10, 2.0: 1.05, 2.5: 1.00, 3.0: 0.96, 3.5: 0.93, 4.0: 0.90}
HIGH_RESISTIVITY_FACTOR = 0.85


def get_capacity(method: InstallationMethod, size: float) -> float:
    return CURRENT_CARRYING_CAPACITY[method][CABLE_SIZES.index(size)]


def get_voltage_drop_coefficient(size: float, phases: int, pf: float) -> float:
    """Effective mV/A/m at the given power factor: r cos + x sin."""
    table = VOLTAGE_DROP_THREE_PHASE if phases == 3 else VOLTAGE_DROP_SINGLE_PHASE
    r, x = table[size]
    theta = math.acos(pf)
    return r * math.cos(theta) + x * math.sin(theta)


def get_grouping_factor(method: InstallationMethod, circuits: int) -> float:
    table = GROUPING_TABLE_BY_METHOD[method]
    for limit in sorted(table.keys()):
        if circuits <= limit:
            return table[limit]
    return table[max(table.keys())]


def get_ambient_temp_factor(temp_c: float) -> float:
    for limit in sorted(AMBIENT_TEMP_FACTORS.keys()):
        if temp_c <= limit:
            return AMBIENT_TEMP_FACTORS[limit]
    return AMBIENT_TEMP_FACTORS[70]


def get_thermal_insulation_factor(enclosed_length: float, total_length: float) -> float:
    ratio = enclosed_length / total_length
    if ratio == 0:
        return 1.0
    for min_ratio, factor in THERMAL_INSULATION_FACTORS:
        if ratio >= min_ratio:
            return factor
    return PARTIAL_INSULATION_FACTOR


def get_soil_factor(resistivity: float) -> float:
    for limit in sorted(SOIL_RESISTIVITY_FACTORS.keys()):
        if resistivity <= limit:
            return SOIL_RESISTIVITY_FACTORS[limit]
    return HIGH_RESISTIVITY_FACTOR
