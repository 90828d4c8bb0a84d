import unittest
from wiring_core.models import (
    AirConditioningRoomType, AirConditioningType, BuildingType, ClimateControlSystem,
    InstallationMethod, InstallationType, LightingControlSystem, LightingRoomType, LightingType,
    MotorStartingMethod, OccupancySchedule, WaterHeaterType, WaterHeatingMethod, WaterHeatingUsage,
)
from regulations import bs7671_tables as cables
from regulations import diversity_tables as tables


class TestTableCoverage(unittest.TestCase):

    def test_every_enum_member_has_an_entry(self):
        print("\n--- TEST: Exhaustive lookup tables ---")
        coverage = [
            (tables.RECOMMENDED_LUX, LightingRoomType),
            (tables.UTILIZATION_FACTORS, LightingRoomType),
            (tables.MAINTENANCE_FACTORS, LightingType),
            (tables.LUMINOUS_EFFICACY, LightingType),
            (tables.LUMINAIRE_POWER, LightingType),
            (tables.LIGHTING_CONTROL_FACTORS, LightingControlSystem),
            (tables.LIGHTING_BASE_DIVERSITY, InstallationType),
            (tables.HEATING_BASE_DIVERSITY, InstallationType),
            (tables.AIR_CONDITIONING_BASE_DIVERSITY, InstallationType),
            (tables.OCCUPANCY_FACTORS, OccupancySchedule),
            (tables.HEATING_CONTROL_FACTORS, ClimateControlSystem),
            (tables.HEATING_SIMULTANEITY_BY_BUILDING, BuildingType),
            (tables.HEATING_BUILDING_DIVERSITY, BuildingType),
            (tables.WATER_HEATER_SIMULTANEOUS, WaterHeaterType),
            (tables.WATER_USAGE_FACTORS, WaterHeatingUsage),
            (tables.WATER_METHOD_FACTORS, WaterHeatingMethod),
            (tables.AIR_CONDITIONING_TYPE_FACTORS, AirConditioningType),
            (tables.AIR_CONDITIONING_ROOM_FACTORS, AirConditioningRoomType),
            (tables.AIR_CONDITIONING_BUILDING_DIVERSITY, BuildingType),
            (tables.AIR_CONDITIONING_CONTROL_FACTORS, ClimateControlSystem),
            (tables.MOTOR_STARTING_MULTIPLIERS, MotorStartingMethod),
            (cables.CURRENT_CARRYING_CAPACITY, InstallationMethod),
            (cables.GROUPING_TABLE_BY_METHOD, InstallationMethod),
        ]
        for table, enum_cls in coverage:
            self.assertEqual(set(table.keys()), set(enum_cls), f"{enum_cls.__name__} not fully covered")

    def test_diversity_factors_are_fractions(self):
        for table in (tables.LIGHTING_CONTROL_FACTORS, tables.HEATING_CONTROL_FACTORS,
                      tables.WATER_USAGE_FACTORS, tables.AIR_CONDITIONING_ROOM_FACTORS):
            for value in table.values():
                self.assertGreater(value, 0)
                self.assertLessEqual(value, 1)


class TestCableTables(unittest.TestCase):

    def test_ladder_and_capacities_ascend(self):
        self.assertEqual(cables.CABLE_SIZES, sorted(cables.CABLE_SIZES))
        for method, amps in cables.CURRENT_CARRYING_CAPACITY.items():
            self.assertEqual(len(amps), len(cables.CABLE_SIZES))
            self.assertEqual(amps, sorted(amps), f"Method {method.value} not ascending")

    def test_voltage_drop_tables_cover_ladder(self):
        for size in cables.CABLE_SIZES:
            self.assertIn(size, cables.VOLTAGE_DROP_SINGLE_PHASE)
            self.assertIn(size, cables.VOLTAGE_DROP_THREE_PHASE)

    def test_voltage_drop_coefficient(self):
        # Up to 16mm² the table is purely resistive
        self.assertAlmostEqual(cables.get_voltage_drop_coefficient(4, 1, 1.0), 11.0)
        self.assertAlmostEqual(cables.get_voltage_drop_coefficient(4, 1, 0.9), 9.9)
        # 25mm² three phase at pf 0.8: 1.5*0.8 + 0.145*0.6
        self.assertAlmostEqual(cables.get_voltage_drop_coefficient(25, 3, 0.8), 1.287, places=6)

    def test_grouping_lookup(self):
        self.assertEqual(cables.get_grouping_factor(InstallationMethod.B, 1), 1.0)
        self.assertEqual(cables.get_grouping_factor(InstallationMethod.B, 3), 0.70)
        self.assertEqual(cables.get_grouping_factor(InstallationMethod.A, 11), 0.45)
        self.assertEqual(cables.get_grouping_factor(InstallationMethod.D, 50), 0.38)
        # Surface table jumps 4 -> 6 -> 9
        self.assertEqual(cables.get_grouping_factor(InstallationMethod.C, 5), 0.73)
        self.assertEqual(cables.get_grouping_factor(InstallationMethod.C, 30), 0.72)
        self.assertEqual(cables.get_grouping_factor(InstallationMethod.F, 2), 0.88)

    def test_ambient_lookup(self):
        self.assertEqual(cables.get_ambient_temp_factor(-5), 1.0)
        self.assertEqual(cables.get_ambient_temp_factor(30), 1.0)
        self.assertEqual(cables.get_ambient_temp_factor(31), 0.94)
        self.assertEqual(cables.get_ambient_temp_factor(40), 0.87)
        self.assertEqual(cables.get_ambient_temp_factor(65), 0.35)

    def test_insulation_lookup(self):
        self.assertEqual(cables.get_thermal_insulation_factor(0, 10), 1.0)
        self.assertEqual(cables.get_thermal_insulation_factor(0.5, 10), 0.90)
        self.assertEqual(cables.get_thermal_insulation_factor(1.5, 10), 0.85)
        self.assertEqual(cables.get_thermal_insulation_factor(3, 10), 0.75)
        self.assertEqual(cables.get_thermal_insulation_factor(7, 10), 0.55)
        self.assertEqual(cables.get_thermal_insulation_factor(10, 10), 0.50)

    def test_soil_lookup(self):
        self.assertEqual(cables.get_soil_factor(0.8), 1.18)
        self.assertEqual(cables.get_soil_factor(2.5), 1.0)
        self.assertEqual(cables.get_soil_factor(3.2), 0.93)
        self.assertEqual(cables.get_soil_factor(6.0), 0.85)


class TestFixedRules(unittest.TestCase):

    def test_socket_tiers(self):
        self.assertEqual(tables.get_socket_demand(0, True), 0)
        self.assertEqual(tables.get_socket_demand(5, True), 500)
        self.assertEqual(tables.get_socket_demand(10, True), 1000)
        self.assertEqual(tables.get_socket_demand(15, True), 1250)
        self.assertEqual(tables.get_socket_demand(20, True), 1500)
        self.assertEqual(tables.get_socket_demand(25, True), 1625)
        self.assertEqual(tables.get_socket_demand(15, False), 1200)

    def test_cooking_tiers(self):
        self.assertEqual(tables.get_cooking_demand(0), 0)
        self.assertEqual(tables.get_cooking_demand(8000), 8000)
        self.assertEqual(tables.get_cooking_demand(10000), 10000)
        self.assertEqual(tables.get_cooking_demand(30000), 20000)
        self.assertEqual(tables.get_cooking_demand(60000), 35000)
        self.assertEqual(tables.get_cooking_demand(80000), 40000)

    def test_operating_hours(self):
        self.assertEqual(tables.get_operating_hours_factor(8), 1.0)
        self.assertEqual(tables.get_operating_hours_factor(10), 0.9)
        self.assertEqual(tables.get_operating_hours_factor(16), 0.8)
        self.assertEqual(tables.get_operating_hours_factor(24), 0.7)

    def test_starting_multipliers(self):
        self.assertEqual(tables.get_starting_multiplier(MotorStartingMethod.DIRECT, False), 6.0)
        self.assertEqual(tables.get_starting_multiplier(MotorStartingMethod.DIRECT, True), 8.0)
        self.assertAlmostEqual(tables.get_starting_multiplier(MotorStartingMethod.STAR_DELTA, True), 8 / 3)
        self.assertEqual(tables.get_starting_multiplier(MotorStartingMethod.VFD, True), 1.5)


if __name__ == '__main__':
    unittest.main()
