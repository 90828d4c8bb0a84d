import math
import unittest
from dataclasses import replace

from wiring_core.errors import InvalidCountError, InvalidInputError, MissingCategoryError
from wiring_core.models import (
    AirConditioningInput, AirConditioningSystem, CookingAppliance, HeatingRoom, InstallationContext,
    InstallationLoadInput, InstallationType, LightingInput, LightingRoom, SpaceHeatingInput,
    SpecialLoad, WaterHeater, WaterHeatingInput,
)
from regulations.aggregator import InstallationLoadAggregator

CATEGORY_ORDER = ["Lighting", "Space Heating", "Water Heating", "Air Conditioning",
                  "Socket Outlets", "Cooking", "Special Loads"]


def house(**kwargs):
    data = InstallationLoadInput(
        context=InstallationContext(InstallationType.DOMESTIC),
        lighting=LightingInput(
            rooms=[LightingRoom("Lounge", 25, "living_room"), LightingRoom("Kitchen", 15, "kitchen")],
            lighting_type="led", control_system="manual"),
        space_heating=SpaceHeatingInput(
            rooms=[HeatingRoom("Lounge", 25, 60, 2000, has_thermostat=True)],
            building_type="residential", control_system="thermostat"),
        water_heating=WaterHeatingInput(
            heaters=[WaterHeater("electric_immersion", 150, 3000)],
            heating_method="storage", usage="domestic_medium"),
        air_conditioning=AirConditioningInput(
            systems=[AirConditioningSystem("Bedroom", "split_system", 1500, 14, "bedroom", 8)],
            building_type="residential", control_system="thermostat"),
        number_of_sockets=15,
        cooking_appliances=[CookingAppliance("Cooker", 10000)],
        special_loads=[SpecialLoad("EV charger", 7400)],
    )
    return replace(data, **kwargs)


class TestInstallationAggregate(unittest.TestCase):

    def test_house_totals(self):
        print("\n--- TEST: Whole-house maximum demand ---")
        res = InstallationLoadAggregator().calculate(house())
        print(f"Connected {res.total_connected_load:.0f} W | Demand {res.total_demand_load:.0f} W | "
              f"{res.single_phase_current:.1f} A")
        self.assertEqual([c.category for c in res.breakdown], CATEGORY_ORDER)
        self.assertAlmostEqual(res.total_connected_load, sum(c.connected_load for c in res.breakdown))
        self.assertAlmostEqual(res.total_demand_load, sum(c.demand_load for c in res.breakdown))
        self.assertLessEqual(res.total_demand_load, res.total_connected_load)
        self.assertAlmostEqual(res.overall_diversity_factor, res.total_demand_load / res.total_connected_load)
        self.assertAlmostEqual(res.single_phase_current, res.total_demand_load / 230)
        self.assertAlmostEqual(res.three_phase_current, res.total_demand_load / (230 * math.sqrt(3)))

    def test_fixed_rule_entries(self):
        res = InstallationLoadAggregator().calculate(house())
        by_name = {c.category: c for c in res.breakdown}
        self.assertEqual(by_name["Socket Outlets"].demand_load, 1250)
        self.assertEqual(by_name["Cooking"].demand_load, 10000)
        self.assertEqual(by_name["Special Loads"].demand_load, 7400)
        self.assertEqual(by_name["Space Heating"].diversity_factor, 1.0)
        self.assertEqual(by_name["Water Heating"].diversity_factor, 1.0)

    def test_context_is_pushed_into_categories(self):
        # The lighting input carries no context of its own
        res = InstallationLoadAggregator().calculate(house(context=InstallationContext("commercial")))
        self.assertAlmostEqual(res.category_results["Lighting"].diversity_factor, 0.8)
        self.assertEqual(res.category_results["Socket Outlets"].demand_load, 15 * 80)

    def test_large_domestic_recommendations(self):
        heavy = [SpecialLoad(f"Load {i}", 9000) for i in range(4)]
        res = InstallationLoadAggregator().calculate(house(special_loads=heavy))
        self.assertGreater(res.total_demand_load, 23000)
        self.assertTrue(any("DNO" in r for r in res.recommendations))
        self.assertTrue(any("three-phase supply is recommended" in r for r in res.recommendations))
        self.assertTrue(any(r.startswith("Special Loads demand is high") for r in res.recommendations))

    def test_missing_installation_type(self):
        with self.assertRaises(MissingCategoryError):
            InstallationLoadAggregator().calculate(house(context=None))
        with self.assertRaises(MissingCategoryError):
            InstallationLoadAggregator().calculate(house(context=InstallationContext(None)))

    def test_missing_category(self):
        for name in ("lighting", "space_heating", "water_heating", "air_conditioning", "number_of_sockets",
                     "cooking_appliances", "special_loads"):
            with self.assertRaises(MissingCategoryError) as ctx:
                InstallationLoadAggregator().calculate(house(**{name: None}))
            self.assertEqual(ctx.exception.field, name)

    def test_negative_sockets(self):
        with self.assertRaises(InvalidCountError):
            InstallationLoadAggregator().calculate(house(number_of_sockets=-3))

    def test_invalid_category_input_propagates(self):
        bad = LightingInput(rooms=[], lighting_type="led", control_system="manual")
        with self.assertRaises(InvalidInputError):
            InstallationLoadAggregator().calculate(house(lighting=bad))

    def test_idempotent(self):
        agg = InstallationLoadAggregator()
        self.assertEqual(agg.calculate(house()), agg.calculate(house()))


if __name__ == '__main__':
    unittest.main()
