import unittest

from wiring_core.errors import InvalidInputError
from wiring_core.models import CableDeratingInput, InstallationMethod
from regulations.cable_derating import CableDerating


class TestCableDerating(unittest.TestCase):

    def test_repeat_call_gives_same_result(self):
        data = CableDeratingInput(32, "B", 20, ambient_temperature=40, number_of_circuits=3,
                                  thermal_insulation_length=3)
        self.assertEqual(CableDerating.calculate(data), CableDerating.calculate(data))

    def test_reference_conditions(self):
        res = CableDerating.calculate(CableDeratingInput(37, InstallationMethod.C, 20))
        self.assertEqual(res.overall_derating, 1.0)
        self.assertEqual(res.derated_current, 37)
        self.assertTrue(res.is_compliant)
        self.assertEqual(res.recommendations, ["Derating is within acceptable limits"])

    def test_combined_factors(self):
        print("\n--- TEST: Grouped, hot, partly insulated ---")
        res = CableDerating.calculate(CableDeratingInput(
            original_rating=32, installation_method="B", total_length=20,
            ambient_temperature=40, number_of_circuits=3, thermal_insulation_length=3))
        print(f"Cg {res.grouping_factor} Ca {res.ambient_temp_factor} Ci {res.thermal_insulation_factor} "
              f"-> {res.overall_derating:.3f} ({res.derated_current:.1f} A)")
        self.assertEqual(res.grouping_factor, 0.70)
        self.assertEqual(res.ambient_temp_factor, 0.87)
        self.assertEqual(res.thermal_insulation_factor, 0.85)
        self.assertEqual(res.buried_factor, 1.0)
        self.assertFalse(res.is_compliant)

    def test_product_identity(self):
        cases = [
            CableDeratingInput(46, "A", 15, 35, 4, 15),
            CableDeratingInput(100, "D", 50, 25, 2, 0, True, 1.0),
            CableDeratingInput(80, "E", 30, 55, 20, 1, True, 3.2),
        ]
        for data in cases:
            res = CableDerating.calculate(data)
            product = res.grouping_factor * res.ambient_temp_factor * res.thermal_insulation_factor * res.buried_factor
            self.assertEqual(res.overall_derating, product)
            self.assertEqual(res.derated_current, data.original_rating * res.overall_derating)

    def test_buried(self):
        res = CableDerating.calculate(CableDeratingInput(100, "D", 50, is_buried=True, soil_thermal_resistivity=1.0))
        self.assertEqual(res.buried_factor, 1.18)
        res = CableDerating.calculate(CableDeratingInput(100, "D", 50, is_buried=True, soil_thermal_resistivity=6))
        self.assertEqual(res.buried_factor, 0.85)
        # Resistivity is ignored when the cable is not buried
        res = CableDerating.calculate(CableDeratingInput(100, "D", 50, soil_thermal_resistivity=6))
        self.assertEqual(res.buried_factor, 1.0)

    def test_method_selects_grouping_table(self):
        enclosed = CableDerating.calculate(CableDeratingInput(30, "A", 10, number_of_circuits=4))
        surface = CableDerating.calculate(CableDeratingInput(30, "C", 10, number_of_circuits=4))
        tray = CableDerating.calculate(CableDeratingInput(30, "F", 10, number_of_circuits=4))
        self.assertEqual((enclosed.grouping_factor, surface.grouping_factor, tray.grouping_factor),
                         (0.65, 0.75, 0.77))

    def test_invalid_inputs(self):
        bad_inputs = [
            CableDeratingInput(0, "C", 20),
            CableDeratingInput(32, "C", 0),
            CableDeratingInput(32, "Z", 20),
            CableDeratingInput(32, "C", 20, ambient_temperature=70),
            CableDeratingInput(32, "C", 20, number_of_circuits=0),
            CableDeratingInput(32, "C", 20, thermal_insulation_length=-1),
            CableDeratingInput(32, "C", 20, thermal_insulation_length=25),
            CableDeratingInput(32, "D", 20, is_buried=True),
            CableDeratingInput(32, "D", 20, is_buried=True, soil_thermal_resistivity=0),
            CableDeratingInput(32, "D", 20, is_buried=True, soil_thermal_resistivity=float("inf")),
        ]
        for data in bad_inputs:
            with self.assertRaises(InvalidInputError):
                CableDerating.calculate(data)


if __name__ == '__main__':
    unittest.main()
