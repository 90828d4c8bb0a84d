import math
import unittest

from wiring_core.converters import convert_length_unit, convert_power_unit, current_from_power, parse_quantity
from wiring_core.errors import InvalidInputError
from wiring_core.models import InstallationMethod
from wiring_core.validation import coerce_enum, require_fraction, resolve_override


class TestUnitConversion(unittest.TestCase):

    def test_power_units(self):
        self.assertEqual(convert_power_unit(3, "kW", 230, 1, 0.9), (3000.0, None))
        self.assertEqual(convert_power_unit(2, "hp", 400, 3, 0.9), (1492.0, None))
        watts, amps = convert_power_unit(10, "kVA", 230, 1, 0.8)
        self.assertAlmostEqual(watts, 8000.0)
        self.assertIsNone(amps)

    def test_amps_carry_override(self):
        watts, amps = convert_power_unit(20, "A", 400, 3, 0.9)
        self.assertEqual(amps, 20)
        self.assertAlmostEqual(watts, 20 * 400 * math.sqrt(3) * 0.9)
        self.assertAlmostEqual(current_from_power(watts, 400, 3, 0.9), 20)

    def test_unknown_units(self):
        with self.assertRaises(InvalidInputError):
            convert_power_unit(1, "BTU", 230, 1, 0.9)
        with self.assertRaises(InvalidInputError):
            convert_length_unit(1, "furlong")

    def test_length(self):
        self.assertAlmostEqual(convert_length_unit(100, "ft"), 30.48)
        self.assertEqual(convert_length_unit(12, "M"), 12)

    def test_parse_quantity(self):
        self.assertEqual(parse_quantity("3.5 kW", "W"), (3.5, "kW"))
        self.assertEqual(parse_quantity("20", "m"), (20.0, "m"))
        with self.assertRaises(InvalidInputError):
            parse_quantity("about ten", "W")


class TestValidationHelpers(unittest.TestCase):

    def test_override_precedence(self):
        self.assertEqual(resolve_override(None, lambda: 0.9, "factor"), 0.9)
        self.assertEqual(resolve_override(0.7, lambda: 0.9, "factor"), 0.7)
        with self.assertRaises(InvalidInputError):
            resolve_override(1.5, lambda: 0.9, "factor")

    def test_fraction_rejects_nan(self):
        with self.assertRaises(InvalidInputError):
            require_fraction(float("nan"), "factor")

    def test_coerce_enum(self):
        self.assertIs(coerce_enum(InstallationMethod, "C", "method"), InstallationMethod.C)
        self.assertIs(coerce_enum(InstallationMethod, InstallationMethod.A, "method"), InstallationMethod.A)
        with self.assertRaises(InvalidInputError) as ctx:
            coerce_enum(InstallationMethod, "Q", "method")
        self.assertEqual(ctx.exception.field, "method")


if __name__ == '__main__':
    unittest.main()
