"""
Unit tests for sweep dimensions and ranges.
"""
import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from optiongreeks.exceptions import InvalidSweepRangeError, UnknownDimensionError
from optiongreeks.instruments.option_leg import OptionLeg
from optiongreeks.scenario.dimensions import SweepDimension, SweepRange


class TestSweepDimension(unittest.TestCase):
    """Test sweep dimension parsing and overrides."""

    def setUp(self):
        self.leg = OptionLeg('call', 100, 80, 1, 0.05, 0.2)

    def test_parse_names_and_aliases(self):
        """Dimensions parse from values and aliases."""
        self.assertIs(SweepDimension.parse('price'), SweepDimension.PRICE)
        self.assertIs(SweepDimension.parse(' Moneyness '), SweepDimension.MONEYNESS)
        self.assertIs(SweepDimension.parse('interest-rate'), SweepDimension.INTEREST)
        self.assertIs(SweepDimension.parse('spot'), SweepDimension.PRICE)
        self.assertIs(SweepDimension.parse(SweepDimension.TIME), SweepDimension.TIME)

    def test_unknown_dimension(self):
        """Unknown names raise instead of being ignored."""
        with self.assertRaises(UnknownDimensionError) as ctx:
            SweepDimension.parse('dividend')
        self.assertEqual(ctx.exception.name, 'dividend')
        with self.assertRaises(ValueError):
            SweepDimension.parse(None)

    def test_every_dimension_overrides_a_field(self):
        """Each dimension maps to an OptionLeg field."""
        for dimension in SweepDimension:
            derived = dimension.apply(self.leg, 0.5)
            self.assertIsInstance(derived, OptionLeg)
            self.assertEqual(getattr(derived, dimension.field_name),
                             40.0 if dimension is SweepDimension.MONEYNESS else 0.5)

    def test_moneyness_moves_spot(self):
        """Moneyness sets spot = strike * ratio and keeps the strike."""
        derived = SweepDimension.MONEYNESS.apply(self.leg, 1.25)
        self.assertEqual(derived.spot, 100.0)
        self.assertEqual(derived.strike, 80.0)
        self.assertEqual(SweepDimension.MONEYNESS.current_value(self.leg), 1.25)

    def test_current_value(self):
        """Current values read back from the leg."""
        self.assertEqual(SweepDimension.PRICE.current_value(self.leg), 100.0)
        self.assertEqual(SweepDimension.INTEREST.current_value(self.leg), 0.05)
        self.assertEqual(SweepDimension.TIME.current_value(self.leg), 1.0)


class TestSweepRange(unittest.TestCase):
    """Test sweep range validation and values."""

    def test_values_include_endpoints(self):
        """step_count + 1 evenly spaced values, exact endpoints."""
        values = SweepRange(50, 150, 100).values()
        self.assertEqual(len(values), 101)
        self.assertEqual(values[0], 50.0)
        self.assertEqual(values[-1], 150.0)
        self.assertAlmostEqual(values[1] - values[0], 1.0)

    def test_single_value_range(self):
        """min == max is allowed."""
        values = SweepRange(0.2, 0.2, 3).values()
        self.assertEqual(list(values), [0.2] * 4)

    def test_degenerate_ranges(self):
        """Degenerate ranges fail on construction."""
        with self.assertRaises(InvalidSweepRangeError):
            SweepRange(2.0, 1.0, 10)
        with self.assertRaises(InvalidSweepRangeError):
            SweepRange(1.0, 2.0, 0)
        with self.assertRaises(InvalidSweepRangeError):
            SweepRange(1.0, 2.0, 2.5)
        with self.assertRaises(InvalidSweepRangeError):
            SweepRange(float('nan'), 2.0, 10)
        with self.assertRaises(InvalidSweepRangeError):
            SweepRange(1.0, 2.0, True)

    def test_from_step(self):
        """Fixed-step ranges stop at the last step not beyond the maximum."""
        time_range = SweepRange.from_step(0.01, 2.0, 0.02)
        self.assertEqual(time_range.step_count, 99)
        self.assertAlmostEqual(time_range.maximum, 1.99)

        vol_range = SweepRange.from_step(0.05, 1.0, 0.01)
        self.assertEqual(vol_range.step_count, 95)
        self.assertAlmostEqual(vol_range.maximum, 1.0)

        with self.assertRaises(InvalidSweepRangeError):
            SweepRange.from_step(0.0, 1.0, 0.0)

    def test_around(self):
        """Symmetric ranges around a center."""
        sweep_range = SweepRange.around(100.0, 0.3, 30)
        self.assertAlmostEqual(sweep_range.minimum, 70.0)
        self.assertAlmostEqual(sweep_range.maximum, 130.0)
        self.assertEqual(sweep_range.point_count, 31)

    def test_coerce(self):
        """Ranges coerce from tuples and min/max/steps mappings."""
        expected = SweepRange(80.0, 120.0, 4)
        self.assertEqual(SweepRange.coerce((80, 120, 4)), expected)
        self.assertEqual(SweepRange.coerce({'min': 80, 'max': 120, 'steps': 4, 'current': 100}), expected)
        self.assertIs(SweepRange.coerce(expected), expected)
        with self.assertRaises(InvalidSweepRangeError):
            SweepRange.coerce({'min': 80, 'steps': 4})
        with self.assertRaises(InvalidSweepRangeError):
            SweepRange.coerce({'min': 120, 'max': 80, 'steps': 4})
        with self.assertRaises(InvalidSweepRangeError):
            SweepRange.coerce('80..120')


if __name__ == '__main__':
    unittest.main()
