"""
Unit tests for portfolio aggregation.
"""
import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from optiongreeks.exceptions import InvalidOptionInputError, UnknownDimensionError
from optiongreeks.instruments.option_leg import OptionLeg, PortfolioLeg
from optiongreeks.scenario.dimensions import SweepRange
from optiongreeks.scenario.sweep_defaults import SweepDefaults
from optiongreeks.valuation.black_scholes import BlackScholesEngine
from optiongreeks.valuation.portfolio_aggregation import PortfolioAggregator


class TestPortfolioAggregator(unittest.TestCase):
    """Test portfolio aggregation."""

    def setUp(self):
        self.aggregator = PortfolioAggregator()
        self.engine = BlackScholesEngine()
        self.call = PortfolioLeg('call', 100, 100, 0.5, 0.05, 0.25, 'long', 2)
        self.put = PortfolioLeg('put', 100, 95, 0.5, 0.05, 0.25, 'short', 1)

    def test_offsetting_legs_cancel(self):
        """A long and a short of the same contract net to zero everywhere."""
        legs = [
            PortfolioLeg('call', 100, 100, 1, 0.05, 0.2, 'long', 3),
            PortfolioLeg('call', 100, 100, 1, 0.05, 0.2, 'short', 3),
        ]
        for point in self.aggregator.aggregate(legs, 'price'):
            self.assertEqual(point.value, 0.0)
            self.assertEqual(point.delta, 0.0)
            self.assertEqual(point.gamma, 0.0)
            self.assertEqual(point.theta, 0.0)
            self.assertEqual(point.vega, 0.0)
            self.assertEqual(point.rho, 0.0)

    def test_default_price_range(self):
        """Default price sweep: 51 points over half to one and a half times the first spot."""
        points = list(self.aggregator.aggregate([self.call, self.put], 'price'))
        self.assertEqual(len(points), 51)
        self.assertEqual(points[0].parameter_value, 50.0)
        self.assertEqual(points[-1].parameter_value, 150.0)

    def test_weighted_sum(self):
        """Each leg contributes sign * quantity times its Greeks."""
        point = self.aggregator.aggregate_point([self.call, self.put], 'price', 105.0)

        call = self.engine.evaluate(OptionLeg('call', 105, 100, 0.5, 0.05, 0.25))
        put = self.engine.evaluate(OptionLeg('put', 105, 95, 0.5, 0.05, 0.25))

        self.assertEqual(point.parameter_value, 105.0)
        self.assertAlmostEqual(point.value, 2 * call.price - put.price, places=12)
        self.assertAlmostEqual(point.delta, 2 * call.delta - put.delta, places=12)
        self.assertAlmostEqual(point.gamma, 2 * call.gamma - put.gamma, places=12)
        self.assertAlmostEqual(point.theta, 2 * call.theta - put.theta, places=12)
        self.assertAlmostEqual(point.vega, 2 * call.vega - put.vega, places=12)
        self.assertAlmostEqual(point.rho, 2 * call.rho - put.rho, places=12)

    def test_sweep_points_match_aggregate_point(self):
        sweep_range = SweepRange(0.1, 0.5, 4)
        points = list(self.aggregator.aggregate([self.call, self.put], 'volatility', sweep_range))
        for point in points:
            expected = self.aggregator.aggregate_point([self.call, self.put], 'volatility',
                                                       point.parameter_value)
            self.assertEqual(point, expected)

    def test_dict_legs(self):
        """Legs can be given as mappings with short keys."""
        legs = [
            {'type': 'call', 'S': 100, 'K': 100, 'T': 0.5, 'r': 0.05, 'sigma': 0.25,
             'position': 'long', 'quantity': 2},
            {'type': 'put', 'S': 100, 'K': 95, 'T': 0.5, 'r': 0.05, 'sigma': 0.25,
             'position': 'short', 'quantity': 1},
        ]
        sweep_range = SweepRange(90, 110, 4)
        from_dicts = list(self.aggregator.aggregate(legs, 'price', sweep_range))
        from_legs = list(self.aggregator.aggregate([self.call, self.put], 'price', sweep_range))
        self.assertEqual(from_dicts, from_legs)

    def test_empty_portfolio(self):
        with self.assertRaises(InvalidOptionInputError):
            self.aggregator.aggregate([], 'price')
        with self.assertRaises(InvalidOptionInputError):
            self.aggregator.current_exposure([])

    def test_rejects_non_portfolio_legs(self):
        with self.assertRaises(InvalidOptionInputError):
            self.aggregator.aggregate([OptionLeg('call', 100, 100, 1, 0.05, 0.2)], 'price')

    def test_errors_raised_before_iteration(self):
        with self.assertRaises(UnknownDimensionError):
            self.aggregator.aggregate([self.call], 'theta')
        with self.assertRaises(InvalidOptionInputError):
            self.aggregator.aggregate([self.call], 'strike', SweepRange(0.0, 100.0, 10))

    def test_default_volatility_range(self):
        points = list(self.aggregator.aggregate([self.call], 'volatility'))
        self.assertEqual(points[0].parameter_value, 0.05)
        self.assertEqual(points[-1].parameter_value, 0.6)

    def test_aggregation_is_repeatable(self):
        first = list(self.aggregator.aggregate([self.call, self.put], 'time'))
        second = list(self.aggregator.aggregate([self.call, self.put], 'time'))
        self.assertEqual(first, second)

    def test_moneyness_uses_each_strike(self):
        """Moneyness moves each leg's spot relative to its own strike."""
        point = self.aggregator.aggregate_point([self.call, self.put], 'moneyness', 1.1)
        call = self.engine.evaluate(OptionLeg('call', 110, 100, 0.5, 0.05, 0.25))
        put = self.engine.evaluate(OptionLeg('put', 95 * 1.1, 95, 0.5, 0.05, 0.25))
        self.assertAlmostEqual(point.value, 2 * call.price - put.price, places=10)

    def test_current_exposure(self):
        """Exposure at the legs' own parameters."""
        exposure = self.aggregator.current_exposure([self.call, self.put])
        call = self.engine.evaluate(OptionLeg('call', 100, 100, 0.5, 0.05, 0.25))
        put = self.engine.evaluate(OptionLeg('put', 100, 95, 0.5, 0.05, 0.25))

        self.assertEqual(exposure.parameter_value, 100.0)
        self.assertAlmostEqual(exposure.delta, 2 * call.delta - put.delta, places=12)
        self.assertAlmostEqual(exposure.value, 2 * call.price - put.price, places=12)

    def test_leg_contribution(self):
        contribution = self.aggregator.leg_contribution(self.put)
        put = self.engine.evaluate(OptionLeg('put', 100, 95, 0.5, 0.05, 0.25))
        self.assertEqual(contribution.price, -put.price)
        self.assertEqual(contribution.vega, -put.vega)

    def test_custom_steps(self):
        aggregator = PortfolioAggregator(defaults=SweepDefaults(portfolio_steps=10))
        self.assertEqual(len(list(aggregator.aggregate([self.call], 'interest'))), 11)


if __name__ == '__main__':
    unittest.main()
