"""
Default sweep ranges used when the caller does not supply one.
"""
from typing import Dict, Sequence

from ..exceptions import InvalidOptionInputError
from ..instruments.option_leg import OptionLeg
from .dimensions import SweepDimension, SweepRange

DEFAULT_GRID_STEPS = 30
DEFAULT_CURVE_PRICE_STEPS = 100
DEFAULT_PORTFOLIO_STEPS = 50


class SweepDefaults:
    """Pre-defined sweep ranges for curves, surfaces and portfolio profiles."""

    def __init__(self, grid_steps: int = DEFAULT_GRID_STEPS,
                 curve_price_steps: int = DEFAULT_CURVE_PRICE_STEPS,
                 portfolio_steps: int = DEFAULT_PORTFOLIO_STEPS):
        """
        Initialize default ranges.

        Args:
            grid_steps: Steps per axis of 2D grids
            curve_price_steps: Steps of 1D price and strike sweeps
            portfolio_steps: Steps of portfolio sweeps
        """
        self.grid_steps = grid_steps
        self.curve_price_steps = curve_price_steps
        self.portfolio_steps = portfolio_steps

    def curve_range(self, base: OptionLeg, dimension) -> SweepRange:
        """
        Default range of a 1D sweep.

        Price and strike span half to one and a half times the strike; the
        other dimensions use fixed steps.

        Args:
            base: Leg being swept
            dimension: SweepDimension or its name

        Returns:
            SweepRange
        """
        strike = base.strike
        ranges = {
            SweepDimension.PRICE: lambda: SweepRange(strike * 0.5, strike * 1.5, self.curve_price_steps),
            SweepDimension.STRIKE: lambda: SweepRange(strike * 0.5, strike * 1.5, self.curve_price_steps),
            SweepDimension.TIME: lambda: SweepRange.from_step(0.01, 2.0, 0.02),
            SweepDimension.VOLATILITY: lambda: SweepRange.from_step(0.05, 1.0, 0.01),
            SweepDimension.INTEREST: lambda: SweepRange.from_step(0.01, 0.1, 0.001),
            SweepDimension.MONEYNESS: lambda: SweepRange.from_step(0.5, 1.5, 0.01),
        }
        return ranges[SweepDimension.parse(dimension)]()

    def grid_range(self, base: OptionLeg, dimension) -> SweepRange:
        """
        Default range of one axis of a 2D grid.

        Price and strike move +/-30% around the leg's current value.
        """
        ranges = {
            SweepDimension.PRICE: lambda: SweepRange.around(base.spot, 0.3, self.grid_steps),
            SweepDimension.STRIKE: lambda: SweepRange.around(base.strike, 0.3, self.grid_steps),
            SweepDimension.TIME: lambda: SweepRange(0.1, 2.0, self.grid_steps),
            SweepDimension.VOLATILITY: lambda: SweepRange(0.05, 0.6, self.grid_steps),
            SweepDimension.INTEREST: lambda: SweepRange(0.01, 0.1, self.grid_steps),
            SweepDimension.MONEYNESS: lambda: SweepRange(0.7, 1.3, self.grid_steps),
        }
        return ranges[SweepDimension.parse(dimension)]()

    def portfolio_range(self, legs: Sequence[OptionLeg], dimension) -> SweepRange:
        """
        Default range of a portfolio sweep, anchored on the first leg.

        Args:
            legs: Portfolio legs (at least one)
            dimension: SweepDimension or its name

        Returns:
            SweepRange
        """
        if not legs:
            raise InvalidOptionInputError('legs', legs, "Portfolio has no legs")

        first = legs[0]
        ranges = {
            SweepDimension.PRICE: lambda: SweepRange(first.spot * 0.5, first.spot * 1.5, self.portfolio_steps),
            SweepDimension.STRIKE: lambda: SweepRange(first.strike * 0.5, first.strike * 1.5, self.portfolio_steps),
            SweepDimension.TIME: lambda: SweepRange(0.01, 2.0, self.portfolio_steps),
            SweepDimension.VOLATILITY: lambda: SweepRange(0.05, 0.6, self.portfolio_steps),
            SweepDimension.INTEREST: lambda: SweepRange(0.01, 0.1, self.portfolio_steps),
            SweepDimension.MONEYNESS: lambda: SweepRange(0.5, 1.5, self.portfolio_steps),
        }
        return ranges[SweepDimension.parse(dimension)]()

    def all_curve_ranges(self, base: OptionLeg) -> Dict[SweepDimension, SweepRange]:
        """Default 1D range of every dimension."""
        return {dimension: self.curve_range(base, dimension) for dimension in SweepDimension}

    def all_grid_ranges(self, base: OptionLeg) -> Dict[SweepDimension, SweepRange]:
        """Default grid axis range of every dimension."""
        return {dimension: self.grid_range(base, dimension) for dimension in SweepDimension}
