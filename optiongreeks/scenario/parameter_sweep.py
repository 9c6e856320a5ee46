"""
Parameter sweeps over one or two option inputs.
"""
import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

from ..instruments.option_leg import OptionLeg
from ..valuation.black_scholes import BlackScholesEngine
from ..valuation.greeks import Greek, Greeks
from .dimensions import SweepDimension, SweepRange
from .sweep_defaults import SweepDefaults

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepSample:
    """Greeks at one value of the swept dimension."""
    parameter_value: float
    greeks: Greeks


@dataclass(frozen=True)
class CurvePoint:
    """One chosen Greek at one value of the swept dimension."""
    parameter: float
    value: float


@dataclass(frozen=True)
class SurfacePoint:
    """Grid point of a 2D sweep; z is the price unless another Greek was requested."""
    x: float
    y: float
    z: float


class ParameterSweep:
    """
    Evaluates the engine repeatedly while varying one or two dimensions.

    Every sweep is validated when it is requested (dimension names, range
    and the swept endpoints applied to the base leg) and then evaluated
    lazily. Calling a sweep again with the same arguments yields the same
    sequence.
    """

    def __init__(self, engine: Optional[BlackScholesEngine] = None,
                 defaults: Optional[SweepDefaults] = None):
        """
        Initialize parameter sweep.

        Args:
            engine: Pricing engine (default-configured if omitted)
            defaults: Default ranges (standard ranges if omitted)
        """
        self.engine = engine or BlackScholesEngine()
        self.defaults = defaults or SweepDefaults()

    def sweep_1d(self, base: OptionLeg, dimension,
                 sweep_range: Optional[SweepRange] = None) -> Iterator[SweepSample]:
        """
        Sweep one dimension and evaluate all Greeks at each point.

        Args:
            base: Leg holding the fixed inputs
            dimension: SweepDimension or its name
            sweep_range: Range to sweep (dimension default if omitted)

        Returns:
            Iterator of SweepSample, step_count + 1 items in range order
        """
        dimension = SweepDimension.parse(dimension)
        if sweep_range is None:
            sweep_range = self.defaults.curve_range(base, dimension)
        sweep_range = SweepRange.coerce(sweep_range)
        _check_endpoints(base, dimension, sweep_range)

        logger.debug(f"1D sweep over {dimension.value}: {sweep_range.minimum} -> "
                     f"{sweep_range.maximum} ({sweep_range.point_count} points)")
        return self._iter_1d(base, dimension, sweep_range)

    def _iter_1d(self, base, dimension, sweep_range) -> Iterator[SweepSample]:
        for value in sweep_range.values():
            value = float(value)
            greeks = self.engine.evaluate(dimension.apply(base, value))
            yield SweepSample(parameter_value=value, greeks=greeks)

    def curve(self, base: OptionLeg, dimension, greek=Greek.PRICE,
              sweep_range: Optional[SweepRange] = None) -> Iterator[CurvePoint]:
        """
        Sweep one dimension and keep a single Greek, for 2D charts.

        Args:
            base: Leg holding the fixed inputs
            dimension: SweepDimension or its name
            greek: Greek to plot (price by default)
            sweep_range: Range to sweep (dimension default if omitted)

        Returns:
            Iterator of CurvePoint
        """
        greek = Greek.parse(greek)
        samples = self.sweep_1d(base, dimension, sweep_range)
        return (CurvePoint(parameter=sample.parameter_value, value=sample.greeks.get(greek))
                for sample in samples)

    def sweep_2d(self, base: OptionLeg, x_dimension, y_dimension,
                 x_range: Optional[SweepRange] = None,
                 y_range: Optional[SweepRange] = None,
                 greek=Greek.PRICE) -> Iterator[SurfacePoint]:
        """
        Sweep a grid of two dimensions for 3D surfaces.

        The y override is applied after the x override, so when both
        dimensions write the same leg field the y value wins (and a
        moneyness axis uses the strike as already set by the other axis).

        Args:
            base: Leg holding the fixed inputs
            x_dimension: Dimension of the outer loop
            y_dimension: Dimension of the inner loop
            x_range: Range for x (grid default if omitted)
            y_range: Range for y (grid default if omitted)
            greek: Greek reported as z (price by default)

        Returns:
            Iterator of SurfacePoint, x-major order
        """
        x_dimension, y_dimension, x_range, y_range = self._prepare_grid(
            base, x_dimension, y_dimension, x_range, y_range)
        greek = Greek.parse(greek)

        logger.debug(f"2D sweep over {x_dimension.value} x {y_dimension.value}: "
                     f"{x_range.point_count * y_range.point_count} points")
        return self._iter_2d(base, x_dimension, y_dimension, x_range, y_range, greek)

    def _iter_2d(self, base, x_dimension, y_dimension, x_range, y_range, greek) -> Iterator[SurfacePoint]:
        y_values = [float(y) for y in y_range.values()]
        for x in x_range.values():
            x = float(x)
            x_leg = x_dimension.apply(base, x)
            for y in y_values:
                greeks = self.engine.evaluate(y_dimension.apply(x_leg, y))
                yield SurfacePoint(x=x, y=y, z=greeks.get(greek))

    def surface_grid(self, base: OptionLeg, x_dimension, y_dimension,
                     x_range: Optional[SweepRange] = None,
                     y_range: Optional[SweepRange] = None,
                     greek=Greek.PRICE) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Vectorized 2D sweep returning arrays ready for surface plots.

        Same override order and values as sweep_2d().

        Returns:
            (x_values, y_values, z) where z[j, i] is the value at
            (x_values[i], y_values[j])
        """
        x_dimension, y_dimension, x_range, y_range = self._prepare_grid(
            base, x_dimension, y_dimension, x_range, y_range)
        greek = Greek.parse(greek)

        x_values = x_range.values()
        y_values = y_range.values()
        x_grid, y_grid = np.meshgrid(x_values, y_values)

        fields = {
            name: np.full(x_grid.shape, getattr(base, name))
            for name in ('spot', 'strike', 'time_to_expiry', 'rate', 'volatility')
        }
        fields.update(x_dimension.field_overrides(x_grid, fields['strike']))
        fields.update(y_dimension.field_overrides(y_grid, fields['strike']))

        results = self.engine.evaluate_batch(
            base.kind, fields['spot'], fields['strike'], fields['time_to_expiry'],
            fields['rate'], fields['volatility']
        )
        return x_values, y_values, results[greek.value]

    def _prepare_grid(self, base, x_dimension, y_dimension, x_range, y_range):
        x_dimension = SweepDimension.parse(x_dimension)
        y_dimension = SweepDimension.parse(y_dimension)
        if x_range is None:
            x_range = self.defaults.grid_range(base, x_dimension)
        if y_range is None:
            y_range = self.defaults.grid_range(base, y_dimension)
        x_range = SweepRange.coerce(x_range)
        y_range = SweepRange.coerce(y_range)

        if x_dimension.field_name == y_dimension.field_name:
            logger.warning(f"Sweep dimensions {x_dimension.value} and {y_dimension.value} "
                           f"both set '{y_dimension.field_name}'; y values take precedence")

        for x in (x_range.minimum, x_range.maximum):
            x_leg = x_dimension.apply(base, x)
            _check_endpoints(x_leg, y_dimension, y_range)

        return x_dimension, y_dimension, x_range, y_range


def _check_endpoints(base: OptionLeg, dimension: SweepDimension, sweep_range: SweepRange):
    """
    Apply both range endpoints to the leg so invalid inputs fail up front.

    Leg constraints are intervals, so valid endpoints imply valid interior
    points.
    """
    dimension.apply(base, sweep_range.minimum)
    dimension.apply(base, sweep_range.maximum)
