"""
Portfolio aggregation of Greeks across weighted option legs.
"""
import logging
from dataclasses import dataclass, asdict
from typing import Dict, Iterator, List, Optional, Sequence

from ..exceptions import InvalidOptionInputError
from ..instruments.option_leg import PortfolioLeg
from ..scenario.dimensions import SweepDimension, SweepRange
from ..scenario.sweep_defaults import SweepDefaults
from .black_scholes import BlackScholesEngine
from .greeks import Greeks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregatedPoint:
    """Signed, quantity-weighted sum of Greeks across legs at one sweep value."""
    parameter_value: float
    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float
    value: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


class PortfolioAggregator:
    """Aggregates Greeks of multi-leg portfolios along a sweep."""

    def __init__(self, engine: Optional[BlackScholesEngine] = None,
                 defaults: Optional[SweepDefaults] = None):
        """
        Initialize portfolio aggregator.

        Args:
            engine: Pricing engine (default-configured if omitted)
            defaults: Default portfolio ranges (standard ranges if omitted)
        """
        self.engine = engine or BlackScholesEngine()
        self.defaults = defaults or SweepDefaults()

    def aggregate(self, legs: Sequence[PortfolioLeg], dimension,
                  sweep_range: Optional[SweepRange] = None) -> Iterator[AggregatedPoint]:
        """
        Sweep one dimension across every leg and sum the weighted Greeks.

        Args:
            legs: Portfolio legs, summed in the given order
            dimension: SweepDimension or its name
            sweep_range: Range to sweep (default anchored on the first leg)

        Returns:
            Iterator of AggregatedPoint in sweep order
        """
        legs = self._check_legs(legs)
        dimension = SweepDimension.parse(dimension)
        if sweep_range is None:
            sweep_range = self.defaults.portfolio_range(legs, dimension)
        sweep_range = SweepRange.coerce(sweep_range)

        for leg in legs:
            dimension.apply(leg, sweep_range.minimum)
            dimension.apply(leg, sweep_range.maximum)

        logger.debug(f"Aggregating {len(legs)} legs over {dimension.value}: "
                     f"{sweep_range.minimum} -> {sweep_range.maximum} ({sweep_range.point_count} points)")
        return self._iter_points(legs, dimension, sweep_range)

    def _iter_points(self, legs, dimension, sweep_range) -> Iterator[AggregatedPoint]:
        for value in sweep_range.values():
            value = float(value)
            derived = [dimension.apply(leg, value) for leg in legs]
            yield self._sum_legs(derived, value)

    def aggregate_point(self, legs: Sequence[PortfolioLeg], dimension, value: float) -> AggregatedPoint:
        """Aggregate the portfolio with one dimension set to a single value."""
        legs = self._check_legs(legs)
        dimension = SweepDimension.parse(dimension)
        return self._sum_legs([dimension.apply(leg, value) for leg in legs], value)

    def current_exposure(self, legs: Sequence[PortfolioLeg]) -> AggregatedPoint:
        """
        Net Greeks and value at the legs' own parameters.

        Returns:
            AggregatedPoint whose parameter_value is the first leg's spot
        """
        legs = self._check_legs(legs)
        return self._sum_legs(legs, legs[0].spot)

    def leg_contribution(self, leg: PortfolioLeg) -> Greeks:
        """Greeks of a single leg scaled by its signed quantity."""
        greeks = self.engine.evaluate(leg)
        weight = leg.signed_quantity
        return Greeks(
            price=greeks.price * weight,
            delta=greeks.delta * weight,
            gamma=greeks.gamma * weight,
            theta=greeks.theta * weight,
            vega=greeks.vega * weight,
            rho=greeks.rho * weight
        )

    def _sum_legs(self, legs: Sequence[PortfolioLeg], parameter_value: float) -> AggregatedPoint:
        total_delta = 0.0
        total_gamma = 0.0
        total_theta = 0.0
        total_vega = 0.0
        total_rho = 0.0
        total_value = 0.0

        for leg in legs:
            contribution = self.leg_contribution(leg)
            total_delta += contribution.delta
            total_gamma += contribution.gamma
            total_theta += contribution.theta
            total_vega += contribution.vega
            total_rho += contribution.rho
            total_value += contribution.price

        return AggregatedPoint(
            parameter_value=float(parameter_value),
            delta=total_delta,
            gamma=total_gamma,
            theta=total_theta,
            vega=total_vega,
            rho=total_rho,
            value=total_value
        )

    @staticmethod
    def _check_legs(legs) -> List[PortfolioLeg]:
        legs = [PortfolioLeg.from_dict(leg) if isinstance(leg, dict) else leg for leg in legs]
        if not legs:
            raise InvalidOptionInputError('legs', legs, "Portfolio has no legs")
        for leg in legs:
            if not isinstance(leg, PortfolioLeg):
                raise InvalidOptionInputError('legs', leg, f"Expected a PortfolioLeg, got {type(leg).__name__}")
        return legs
