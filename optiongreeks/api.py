"""
Function-call interface consumed by chart and dashboard front ends.
"""
import logging
from typing import Dict, List, Mapping, Optional, Sequence

from .instruments.option_leg import OptionLeg, PortfolioLeg
from .output.report_generator import ReportGenerator
from .scenario.dimensions import SweepDimension, SweepRange
from .scenario.parameter_sweep import CurvePoint, ParameterSweep, SurfacePoint, SweepSample
from .scenario.sweep_defaults import SweepDefaults
from .utils.config_loader import EngineSettings, setup_logging
from .valuation.black_scholes import BlackScholesEngine
from .valuation.greeks import Greek, Greeks
from .valuation.portfolio_aggregation import AggregatedPoint, PortfolioAggregator

logger = logging.getLogger(__name__)


class OptionsAnalyzer:
    """Bundles the engine, sweeps, aggregation and reporting under one configuration."""

    def __init__(self, config_path: Optional[str] = None,
                 settings: Optional[EngineSettings] = None):
        """
        Initialize options analyzer.

        Args:
            config_path: Optional YAML configuration file
            settings: Explicit settings (take precedence over config_path)
        """
        if settings is None:
            settings = EngineSettings.load(config_path) if config_path else EngineSettings()
        self.settings = settings

        self.engine = BlackScholesEngine(expiry_epsilon=settings.expiry_epsilon)
        self.defaults = SweepDefaults(
            grid_steps=settings.grid_steps,
            curve_price_steps=settings.curve_price_steps,
            portfolio_steps=settings.portfolio_steps
        )
        self.sweep = ParameterSweep(self.engine, self.defaults)
        self.portfolio_aggregator = PortfolioAggregator(self.engine, self.defaults)
        self.report_generator = ReportGenerator(settings.export_path)

        logger.debug(f"Options analyzer ready (expiry_epsilon={settings.expiry_epsilon})")

    def configure_logging(self):
        """Apply the configured log level and file."""
        setup_logging(log_level=self.settings.log_level, log_file=self.settings.log_file)

    def evaluate_greeks(self, kind, spot: float, strike: float, time_to_expiry: float,
                        rate: float, volatility: float) -> Greeks:
        """Price and Greeks of a single option."""
        leg = OptionLeg(kind, spot, strike, time_to_expiry, rate, volatility)
        return self.engine.evaluate(leg)

    def generate_sweep(self, kind, dimension, spot: float, strike: float,
                       time_to_expiry: float, rate: float, volatility: float,
                       sweep_range=None) -> List[SweepSample]:
        """
        Greeks along one swept dimension.

        Args:
            kind: Option kind
            dimension: Dimension to sweep
            spot, strike, time_to_expiry, rate, volatility: Base inputs
            sweep_range: Optional range (dimension default if omitted)

        Returns:
            Samples in sweep order
        """
        base = OptionLeg(kind, spot, strike, time_to_expiry, rate, volatility)
        return list(self.sweep.sweep_1d(base, dimension, sweep_range))

    def generate_curve(self, kind, dimension, greek, spot: float, strike: float,
                       time_to_expiry: float, rate: float, volatility: float,
                       sweep_range=None) -> List[CurvePoint]:
        """One Greek along one swept dimension."""
        base = OptionLeg(kind, spot, strike, time_to_expiry, rate, volatility)
        return list(self.sweep.curve(base, dimension, greek, sweep_range))

    def generate_surface(self, kind, x_dimension, y_dimension, spot: float, strike: float,
                         time_to_expiry: float, rate: float, volatility: float,
                         ranges: Optional[Mapping] = None, x_range=None, y_range=None,
                         greek=Greek.PRICE) -> List[SurfacePoint]:
        """
        Grid of (x, y, z) points for 3D surfaces.

        Args:
            kind: Option kind
            x_dimension: Outer dimension
            y_dimension: Inner dimension (applied after x)
            spot, strike, time_to_expiry, rate, volatility: Base inputs
            ranges: Optional mapping of dimension name -> range
            x_range: Explicit x range (takes precedence over ranges)
            y_range: Explicit y range (takes precedence over ranges)
            greek: Greek reported as z (price by default)

        Returns:
            Grid points in x-major order
        """
        base = OptionLeg(kind, spot, strike, time_to_expiry, rate, volatility)
        x_dimension = SweepDimension.parse(x_dimension)
        y_dimension = SweepDimension.parse(y_dimension)
        if ranges:
            lookup = _ranges_by_dimension(ranges)
            x_range = x_range if x_range is not None else lookup.get(x_dimension)
            y_range = y_range if y_range is not None else lookup.get(y_dimension)
        return list(self.sweep.sweep_2d(base, x_dimension, y_dimension, x_range, y_range, greek))

    def aggregate_portfolio(self, legs: Sequence, dimension,
                            sweep_range=None) -> List[AggregatedPoint]:
        """
        Aggregated portfolio Greeks along one swept dimension.

        Args:
            legs: PortfolioLeg objects or mappings accepted by PortfolioLeg.from_dict()
            dimension: Dimension to sweep
            sweep_range: Optional range (default anchored on the first leg)

        Returns:
            Aggregated points in sweep order
        """
        return list(self.portfolio_aggregator.aggregate(legs, dimension, sweep_range))

    def portfolio_exposure(self, legs: Sequence) -> AggregatedPoint:
        """Net Greeks of the portfolio at its current parameters."""
        return self.portfolio_aggregator.current_exposure(legs)


def _ranges_by_dimension(ranges: Mapping) -> Dict[SweepDimension, SweepRange]:
    return {SweepDimension.parse(name): SweepRange.coerce(value) for name, value in ranges.items()}


def _analyzer(expiry_epsilon: Optional[float] = None) -> OptionsAnalyzer:
    if expiry_epsilon is None:
        return OptionsAnalyzer()
    return OptionsAnalyzer(settings=EngineSettings(expiry_epsilon=expiry_epsilon))


def evaluate_greeks(kind, spot: float, strike: float, time_to_expiry: float,
                    rate: float, volatility: float,
                    expiry_epsilon: Optional[float] = None) -> Greeks:
    """Price and Greeks of a single option with default settings."""
    return _analyzer(expiry_epsilon).evaluate_greeks(kind, spot, strike, time_to_expiry, rate, volatility)


def generate_sweep(kind, dimension, spot: float, strike: float, time_to_expiry: float,
                   rate: float, volatility: float, sweep_range=None) -> List[SweepSample]:
    """Greeks along one swept dimension with default settings."""
    return _analyzer().generate_sweep(kind, dimension, spot, strike, time_to_expiry,
                                      rate, volatility, sweep_range)


def generate_surface(kind, x_dimension, y_dimension, spot: float, strike: float,
                     time_to_expiry: float, rate: float, volatility: float,
                     ranges: Optional[Mapping] = None) -> List[SurfacePoint]:
    """Price surface over two dimensions with default settings."""
    return _analyzer().generate_surface(kind, x_dimension, y_dimension, spot, strike,
                                        time_to_expiry, rate, volatility, ranges=ranges)


def aggregate_portfolio(legs: Sequence[PortfolioLeg], dimension,
                        sweep_range=None) -> List[AggregatedPoint]:
    """Aggregated portfolio Greeks with default settings."""
    return _analyzer().aggregate_portfolio(legs, dimension, sweep_range)
