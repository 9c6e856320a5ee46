"""Black-Scholes option Greeks, parameter sweeps and portfolio aggregation."""
from .exceptions import (GreeksEngineError, InvalidOptionInputError, UnknownDimensionError,
                         InvalidSweepRangeError, UnknownGreekError, ConfigurationError)
from .instruments import OptionKind, PositionSide, OptionLeg, PortfolioLeg
from .valuation import Greek, Greeks, BlackScholesEngine, AggregatedPoint, PortfolioAggregator
from .scenario import (SweepDimension, SweepRange, SweepDefaults, ParameterSweep,
                       SweepSample, CurvePoint, SurfacePoint)
from .api import (OptionsAnalyzer, evaluate_greeks, generate_sweep, generate_surface,
                  aggregate_portfolio)

__version__ = '1.0.0'

__all__ = [
    'GreeksEngineError',
    'InvalidOptionInputError',
    'UnknownDimensionError',
    'InvalidSweepRangeError',
    'UnknownGreekError',
    'ConfigurationError',
    'OptionKind',
    'PositionSide',
    'OptionLeg',
    'PortfolioLeg',
    'Greek',
    'Greeks',
    'BlackScholesEngine',
    'AggregatedPoint',
    'PortfolioAggregator',
    'SweepDimension',
    'SweepRange',
    'SweepDefaults',
    'ParameterSweep',
    'SweepSample',
    'CurvePoint',
    'SurfacePoint',
    'OptionsAnalyzer',
    'evaluate_greeks',
    'generate_sweep',
    'generate_surface',
    'aggregate_portfolio'
]
