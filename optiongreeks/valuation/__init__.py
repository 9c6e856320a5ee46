"""Valuation engine for option pricing and portfolio aggregation."""
from .greeks import Greek, Greeks
from .black_scholes import BlackScholesEngine, DEFAULT_EXPIRY_EPSILON
from .portfolio_aggregation import AggregatedPoint, PortfolioAggregator

__all__ = [
    'Greek',
    'Greeks',
    'BlackScholesEngine',
    'DEFAULT_EXPIRY_EPSILON',
    'AggregatedPoint',
    'PortfolioAggregator'
]
