"""
Black-Scholes option pricing and Greeks for European options.
"""
import logging
import math
from typing import Dict

import numpy as np

from ..exceptions import ConfigurationError, InvalidOptionInputError
from ..instruments.option_leg import OptionKind, OptionLeg
from .greeks import Greek, Greeks
from .normal_distribution import cdf, pdf

logger = logging.getLogger(__name__)

# Legs with time_to_expiry at or below this threshold are valued at intrinsic.
DEFAULT_EXPIRY_EPSILON = 1e-4

DAYS_PER_YEAR = 365.0


class BlackScholesEngine:
    """Closed-form Black-Scholes pricing with Greeks."""

    def __init__(self, expiry_epsilon: float = DEFAULT_EXPIRY_EPSILON):
        """
        Initialize Black-Scholes engine.

        Args:
            expiry_epsilon: Time to expiry (years) at or below which an option
                is treated as expired. 0.0 gives the strict T <= 0 rule.
        """
        if not math.isfinite(expiry_epsilon) or expiry_epsilon < 0:
            raise ConfigurationError(f"expiry_epsilon must be a non-negative number, got {expiry_epsilon}")
        self.expiry_epsilon = float(expiry_epsilon)

    def is_expired(self, time_to_expiry: float) -> bool:
        return time_to_expiry <= self.expiry_epsilon

    @staticmethod
    def d1_d2(leg: OptionLeg) -> tuple:
        """
        Compute d1 and d2 for a leg with positive time to expiry.

            d1 = [ln(S/K) + (r + sigma^2/2) * T] / (sigma * sqrt(T))
            d2 = d1 - sigma * sqrt(T)
        """
        return _d1_d2(leg.spot, leg.strike, leg.time_to_expiry, leg.rate, leg.volatility)

    def evaluate(self, leg: OptionLeg) -> Greeks:
        """
        Calculate option price and Greeks.

        Args:
            leg: Validated option leg

        Returns:
            Greeks with daily theta, and vega/rho per 1% move
        """
        if not isinstance(leg, OptionLeg):
            raise InvalidOptionInputError('leg', leg, f"Expected an OptionLeg, got {type(leg).__name__}")

        if self.is_expired(leg.time_to_expiry):
            return self._expired_greeks(leg)

        price, delta, gamma, theta, vega, rho = _closed_form(
            leg.is_call, leg.spot, leg.strike, leg.time_to_expiry, leg.rate, leg.volatility
        )
        return Greeks(
            price=float(price),
            delta=float(delta),
            gamma=float(gamma),
            theta=float(theta),
            vega=float(vega),
            rho=float(rho)
        )

    def evaluate_greek(self, leg: OptionLeg, greek) -> float:
        """Calculate a single quantity (price or one Greek) for a leg."""
        return self.evaluate(leg).get(greek)

    @staticmethod
    def _expired_greeks(leg: OptionLeg) -> Greeks:
        """At expiry the option is worth its payoff and only delta survives."""
        if leg.is_call:
            delta = 1.0 if leg.spot > leg.strike else 0.0
        else:
            delta = -1.0 if leg.spot < leg.strike else 0.0

        return Greeks(
            price=leg.intrinsic_value(),
            delta=delta,
            gamma=0.0,
            theta=0.0,
            vega=0.0,
            rho=0.0
        )

    def evaluate_batch(self, kind, spots, strikes, times_to_expiry,
                       rates, volatilities) -> Dict[str, np.ndarray]:
        """
        Vectorized evaluation over arrays of inputs.

        Inputs are broadcast against each other. The expiry rule and the
        domain checks match evaluate().

        Args:
            kind: OptionKind (or 'call'/'put') shared by every element
            spots: Array of spot prices
            strikes: Array of strike prices
            times_to_expiry: Array of times to expiry (in years)
            rates: Array of risk-free rates
            volatilities: Array of volatilities

        Returns:
            Dictionary of Greek name -> array, shaped like the broadcast inputs
        """
        is_call = OptionKind.parse(kind) is OptionKind.CALL
        spots, strikes, times, rates, vols = np.broadcast_arrays(
            *(np.asarray(values, dtype=float) for values in
              (spots, strikes, times_to_expiry, rates, volatilities))
        )
        _validate_arrays(spots=spots, strikes=strikes, times_to_expiry=times,
                         rates=rates, volatilities=vols)

        expired = times <= self.expiry_epsilon
        # Placeholder time for expired elements; their values are replaced below
        safe_times = np.where(expired, 1.0, times)

        price, delta, gamma, theta, vega, rho = _closed_form(
            is_call, spots, strikes, safe_times, rates, vols
        )

        if is_call:
            intrinsic = np.maximum(0.0, spots - strikes)
            expired_delta = np.where(spots > strikes, 1.0, 0.0)
        else:
            intrinsic = np.maximum(0.0, strikes - spots)
            expired_delta = np.where(spots < strikes, -1.0, 0.0)

        return {
            Greek.PRICE.value: np.where(expired, intrinsic, price),
            Greek.DELTA.value: np.where(expired, expired_delta, delta),
            Greek.GAMMA.value: np.where(expired, 0.0, gamma),
            Greek.THETA.value: np.where(expired, 0.0, theta),
            Greek.VEGA.value: np.where(expired, 0.0, vega),
            Greek.RHO.value: np.where(expired, 0.0, rho),
        }

    def put_call_parity_gap(self, leg: OptionLeg) -> float:
        """
        Deviation from put-call parity: (C - P) - (S - K * exp(-rT)).

        Exactly zero in theory; the normal CDF approximation leaves a
        residual well below 1e-6.
        """
        call = self.evaluate(_with_kind(leg, OptionKind.CALL)).price
        put = self.evaluate(_with_kind(leg, OptionKind.PUT)).price
        theoretical = leg.spot - leg.strike * math.exp(-leg.rate * leg.time_to_expiry)
        return (call - put) - theoretical


def _with_kind(leg: OptionLeg, kind: OptionKind) -> OptionLeg:
    return OptionLeg(kind=kind, spot=leg.spot, strike=leg.strike,
                     time_to_expiry=leg.time_to_expiry, rate=leg.rate,
                     volatility=leg.volatility)


def _d1_d2(S, K, T, r, sigma):
    sqrt_t = np.sqrt(T)
    d1 = (np.log(S / K) + (r + 0.5 * sigma ** 2) * T) / (sigma * sqrt_t)
    d2 = d1 - sigma * sqrt_t
    return d1, d2


def _closed_form(is_call: bool, S, K, T, r, sigma) -> tuple:
    """
    Price and Greeks for T > 0; works on scalars and numpy arrays alike.

    Returns:
        (price, delta, gamma, theta, vega, rho)
    """
    sqrt_t = np.sqrt(T)
    d1, d2 = _d1_d2(S, K, T, r, sigma)
    discount = np.exp(-r * T)
    n_d1 = pdf(d1)

    if is_call:
        n_d2 = cdf(d2)
        price = S * cdf(d1) - K * discount * n_d2
        delta = cdf(d1)
        theta = (-S * sigma * n_d1) / (2 * sqrt_t) - r * K * discount * n_d2
        rho = K * T * discount * n_d2 / 100
    else:
        n_neg_d2 = cdf(-d2)
        price = K * discount * n_neg_d2 - S * cdf(-d1)
        delta = cdf(d1) - 1
        theta = (-S * sigma * n_d1) / (2 * sqrt_t) + r * K * discount * n_neg_d2
        rho = -K * T * discount * n_neg_d2 / 100

    # Gamma and vega are the same for calls and puts
    gamma = n_d1 / (S * sigma * sqrt_t)
    vega = S * sqrt_t * n_d1 / 100

    return price, delta, gamma, theta / DAYS_PER_YEAR, vega, rho


def _validate_arrays(**arrays):
    for name, values in arrays.items():
        if not np.all(np.isfinite(values)):
            bad = values[~np.isfinite(values)].flat[0]
            raise InvalidOptionInputError(name, bad, f"'{name}' must be finite, got {bad}")

    for name in ('spots', 'strikes', 'volatilities'):
        values = arrays[name]
        if np.any(values <= 0):
            bad = values[values <= 0].flat[0]
            raise InvalidOptionInputError(name, bad, f"'{name}' must be positive, got {bad}")

    times = arrays['times_to_expiry']
    if np.any(times < 0):
        bad = times[times < 0].flat[0]
        raise InvalidOptionInputError('times_to_expiry', bad, f"'times_to_expiry' must be non-negative, got {bad}")
