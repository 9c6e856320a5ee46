"""
Option leg classes describing the contracts fed to the pricing engine.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict

from ..exceptions import InvalidOptionInputError

logger = logging.getLogger(__name__)


class OptionKind(Enum):
    """European option kind."""
    CALL = 'call'
    PUT = 'put'

    @classmethod
    def parse(cls, value) -> 'OptionKind':
        """
        Parse an option kind from an enum member or a string.

        Accepts 'call'/'put' in any case, plus the single-letter 'C'/'P'.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            if text in ('c', 'call'):
                return cls.CALL
            if text in ('p', 'put'):
                return cls.PUT
        raise InvalidOptionInputError('kind', value, f"Unknown option kind: {value!r}")


class PositionSide(Enum):
    """Direction of a portfolio position."""
    LONG = 'long'
    SHORT = 'short'

    @property
    def sign(self) -> int:
        """+1 for long positions, -1 for short positions."""
        return 1 if self is PositionSide.LONG else -1

    @classmethod
    def parse(cls, value) -> 'PositionSide':
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            for side in cls:
                if side.value == text:
                    return side
        raise InvalidOptionInputError('position', value, f"Unknown position side: {value!r}")


def _require_finite(field_name: str, value) -> float:
    if isinstance(value, bool):
        raise InvalidOptionInputError(field_name, value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidOptionInputError(field_name, value) from None
    if not math.isfinite(number):
        raise InvalidOptionInputError(field_name, value, f"'{field_name}' must be finite, got {value!r}")
    return number


@dataclass(frozen=True)
class OptionLeg:
    """
    A single European option evaluated by the Black-Scholes engine.

    Attributes:
        kind: OptionKind.CALL or OptionKind.PUT
        spot: Current underlying price (> 0)
        strike: Strike price (> 0)
        time_to_expiry: Time to expiration in years (>= 0)
        rate: Annual risk-free rate, continuously compounded
        volatility: Annual volatility as a decimal, e.g. 0.20 (> 0)

    Legs are immutable; derive variations with dataclasses.replace(), which
    re-runs validation.
    """
    kind: OptionKind
    spot: float
    strike: float
    time_to_expiry: float
    rate: float
    volatility: float

    def __post_init__(self):
        """Normalize and validate the pricing inputs."""
        object.__setattr__(self, 'kind', OptionKind.parse(self.kind))
        for name in ('spot', 'strike', 'time_to_expiry', 'rate', 'volatility'):
            object.__setattr__(self, name, _require_finite(name, getattr(self, name)))

        if self.spot <= 0:
            raise InvalidOptionInputError('spot', self.spot, f"Spot price must be positive, got {self.spot}")
        if self.strike <= 0:
            raise InvalidOptionInputError('strike', self.strike, f"Strike price must be positive, got {self.strike}")
        if self.volatility <= 0:
            raise InvalidOptionInputError('volatility', self.volatility,
                                          f"Volatility must be positive, got {self.volatility}")
        if self.time_to_expiry < 0:
            raise InvalidOptionInputError('time_to_expiry', self.time_to_expiry,
                                          f"Time to expiration must be non-negative, got {self.time_to_expiry}")

    @property
    def is_call(self) -> bool:
        return self.kind is OptionKind.CALL

    @property
    def moneyness(self) -> float:
        """Spot/strike ratio."""
        return self.spot / self.strike

    def is_itm(self) -> bool:
        """Check if the option is in-the-money."""
        if self.is_call:
            return self.spot > self.strike
        return self.spot < self.strike

    def intrinsic_value(self) -> float:
        """Payoff if exercised now."""
        if self.is_call:
            return max(0.0, self.spot - self.strike)
        return max(0.0, self.strike - self.spot)


@dataclass(frozen=True)
class PortfolioLeg(OptionLeg):
    """
    An option leg held in a portfolio with a direction and a size.

    Quantity is always positive; the direction lives in `position`. A
    missing, unparsable or non-positive quantity falls back to 1; a
    fractional one is rejected.
    """
    position: PositionSide = PositionSide.LONG
    quantity: int = 1

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, 'position', PositionSide.parse(self.position))
        object.__setattr__(self, 'quantity', self._parse_quantity(self.quantity))

    @staticmethod
    def _parse_quantity(quantity) -> int:
        try:
            number = float(quantity)
        except (TypeError, ValueError, OverflowError):
            number = 0.0
        if not math.isfinite(number) or number <= 0:
            logger.warning(f"Invalid quantity {quantity!r}, using 1")
            return 1
        if not number.is_integer():
            raise InvalidOptionInputError('quantity', quantity,
                                          f"Quantity must be a whole number of contracts, got {quantity!r}")
        return int(number)

    @property
    def signed_quantity(self) -> int:
        """Positive for long, negative for short."""
        return self.position.sign * self.quantity

    @classmethod
    def from_dict(cls, params: Dict) -> 'PortfolioLeg':
        """
        Build a portfolio leg from a loose mapping.

        Accepts either the field names of this class or the short keys
        used by chart front ends ('type', 'S', 'K', 'T', 'r', 'sigma').

        Args:
            params: Mapping describing the leg

        Returns:
            PortfolioLeg
        """
        def pick(*keys, default=None):
            for key in keys:
                if key in params and params[key] is not None:
                    return params[key]
            return default

        missing = object()
        values = {
            'kind': pick('kind', 'type', 'option_type', default=missing),
            'spot': pick('spot', 'S', default=missing),
            'strike': pick('strike', 'K', default=missing),
            'time_to_expiry': pick('time_to_expiry', 'T', default=missing),
            'rate': pick('rate', 'r', default=missing),
            'volatility': pick('volatility', 'sigma', default=missing),
        }
        for name, value in values.items():
            if value is missing:
                raise InvalidOptionInputError(name, None, f"Missing required leg field '{name}'")

        return cls(
            position=pick('position', 'side', default=PositionSide.LONG),
            quantity=pick('quantity', 'qty', default=1),
            **values
        )
