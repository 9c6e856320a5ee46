"""
Greeks result values.
"""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict

from ..exceptions import UnknownGreekError


class Greek(Enum):
    """Output quantities of one engine evaluation."""
    PRICE = 'price'
    DELTA = 'delta'
    GAMMA = 'gamma'
    THETA = 'theta'
    VEGA = 'vega'
    RHO = 'rho'

    @classmethod
    def parse(cls, value) -> 'Greek':
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            for greek in cls:
                if greek.value == text:
                    return greek
        raise UnknownGreekError(value)


@dataclass(frozen=True)
class Greeks:
    """
    Price and sensitivities of a single option.

    Attributes:
        price: Option premium
        delta: dV/dS
        gamma: d2V/dS2
        theta: Time decay per calendar day (annual theta / 365)
        vega: Value change per 1% volatility move
        rho: Value change per 1% rate move
    """
    price: float
    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float

    def get(self, greek) -> float:
        """Return one quantity by Greek member or name."""
        return getattr(self, Greek.parse(greek).value)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)
