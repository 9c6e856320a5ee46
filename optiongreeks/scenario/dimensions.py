"""
Sweep dimensions and ranges.
"""
import dataclasses
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping

import numpy as np

from ..exceptions import InvalidSweepRangeError, UnknownDimensionError
from ..instruments.option_leg import OptionLeg


class SweepDimension(Enum):
    """Option input that a sweep varies."""
    PRICE = 'price'
    STRIKE = 'strike'
    TIME = 'time'
    VOLATILITY = 'volatility'
    INTEREST = 'interest'
    MONEYNESS = 'moneyness'

    @classmethod
    def parse(cls, value) -> 'SweepDimension':
        """
        Parse a dimension from an enum member, its value or a known alias.

        Raises:
            UnknownDimensionError: for any other input
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            for dimension in cls:
                if dimension.value == text:
                    return dimension
            if text in _ALIASES:
                return _ALIASES[text]
        raise UnknownDimensionError(value)

    @property
    def field_name(self) -> str:
        """OptionLeg field written by this dimension."""
        return _FIELD_NAMES[self]

    def field_overrides(self, value, strike) -> Dict[str, object]:
        """
        Field values to write for a sweep value.

        Moneyness does not exist as a leg field: it sets the spot to
        strike * ratio and leaves the strike alone. Works for scalars and
        numpy arrays.
        """
        if self is SweepDimension.MONEYNESS:
            return {'spot': strike * value}
        return {self.field_name: value}

    def apply(self, leg: OptionLeg, value: float) -> OptionLeg:
        """Return a copy of the leg with this dimension set to value."""
        return dataclasses.replace(leg, **self.field_overrides(value, leg.strike))

    def current_value(self, leg: OptionLeg) -> float:
        """Value of this dimension on an existing leg."""
        if self is SweepDimension.MONEYNESS:
            return leg.moneyness
        return getattr(leg, self.field_name)


_FIELD_NAMES = {
    SweepDimension.PRICE: 'spot',
    SweepDimension.STRIKE: 'strike',
    SweepDimension.TIME: 'time_to_expiry',
    SweepDimension.VOLATILITY: 'volatility',
    SweepDimension.INTEREST: 'rate',
    SweepDimension.MONEYNESS: 'spot',
}

_ALIASES = {
    'spot': SweepDimension.PRICE,
    'interest-rate': SweepDimension.INTEREST,
    'interest_rate': SweepDimension.INTEREST,
    'rate': SweepDimension.INTEREST,
    'vol': SweepDimension.VOLATILITY,
    'sigma': SweepDimension.VOLATILITY,
}


@dataclass(frozen=True)
class SweepRange:
    """
    Evenly spaced sweep values from minimum to maximum, both inclusive.

    A range with step_count n yields n + 1 values.
    """
    minimum: float
    maximum: float
    step_count: int

    def __post_init__(self):
        for name in ('minimum', 'maximum'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float, np.number)) \
                    or not math.isfinite(value):
                raise InvalidSweepRangeError(f"Range {name} must be a finite number, got {value!r}")
            object.__setattr__(self, name, float(value))

        if self.minimum > self.maximum:
            raise InvalidSweepRangeError(
                f"Range minimum {self.minimum} is greater than maximum {self.maximum}")

        steps = self.step_count
        if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)):
            raise InvalidSweepRangeError(f"step_count must be an integer, got {steps!r}")
        if steps < 1:
            raise InvalidSweepRangeError(f"step_count must be at least 1, got {steps}")
        object.__setattr__(self, 'step_count', int(steps))

    @property
    def step(self) -> float:
        return (self.maximum - self.minimum) / self.step_count

    @property
    def point_count(self) -> int:
        return self.step_count + 1

    def values(self) -> np.ndarray:
        """All sweep values; the endpoints are exact."""
        return np.linspace(self.minimum, self.maximum, self.point_count)

    @classmethod
    def from_step(cls, minimum: float, maximum: float, step: float) -> 'SweepRange':
        """
        Range that starts at minimum and advances by step while <= maximum.

        The last value is minimum + n * step, which can fall short of
        maximum when step does not divide the interval.
        """
        if not step > 0:
            raise InvalidSweepRangeError(f"step must be positive, got {step}")
        count = int(math.floor((maximum - minimum) / step + 1e-9))
        return cls(minimum, minimum + count * step, count)

    @classmethod
    def around(cls, center: float, fraction: float, step_count: int) -> 'SweepRange':
        """Range of center * (1 - fraction) .. center * (1 + fraction)."""
        return cls(center * (1 - fraction), center * (1 + fraction), step_count)

    @classmethod
    def coerce(cls, value) -> 'SweepRange':
        """
        Accept a SweepRange, a (min, max, steps) tuple or a mapping with
        'min'/'max'/'steps' keys (extra keys such as 'current' are ignored).
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            try:
                return cls(value['min'], value['max'], value.get('steps', value.get('step_count')))
            except KeyError as e:
                raise InvalidSweepRangeError(f"Range mapping is missing {e}") from None
        if isinstance(value, (tuple, list)) and len(value) == 3:
            return cls(*value)
        raise InvalidSweepRangeError(f"Cannot interpret {value!r} as a sweep range")
