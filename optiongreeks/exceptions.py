"""
Custom exceptions for the option Greeks engine.
"""


class GreeksEngineError(Exception):
    """Base exception for all engine errors."""
    pass


class InvalidOptionInputError(GreeksEngineError, ValueError):
    """
    Raised when option parameters violate the pricing domain.

    Spot, strike and volatility must be strictly positive, time to expiry
    must be non-negative, and every field must be a finite number.
    """

    def __init__(self, field_name: str, value, message: str = None):
        self.field_name = field_name
        self.value = value
        msg = message or f"Invalid value for '{field_name}': {value!r}"
        super().__init__(msg)


class UnknownDimensionError(GreeksEngineError, ValueError):
    """Raised when a sweep names a dimension the engine does not know."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown sweep dimension: {name!r}")


class InvalidSweepRangeError(GreeksEngineError, ValueError):
    """Raised when a sweep range is degenerate (min > max or step_count < 1)."""
    pass


class ConfigurationError(GreeksEngineError, ValueError):
    """Raised when engine settings are out of bounds."""
    pass


class UnknownGreekError(GreeksEngineError, ValueError):
    """Raised when a Greek is requested by a name the engine does not produce."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown Greek: {name!r}")
