"""Option leg definitions."""
from .option_leg import OptionKind, PositionSide, OptionLeg, PortfolioLeg

__all__ = ['OptionKind', 'PositionSide', 'OptionLeg', 'PortfolioLeg']
