"""Parameter sweeps and their default ranges."""
from .dimensions import SweepDimension, SweepRange
from .sweep_defaults import SweepDefaults
from .parameter_sweep import ParameterSweep, SweepSample, CurvePoint, SurfacePoint

__all__ = [
    'SweepDimension',
    'SweepRange',
    'SweepDefaults',
    'ParameterSweep',
    'SweepSample',
    'CurvePoint',
    'SurfacePoint'
]
