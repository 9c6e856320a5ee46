"""Report generation for engine results."""
from .report_generator import ReportGenerator

__all__ = ['ReportGenerator']
