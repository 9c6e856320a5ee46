"""
Tabular output for sweep and portfolio results.
"""
import logging
import json
import os
from typing import Dict, Iterable, Optional, Union

import numpy as np
import pandas as pd

from ..exceptions import InvalidSweepRangeError
from ..scenario.parameter_sweep import CurvePoint, SurfacePoint, SweepSample
from ..valuation.greeks import Greek, Greeks
from ..valuation.portfolio_aggregation import AggregatedPoint

logger = logging.getLogger(__name__)

GREEK_COLUMNS = [greek.value for greek in Greek]
PORTFOLIO_COLUMNS = ['parameter', 'delta', 'gamma', 'theta', 'vega', 'rho', 'value']

GREEK_DESCRIPTIONS = {
    'price': 'Option value',
    'value': 'Portfolio value',
    'delta': 'Value change per $1 move in the underlying',
    'gamma': 'Delta change per $1 move in the underlying',
    'theta': 'Daily time decay',
    'vega': 'Value change per 1% volatility move',
    'rho': 'Value change per 1% rate move',
}


class ReportGenerator:
    """Turn engine results into DataFrames and export them."""

    def __init__(self, export_path: str = 'data/reports/'):
        """
        Initialize report generator.

        Args:
            export_path: Directory for exported files (created on first export)
        """
        self.export_path = export_path

    def generate_sweep_table(self, samples: Iterable[SweepSample]) -> pd.DataFrame:
        """
        Build a table of a 1D sweep.

        Args:
            samples: Sweep samples

        Returns:
            DataFrame with parameter and one column per Greek
        """
        rows = [{'parameter': sample.parameter_value, **sample.greeks.as_dict()} for sample in samples]
        return pd.DataFrame(rows, columns=['parameter'] + GREEK_COLUMNS)

    def generate_curve_table(self, points: Iterable[CurvePoint]) -> pd.DataFrame:
        rows = [{'parameter': point.parameter, 'value': point.value} for point in points]
        return pd.DataFrame(rows, columns=['parameter', 'value'])

    def generate_surface_table(self, points: Iterable[SurfacePoint]) -> pd.DataFrame:
        """Long-form x, y, z table of a 2D sweep."""
        rows = [{'x': point.x, 'y': point.y, 'z': point.z} for point in points]
        return pd.DataFrame(rows, columns=['x', 'y', 'z'])

    def generate_surface_grid(self, points: Iterable[SurfacePoint],
                              y_count: Optional[int] = None) -> pd.DataFrame:
        """
        Arrange a 2D sweep as a matrix.

        Points are placed by position in x-major order (as sweep_2d yields
        them), so an axis with repeated values keeps one row or column per
        sweep step.

        Args:
            points: Surface points in x-major order
            y_count: Points per x value. Inferred from the first x run, or
                from the distinct y values when every x is the same

        Returns:
            DataFrame indexed by y with one column per x value
        """
        table = self.generate_surface_table(points)
        if table.empty:
            return pd.DataFrame(index=pd.Index([], name='y'), columns=pd.Index([], name='x'))

        if y_count is None:
            y_count = _leading_run(table['x'].to_numpy())
            if y_count == len(table):
                y_count = table['y'].nunique()
        if y_count < 1 or len(table) % y_count:
            raise InvalidSweepRangeError(
                f"{len(table)} surface points do not form a grid with {y_count} y values")

        x_count = len(table) // y_count
        z = table['z'].to_numpy().reshape(x_count, y_count).T
        return pd.DataFrame(
            z,
            index=pd.Index(table['y'].to_numpy()[:y_count], name='y'),
            columns=pd.Index(table['x'].to_numpy()[::y_count], name='x')
        )

    def generate_portfolio_table(self, points: Iterable[AggregatedPoint]) -> pd.DataFrame:
        """
        Build a table of an aggregated portfolio profile.

        Args:
            points: Aggregated points in sweep order

        Returns:
            DataFrame with parameter, Greeks and value columns
        """
        rows = []
        for point in points:
            row = point.as_dict()
            row['parameter'] = row.pop('parameter_value')
            rows.append(row)
        return pd.DataFrame(rows, columns=PORTFOLIO_COLUMNS)

    def generate_greeks_summary(self, result: Union[Greeks, AggregatedPoint]) -> pd.DataFrame:
        """
        Generate Greeks summary.

        Args:
            result: Single-leg Greeks or an aggregated portfolio point

        Returns:
            DataFrame with one row per quantity
        """
        values = result.as_dict()
        values.pop('parameter_value', None)

        rows = [{
            'Greek': name.capitalize(),
            'Value': value,
            'Description': GREEK_DESCRIPTIONS[name]
        } for name, value in values.items()]

        return pd.DataFrame(rows, columns=['Greek', 'Value', 'Description'])

    def export_to_csv(self, df: pd.DataFrame, filename: str) -> Optional[str]:
        """
        Export DataFrame to CSV.

        Args:
            df: DataFrame to export
            filename: Output filename

        Returns:
            Path of the written file, or None on failure
        """
        try:
            os.makedirs(self.export_path, exist_ok=True)
            filepath = os.path.join(self.export_path, filename)
            df.to_csv(filepath, index=False)
            logger.info(f"Exported CSV to {filepath}")
            return filepath
        except OSError as e:
            logger.error(f"Error exporting CSV: {e}")
            return None

    def export_to_json(self, data: Dict, filename: str) -> Optional[str]:
        """
        Export data to JSON.

        Args:
            data: Dictionary to export
            filename: Output filename

        Returns:
            Path of the written file, or None on failure
        """
        try:
            os.makedirs(self.export_path, exist_ok=True)
            filepath = os.path.join(self.export_path, filename)
            with open(filepath, 'w') as f:
                json.dump(data, f, indent=2, default=str)
            logger.info(f"Exported JSON to {filepath}")
            return filepath
        except (OSError, TypeError) as e:
            logger.error(f"Error exporting JSON: {e}")
            return None


def _leading_run(values) -> int:
    """Number of leading elements equal to the first one."""
    different = np.flatnonzero(values != values[0])
    return int(different[0]) if different.size else len(values)
