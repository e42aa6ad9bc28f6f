"""Tabular views and chart ranges for a sampled firm model.

This module turns a Series into a pandas DataFrame for tables and CSV
export, and computes padded y-axis ranges for the two charts while keeping
undefined values (AC and AP at Q = 0) out of the range.
"""

from dataclasses import asdict
from typing import Iterable, Sequence, Tuple

import numpy as np
import pandas as pd

from .engine import Series

TOTALS_FIELDS: Tuple[str, ...] = ("tr", "tc", "tp")
UNIT_FIELDS: Tuple[str, ...] = ("ar", "mr", "ac", "mc", "ap", "mp")

COLUMN_LABELS = {
    "q": "Q",
    "tr": "TR",
    "ar": "AR",
    "mr": "MR",
    "tc": "TC",
    "ac": "AC",
    "mc": "MC",
    "tp": "TP",
    "ap": "AP",
    "mp": "MP",
}

DOMAIN_PADDING = 0.1


def series_to_frame(series: Series) -> pd.DataFrame:
    """Convert a sampled series into a DataFrame with display column names.

    Args:
        series: Samples ordered by increasing Q

    Returns:
        DataFrame with columns Q, TR, AR, MR, TC, AC, MC, TP, AP, MP
    """
    df = pd.DataFrame(
        [asdict(sample) for sample in series], columns=list(COLUMN_LABELS)
    )
    return df.rename(columns=COLUMN_LABELS)


def finite_values(series: Series, fields: Iterable[str]) -> np.ndarray:
    """Collect the finite values of the given fields across a series."""
    fields = list(fields)
    values = np.array(
        [getattr(sample, name) for sample in series for name in fields], dtype=float
    )
    return values[np.isfinite(values)]


def value_domain(series: Series, fields: Sequence[str]) -> Tuple[float, float]:
    """Compute a padded y-axis range covering the given fields.

    The range is widened by 10% of its span on each side, or by 1 when all
    values coincide. A series with no finite values gets (-1, 1).

    Args:
        series: Samples to cover
        fields: Sample attribute names plotted on the chart

    Returns:
        Tuple of (lower, upper) axis bounds
    """
    values = finite_values(series, fields)
    if values.size == 0:
        return -1.0, 1.0

    low = float(values.min())
    high = float(values.max())
    pad = (high - low) * DOMAIN_PADDING or 1.0
    return low - pad, high + pad


def totals_domain(series: Series) -> Tuple[float, float]:
    return value_domain(series, TOTALS_FIELDS)


def unit_domain(series: Series) -> Tuple[float, float]:
    return value_domain(series, UNIT_FIELDS)
