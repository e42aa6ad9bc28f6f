"""Firm model computations: parameters, engine and tabular analysis."""

from .analysis import series_to_frame, totals_domain, unit_domain, value_domain
from .engine import (
    Markers,
    ModelResult,
    Sample,
    compute_model,
    evaluate,
    find_markers,
    find_profit_roots,
    profit_at,
    sample_series,
)
from .parameters import PARAMETER_RANGES, FirmParameters, ParameterRange

__all__ = [
    "FirmParameters",
    "ParameterRange",
    "PARAMETER_RANGES",
    "Sample",
    "Markers",
    "ModelResult",
    "evaluate",
    "profit_at",
    "sample_series",
    "find_profit_roots",
    "find_markers",
    "compute_model",
    "series_to_frame",
    "value_domain",
    "totals_domain",
    "unit_domain",
]
