"""Firm model package for teaching the theory of the firm.

This package computes total, average and marginal revenue, cost and profit
curves of a price-taking firm with a cubic cost curve, locates the
break-even and profit-maximizing output levels, and renders the results as
interactive charts.
"""

from .models.engine import (
    Markers,
    ModelResult,
    Sample,
    compute_model,
    evaluate,
    find_markers,
    sample_series,
)
from .models.parameters import PARAMETER_RANGES, FirmParameters
from .session import ModelSession

__all__ = [
    "FirmParameters",
    "PARAMETER_RANGES",
    "Sample",
    "Markers",
    "ModelResult",
    "ModelSession",
    "evaluate",
    "sample_series",
    "find_markers",
    "compute_model",
]
