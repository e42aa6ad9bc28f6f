"""Number formatting for KPI readouts, tooltips and axis ticks."""

import math
from typing import Optional

PLACEHOLDER = "—"


def format_value(x: Optional[float], digits: int = 2) -> str:
    """Format a number to fixed decimals, or the placeholder if undefined."""
    if x is None or not math.isfinite(x):
        return PLACEHOLDER
    return f"{x:.{digits}f}"


def format_tick(x: Optional[float]) -> str:
    return format_value(x, 1)
