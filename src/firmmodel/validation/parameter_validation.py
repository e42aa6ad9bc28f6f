"""Range checks for firm model parameters.

The engine accepts any parameters, including negative cost coefficients,
so these checks only report values that fall outside the input ranges or
make the cost curve behave unexpectedly. Callers decide what to do with
the warnings.
"""

import math
from dataclasses import dataclass, fields
from typing import Dict, List

from ..logging import get_logger
from ..models.engine import marginal_cost
from ..models.parameters import PARAMETER_RANGES, FirmParameters

logger = get_logger(__name__)


@dataclass
class ParameterCheckResult:
    """Result of a parameter check with warnings and summary metrics."""

    is_valid: bool
    warnings: List[str]
    metrics: Dict[str, float]


class ParameterValidationError(Exception):
    """Exception raised when a strict parameter check fails."""

    pass


def minimum_marginal_cost(params: FirmParameters) -> float:
    """Lowest value of MC(Q) = a - 2bQ + 3cQ² over Q >= 0.

    For c > 0 the parabola bottoms out at Q = b / (3c); otherwise MC is
    linear and its minimum over Q >= 0 is at Q = 0 (or unbounded below).
    """
    if params.c > 0:
        q_min = max(0.0, params.b / (3 * params.c))
        return marginal_cost(q_min, params)
    if params.b > 0 or params.c < 0:
        return -math.inf
    return params.a


def check_parameters(
    params: FirmParameters, strict: bool = False
) -> ParameterCheckResult:
    """Check parameters against their input ranges.

    Args:
        params: Firm parameters to check
        strict: Raise instead of returning warnings

    Returns:
        ParameterCheckResult with warnings and metrics

    Raises:
        ParameterValidationError: If strict and any warning was produced
    """
    warnings_list: List[str] = []

    for f in fields(params):
        value = getattr(params, f.name)
        bounds = PARAMETER_RANGES[f.name]
        if not math.isfinite(value):
            warnings_list.append(f"{bounds.label} is not finite: {value}")
        elif not bounds.contains(value):
            warnings_list.append(
                f"{bounds.label} = {value} outside "
                f"[{bounds.minimum}, {bounds.maximum}]"
            )

    if params.b < 0:
        warnings_list.append(f"Negative b = {params.b}: MC rises from Q = 0")
    if params.c < 0:
        warnings_list.append(f"Negative c = {params.c}: total cost turns down")

    metrics: Dict[str, float] = {
        f.name: float(getattr(params, f.name)) for f in fields(params)
    }
    metrics["mc_min"] = minimum_marginal_cost(params)

    if strict and warnings_list:
        raise ParameterValidationError("; ".join(warnings_list))

    return ParameterCheckResult(
        is_valid=not warnings_list, warnings=warnings_list, metrics=metrics
    )


def log_parameter_warnings(params: FirmParameters) -> ParameterCheckResult:
    """Run the parameter check and log each warning."""
    result = check_parameters(params)
    for message in result.warnings:
        logger.warning(message)
    return result
