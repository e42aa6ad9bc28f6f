"""Firm model engine.

This module evaluates the revenue, cost and profit curves of a price-taking
firm with a cubic total cost curve, samples them over a bounded output
range, and locates the break-even, profit-maximizing and profit-limit
quantities.

    TR = p·Q                      TC = FC + aQ - bQ² + cQ³
    AR = MR = p                   AC = TC/Q,  MC = a - 2bQ + 3cQ²
    TP = TR - TC                  AP = TP/Q,  MP = MR - MC

Nothing here raises for unusual parameters: AC and AP are NaN at Q = 0,
and non-finite inputs propagate as non-finite outputs.
"""

import math
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

from ..logging import get_logger, log_execution_time
from .parameters import FirmParameters

logger = get_logger(__name__)

Q_MAX = 10.0
DISPLAY_STEP = 0.1
ROOT_SCAN_STEP = 0.01
BISECTION_ITERATIONS = 30
ROOT_DEDUP_TOLERANCE = 1e-3
PROFIT_LIMIT_MIN_GAP = 1.0

Q_DECIMALS = 3
SCAN_DECIMALS = 4
SAMPLE_EPSILON = 1e-9


@dataclass(frozen=True)
class Sample:
    """One evaluated point of the model at output level q."""

    q: float
    tr: float
    ar: float
    mr: float
    tc: float
    ac: float
    mc: float
    tp: float
    ap: float
    mp: float


Series = Sequence[Sample]


@dataclass(frozen=True)
class Markers:
    """Derived quantities shown as reference lines and KPI readouts.

    break_even and profit_limit are None when no such quantity exists.
    roots holds every distinct positive zero of TP found by the scan.
    """

    q_star: float
    max_tp: float
    break_even: Optional[float]
    profit_limit: Optional[float]
    roots: Tuple[float, ...] = field(default=())


@dataclass(frozen=True)
class ModelResult:
    """Series and markers recomputed together for one set of parameters."""

    parameters: FirmParameters
    series: Tuple[Sample, ...]
    markers: Markers
    q_max: float = Q_MAX


def total_cost(q: float, params: FirmParameters) -> float:
    return params.fc + params.a * q - params.b * q * q + params.c * q * q * q


def marginal_cost(q: float, params: FirmParameters) -> float:
    return params.a - 2 * params.b * q + 3 * params.c * q * q


def profit_at(q: float, params: FirmParameters) -> float:
    """Total profit TP(q), evaluated without building a full Sample."""
    return params.p * q - total_cost(q, params)


def evaluate(q: float, params: FirmParameters) -> Sample:
    """Evaluate all nine model curves at output level q.

    Args:
        q: Output level (thousands of units)
        params: Firm parameters

    Returns:
        Sample with revenue, cost and profit totals, averages and marginals
    """
    tr = params.p * q
    ar = params.p
    mr = params.p

    tc = total_cost(q, params)
    ac = math.nan if q == 0 else tc / q
    mc = marginal_cost(q, params)

    tp = tr - tc
    ap = math.nan if q == 0 else tp / q
    mp = mr - mc

    return Sample(q=q, tr=tr, ar=ar, mr=mr, tc=tc, ac=ac, mc=mc, tp=tp, ap=ap, mp=mp)


def _grid_size(q_max: float, step: float) -> int:
    """Number of steps after Q = 0 that fit in [0, q_max]."""
    if step <= 0 or not math.isfinite(step):
        raise ValueError(f"step ({step}) must be a positive finite number")
    if not math.isfinite(q_max):
        raise ValueError(f"q_max ({q_max}) must be a finite number")
    if q_max < 0:
        return -1
    return int(math.floor((q_max + SAMPLE_EPSILON) / step))


def sample_series(
    params: FirmParameters, q_max: float = Q_MAX, step: float = DISPLAY_STEP
) -> List[Sample]:
    """Sample the model at Q = 0, step, 2·step, ... up to q_max.

    Q values are rounded to three decimals for stable rendering; the curve
    values are computed from the unrounded Q.

    Args:
        params: Firm parameters
        q_max: Upper bound of the sampling domain (inclusive)
        step: Distance between consecutive samples

    Returns:
        Samples ordered by increasing Q; empty when q_max is negative

    Raises:
        ValueError: If step is not positive or q_max is not finite
    """
    steps = _grid_size(q_max, step)
    series = []
    for i in range(steps + 1):
        q = i * step
        series.append(replace(evaluate(q, params), q=round(q, Q_DECIMALS)))
    return series


def _bisect_profit_root(
    params: FirmParameters, lo: float, hi: float, lo_tp: float, iterations: int
) -> float:
    """Refine a sign change of TP inside [lo, hi] by interval halving."""
    for _ in range(iterations):
        mid = (lo + hi) / 2
        mid_tp = profit_at(mid, params)
        if lo_tp * mid_tp <= 0:
            hi = mid
        else:
            lo = mid
            lo_tp = mid_tp
    return (lo + hi) / 2


def dedupe_roots(
    roots: List[float], tolerance: float = ROOT_DEDUP_TOLERANCE
) -> List[float]:
    """Sort roots and drop any root within tolerance of its predecessor."""
    ordered = sorted(roots)
    return [
        x
        for idx, x in enumerate(ordered)
        if idx == 0 or abs(x - ordered[idx - 1]) > tolerance
    ]


def find_profit_roots(
    params: FirmParameters,
    q_max: float = Q_MAX,
    scan_step: float = ROOT_SCAN_STEP,
    iterations: int = BISECTION_ITERATIONS,
    tolerance: float = ROOT_DEDUP_TOLERANCE,
) -> List[float]:
    """Locate the zeros of TP(Q) on [0, q_max].

    TP is scanned on a fine grid. Exact zeros at grid points are recorded
    as-is; strict sign changes between neighbours are refined by bisection.
    Pairs containing a non-finite value are skipped.

    Returns:
        Sorted, deduplicated list of roots
    """
    steps = _grid_size(q_max, scan_step)
    roots: List[float] = []

    prev_q = 0.0
    prev_tp = profit_at(prev_q, params)
    for i in range(1, steps + 1):
        curr_q = round(i * scan_step, SCAN_DECIMALS)
        curr_tp = profit_at(curr_q, params)

        if math.isfinite(prev_tp) and math.isfinite(curr_tp):
            if prev_tp == 0:
                roots.append(prev_q)
            elif curr_tp == 0:
                roots.append(curr_q)
            elif prev_tp * curr_tp < 0:
                roots.append(
                    _bisect_profit_root(params, prev_q, curr_q, prev_tp, iterations)
                )

        prev_q = curr_q
        prev_tp = curr_tp

    return dedupe_roots(roots, tolerance)


def find_markers(
    params: FirmParameters,
    series: Series,
    q_max: float = Q_MAX,
    scan_step: float = ROOT_SCAN_STEP,
    iterations: int = BISECTION_ITERATIONS,
    tolerance: float = ROOT_DEDUP_TOLERANCE,
    min_gap: float = PROFIT_LIMIT_MIN_GAP,
) -> Markers:
    """Find maximum profit, break-even and profit-limit quantities.

    Q* is the sample with the strictly greatest TP (first one wins ties).
    Roots of TP within tolerance of Q = 0 are the origin itself, not a
    break-even. The profit limit is the next root, accepted only when it
    lies at least min_gap beyond break-even. When profit starts at zero
    and turns positive (FC = 0, p > a), there is no break-even and the
    first positive root is where profit falls back to zero, so it becomes
    the profit limit (at least min_gap from the origin).

    Args:
        params: Firm parameters the series was sampled from
        series: Sampled model, ordered by increasing Q
        q_max: Upper bound of the root scan
        scan_step: Grid step of the root scan
        iterations: Bisection iterations per sign change
        tolerance: Minimum distance between distinct roots
        min_gap: Minimum distance between break-even and profit limit

    Returns:
        Markers for the given series
    """
    max_tp = -math.inf
    q_star = 0.0
    for sample in series:
        if sample.tp > max_tp:
            max_tp = sample.tp
            q_star = sample.q

    all_roots = find_profit_roots(params, q_max, scan_step, iterations, tolerance)
    roots = [r for r in all_roots if r > tolerance]
    starts_profitable = (
        len(roots) < len(all_roots) and profit_at(scan_step, params) > 0
    )

    break_even = None
    profit_limit = None
    if starts_profitable:
        if roots and roots[0] >= min_gap:
            profit_limit = roots[0]
    elif roots:
        break_even = roots[0]
        if len(roots) > 1 and roots[1] - break_even >= min_gap:
            profit_limit = roots[1]

    return Markers(
        q_star=q_star,
        max_tp=max_tp,
        break_even=break_even,
        profit_limit=profit_limit,
        roots=tuple(roots),
    )


def compute_model(
    params: FirmParameters,
    q_max: float = Q_MAX,
    step: float = DISPLAY_STEP,
    scan_step: float = ROOT_SCAN_STEP,
    iterations: int = BISECTION_ITERATIONS,
    tolerance: float = ROOT_DEDUP_TOLERANCE,
    min_gap: float = PROFIT_LIMIT_MIN_GAP,
) -> ModelResult:
    """Sample the model and derive its markers in one pass."""
    with log_execution_time(logger, f"compute model {params!r}"):
        series = sample_series(params, q_max, step)
        markers = find_markers(
            params, series, q_max, scan_step, iterations, tolerance, min_gap
        )

    logger.debug(
        f"Markers: Q*={markers.q_star}, TP*={markers.max_tp}, "
        f"break_even={markers.break_even}, profit_limit={markers.profit_limit}"
    )
    return ModelResult(
        parameters=params, series=tuple(series), markers=markers, q_max=q_max
    )
