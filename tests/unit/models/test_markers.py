"""Tests for the break-even, maximum-profit and profit-limit markers.

This module tests the root scan of TP(Q) with bisection refinement, the
deduplication of roots, and the policy that turns roots into markers.
"""

import math

import pytest

from firmmodel.models.engine import (
    Markers,
    dedupe_roots,
    find_markers,
    find_profit_roots,
    profit_at,
    sample_series,
)
from firmmodel.models.parameters import FirmParameters


@pytest.fixture
def reference_params() -> FirmParameters:
    return FirmParameters.defaults()


@pytest.fixture
def reference_markers(reference_params: FirmParameters) -> Markers:
    return find_markers(reference_params, sample_series(reference_params))


class TestMaximumProfit:
    """Test cases for Q* and TP(Q*)."""

    def test_reference_maximum(
        self, reference_params: FirmParameters, reference_markers: Markers
    ) -> None:
        """Test Q*=6.7 for the reference parameters (true optimum 20/3)."""
        assert reference_markers.q_star == 6.7
        # TP(6.7) = 33.5 - (5 + 33.5 - 44.89 + 30.0763) = 9.8137
        assert reference_markers.max_tp == pytest.approx(9.8137, abs=1e-9)

    def test_maximum_beats_neighbours(
        self, reference_params: FirmParameters, reference_markers: Markers
    ) -> None:
        """Test TP(Q*) exceeds TP at Q* +/- 0.5."""
        q_star = reference_markers.q_star

        assert math.isfinite(q_star)
        assert profit_at(q_star, reference_params) > profit_at(
            q_star - 0.5, reference_params
        )
        assert profit_at(q_star, reference_params) > profit_at(
            q_star + 0.5, reference_params
        )

    def test_first_occurrence_wins_ties(self) -> None:
        """Test that a flat profit curve keeps the first sample."""
        params = FirmParameters(fc=0.0, a=5.0, b=0.0, c=0.0, p=5.0)
        markers = find_markers(params, sample_series(params))

        assert markers.q_star == 0.0
        assert markers.max_tp == 0.0

    def test_decreasing_profit_maximum_at_origin(self) -> None:
        """Test that profit falling from Q=0 puts Q* at the origin."""
        params = FirmParameters(fc=5.0, a=8.0, b=0.0, c=0.0, p=5.0)
        markers = find_markers(params, sample_series(params))

        assert markers.q_star == 0.0
        assert markers.max_tp == -5.0

    def test_empty_series(self) -> None:
        """Test markers of an empty series."""
        params = FirmParameters.defaults()
        markers = find_markers(params, [])

        assert markers.q_star == 0.0
        assert markers.max_tp == -math.inf


class TestBreakEven:
    """Test cases for break-even and profit-limit detection."""

    def test_reference_break_even(
        self, reference_params: FirmParameters, reference_markers: Markers
    ) -> None:
        """Test break-even near Q=2.599 with TP close to zero."""
        break_even = reference_markers.break_even

        assert break_even is not None
        assert 2.59 < break_even < 2.6
        assert abs(profit_at(break_even, reference_params)) < 0.01

    def test_reference_profit_limit(
        self, reference_params: FirmParameters, reference_markers: Markers
    ) -> None:
        """Test the profit limit between Q=9.4 and Q=9.5."""
        profit_limit = reference_markers.profit_limit

        assert profit_limit is not None
        assert 9.4 < profit_limit < 9.5
        assert abs(profit_at(profit_limit, reference_params)) < 0.01
        assert profit_limit - reference_markers.break_even >= 1.0

    def test_markers_ordered_around_maximum(
        self, reference_markers: Markers
    ) -> None:
        """Test break-even < Q* < profit limit."""
        assert (
            reference_markers.break_even
            < reference_markers.q_star
            < reference_markers.profit_limit
        )

    def test_no_profitable_region(self) -> None:
        """Test linear cost above price: no break-even, no profit limit."""
        params = FirmParameters(fc=5.0, a=6.0, b=0.0, c=0.0, p=5.0)
        markers = find_markers(params, sample_series(params))

        assert markers.break_even is None
        assert markers.profit_limit is None
        assert markers.roots == ()

    def test_no_profitable_region_without_fixed_cost(self) -> None:
        """Test that TP(0)=0 alone is not reported as break-even."""
        params = FirmParameters(fc=0.0, a=6.0, b=0.0, c=0.0, p=5.0)
        markers = find_markers(params, sample_series(params))

        assert markers.break_even is None
        assert markers.profit_limit is None

    def test_zero_fixed_cost_origin_not_a_root(self) -> None:
        """Test FC=0 does not report Q=0 as break-even."""
        params = FirmParameters(fc=0.0, a=5.0, b=1.0, c=0.1, p=5.0)
        markers = find_markers(params, sample_series(params))

        assert 0.0 not in markers.roots
        # TP = Q^2 (1 - 0.1 Q) is positive from the origin and returns to
        # zero at Q = 10, where profit falls back to zero
        assert markers.break_even is None
        assert markers.profit_limit == pytest.approx(10.0)

    def test_zero_fixed_cost_profitable_from_origin(self) -> None:
        """Test FC=0, p>a makes the first positive root the profit limit."""
        # TP = 2Q - 0.1Q^3 = Q (2 - 0.1 Q^2), zero again at Q = sqrt(20)
        params = FirmParameters(fc=0.0, a=3.0, b=0.0, c=0.1, p=5.0)
        markers = find_markers(params, sample_series(params))

        assert markers.break_even is None
        assert markers.profit_limit == pytest.approx(math.sqrt(20.0), abs=1e-6)
        assert markers.q_star == 2.6
        assert markers.q_star < markers.profit_limit
        assert profit_at(markers.profit_limit - 0.1, params) > 0
        assert profit_at(markers.profit_limit + 0.1, params) < 0

    def test_zero_fixed_cost_profit_limit_requires_gap(self) -> None:
        """Test the min_gap for a profit limit is measured from the origin."""
        params = FirmParameters(fc=0.0, a=3.0, b=0.0, c=0.1, p=5.0)
        markers = find_markers(params, sample_series(params), min_gap=5.0)

        assert markers.break_even is None
        assert markers.profit_limit is None

    def test_zero_fixed_cost_loss_from_origin(self) -> None:
        """Test FC=0, p<a keeps the first positive root as break-even."""
        # TP = -Q (1 - Q + 0.1Q^2): negative after the origin, positive
        # between Q = 5 - sqrt(15) and Q = 5 + sqrt(15)
        params = FirmParameters(fc=0.0, a=6.0, b=1.0, c=0.1, p=5.0)
        markers = find_markers(params, sample_series(params))

        assert markers.break_even == pytest.approx(5.0 - math.sqrt(15.0), abs=1e-6)
        assert markers.profit_limit == pytest.approx(5.0 + math.sqrt(15.0), abs=1e-6)

    def test_profit_limit_requires_gap(self, reference_params: FirmParameters) -> None:
        """Test that a second root closer than min_gap is not a profit limit."""
        series = sample_series(reference_params)
        markers = find_markers(reference_params, series, min_gap=7.0)

        assert markers.break_even is not None
        assert markers.profit_limit is None
        assert len(markers.roots) == 2

    def test_break_even_has_no_gap_check(self) -> None:
        """Test that a single positive root becomes break-even."""
        # TP = 5Q - (5 + 4Q) crosses zero at Q = 5
        params = FirmParameters(fc=5.0, a=4.0, b=0.0, c=0.0, p=5.0)
        markers = find_markers(params, sample_series(params))

        assert markers.break_even == pytest.approx(5.0, abs=1e-6)
        assert markers.profit_limit is None

    def test_non_finite_parameters(self) -> None:
        """Test that NaN parameters give no roots and no exception."""
        params = FirmParameters(fc=5.0, a=5.0, b=1.0, c=0.1, p=math.nan)
        markers = find_markers(params, sample_series(params))

        assert markers.break_even is None
        assert markers.profit_limit is None
        assert markers.max_tp == -math.inf

    def test_deterministic(self, reference_params: FirmParameters) -> None:
        """Test that rerunning on an unchanged series gives identical markers."""
        series = sample_series(reference_params)

        first = find_markers(reference_params, series)
        second = find_markers(reference_params, series)

        assert first == second
        assert first.break_even == second.break_even
        assert first.profit_limit == second.profit_limit


class TestProfitRoots:
    """Test cases for the root scan."""

    def test_reference_roots(self, reference_params: FirmParameters) -> None:
        """Test that the scan finds both sign changes of the reference curve."""
        roots = find_profit_roots(reference_params)

        assert len(roots) == 2
        for root in roots:
            assert abs(profit_at(root, reference_params)) < 1e-6

    def test_bisection_precision(self) -> None:
        """Test that bisection converges well within the scan step."""
        # TP = 5Q - (1 + 2Q) = 3Q - 1, root at 1/3
        params = FirmParameters(fc=1.0, a=2.0, b=0.0, c=0.0, p=5.0)
        roots = find_profit_roots(params)

        assert roots == [pytest.approx(1 / 3, abs=1e-9)]

    def test_exact_grid_root(self) -> None:
        """Test that an exact zero on the scan grid is recorded once."""
        # TP = 5Q - (2 + 4Q) = Q - 2, zero at the grid point Q = 2
        params = FirmParameters(fc=2.0, a=4.0, b=0.0, c=0.0, p=5.0)
        roots = find_profit_roots(params)

        assert roots == [2.0]

    def test_origin_root_kept_by_scan(self) -> None:
        """Test that the raw scan records TP(0)=0 as a root."""
        params = FirmParameters(fc=0.0, a=6.0, b=0.0, c=0.0, p=5.0)

        assert find_profit_roots(params) == [0.0]

    def test_negative_domain(self, reference_params: FirmParameters) -> None:
        """Test that a negative domain has no roots."""
        assert find_profit_roots(reference_params, q_max=-1.0) == []


class TestDedupeRoots:
    """Test cases for root deduplication."""

    def test_sorts_and_drops_close_roots(self) -> None:
        """Test that roots within 1e-3 of their predecessor are dropped."""
        assert dedupe_roots([0.5, 0.1, 0.1005, 0.3]) == [0.1, 0.3, 0.5]

    def test_keeps_separated_roots(self) -> None:
        """Test that roots further apart than the tolerance are kept."""
        assert dedupe_roots([1.0, 1.002]) == [1.0, 1.002]

    def test_empty(self) -> None:
        """Test that no roots stay no roots."""
        assert dedupe_roots([]) == []
