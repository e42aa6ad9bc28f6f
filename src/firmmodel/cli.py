"""Command-line interface for the firm model.

This module provides a CLI that computes the break-even, profit-maximizing
and profit-limit quantities for one set of firm parameters, and can print
or export the sampled curves.
"""

import argparse
import sys
from typing import List, Optional

from .config import get_settings
from .formatting import format_value
from .logging import configure_logging, set_log_level
from .models.analysis import series_to_frame
from .models.engine import ModelResult, compute_model
from .models.parameters import FirmParameters
from .validation.parameter_validation import (
    ParameterValidationError,
    check_parameters,
)


def build_parser() -> argparse.ArgumentParser:
    defaults = FirmParameters.defaults()
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Compute the cost, revenue and profit curves of a firm",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  firm-model
  firm-model --fc 5 --a 5 --b 1 --c 0.1 --p 5
  firm-model --p 8 --table --step 0.5
  firm-model --csv curves.csv
        """,
    )

    parser.add_argument("--fc", type=float, default=defaults.fc, help="Fixed cost FC")
    parser.add_argument(
        "--a", type=float, default=defaults.a, help="Linear cost coefficient a"
    )
    parser.add_argument(
        "--b", type=float, default=defaults.b, help="Quadratic cost coefficient b"
    )
    parser.add_argument(
        "--c", type=float, default=defaults.c, help="Cubic cost coefficient c"
    )
    parser.add_argument("--p", type=float, default=defaults.p, help="Price p")

    parser.add_argument(
        "--q-max",
        type=float,
        default=settings.q_max,
        help="Upper bound of the output range Q",
    )
    parser.add_argument(
        "--step",
        type=float,
        default=settings.display_step,
        help="Distance between sampled Q values",
    )
    parser.add_argument("--table", action="store_true", help="Print the sampled curves")
    parser.add_argument("--csv", type=str, help="Write the sampled curves to CSV")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a parameter lies outside its input range",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    return parser


def format_markers(result: ModelResult) -> List[str]:
    """Format the KPI readouts, one line per marker."""
    markers = result.markers
    return [
        f"Break-even Q: {format_value(markers.break_even, 3)}",
        f"Max profit Q*: {format_value(markers.q_star, 3)}",
        f"Max profit TP(Q*): {format_value(markers.max_tp, 3)}",
        f"Profit limit Q: {format_value(markers.profit_limit, 3)}",
    ]


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point for the firm model."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    configure_logging(settings)

    if args.verbose:
        set_log_level("DEBUG")

    try:
        params = FirmParameters(fc=args.fc, a=args.a, b=args.b, c=args.c, p=args.p)

        check = check_parameters(params, strict=args.strict)
        for message in check.warnings:
            print(f"Warning: {message}", file=sys.stderr)

        result = compute_model(
            params,
            q_max=args.q_max,
            step=args.step,
            scan_step=settings.root_scan_step,
            iterations=settings.bisection_iterations,
            tolerance=settings.root_dedup_tolerance,
            min_gap=settings.profit_limit_min_gap,
        )

        for line in format_markers(result):
            print(line)

        if args.table or args.csv:
            df = series_to_frame(result.series)
            if args.table:
                print(df.to_string(index=False, float_format=lambda x: f"{x:.3f}"))
            if args.csv:
                df.to_csv(args.csv, index=False)
                print(f"Wrote {len(df)} rows to {args.csv}")

    except (ValueError, ParameterValidationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
