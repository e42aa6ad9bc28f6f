"""Plotly figures for the firm model.

Two line charts share the same x axis: "Totals" (TR, TC, TP) and
"Unit values" (AR, MR, AC, MC, AP, MP). Both carry dashed vertical lines
at break-even, maximum profit and the profit limit.
"""

import math
from typing import Dict, Optional, Sequence, Tuple

import plotly.graph_objects as go

from .models.analysis import TOTALS_FIELDS, UNIT_FIELDS, totals_domain, unit_domain
from .models.engine import ModelResult

X_AXIS_TITLE = "Production rate Q ('000 units)"

# field -> (colour, dash)
LINE_STYLES: Dict[str, Tuple[str, Optional[str]]] = {
    "tr": ("#1f3b77", None),
    "tc": ("#d55b38", None),
    "tp": ("#1a8f6b", None),
    "ar": ("#1f3b77", None),
    "mr": ("#304c8c", "dash"),
    "ac": ("#d55b38", None),
    "mc": ("#f3a23b", None),
    "ap": ("#1a8f6b", None),
    "mp": ("#0f6a4f", "dash"),
}

BREAK_EVEN_COLOR = "#d55b38"
MAX_PROFIT_COLOR = "#1a8f6b"


def _add_lines(fig: go.Figure, result: ModelResult, fields: Sequence[str]) -> None:
    q_values = [sample.q for sample in result.series]
    for name in fields:
        color, dash = LINE_STYLES[name]
        fig.add_trace(
            go.Scatter(
                x=q_values,
                y=[getattr(sample, name) for sample in result.series],
                mode="lines",
                name=name.upper(),
                line=dict(color=color, dash=dash, width=2.6),
                hovertemplate="Q=%{x:.3f}<br>%{y:.3f}",
            )
        )


def _add_marker_lines(fig: go.Figure, result: ModelResult) -> None:
    markers = result.markers
    lines = [
        (markers.break_even, "Break-even", BREAK_EVEN_COLOR),
        (markers.q_star, "Max Profit", MAX_PROFIT_COLOR),
        (markers.profit_limit, "Profit limit", BREAK_EVEN_COLOR),
    ]
    for x, label, color in lines:
        if x is None:
            continue
        fig.add_vline(
            x=x,
            line_dash="dash",
            line_color=color,
            line_width=2,
            annotation_text=label,
            annotation_position="top",
        )


def _layout(
    fig: go.Figure, result: ModelResult, y_range: Tuple[float, float], y_title: str
) -> None:
    fig.update_layout(
        height=420,
        margin=dict(t=40, r=26, l=6, b=44),
        legend=dict(orientation="h", yanchor="top", y=-0.2),
        hovermode="x unified",
    )
    fig.update_xaxes(
        title_text=X_AXIS_TITLE, range=[0, result.q_max], tickformat=".1f", dtick=0.5
    )
    fig.update_yaxes(title_text=y_title, range=list(y_range), tickformat=".1f")


def build_totals_figure(result: ModelResult) -> go.Figure:
    """Build the TR / TC / TP chart with reference lines and the Q* dot."""
    fig = go.Figure()
    _add_lines(fig, result, TOTALS_FIELDS)
    _add_marker_lines(fig, result)

    markers = result.markers
    if math.isfinite(markers.max_tp):
        fig.add_trace(
            go.Scatter(
                x=[markers.q_star],
                y=[markers.max_tp],
                mode="markers",
                name="Max profit",
                marker=dict(
                    size=10,
                    color=MAX_PROFIT_COLOR,
                    line=dict(color="#0d3a2a", width=1),
                ),
                showlegend=False,
            )
        )

    _layout(fig, result, totals_domain(result.series), "Totals ('000 $)")
    return fig


def build_unit_figure(result: ModelResult) -> go.Figure:
    """Build the per-unit chart (AR, MR, AC, MC, AP, MP) with reference lines."""
    fig = go.Figure()
    _add_lines(fig, result, UNIT_FIELDS)
    _add_marker_lines(fig, result)
    _layout(fig, result, unit_domain(result.series), "Unit values ($)")
    return fig
