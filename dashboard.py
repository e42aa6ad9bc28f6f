"""Streamlit dashboard for the firm model.

This module provides the interactive teaching tool: sliders for FC, a, b,
c and p, KPI readouts for the break-even and profit-maximizing quantities,
and the totals and unit-value charts.

Run with ``streamlit run dashboard.py``.
"""

import streamlit as st

from firmmodel.charts import build_totals_figure, build_unit_figure
from firmmodel.config import get_settings
from firmmodel.formatting import format_value
from firmmodel.logging import configure_logging
from firmmodel.models.analysis import series_to_frame
from firmmodel.models.engine import ModelResult
from firmmodel.models.parameters import PARAMETER_RANGES, FirmParameters
from firmmodel.session import ModelSession
from firmmodel.validation.parameter_validation import check_parameters


def get_session() -> ModelSession:
    """Return the model session stored in the Streamlit session state."""
    if "model_session" not in st.session_state:
        st.session_state["model_session"] = ModelSession()
    return st.session_state["model_session"]


def render_sliders(session: ModelSession) -> None:
    """Render one slider per parameter and push the values into the session."""
    st.sidebar.header("Parameters")

    values = {}
    for name, bounds in PARAMETER_RANGES.items():
        values[name] = st.sidebar.slider(
            bounds.label,
            min_value=bounds.minimum,
            max_value=bounds.maximum,
            value=float(getattr(session.parameters, name)),
            step=bounds.step,
            key=f"slider_{name}",
        )

    session.update(**values)

    if st.sidebar.button("Reset to defaults"):
        session.parameters = FirmParameters.defaults()
        for name in PARAMETER_RANGES:
            st.session_state.pop(f"slider_{name}", None)
        st.rerun()


def render_kpis(result: ModelResult) -> None:
    """Render the four marker readouts."""
    markers = result.markers
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Break-even Q", format_value(markers.break_even, 3))
    with col2:
        st.metric("Max profit Q*", format_value(markers.q_star, 3))
    with col3:
        st.metric("Max profit TP(Q*)", format_value(markers.max_tp, 3))
    with col4:
        st.metric("Profit limit Q", format_value(markers.profit_limit, 3))


def main() -> None:
    """Main Streamlit application."""
    st.set_page_config(page_title="Firm Model", page_icon="📈", layout="wide")
    configure_logging(get_settings())

    st.title("📈 Firm Model — Interactive Tool")
    st.markdown(
        "Move the sliders for **FC, a, b, c, p**; charts and markers update "
        "automatically."
    )
    st.info("Q is in **'000 units** • Money is in **'000 $**")

    session = get_session()
    render_sliders(session)

    for message in check_parameters(session.parameters).warnings:
        st.warning(message)

    result = session.result
    render_kpis(result)

    st.subheader("Totals")
    st.caption(
        "TR = p·Q, TC = FC + aQ − bQ² + cQ³, TP = TR − TC. "
        "Vertical markers: break-even, max profit, profit limit."
    )
    st.plotly_chart(build_totals_figure(result), use_container_width=True)

    st.subheader("Unit values")
    st.caption(
        "AR = MR = p (constant). AC = TC/Q, MC = dTC/dQ, AP = TP/Q, "
        "MP = dTP/dQ = MR − MC."
    )
    st.plotly_chart(build_unit_figure(result), use_container_width=True)

    with st.expander("📋 Data table"):
        df = series_to_frame(result.series)
        st.dataframe(df, use_container_width=True)
        st.download_button(
            label="Download CSV",
            data=df.to_csv(index=False).encode("utf-8"),
            file_name="firm_model.csv",
            mime="text/csv",
        )


if __name__ == "__main__":
    main()
