import streamlit as st

from botmudra.utils.projection_engine import weighted_strategy_rate
from botmudra.utils.projection_models import STRATEGY_NAMES
from botmudra.utils.reference_data import get_reference_data
from botmudra.web_app.ui_helpers import STRATEGY_COLORS, _color_bar


def _progress_fraction(rate: float) -> float:
    # 10% monthly fills the bar; negative rates show empty
    return max(0.0, min(rate * 10, 100)) / 100


def render():
    st.subheader("Optimize your forex trading strategy with our profit projection tool")
    st.caption("Pick an allocation across the four strategies on the Calculator tab to see a compounded projection.")

    ref = get_reference_data()
    cols = st.columns(len(STRATEGY_NAMES), gap="medium")

    for col, name in zip(cols, STRATEGY_NAMES):
        strategy = ref.strategies.get(name)
        color = STRATEGY_COLORS.get(name, "#4285f4")
        with col:
            _color_bar(color)
            st.markdown(f"#### {name}")
            if strategy is None:
                st.warning("No reference data for this strategy.")
                continue

            rate, _ = weighted_strategy_rate(strategy)
            st.write(strategy.description)
            st.metric("Avg. monthly return", f"{rate:.2f}%")
            st.caption(f"{len(strategy.pairs)} currency pairs")
            st.progress(_progress_fraction(rate))

    st.caption(f"Reference data version: {ref.version}")
