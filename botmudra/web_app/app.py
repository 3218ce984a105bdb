import streamlit as st
import uuid
from botmudra.core.config import SETTINGS
from botmudra.utils.logging import setup_logging
from botmudra.pages import overview, calculator, results

# Setup logging
setup_logging(SETTINGS.log_level)

st.set_page_config(page_title="BOTMUDRA Profit Calculator", layout="wide")

# Session initialization
def _init_session() -> None:
    st.session_state.setdefault("session_id", str(uuid.uuid4()))
    st.session_state.setdefault("_projection_inputs", None)
    st.session_state.setdefault("_projection_result", None)

_init_session()

with st.sidebar:
    st.subheader("Limits")
    st.caption(f"Minimum investment: ${SETTINGS.min_investment:,.0f}")
    st.caption(f"Duration: {SETTINGS.min_duration_months}-{SETTINGS.max_duration_months} months")
    st.divider()
    st.caption(f"Session: {st.session_state['session_id']}")

# Main UI
st.title("BOTMUDRA Profit Calculator")

tab_overview, tab_calc, tab_results = st.tabs(["Overview", "Calculator", "Results"])

with tab_overview:
    overview.render()

with tab_calc:
    calculator.render()

with tab_results:
    results.render()
