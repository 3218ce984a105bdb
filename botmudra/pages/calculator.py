from __future__ import annotations

import logging
import uuid
from typing import Any, Dict

import streamlit as st

from botmudra.core.config import SETTINGS
from botmudra.tools.projection_tools import tool_compute_projection_model
from botmudra.utils.logging import get_logger, log_event, set_log_context
from botmudra.utils.projection_models import STRATEGY_SLOTS
from botmudra.utils.validators import InvalidProjectionInput
from botmudra.web_app.ui_helpers import _badge

logger = get_logger("ui.calculator")


def render():
    st.subheader("Investment parameters")

    col_l, col_r = st.columns([0.45, 0.55], gap="large")

    with col_l:
        total_investment = st.number_input(
            "Total investment ($)",
            min_value=float(SETTINGS.min_investment),
            value=float(max(SETTINGS.min_investment, 100000)),
            step=10000.0,
            help=f"Minimum ${SETTINGS.min_investment:,.0f}",
        )
        duration = st.number_input(
            "Duration (months)",
            min_value=SETTINGS.min_duration_months,
            max_value=SETTINGS.max_duration_months,
            value=min(12, SETTINGS.max_duration_months),
            step=1,
        )

    with col_r:
        st.markdown("**Strategy allocation (%)**")
        allocations: Dict[str, int] = {}
        for name, _, wire_name in STRATEGY_SLOTS:
            allocations[wire_name] = st.slider(name, min_value=0, max_value=100, value=25, step=1, key=f"alloc_{wire_name}")

        total_alloc = sum(allocations.values())
        _badge(f"Total allocation: {total_alloc}%", "ok" if total_alloc == 100 else "bad")
        st.caption(" · ".join(f"{name} {allocations[w]}%" for name, _, w in STRATEGY_SLOTS))

    if st.button("Calculate projection", type="primary"):
        payload: Dict[str, Any] = {"totalInvestment": total_investment, "duration": int(duration), **allocations}
        set_log_context(
            request_id=str(uuid.uuid4()),
            session_id=st.session_state.get("session_id"),
            surface="ui",
        )
        try:
            result = tool_compute_projection_model(payload)
        except InvalidProjectionInput as e:
            st.error(e.message)
            return
        except Exception:
            logger.exception("Error calculating investment projections")
            st.error("Failed to calculate investment projections")
            return

        for w in result.warnings:
            log_event(logger, "projection_warning", logging.WARNING, code=w.code, strategy=w.strategy)
            st.warning(w.message)

        st.session_state["_projection_inputs"] = payload
        st.session_state["_projection_result"] = result
        st.success("Projection ready. Open the Results tab.")
