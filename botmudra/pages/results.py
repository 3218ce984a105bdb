import streamlit as st
import pandas as pd
import plotly.express as px
from typing import Optional

from botmudra.utils.projection_models import STRATEGY_NAMES, ProjectionInput, ProjectionResult
from botmudra.utils.reference_data import get_reference_data
from botmudra.utils.report_export import build_csv_report, report_filename
from botmudra.web_app.ui_helpers import RISK_BADGE_KIND, STRATEGY_COLORS, _badge, _fmt_money


def _allocation_frame(inputs: ProjectionInput) -> pd.DataFrame:
    rows = []
    for name in STRATEGY_NAMES:
        pct = inputs.allocation_for(name)
        rows.append({
            "strategy": name,
            "percentage": pct,
            "investment": inputs.total_investment * pct / 100,
        })
    return pd.DataFrame(rows)


def _strategy_frame(result: ProjectionResult) -> pd.DataFrame:
    """One row per strategy, straight from the engine's strategy results."""
    rows = []
    for name, s in result.strategies.items():
        rows.append({
            "strategy": name,
            "monthly_return": round(s.return_rate, 2),
            "projected_profit": round(s.projected_return - s.investment) if s.pairs else 0,
            "pair_count": len(s.pairs),
        })
    return pd.DataFrame(rows)


def _pair_frame(result: ProjectionResult, strategy: str) -> pd.DataFrame:
    s = result.strategies.get(strategy)
    if s is None or not s.pairs:
        return pd.DataFrame(columns=["pair", "monthly_return", "investment", "projected_return"])
    return pd.DataFrame([
        {
            "pair": pair_name,
            "monthly_return": p.monthly_return,
            "investment": round(p.investment, 2),
            "projected_return": round(p.projected_return, 2),
        }
        for pair_name, p in s.pairs.items()
    ])


def _projection_frame(result: ProjectionResult) -> pd.DataFrame:
    return pd.DataFrame([p.model_dump() for p in result.monthly_projections])


def render():
    result: Optional[ProjectionResult] = st.session_state.get("_projection_result")
    payload = st.session_state.get("_projection_inputs")
    if result is None or not payload:
        st.info("No projection yet. Fill in the Calculator tab first.")
        return

    inputs = ProjectionInput(**payload)
    st.subheader("Investment projection results")
    st.caption(f"Based on your {_fmt_money(inputs.total_investment)} investment over {inputs.duration} months")

    c1, c2, c3 = st.columns(3, gap="large")
    with c1:
        st.metric("Total return", _fmt_money(result.total_return))
        st.caption(f"{_fmt_money(result.total_profit)} profit ({result.percentage_return}%)")
    with c2:
        st.metric("Average monthly return", f"{result.avg_monthly_return}%")
        st.caption(f"{_fmt_money(result.avg_monthly_profit)} profit per month")
    with c3:
        st.metric("Risk assessment", result.risk_level)
        _badge(result.risk_description, RISK_BADGE_KIND.get(result.risk_level, "info"))

    tab_alloc, tab_strat, tab_proj = st.tabs(["Allocation", "Strategies", "Projections"])

    with tab_alloc:
        df_alloc = _allocation_frame(inputs)
        fig_pie = px.pie(
            df_alloc,
            values="percentage",
            names="strategy",
            color="strategy",
            color_discrete_map=STRATEGY_COLORS,
            title="Strategy allocation (%)",
        )
        st.plotly_chart(fig_pie, use_container_width=True)
        df_show = df_alloc.assign(investment=df_alloc["investment"].map(_fmt_money))
        st.dataframe(df_show, use_container_width=True, hide_index=True)

    with tab_strat:
        df_strat = _strategy_frame(result)
        fig_bar = px.bar(
            df_strat,
            x="strategy",
            y="monthly_return",
            color="strategy",
            color_discrete_map=STRATEGY_COLORS,
            hover_data=["projected_profit", "pair_count"],
            title="Monthly return by strategy (%)",
        )
        st.plotly_chart(fig_bar, use_container_width=True)

        for name in df_strat["strategy"]:
            df_pairs = _pair_frame(result, name)
            if df_pairs.empty:
                continue
            with st.expander(f"{name} · {len(df_pairs)} pairs"):
                st.dataframe(df_pairs, use_container_width=True, hide_index=True)

    with tab_proj:
        df_proj = _projection_frame(result)
        fig_line = px.line(df_proj, x="month", y="value", markers=True, title="Projected investment value")
        fig_line.add_hline(
            y=inputs.total_investment,
            line_dash="dash",
            annotation_text="Initial investment",
        )
        st.plotly_chart(fig_line, use_container_width=True)
        st.dataframe(df_proj, use_container_width=True, hide_index=True)

        csv_text = build_csv_report(result, inputs, get_reference_data())
        st.download_button(
            "Export report",
            data=csv_text,
            file_name=report_filename(),
            mime="text/csv",
        )
