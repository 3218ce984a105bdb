from __future__ import annotations

from typing import Dict

import streamlit as st

STRATEGY_COLORS: Dict[str, str] = {
    "Falcon": "#E82561",
    "BS Buy Sell": "#C6E7FF",
    "Max Distance + RSI": "#9B7EBD",
    "UBS WITH ATR": "#1679AB",
}

RISK_BADGE_KIND: Dict[str, str] = {"Low": "ok", "Moderate": "warn", "High": "bad"}


def _badge(text: str, kind: str = "info") -> None:
    """Small colored badge using HTML."""
    color = {
        "ok": "#0f9d58",
        "warn": "#f4b400",
        "bad": "#db4437",
        "info": "#4285f4",
    }.get(kind, "#4285f4")
    st.markdown(
        f"""
        <span style="display:inline-block;padding:2px 10px;border-radius:999px;font-size:12px;background:{color};color:white;">
          {text}
        </span>
        """,
        unsafe_allow_html=True,
    )


def _color_bar(color: str, height_px: int = 6) -> None:
    st.markdown(
        f'<div style="height:{height_px}px;border-radius:3px;background:{color};margin-bottom:8px;"></div>',
        unsafe_allow_html=True,
    )


def _fmt_money(v: float) -> str:
    f = float(v)
    return f"${f:,.0f}" if f.is_integer() else f"${f:,.2f}"
