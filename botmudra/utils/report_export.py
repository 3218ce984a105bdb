from __future__ import annotations

import csv
import io
from datetime import datetime, timezone
from typing import List, Optional

from botmudra.utils.projection_models import (
    STRATEGY_NAMES,
    HistoricalReferenceData,
    ProjectionInput,
    ProjectionResult,
)


def _num(v: float) -> str:
    f = float(v)
    return f"{f:,.0f}" if f.is_integer() else f"{f:,.2f}"


def _money(v: float) -> str:
    return f"${_num(v)}"


def build_csv_report(
    result: ProjectionResult,
    inputs: ProjectionInput,
    reference: HistoricalReferenceData,
) -> str:
    """Flat CSV with SUMMARY, STRATEGY ALLOCATION and MONTHLY PROJECTIONS sections."""
    rows: List[List[str]] = []

    rows.append(["Investment Report"])
    rows.append([])

    rows.append(["SUMMARY"])
    rows.append(["Total Investment", _money(inputs.total_investment)])
    rows.append(["Investment Duration", f"{inputs.duration} months"])
    rows.append(["Final Balance", _money(result.total_return)])
    rows.append(["Total Profit", _money(result.total_profit)])
    rows.append(["Percentage Return", f"{result.percentage_return}%"])
    rows.append(["Average Monthly Return", f"{result.avg_monthly_return}%"])
    rows.append(["Average Monthly Profit", _money(result.avg_monthly_profit)])
    rows.append(["Risk Level", result.risk_level])
    rows.append(["Risk Description", result.risk_description])
    rows.append([])

    rows.append(["STRATEGY ALLOCATION"])
    rows.append(["Strategy", "Allocation %", "Investment Amount", "Number of Pairs"])
    for name in STRATEGY_NAMES:
        pct = inputs.allocation_for(name)
        strategy_ref = reference.strategies.get(name)
        pair_count = len(strategy_ref.pairs) if strategy_ref else 0
        rows.append([
            name,
            f"{_num(pct)}%",
            _money(inputs.total_investment * pct / 100),
            str(pair_count),
        ])
    rows.append([])

    rows.append(["MONTHLY PROJECTIONS"])
    rows.append(["Month", "Investment Value", "Profit"])
    for point in result.monthly_projections:
        rows.append([str(point.month), _money(point.value), _money(point.profit)])

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerows(rows)
    return buf.getvalue()


def report_filename(now: Optional[datetime] = None) -> str:
    ts = (now or datetime.now(timezone.utc)).isoformat(timespec="milliseconds")
    ts = ts.replace("+00:00", "Z").replace(":", "-").replace(".", "-")
    return f"investment-report-{ts}.csv"
