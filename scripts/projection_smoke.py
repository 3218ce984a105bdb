from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from botmudra.tools.projection_tools import tool_compute_projection


def main():
    payload = {
        "total_investment": 100000,
        "duration": 12,
        "falcon_allocation": 25,
        "bs_buy_allocation": 25,
        "max_distance_allocation": 25,
        "ubs_allocation": 25,
    }
    out = tool_compute_projection(payload)
    print("Final balance:", out["totalReturn"])
    print("Total profit:", out["totalProfit"], f"({out['percentageReturn']}%)")
    print("Avg monthly return:", out["avgMonthlyReturn"], "%")
    print("Risk:", out["riskLevel"], "-", out["riskDescription"])
    for name, s in out["strategies"].items():
        print(f"Strategy: {name} rate={s['returnRate']:.2f}% projected={s['projectedReturn']:.0f}")
    for p in out["monthlyProjections"][:3]:
        print("Month:", p["month"], p["value"], p["profit"])

if __name__ == "__main__":
    main()
