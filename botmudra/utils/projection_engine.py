from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Dict, List, Tuple

from botmudra.utils.projection_models import (
    STRATEGY_SLOTS,
    HistoricalReferenceData,
    MonthPoint,
    PairResult,
    ProjectionInput,
    ProjectionResult,
    ProjectionWarning,
    RiskLevel,
    StrategyReference,
    StrategyResult,
)

HIGH_RISK_THRESHOLD = 70.0
MODERATE_RISK_THRESHOLD = 40.0

_CENTS = Decimal("0.01")
# wide enough for any finite float at two decimals
_WIDE = Context(prec=400)

RISK_DESCRIPTIONS: Dict[str, str] = {
    "High": "Aggressive portfolio with higher volatility",
    "Moderate": "Balanced portfolio with moderate volatility",
    "Low": "Conservative portfolio with lower volatility",
}


def _round(x: float) -> int:
    # Half rounds toward +inf (Math.round), so -2.5 -> -2 and 2.5 -> 3.
    r = math.floor(x)
    return int(r + 1 if x - r >= 0.5 else r)


def _pct2(x: float) -> str:
    # Decimal(float) is exact; ties round away from zero like toFixed(2).
    return str(Decimal(x).quantize(_CENTS, rounding=ROUND_HALF_UP, context=_WIDE))


def _growth(rate_pct: float, months: int) -> float:
    return (1 + rate_pct / 100) ** months


def weighted_strategy_rate(strategy: StrategyReference) -> Tuple[float, bool]:
    """Allocation-ratio weighted monthly return of a strategy.

    Returns (rate, degenerate). A strategy whose ratios sum to zero has no
    defined weighted mean; it is reported as degenerate with a rate of 0.
    """
    total_ratio = 0.0
    weighted = 0.0
    for pair in strategy.pairs.values():
        total_ratio += pair.allocation_ratio
        weighted += pair.avg_monthly_return * pair.allocation_ratio

    if total_ratio == 0:
        return 0.0, True
    return weighted / total_ratio, False


def classify_risk(bs_buy_allocation: float, max_distance_allocation: float) -> Tuple[RiskLevel, str]:
    high_risk = bs_buy_allocation + max_distance_allocation
    if high_risk > HIGH_RISK_THRESHOLD:
        level: RiskLevel = "High"
    elif high_risk > MODERATE_RISK_THRESHOLD:
        level = "Moderate"
    else:
        level = "Low"
    return level, RISK_DESCRIPTIONS[level]


def _compute_strategy(
    name: str,
    allocation: float,
    investment: float,
    duration: int,
    reference: HistoricalReferenceData,
    warnings: List[ProjectionWarning],
) -> StrategyResult:
    empty = StrategyResult(allocation=allocation, investment=investment)
    if allocation == 0:
        return empty

    strategy_ref = reference.strategies.get(name)
    if strategy_ref is None:
        warnings.append(ProjectionWarning(
            code="UNKNOWN_STRATEGY",
            strategy=name,
            message=f"No reference data for strategy '{name}'; it contributes 0 to the projection.",
        ))
        return empty

    pairs: Dict[str, PairResult] = {}
    for pair_name, pair in strategy_ref.pairs.items():
        pair_investment = investment * pair.allocation_ratio
        pairs[pair_name] = PairResult(
            allocation=pair.allocation_ratio,
            investment=pair_investment,
            monthly_return=pair.avg_monthly_return,
            projected_return=pair_investment * _growth(pair.avg_monthly_return, duration),
        )

    rate, degenerate = weighted_strategy_rate(strategy_ref)
    if degenerate:
        warnings.append(ProjectionWarning(
            code="DEGENERATE_AGGREGATION",
            strategy=name,
            message=f"Pair allocation ratios for '{name}' sum to 0; strategy return treated as 0%.",
        ))

    return StrategyResult(
        allocation=allocation,
        investment=investment,
        pairs=pairs,
        return_rate=rate,
        projected_return=investment * _growth(rate, duration),
    )


def compute_projection(inp: ProjectionInput, reference: HistoricalReferenceData) -> ProjectionResult:
    """Compounded monthly projection for a validated input.

    Pure: the same input and reference table always give an identical result.
    """
    warnings: List[ProjectionWarning] = []
    total = float(inp.total_investment)
    duration = int(inp.duration)

    strategies: Dict[str, StrategyResult] = {}
    for name, field_name, _ in STRATEGY_SLOTS:
        allocation = float(getattr(inp, field_name)) / 100
        strategies[name] = _compute_strategy(
            name, allocation, total * allocation, duration, reference, warnings
        )

    portfolio_rate = sum(s.return_rate * s.allocation for s in strategies.values())

    total_return = total * _growth(portfolio_rate, duration)
    total_profit = total_return - total
    percentage_return = (total_return / total - 1) * 100

    risk_level, risk_description = classify_risk(inp.bs_buy_allocation, inp.max_distance_allocation)

    monthly: List[MonthPoint] = []
    for month in range(duration + 1):
        value = total * _growth(portfolio_rate, month)
        monthly.append(MonthPoint(month=month, value=_round(value), profit=_round(value - total)))

    return ProjectionResult(
        total_return=_round(total_return),
        total_profit=_round(total_profit),
        percentage_return=_pct2(percentage_return),
        avg_monthly_return=_pct2(portfolio_rate),
        avg_monthly_profit=_round(total_profit / duration),
        risk_level=risk_level,
        risk_description=risk_description,
        strategies=strategies,
        monthly_projections=monthly,
        warnings=warnings,
    )
