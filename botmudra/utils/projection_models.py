from __future__ import annotations

from typing import Any, Dict, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field

# (strategy name, ProjectionInput field, wire field); order is the display order everywhere.
STRATEGY_SLOTS: Tuple[Tuple[str, str, str], ...] = (
    ("Falcon", "falcon_allocation", "falconAllocation"),
    ("BS Buy Sell", "bs_buy_allocation", "bsBuyAllocation"),
    ("Max Distance + RSI", "max_distance_allocation", "maxDistanceAllocation"),
    ("UBS WITH ATR", "ubs_allocation", "ubsAllocation"),
)

STRATEGY_NAMES: Tuple[str, ...] = tuple(name for name, _, _ in STRATEGY_SLOTS)

RiskLevel = Literal["Low", "Moderate", "High"]
WarningCode = Literal["UNKNOWN_STRATEGY", "DEGENERATE_AGGREGATION"]


# -------------------------
# Reference data (static)
# -------------------------

class PairReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    avg_monthly_return: float = Field(..., description="Percent per month, e.g. 3.32 == 3.32%/month")
    allocation_ratio: float = Field(..., ge=0, le=1, description="Pair's share of its strategy's capital")


class StrategyReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str = ""
    pairs: Dict[str, PairReference] = Field(default_factory=dict)


class HistoricalReferenceData(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str = "unversioned"
    strategies: Dict[str, StrategyReference] = Field(default_factory=dict)


# -------------------------
# Projection input / output
# -------------------------

class ProjectionInput(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_investment: float = Field(..., alias="totalInvestment")
    duration: int = Field(..., description="Months")
    falcon_allocation: float = Field(..., alias="falconAllocation")
    bs_buy_allocation: float = Field(..., alias="bsBuyAllocation")
    max_distance_allocation: float = Field(..., alias="maxDistanceAllocation")
    ubs_allocation: float = Field(..., alias="ubsAllocation")

    def allocation_for(self, strategy: str) -> float:
        for name, field_name, _ in STRATEGY_SLOTS:
            if name == strategy:
                return float(getattr(self, field_name))
        raise KeyError(strategy)


class PairResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    allocation: float
    investment: float
    monthly_return: float = Field(..., alias="monthlyReturn")
    projected_return: float = Field(..., alias="projectedReturn")


class StrategyResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    allocation: float
    investment: float
    pairs: Dict[str, PairResult] = Field(default_factory=dict)
    return_rate: float = Field(0.0, alias="returnRate")
    projected_return: float = Field(0.0, alias="projectedReturn")


class MonthPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: int
    value: int
    profit: int


class ProjectionWarning(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: WarningCode
    strategy: str
    message: str


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_return: int = Field(..., alias="totalReturn")
    total_profit: int = Field(..., alias="totalProfit")
    percentage_return: str = Field(..., alias="percentageReturn")
    avg_monthly_return: str = Field(..., alias="avgMonthlyReturn")
    avg_monthly_profit: int = Field(..., alias="avgMonthlyProfit")
    risk_level: RiskLevel = Field(..., alias="riskLevel")
    risk_description: str = Field(..., alias="riskDescription")
    strategies: Dict[str, StrategyResult]
    monthly_projections: List[MonthPoint] = Field(..., alias="monthlyProjections")

    # Kept off the wire; surfaced via logs / X-Projection-Warnings.
    warnings: List[ProjectionWarning] = Field(default_factory=list, exclude=True)

    def to_wire(self) -> Dict:
        return _integral_floats_as_ints(self.model_dump(by_alias=True))


def _integral_floats_as_ints(value: Any) -> Any:
    # JSON numbers like 25000 rather than 25000.0
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {k: _integral_floats_as_ints(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_integral_floats_as_ints(v) for v in value]
    return value
