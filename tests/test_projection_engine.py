import json
import math

import pytest

from botmudra.utils.projection_engine import _round, classify_risk, compute_projection, weighted_strategy_rate
from botmudra.utils.projection_models import ProjectionInput
from conftest import make_reference, payload


def _input(**kw) -> ProjectionInput:
    return ProjectionInput(**payload(**kw))


def _portfolio_rate(result) -> float:
    return sum(s.return_rate * s.allocation for s in result.strategies.values())


def test_equal_split_matches_documented_rates(reference):
    out = compute_projection(_input(), reference)

    assert out.strategies["Falcon"].return_rate == pytest.approx(3.32)
    assert out.strategies["BS Buy Sell"].return_rate == pytest.approx(1.37, abs=0.01)
    assert out.strategies["Max Distance + RSI"].return_rate == pytest.approx(2.37)
    assert out.strategies["UBS WITH ATR"].return_rate == pytest.approx(6.58, abs=0.01)

    assert out.avg_monthly_return == "3.41"
    rate = _portfolio_rate(out)
    assert out.total_return == math.floor(100000 * (1 + rate / 100) ** 12 + 0.5)
    assert out.total_return == pytest.approx(100000 * 1.0341 ** 12, rel=1e-3)
    assert out.total_profit == out.total_return - 100000
    assert out.warnings == []


def test_allocations_and_investments_add_up(reference):
    out = compute_projection(_input(total=250000, falcon=10, bs_buy=20, max_distance=30, ubs=40), reference)
    assert sum(s.allocation for s in out.strategies.values()) == pytest.approx(1.0)
    assert sum(s.investment for s in out.strategies.values()) == pytest.approx(250000)
    assert list(out.strategies) == ["Falcon", "BS Buy Sell", "Max Distance + RSI", "UBS WITH ATR"]


def test_monthly_trajectory_endpoints(reference):
    out = compute_projection(_input(duration=24), reference)
    assert len(out.monthly_projections) == 25
    first, last = out.monthly_projections[0], out.monthly_projections[-1]
    assert (first.month, first.value, first.profit) == (0, 100000, 0)
    assert last.month == 24
    assert last.value == out.total_return


def test_trajectory_increases_with_positive_rate(reference):
    values = [p.value for p in compute_projection(_input(duration=60), reference).monthly_projections]
    assert all(b > a for a, b in zip(values, values[1:]))


def test_trajectory_decreases_with_negative_rate():
    ref = make_reference({
        name: {"pairs": {"EURUSD": {"avg_monthly_return": -1.5, "allocation_ratio": 1.0}}}
        for name in ["Falcon", "BS Buy Sell", "Max Distance + RSI", "UBS WITH ATR"]
    })
    out = compute_projection(_input(duration=12), ref)
    values = [p.value for p in out.monthly_projections]
    assert all(b < a for a, b in zip(values, values[1:]))
    assert out.total_profit < 0
    assert out.percentage_return.startswith("-")


def test_trajectory_flat_with_zero_rate():
    ref = make_reference({
        name: {"pairs": {"EURUSD": {"avg_monthly_return": 0.0, "allocation_ratio": 1.0}}}
        for name in ["Falcon", "BS Buy Sell", "Max Distance + RSI", "UBS WITH ATR"]
    })
    out = compute_projection(_input(duration=6), ref)
    assert {p.value for p in out.monthly_projections} == {100000}
    assert out.percentage_return == "0.00"
    assert out.avg_monthly_profit == 0


def test_zero_allocation_strategy_is_skipped(reference):
    out = compute_projection(_input(falcon=100, bs_buy=0, max_distance=0, ubs=0), reference)
    bs = out.strategies["BS Buy Sell"]
    assert bs.pairs == {}
    assert bs.return_rate == 0
    assert bs.projected_return == 0
    assert out.avg_monthly_return == "3.32"
    assert out.risk_level == "Low"


def test_pair_projection_compounds_pair_investment(reference):
    out = compute_projection(_input(duration=12), reference)
    pair = out.strategies["UBS WITH ATR"].pairs["EURUSD"]
    assert pair.allocation == 0.25
    assert pair.investment == pytest.approx(25000 * 0.25)
    assert pair.monthly_return == 11.0
    assert pair.projected_return == pytest.approx(6250 * 1.11 ** 12)


def test_unknown_strategy_contributes_zero_with_warning():
    ref = make_reference({"Falcon": {"pairs": {"GBPUSD": {"avg_monthly_return": 2.0, "allocation_ratio": 1.0}}}})
    out = compute_projection(_input(falcon=50, bs_buy=50, max_distance=0, ubs=0), ref)
    assert out.avg_monthly_return == "1.00"
    assert out.strategies["BS Buy Sell"].return_rate == 0
    assert [(w.code, w.strategy) for w in out.warnings] == [("UNKNOWN_STRATEGY", "BS Buy Sell")]


def test_degenerate_ratios_yield_zero_rate_not_nan():
    ref = make_reference({
        "Falcon": {"pairs": {
            "GBPUSD V1": {"avg_monthly_return": 3.0, "allocation_ratio": 0.0},
            "GBPUSD V2": {"avg_monthly_return": 4.0, "allocation_ratio": 0.0},
        }},
    })
    out = compute_projection(_input(falcon=100, bs_buy=0, max_distance=0, ubs=0), ref)
    falcon = out.strategies["Falcon"]
    assert falcon.return_rate == 0.0
    assert math.isfinite(falcon.projected_return)
    assert falcon.projected_return == pytest.approx(100000)
    assert out.total_return == 100000
    assert [w.code for w in out.warnings] == ["DEGENERATE_AGGREGATION"]


def test_weighted_rate_uses_ratios():
    ref = make_reference({"Falcon": {"pairs": {
        "A": {"avg_monthly_return": 1.0, "allocation_ratio": 0.75},
        "B": {"avg_monthly_return": 5.0, "allocation_ratio": 0.25},
    }}})
    rate, degenerate = weighted_strategy_rate(ref.strategies["Falcon"])
    assert rate == pytest.approx(2.0)
    assert degenerate is False


@pytest.mark.parametrize(
    "bs_buy,max_distance,level",
    [(40, 40, "High"), (35, 36, "High"), (35, 35, "Moderate"), (25, 25, "Moderate"), (20, 20, "Low"), (10, 10, "Low")],
)
def test_risk_classification(bs_buy, max_distance, level):
    got, description = classify_risk(bs_buy, max_distance)
    assert got == level
    assert description.endswith("volatility")


def test_risk_in_result(reference):
    out = compute_projection(_input(falcon=10, bs_buy=40, max_distance=40, ubs=10), reference)
    assert out.risk_level == "High"
    assert out.risk_description == "Aggressive portfolio with higher volatility"


def test_rounding_matches_half_up():
    assert _round(2.5) == 3
    assert _round(-2.5) == -2
    assert _round(-2.6) == -3
    assert _round(1234.49) == 1234


def test_idempotent_wire_output(reference):
    a = compute_projection(_input(duration=37), reference).to_wire()
    b = compute_projection(_input(duration=37), reference).to_wire()
    assert json.dumps(a) == json.dumps(b)


def test_wire_shape(reference):
    wire = compute_projection(_input(), reference).to_wire()
    assert set(wire) == {
        "totalReturn", "totalProfit", "percentageReturn", "avgMonthlyReturn", "avgMonthlyProfit",
        "riskLevel", "riskDescription", "strategies", "monthlyProjections",
    }
    falcon = wire["strategies"]["Falcon"]
    assert set(falcon) == {"allocation", "investment", "pairs", "returnRate", "projectedReturn"}
    assert set(falcon["pairs"]["GBPUSD V1"]) == {"allocation", "investment", "monthlyReturn", "projectedReturn"}
    assert wire["monthlyProjections"][0] == {"month": 0, "value": 100000, "profit": 0}
    assert isinstance(wire["percentageReturn"], str)


def test_rounding_edges_match_math_round():
    assert _round(0.49999999999999994) == 0
    assert _round(2.0 ** 52 + 1) == 2 ** 52 + 1
    assert _round(-0.5) == 0


def test_two_decimal_ties_round_away_from_zero():
    ref = make_reference({"Falcon": {"pairs": {"GBPUSD": {"avg_monthly_return": 0.5, "allocation_ratio": 1.0}}}})
    out = compute_projection(_input(falcon=25, bs_buy=75, max_distance=0, ubs=0), ref)
    # 0.25 * 0.5 is exactly 0.125
    assert out.avg_monthly_return == "0.13"


def test_integral_amounts_serialize_without_fraction(reference):
    wire = compute_projection(_input(), reference).to_wire()
    falcon = wire["strategies"]["Falcon"]
    assert json.dumps(falcon["investment"]) == "25000"
    assert json.dumps(falcon["allocation"]) == "0.25"
