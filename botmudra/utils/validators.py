from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional

from botmudra.core.config import SETTINGS, Settings
from botmudra.core.schemas import ValidationReport
from botmudra.utils.projection_engine import weighted_strategy_rate
from botmudra.utils.projection_models import STRATEGY_NAMES, STRATEGY_SLOTS, ProjectionInput
from botmudra.utils.reference_data import load_reference_data

RATIO_SUM_TOLERANCE = 1e-6

ALLOCATION_SUM_MESSAGE = "Strategy allocations must sum to 100%"
ALLOCATION_RANGE_MESSAGE = "Each strategy allocation must be between 0 and 100%"


class InvalidProjectionInput(ValueError):
    """Caller-supplied parameters were rejected; `message` is safe to show to users."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def investment_message(settings: Settings) -> str:
    return f"Total investment must be at least ${settings.min_investment:,.0f}"


def duration_message(settings: Settings) -> str:
    return (
        f"Duration must be between {settings.min_duration_months} "
        f"and {settings.max_duration_months} months"
    )


def _as_number(v: Any) -> Optional[float]:
    if v is None or isinstance(v, bool):
        return None
    try:
        f = float(v)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(f):
        return None
    return f


def validate_projection_payload(payload: Mapping[str, Any], settings: Optional[Settings] = None) -> ProjectionInput:
    """Check a wire payload and build a ProjectionInput.

    Checks run in a fixed order and stop at the first failure:
    investment, duration, allocation sum, allocation range.
    """
    settings = settings or SETTINGS
    payload = payload or {}

    total = _as_number(payload.get("totalInvestment"))
    if not total or total < settings.min_investment:
        raise InvalidProjectionInput(investment_message(settings))

    duration = _as_number(payload.get("duration"))
    if (
        not duration
        or not duration.is_integer()
        or duration < settings.min_duration_months
        or duration > settings.max_duration_months
    ):
        raise InvalidProjectionInput(duration_message(settings))

    allocations: Dict[str, float] = {}
    for _, field_name, wire_name in STRATEGY_SLOTS:
        value = _as_number(payload.get(wire_name))
        if value is None:
            raise InvalidProjectionInput(ALLOCATION_SUM_MESSAGE)
        allocations[field_name] = value

    if sum(allocations.values()) != 100:
        raise InvalidProjectionInput(ALLOCATION_SUM_MESSAGE)

    if any(v < 0 or v > 100 for v in allocations.values()):
        raise InvalidProjectionInput(ALLOCATION_RANGE_MESSAGE)

    return ProjectionInput(total_investment=total, duration=int(duration), **allocations)


def validate_reference_data(path: Optional[str] = None) -> ValidationReport:
    source = path or SETTINGS.reference_data_path
    report = ValidationReport(source=source)

    try:
        data = load_reference_data(source)
    except Exception as e:
        report.add_error(str(e))
        return report.finalize()

    report.add_info(f"Reference data version {data.version} with {len(data.strategies)} strategies.")

    for name in STRATEGY_NAMES:
        strategy = data.strategies.get(name)
        if strategy is None:
            report.add_warning(
                f"Strategy '{name}' is missing; allocations to it will contribute 0.", strategy=name
            )
            continue

        if not strategy.pairs:
            report.add_warning(f"Strategy '{name}' lists no currency pairs.", strategy=name)

        rate, degenerate = weighted_strategy_rate(strategy)
        if degenerate:
            report.add_warning(
                f"Allocation ratios for '{name}' sum to 0; its return will be treated as 0%.", strategy=name
            )
            continue

        ratio_sum = sum(p.allocation_ratio for p in strategy.pairs.values())
        if abs(ratio_sum - 1.0) > RATIO_SUM_TOLERANCE:
            report.add_warning(
                f"Allocation ratios for '{name}' sum to {ratio_sum:.6f}, expected 1.0.", strategy=name
            )

        report.add_info(
            f"{name}: {len(strategy.pairs)} pairs, weighted monthly return {rate:.2f}%", strategy=name
        )

    for name in data.strategies:
        if name not in STRATEGY_NAMES:
            report.add_info(f"Strategy '{name}' is not one of the calculator's strategies; ignored.", strategy=name)

    return report.finalize()
