from __future__ import annotations

from typing import Any, Dict, Optional

from botmudra.core.config import Settings
from botmudra.utils.projection_engine import compute_projection
from botmudra.utils.projection_models import HistoricalReferenceData, ProjectionResult
from botmudra.utils.reference_data import get_reference_data
from botmudra.utils.validators import validate_projection_payload

# snake_case / short aliases -> canonical wire fields
_ALIASES = {
    "total_investment": "totalInvestment",
    "investment": "totalInvestment",
    "months": "duration",
    "duration_months": "duration",
    "falcon_allocation": "falconAllocation",
    "falcon": "falconAllocation",
    "bs_buy_allocation": "bsBuyAllocation",
    "bs_buy": "bsBuyAllocation",
    "max_distance_allocation": "maxDistanceAllocation",
    "max_distance": "maxDistanceAllocation",
    "ubs_allocation": "ubsAllocation",
    "ubs": "ubsAllocation",
}


def normalize_payload(payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    p = dict(payload or {})
    for alias, canonical in _ALIASES.items():
        if canonical not in p and alias in p:
            p[canonical] = p.pop(alias)
    return p


def tool_compute_projection_model(
    payload: Dict[str, Any],
    *,
    reference: Optional[HistoricalReferenceData] = None,
    settings: Optional[Settings] = None,
) -> ProjectionResult:
    inp = validate_projection_payload(normalize_payload(payload), settings)
    return compute_projection(inp, reference or get_reference_data())


def tool_compute_projection(
    payload: Dict[str, Any],
    *,
    reference: Optional[HistoricalReferenceData] = None,
    settings: Optional[Settings] = None,
) -> Dict[str, Any]:
    out = tool_compute_projection_model(payload, reference=reference, settings=settings)
    return out.to_wire()
