from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from botmudra.core.config import SETTINGS, resolve_path
from botmudra.utils.logging import get_logger, log_event
from botmudra.utils.projection_models import HistoricalReferenceData

logger = get_logger("reference_data")


def load_reference_data(path: str) -> HistoricalReferenceData:
    p = resolve_path(path)
    if not p.exists():
        raise FileNotFoundError(f"Reference data not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Reference data is not valid JSON ({p}): {e}") from e

    if not isinstance(raw, dict) or not isinstance(raw.get("strategies"), dict):
        raise ValueError(f"Reference data must be an object with a 'strategies' mapping: {p}")

    try:
        data = HistoricalReferenceData.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Reference data failed schema validation ({p}): {e}") from e

    log_event(logger, "reference_data_loaded", path=p, version=data.version, strategies=len(data.strategies))
    return data


@lru_cache(maxsize=1)
def _cached(path: str) -> HistoricalReferenceData:
    return load_reference_data(path)


def get_reference_data(path: Optional[str] = None) -> HistoricalReferenceData:
    """Process-wide table, loaded on first use and never reloaded."""
    return _cached(str(Path(path or SETTINGS.reference_data_path)))
