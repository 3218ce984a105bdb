import pytest

from botmudra.core.config import Settings
from botmudra.utils.projection_models import HistoricalReferenceData
from botmudra.utils.reference_data import load_reference_data

REFERENCE_PATH = "data/reference/historical_data.json"


@pytest.fixture()
def reference() -> HistoricalReferenceData:
    return load_reference_data(REFERENCE_PATH)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        env="test",
        log_level="INFO",
        reference_data_path=REFERENCE_PATH,
        min_investment=100000.0,
        min_duration_months=1,
        max_duration_months=60,
        api_host="127.0.0.1",
        api_port=8000,
    )


def make_reference(strategies: dict, version: str = "test") -> HistoricalReferenceData:
    return HistoricalReferenceData.model_validate({"version": version, "strategies": strategies})


def payload(total=100000, duration=12, falcon=25, bs_buy=25, max_distance=25, ubs=25) -> dict:
    return {
        "totalInvestment": total,
        "duration": duration,
        "falconAllocation": falcon,
        "bsBuyAllocation": bs_buy,
        "maxDistanceAllocation": max_distance,
        "ubsAllocation": ubs,
    }
