from fastapi import APIRouter, Request

from botmudra.core.schemas import StrategyCatalog, StrategySummary
from botmudra.utils.projection_engine import weighted_strategy_rate
from botmudra.utils.projection_models import HistoricalReferenceData

router = APIRouter()


def build_catalog(reference: HistoricalReferenceData) -> StrategyCatalog:
    strategies = []
    for name, strategy in reference.strategies.items():
        rate, _ = weighted_strategy_rate(strategy)
        strategies.append(StrategySummary(
            name=name,
            description=strategy.description,
            monthly_return=round(rate, 2),
            pair_count=len(strategy.pairs),
            pairs={pair_name: pair.model_dump() for pair_name, pair in strategy.pairs.items()},
        ))
    return StrategyCatalog(version=reference.version, strategies=strategies)


@router.get("/strategies", response_model=StrategyCatalog)
async def get_strategies(request: Request):
    """
    Reference table with each strategy's weighted monthly return
    """
    return build_catalog(request.app.state.reference_data)
