import json

import pytest
from pydantic import ValidationError

from botmudra.utils.projection_models import STRATEGY_NAMES
from botmudra.utils.reference_data import get_reference_data, load_reference_data
from conftest import REFERENCE_PATH


def test_shipped_table_has_the_four_strategies(reference):
    assert set(STRATEGY_NAMES) <= set(reference.strategies)
    counts = {name: len(reference.strategies[name].pairs) for name in STRATEGY_NAMES}
    assert counts == {"Falcon": 5, "BS Buy Sell": 3, "Max Distance + RSI": 10, "UBS WITH ATR": 4}
    assert reference.strategies["Falcon"].description.startswith("Conservative")


def test_reference_models_are_frozen(reference):
    with pytest.raises(ValidationError):
        reference.version = "hacked"
    pair = reference.strategies["Falcon"].pairs["GBPUSD V1"]
    with pytest.raises(ValidationError):
        pair.avg_monthly_return = 99.0


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_reference_data(str(tmp_path / "nope.json"))


def test_wrong_shape(tmp_path):
    p = tmp_path / "ref.json"
    p.write_text(json.dumps({"Falcon": {}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_reference_data(str(p))


def test_ratio_out_of_range(tmp_path):
    p = tmp_path / "ref.json"
    p.write_text(json.dumps({"strategies": {"Falcon": {"pairs": {
        "GBPUSD": {"avg_monthly_return": 3.0, "allocation_ratio": 1.5},
    }}}}), encoding="utf-8")
    with pytest.raises(ValueError, match="schema validation"):
        load_reference_data(str(p))


def test_process_wide_table_loaded_once():
    a = get_reference_data(REFERENCE_PATH)
    b = get_reference_data(REFERENCE_PATH)
    assert a is b
