import json

from loan_report.data_model import FinancialParameters, default_parameters
from loan_report.engine.state import CalculatorState


def _state(tmp_path):
    return CalculatorState(storage_path=str(tmp_path / "store.json"), storage_key="params")


def test_update_recomputes_persists_and_notifies(tmp_path):
    state = _state(tmp_path)
    seen = []
    state.subscribe(seen.append)

    report = state.update({"housePrice": 2000, "expense": {"car": 12}})

    assert state.params.house_price == 2000.0
    assert state.params.expense.car == 12.0
    assert state.params.expense.basic_food == default_parameters().expense.basic_food
    assert seen == [report]
    assert report.params is state.params

    reloaded = _state(tmp_path)
    assert reloaded.params == state.params


def test_replace_and_reset(tmp_path):
    state = _state(tmp_path)
    state.replace(FinancialParameters(annual_salary=500.0))
    assert state.report.params.annual_salary == 500.0

    state.reset()

    assert state.params == default_parameters()
    assert _state(tmp_path).params == default_parameters()


def test_unsubscribed_observer_is_not_called(tmp_path):
    state = _state(tmp_path)
    seen = []
    state.subscribe(seen.append)
    state.unsubscribe(seen.append)

    state.update({"rentIncome": 10})

    assert seen == []


def test_startup_with_malformed_rate_stages_uses_defaults(tmp_path):
    path = tmp_path / "store.json"
    path.write_text(json.dumps({"params": {"rates2": [None]}}), encoding="utf-8")

    state = _state(tmp_path)

    assert state.params == default_parameters()
    assert state.report.errors == {}
