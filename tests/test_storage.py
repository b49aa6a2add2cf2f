import json
import logging
import math
import os

import pytest

from loan_report.app import _sanitize_records
from loan_report.data_model import ExpenseBreakdown, FinancialParameters, RateStage, default_parameters
from loan_report.engine.aggregate import build_report
from loan_report.engine.storage import (
    _sanitize_json_compat,
    load_params,
    merge_with_defaults,
    save_params,
    save_store,
)

KEY = "loan-report-params"


def test_sanitize_json_compat_replaces_special_numbers():
    payload = {
        "float": math.nan,
        "list": [1, float("inf"), -float("inf")],
        "nested": {"value": math.nan},
    }

    clean = _sanitize_json_compat(payload)

    assert clean == {
        "float": None,
        "list": [1, None, None],
        "nested": {"value": None},
    }


def test_round_trip_preserves_every_field(tmp_path):
    path = str(tmp_path / "store.json")
    params = FinancialParameters(
        house_price=2000.0,
        mortgage_loan=0.0,
        salary_growth=1.5,
        expense=ExpenseBreakdown(travel=25.0, baby=0.0),
        baby_year=5,
        years1=25,
        grace_period1=2,
        rates1=[RateStage(1, 3, 1.9), RateStage(4, 25, 2.3)],
    )

    assert save_params(path, KEY, params)
    loaded = load_params(path, KEY)

    assert loaded == params
    assert loaded.to_dict() == params.to_dict()


def test_save_keeps_other_keys(tmp_path):
    path = tmp_path / "store.json"
    save_store(str(path), {"other": {"theme": "dark"}})

    save_params(str(path), KEY, default_parameters())

    with path.open("r", encoding="utf-8") as handle:
        stored = json.load(handle)
    assert stored["other"] == {"theme": "dark"}
    assert stored[KEY]["housePrice"] == default_parameters().house_price


def test_missing_file_loads_defaults(tmp_path):
    assert load_params(str(tmp_path / "absent.json"), KEY) == default_parameters()


def test_corrupt_json_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        params = load_params(str(path), KEY)

    assert params == default_parameters()
    assert "Failed to read" in caplog.text


def test_bad_values_fall_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "store.json"
    path.write_text(json.dumps({KEY: {"housePrice": "lots"}}), encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        params = load_params(str(path), KEY)

    assert params == default_parameters()
    assert "Failed to parse" in caplog.text


@pytest.mark.parametrize("stages", [[5], [None], [{"yearStart": 1, "yearEnd": 30, "rate": 2.0}, "2.5"]])
def test_non_object_rate_stage_falls_back_to_defaults(tmp_path, caplog, stages):
    path = tmp_path / "store.json"
    path.write_text(json.dumps({KEY: {"rates1": stages}}), encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        params = load_params(str(path), KEY)

    assert params == default_parameters()
    assert "Failed to parse" in caplog.text


def test_stored_json_string_entry_is_parsed(tmp_path):
    path = tmp_path / "store.json"
    path.write_text(json.dumps({KEY: json.dumps({"housePrice": 888})}), encoding="utf-8")

    assert load_params(str(path), KEY).house_price == 888.0


def test_merge_fills_new_fields_and_expense_categories():
    merged = merge_with_defaults({"housePrice": 900, "expense": {"car": 1.0}})
    defaults = default_parameters().to_dict()

    assert merged["housePrice"] == 900
    assert merged["years1"] == defaults["years1"]
    assert merged["expense"]["car"] == 1.0
    assert merged["expense"]["basic_food"] == defaults["expense"]["basic_food"]


def test_legacy_interest_rate_keys_swap_onto_current_loans(tmp_path):
    path = tmp_path / "store.json"
    path.write_text(
        json.dumps({KEY: {"interestRate1": 1.6, "interestRate2": 2.8, "years1": 15, "gracePeriod2": 2}}),
        encoding="utf-8",
    )

    params = load_params(str(path), KEY)

    assert params.rates1 == 2.8
    assert params.rates2 == 1.6
    assert params.years2 == 15
    assert params.years1 == default_parameters().years1
    assert params.grace_period1 == 2
    assert params.grace_period2 == 0


def test_legacy_snapshot_keeps_its_monthly_payment(tmp_path):
    path = tmp_path / "store.json"
    legacy = {
        "housePrice": 1500,
        "decoration": 100,
        "mortgageLoan": 300,
        "interestRate1": 1.0,
        "years1": 10,
        "interestRate2": 3.0,
        "years2": 30,
    }
    path.write_text(json.dumps({KEY: legacy}), encoding="utf-8")

    params = load_params(str(path), KEY)
    report = build_report(params)

    # 1300 at 3% over 30 years plus 300 at 1% over 10 years
    assert params.loan_terms(1) == (1300.0, 3.0, 30, 0)
    assert params.loan_terms(2) == (300.0, 1.0, 10, 0)
    assert report.monthly_payment_total == pytest.approx(8.109, abs=1e-3)


def test_current_keys_win_over_legacy_keys():
    merged = merge_with_defaults({"rates1": 2.0, "interestRate1": 9.0, "years1": 25})

    assert merged["rates1"] == 2.0
    assert merged["years1"] == 25
    assert "interestRate1" not in merged


def test_save_failure_is_logged_not_raised(tmp_path, caplog):
    target = tmp_path / "occupied"
    target.mkdir()

    with caplog.at_level(logging.ERROR):
        saved = save_params(str(target), KEY, default_parameters())

    assert saved is False
    assert "Failed to save" in caplog.text


def test_failed_write_leaves_no_temp_file(tmp_path):
    path = tmp_path / "store.json"
    save_store(str(path), {"other": 1})

    with pytest.raises(TypeError):
        save_store(str(path), {"other": object()})

    assert not os.path.exists(f"{path}.tmp")
    assert json.loads(path.read_text(encoding="utf-8")) == {"other": 1}


def test_sanitize_records_used_for_api_payloads():
    rows = [{"value": float("nan"), "other": 5}]

    clean = _sanitize_records(rows)

    assert clean == [{"value": None, "other": 5}]
