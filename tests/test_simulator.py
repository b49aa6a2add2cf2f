import pytest

from loan_report.data_model import ExpenseBreakdown, FinancialParameters, LoanSchedule
from loan_report.engine.aggregate import build_report
from loan_report.engine.schedule import compute_schedule
from loan_report.engine.simulator import simulate

NO_EXPENSES = dict(basic_food=0, basic_house=0, parents=0, shopping=0, travel=0, insurance=0, car=0, baby=0)


def _params(**overrides) -> FinancialParameters:
    values = dict(
        house_price=1000.0,
        decoration=0.0,
        mortgage_loan=0.0,
        annual_salary=100.0,
        salary_growth=0.0,
        rent_income=0.0,
        expense=ExpenseBreakdown(**NO_EXPENSES),
        baby_year=3,
        years1=20,
        years2=20,
        grace_period1=0,
        grace_period2=0,
        rates1=2.0,
        rates2=2.0,
    )
    values.update(overrides)
    return FinancialParameters(**values)


def test_salary_compounds_only_in_years_two_to_five():
    params = _params(salary_growth=10.0, baby_year=10)

    result = simulate(params, LoanSchedule(), LoanSchedule())
    incomes = [row.income_total for row in result.rows]

    assert incomes[:5] == pytest.approx([100.0, 110.0, 121.0, 133.1, 146.41])
    assert incomes[5:9] == pytest.approx([146.41] * 4)
    assert incomes[9] == pytest.approx(146.41 * 0.95)


def test_living_expenses_inflate_from_year_two():
    expense = ExpenseBreakdown(**{**NO_EXPENSES, "basic_food": 60, "car": 40})
    result = simulate(_params(expense=expense), LoanSchedule(), LoanSchedule())

    living = [row.living_annual for row in result.rows]
    assert living[0] == pytest.approx(100.0)
    assert living[1] == pytest.approx(103.0)
    assert living[2] == pytest.approx(106.09)


def test_event_year_reduces_salary_and_adds_one_time_cost():
    expense = ExpenseBreakdown(**{**NO_EXPENSES, "basic_food": 10, "baby": 50})
    params = _params(expense=expense, baby_year=4, rent_income=12.0)

    rows = simulate(params, LoanSchedule(), LoanSchedule()).rows

    assert rows[3].note_kind == "event"
    assert rows[3].income_total == pytest.approx(95.0 + 12.0)
    assert rows[3].living_annual == pytest.approx(10 * 1.03 ** 3 + 50)
    assert rows[4].living_annual == pytest.approx(10 * 1.03 ** 4)
    assert [row.note_kind for row in rows] == ["growth"] * 3 + ["event", "growth"] + ["flat"] * 5


def test_unset_event_year_defaults_to_three():
    rows = simulate(_params(baby_year=0), LoanSchedule(), LoanSchedule()).rows

    assert rows[2].note_kind == "event"
    assert rows[2].income_total == pytest.approx(95.0)


def test_cumulative_assets_accumulate_balances():
    result = build_report(FinancialParameters()).simulation

    assert result.rows[0].cumulative_assets == pytest.approx(result.rows[0].balance)
    for prev, row in zip(result.rows, result.rows[1:]):
        assert row.cumulative_assets == pytest.approx(prev.cumulative_assets + row.balance)
    assert result.total_assets_year10 == result.rows[-1].cumulative_assets
    assert len(result.rows) == 10


def test_paid_off_loan_contributes_no_mortgage():
    schedule = compute_schedule(100, 2.0, 5, 0)
    rows = simulate(_params(), schedule, LoanSchedule()).rows

    assert rows[4].mortgage_annual == pytest.approx(schedule.entry_for(5).monthly_payment * 12)
    assert all(row.mortgage_annual == 0.0 for row in rows[5:])


def test_grace_flag_and_peak_payment():
    schedule1 = compute_schedule(800, 2.0, 20, 0)
    schedule2 = compute_schedule(400, 2.0, 20, 2)

    result = simulate(_params(), schedule1, schedule2)

    assert [row.is_grace_period for row in result.rows[:3]] == [True, True, False]
    expected_peak = schedule1.payment_for(3) + schedule2.payment_for(3)
    assert result.max_monthly_payment == pytest.approx(expected_peak)
    assert result.max_monthly_payment > schedule1.current_payment + schedule2.current_payment


def test_end_to_end_single_flat_loan():
    params = _params(annual_salary=1200.0)

    report = build_report(params)

    assert report.errors == {}
    assert report.schedule2.entries == []
    assert report.monthly_payment_total == pytest.approx(5.0585, abs=1e-3)
    assert report.burden_ratio == 5.1
    assert report.band.key == "best"
    assert report.band.status == "safe"


def test_end_to_end_low_salary_is_heavy():
    report = build_report(_params(annual_salary=120.0))

    assert report.burden_ratio == pytest.approx(50.6)
    assert report.band.key == "heavy"


def test_simulation_frame_has_one_row_per_year():
    df = build_report(FinancialParameters()).simulation.to_frame()

    assert list(df["Year"]) == list(range(1, 11))
    assert {"Income", "Mortgage", "Living", "Balance", "Assets", "GracePeriod"}.issubset(df.columns)
