from __future__ import annotations

from typing import List

from .. import config as cfg
from ..data_model import FinancialParameters, LoanSchedule, SimulationResult, SimulationRow

NOTE_LABELS = {
    "event": "👼 懷孕育嬰",
    "growth": "📈 薪資成長",
    "flat": "➖ 薪資持平",
}


def _note_kind(year: int, event_year: int) -> str:
    if year == event_year:
        return "event"
    if year <= cfg.SALARY_GROWTH_LAST_YEAR:
        return "growth"
    return "flat"


def combined_monthly_payment(schedule1: LoanSchedule, schedule2: LoanSchedule, year: int) -> float:
    return schedule1.payment_for(year) + schedule2.payment_for(year)


def simulate(params: FinancialParameters, schedule1: LoanSchedule, schedule2: LoanSchedule) -> SimulationResult:
    """Walk the simulation horizon year by year and accumulate net cash balance.

    Salary compounds only in years 2..5, living costs inflate from year 2,
    and the event year loses part of the salary while paying the one-time
    baby expense. Years past a loan's term contribute no mortgage payment.
    """
    expense = params.expense
    event_year = params.baby_year or cfg.DEFAULT_EVENT_YEAR
    current_salary = params.annual_salary
    current_living = expense.recurring_total()
    accumulated = 0.0
    max_monthly = 0.0
    rows: List[SimulationRow] = []

    for year in range(1, cfg.SIMULATION_YEARS + 1):
        if 1 < year <= cfg.SALARY_GROWTH_LAST_YEAR:
            current_salary *= 1 + params.salary_growth / 100
        if year > 1:
            current_living *= 1 + cfg.LIVING_INFLATION_RATE

        kind = _note_kind(year, event_year)
        actual_salary = current_salary
        extra_expense = 0.0
        if kind == "event":
            actual_salary -= current_salary * cfg.EVENT_INCOME_LOSS
            extra_expense = expense.baby

        monthly_payment = combined_monthly_payment(schedule1, schedule2, year)
        max_monthly = max(max_monthly, monthly_payment)

        income_total = actual_salary + params.rent_income
        mortgage_annual = monthly_payment * 12
        living_annual = current_living + extra_expense
        balance = income_total - mortgage_annual - living_annual
        accumulated += balance

        rows.append(
            SimulationRow(
                year=year,
                note=NOTE_LABELS[kind],
                note_kind=kind,
                income_total=income_total,
                mortgage_annual=mortgage_annual,
                living_annual=living_annual,
                balance=balance,
                cumulative_assets=accumulated,
                is_grace_period=schedule1.is_grace_year(year) or schedule2.is_grace_year(year),
            )
        )

    return SimulationResult(
        rows=rows,
        total_assets_year10=rows[-1].cumulative_assets if rows else 0.0,
        max_monthly_payment=max_monthly,
    )
