from __future__ import annotations

from typing import List

from ..data_model import LoanSchedule, RateConfig, YearEntry


def amortized_payment(balance: float, monthly_rate: float, months: int) -> float:
    """Level monthly payment retiring ``balance`` over ``months`` periods."""
    if balance <= 0 or months <= 0:
        return 0.0
    if not monthly_rate:
        return balance / months
    growth = (1 + monthly_rate) ** months
    return balance * monthly_rate * growth / (growth - 1)


def build_rate_table(rate_config: RateConfig, total_years: int) -> List[float]:
    """Annual rate (percent) for each year 1..total_years."""
    if not isinstance(rate_config, list):
        return [float(rate_config)] * total_years
    if not rate_config:
        return [0.0] * total_years

    table: List[float] = []
    current = rate_config[0].rate
    for year in range(1, total_years + 1):
        for stage in rate_config:
            if stage.year_start <= year <= stage.year_end:
                current = stage.rate
                break
        else:
            if year > rate_config[-1].year_end:
                current = rate_config[-1].rate
        table.append(current)
    return table


def compute_schedule(principal: float, rate_config: RateConfig, total_years: int, grace_years: int = 0) -> LoanSchedule:
    if not principal or principal <= 0 or total_years <= 0:
        return LoanSchedule()

    rates = build_rate_table(rate_config, total_years)
    balance = float(principal)
    entries: List[YearEntry] = []

    for year in range(1, total_years + 1):
        rate = rates[year - 1]
        monthly_rate = rate / 1200.0
        in_grace = year <= grace_years

        if in_grace:
            payment = balance * monthly_rate
        else:
            remaining_months = (total_years - year + 1) * 12
            payment = amortized_payment(balance, monthly_rate, remaining_months)
            for _ in range(12):
                interest = balance * monthly_rate
                balance -= payment - interest

        entries.append(
            YearEntry(
                year=year,
                rate=rate,
                monthly_payment=payment,
                is_grace_period=in_grace,
                balance=balance,
            )
        )

    return LoanSchedule(entries=entries, current_payment=entries[0].monthly_payment)
