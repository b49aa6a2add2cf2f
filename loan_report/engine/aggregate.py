from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..data_model import FinancialParameters, LoanSchedule, SimulationResult
from .affordability import BurdenBand, burden_ratio, classify_burden
from .schedule import compute_schedule
from .simulator import simulate
from .validation import validate

logger = logging.getLogger(__name__)

EXPENSE_BUCKETS = [
    ("mortgage", "房貸支出"),
    ("enjoyment", "高端享樂"),
    ("obligations", "年度責任"),
    ("basic", "基本生活"),
]


@dataclass
class LoanReport:
    params: FinancialParameters
    schedule1: LoanSchedule
    schedule2: LoanSchedule
    simulation: SimulationResult
    burden_ratio: float
    band: BurdenBand
    expense_breakdown: List[Dict[str, Any]] = field(default_factory=list)
    asset_series: List[Dict[str, Any]] = field(default_factory=list)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def monthly_payment_total(self) -> float:
        return self.schedule1.current_payment + self.schedule2.current_payment

    def to_dict(self) -> Dict[str, Any]:
        return {
            "params": self.params.to_dict(),
            "purchaseLoanAmount": self.params.purchase_loan_amount,
            "mortgagePayment1": self.schedule1.current_payment,
            "mortgagePayment2": self.schedule2.current_payment,
            "monthlyPaymentTotal": self.monthly_payment_total,
            "maxMonthlyPayment": self.simulation.max_monthly_payment,
            "burdenRatio": self.burden_ratio,
            "burdenBand": self.band.key,
            "burdenText": self.band.label,
            "burdenStatus": self.band.status,
            "totalAssets10Year": self.simulation.total_assets_year10,
            "expenseBreakdown": self.expense_breakdown,
            "assetSeries": self.asset_series,
            "simulation": self.simulation.to_frame().to_dict(orient="records"),
            "errors": self.errors,
        }


def expense_breakdown(params: FinancialParameters, schedule1: LoanSchedule, schedule2: LoanSchedule) -> List[Dict[str, Any]]:
    """Annual spending split into the four chart buckets, in display order."""
    e = params.expense
    amounts = {
        "mortgage": (schedule1.current_payment + schedule2.current_payment) * 12,
        "enjoyment": e.shopping + e.travel,
        "obligations": e.parents + e.insurance,
        "basic": e.basic_food + e.basic_house + e.car,
    }
    return [{"key": key, "label": label, "amount": amounts[key]} for key, label in EXPENSE_BUCKETS]


def asset_series(result: SimulationResult) -> List[Dict[str, Any]]:
    return [
        {
            "label": f"Y{row.year}",
            "year": row.year,
            "assets": row.cumulative_assets,
            "negative": row.cumulative_assets < 0,
        }
        for row in result.rows
    ]


def _whole_years(value) -> int:
    if isinstance(value, int) and value > 0:
        return value
    return 0


def loan_schedule(params: FinancialParameters, loan: int) -> LoanSchedule:
    principal, rates, years, grace = params.loan_terms(loan)
    return compute_schedule(principal, rates, _whole_years(years), _whole_years(grace))


def build_report(params: FinancialParameters) -> LoanReport:
    """Recompute every derived value from one parameter snapshot."""
    errors = validate(params)
    schedule1 = loan_schedule(params, 1)
    schedule2 = loan_schedule(params, 2)
    result = simulate(params, schedule1, schedule2)
    ratio = burden_ratio(result.max_monthly_payment, params.annual_salary)
    logger.debug(
        "Report computed: burden=%.1f%% assets10=%.1f errors=%d",
        ratio,
        result.total_assets_year10,
        len(errors),
    )
    return LoanReport(
        params=params,
        schedule1=schedule1,
        schedule2=schedule2,
        simulation=result,
        burden_ratio=ratio,
        band=classify_burden(ratio),
        expense_breakdown=expense_breakdown(params, schedule1, schedule2),
        asset_series=asset_series(result),
        errors=errors,
    )
