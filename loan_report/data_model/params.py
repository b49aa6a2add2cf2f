from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Union

EXPENSE_LABELS = {
    "basic_food": "飲食雜支",
    "basic_house": "居住雜費",
    "parents": "孝親費",
    "shopping": "購物治裝",
    "travel": "旅遊娛樂",
    "insurance": "保險費",
    "car": "交通養車",
    "baby": "育兒一次性支出",
}


@dataclass
class RateStage:
    year_start: int
    year_end: int
    rate: float

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "RateStage":
        return cls(
            year_start=_as_number(raw.get("yearStart", raw.get("year_start", 0))),
            year_end=_as_number(raw.get("yearEnd", raw.get("year_end", 0))),
            rate=float(raw.get("rate", 0.0) or 0.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"yearStart": self.year_start, "yearEnd": self.year_end, "rate": self.rate}


RateConfig = Union[float, List[RateStage]]


@dataclass
class ExpenseBreakdown:
    """Annual household expenses by category; ``baby`` is a one-time cost."""

    basic_food: float = 24.0
    basic_house: float = 6.0
    parents: float = 12.0
    shopping: float = 6.0
    travel: float = 10.0
    insurance: float = 5.0
    car: float = 6.0
    baby: float = 30.0

    def recurring_total(self) -> float:
        return (
            self.basic_food
            + self.basic_house
            + self.parents
            + self.shopping
            + self.travel
            + self.insurance
            + self.car
        )

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ExpenseBreakdown":
        defaults = cls()
        values = {}
        for f in fields(cls):
            value = raw.get(f.name, getattr(defaults, f.name))
            values[f.name] = float(value if value is not None else 0.0)
        return cls(**values)

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class FinancialParameters:
    house_price: float = 1500.0
    decoration: float = 100.0
    mortgage_loan: float = 300.0
    annual_salary: float = 180.0
    salary_growth: float = 3.0
    rent_income: float = 0.0
    expense: ExpenseBreakdown = field(default_factory=ExpenseBreakdown)
    baby_year: int = 3
    years1: int = 30
    years2: int = 20
    grace_period1: int = 0
    grace_period2: int = 0
    rates1: RateConfig = 2.1
    rates2: RateConfig = 2.5

    @property
    def purchase_loan_amount(self) -> float:
        return self.house_price + self.decoration - self.mortgage_loan

    def loan_terms(self, loan: int) -> tuple[float, RateConfig, int, int]:
        """Return ``(principal, rates, years, grace)`` for loan 1 (purchase) or 2 (cash-out)."""
        if loan == 1:
            return self.purchase_loan_amount, self.rates1, self.years1, self.grace_period1
        if loan == 2:
            return self.mortgage_loan, self.rates2, self.years2, self.grace_period2
        raise ValueError(f"Unknown loan number: {loan}")

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "FinancialParameters":
        defaults = cls()

        def _get(key: str, default: Any) -> Any:
            value = raw.get(key)
            return default if value is None or value == "" else value

        return cls(
            house_price=float(_get("housePrice", defaults.house_price)),
            decoration=float(_get("decoration", defaults.decoration)),
            mortgage_loan=float(_get("mortgageLoan", defaults.mortgage_loan)),
            annual_salary=float(_get("annualSalary", defaults.annual_salary)),
            salary_growth=float(_get("salaryGrowth", defaults.salary_growth)),
            rent_income=float(_get("rentIncome", defaults.rent_income)),
            expense=ExpenseBreakdown.from_dict(raw.get("expense") or {}),
            baby_year=_as_number(_get("babyYear", defaults.baby_year)),
            years1=_as_number(_get("years1", defaults.years1)),
            years2=_as_number(_get("years2", defaults.years2)),
            grace_period1=_as_number(_get("gracePeriod1", defaults.grace_period1)),
            grace_period2=_as_number(_get("gracePeriod2", defaults.grace_period2)),
            rates1=parse_rate_config(raw.get("rates1"), defaults.rates1),
            rates2=parse_rate_config(raw.get("rates2"), defaults.rates2),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "housePrice": self.house_price,
            "decoration": self.decoration,
            "mortgageLoan": self.mortgage_loan,
            "annualSalary": self.annual_salary,
            "salaryGrowth": self.salary_growth,
            "rentIncome": self.rent_income,
            "expense": self.expense.to_dict(),
            "babyYear": self.baby_year,
            "years1": self.years1,
            "years2": self.years2,
            "gracePeriod1": self.grace_period1,
            "gracePeriod2": self.grace_period2,
            "rates1": rate_config_to_payload(self.rates1),
            "rates2": rate_config_to_payload(self.rates2),
        }


def default_parameters() -> FinancialParameters:
    return FinancialParameters()


def parse_rate_config(value: Any, default: RateConfig = 0.0) -> RateConfig:
    if value is None or value == "":
        return default
    if isinstance(value, list):
        stages = []
        for stage in value:
            if isinstance(stage, RateStage):
                stages.append(stage)
            elif isinstance(stage, dict):
                stages.append(RateStage.from_dict(stage))
            else:
                raise ValueError(f"Rate stage must be an object, got {type(stage).__name__}")
        return stages
    return float(value)


def rate_config_to_payload(rates: RateConfig) -> float | List[Dict[str, Any]]:
    if isinstance(rates, list):
        return [stage.to_dict() for stage in rates]
    return rates


def _as_number(value: Any) -> int | float:
    """Keep whole numbers as ``int`` so validation can reject fractional years."""
    number = float(value)
    if number.is_integer():
        return int(number)
    return number
