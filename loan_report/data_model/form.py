from __future__ import annotations

from typing import Any, List

import pandas as pd

from .base import ColumnDefinition, TableModel
from .params import EXPENSE_LABELS, FinancialParameters, RateStage

_DEFAULTS = FinancialParameters()


def _money(field: str, label: str, default: float, help: str | None = None) -> ColumnDefinition:
    return ColumnDefinition(field, label, kind="number", default=default, min_value=0.0, step=10.0, format="%.1f", help=help)


def _years(field: str, label: str, default: int, min_value: float = 1.0) -> ColumnDefinition:
    return ColumnDefinition(field, label, kind="number", default=default, min_value=min_value, step=1.0, format="%d")


PROPERTY_FIELDS: List[ColumnDefinition] = [
    _money("housePrice", "房屋總價 (萬)", _DEFAULTS.house_price),
    _money("decoration", "裝潢費用 (萬)", _DEFAULTS.decoration),
    _money("mortgageLoan", "抵押/理財型貸款 (萬)", _DEFAULTS.mortgage_loan, help="購屋貸款 = 總價 + 裝潢 - 抵押貸款"),
]

LOAN_FIELDS: List[ColumnDefinition] = [
    ColumnDefinition("rates1", "購屋貸款利率 (%)", default=_DEFAULTS.rates1, min_value=0.0, step=0.05, format="%.2f"),
    _years("years1", "購屋貸款年限", _DEFAULTS.years1),
    _years("gracePeriod1", "購屋貸款寬限期 (年)", _DEFAULTS.grace_period1, min_value=0.0),
    ColumnDefinition("rates2", "抵押貸款利率 (%)", default=_DEFAULTS.rates2, min_value=0.0, step=0.05, format="%.2f"),
    _years("years2", "抵押貸款年限", _DEFAULTS.years2),
    _years("gracePeriod2", "抵押貸款寬限期 (年)", _DEFAULTS.grace_period2, min_value=0.0),
]

INCOME_FIELDS: List[ColumnDefinition] = [
    _money("annualSalary", "家庭年薪 (萬)", _DEFAULTS.annual_salary),
    ColumnDefinition("salaryGrowth", "前五年薪資成長 (%)", default=_DEFAULTS.salary_growth, min_value=0.0, step=0.5, format="%.1f"),
    _money("rentIncome", "年租金收入 (萬)", _DEFAULTS.rent_income),
    _years("babyYear", "育兒事件發生年", _DEFAULTS.baby_year),
]

EXPENSE_FIELDS: List[ColumnDefinition] = [
    _money(f"expense.{key}", f"{label} (萬/年)", getattr(_DEFAULTS.expense, key))
    for key, label in EXPENSE_LABELS.items()
]

FORM_SECTIONS = {
    "property": PROPERTY_FIELDS,
    "loans": LOAN_FIELDS,
    "income": INCOME_FIELDS,
    "expense": EXPENSE_FIELDS,
}


def all_form_fields() -> List[ColumnDefinition]:
    return [col for section in FORM_SECTIONS.values() for col in section]


class RateStageTableModel(TableModel):
    """Schema + defaults for a multi-stage interest-rate table."""

    def __init__(self, loan: int) -> None:
        columns = [
            ColumnDefinition("Year Start", "起始年", default=1, min_value=1.0, step=1.0, format="%d"),
            ColumnDefinition("Year End", "結束年", default=1, min_value=1.0, step=1.0, format="%d"),
            ColumnDefinition("Rate (%)", "年利率 (%)", default=0.0, min_value=0.0, step=0.05, format="%.2f"),
        ]
        super().__init__(f"rates{loan}", columns, [])


RATE_STAGE_MODELS = {1: RateStageTableModel(1), 2: RateStageTableModel(2)}


def stages_to_rows(stages: List[RateStage]) -> List[dict[str, Any]]:
    return [
        {"Year Start": stage.year_start, "Year End": stage.year_end, "Rate (%)": stage.rate}
        for stage in stages
    ]


def dataframe_to_rate_stages(df: pd.DataFrame) -> List[RateStage]:
    stages: List[RateStage] = []
    for row in df.to_dict("records"):
        start = row.get("Year Start")
        end = row.get("Year End")
        if _blank(start) and _blank(end):
            continue
        stages.append(
            RateStage.from_dict(
                {
                    "yearStart": 0 if _blank(start) else start,
                    "yearEnd": 0 if _blank(end) else end,
                    "rate": 0.0 if _blank(row.get("Rate (%)")) else row.get("Rate (%)"),
                }
            )
        )
    return stages


def form_payload(values: dict[str, Any], stage_tables: dict[int, list] | None = None) -> dict[str, Any]:
    """Turn flat form values into a camelCase parameter payload.

    Blank inputs become 0 so validation reports them. ``stage_tables`` maps a
    loan number to its edited rate-stage rows, replacing that loan's flat rate.
    """
    prefix = "expense."
    payload: dict[str, Any] = {"expense": {}}
    for key, value in values.items():
        number = 0 if _blank(value) else value
        if key.startswith(prefix):
            payload["expense"][key[len(prefix):]] = number
        else:
            payload[key] = number
    for loan, rows in (stage_tables or {}).items():
        if rows is None:
            continue
        stages = dataframe_to_rate_stages(pd.DataFrame(rows))
        payload[f"rates{loan}"] = [stage.to_dict() for stage in stages]
    return payload


def _blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
