from __future__ import annotations

from typing import Dict, List, Optional

from ..data_model import EXPENSE_LABELS, FinancialParameters, RateConfig, RateStage


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_rate_stages(stages: List[RateStage]) -> Optional[str]:
    """Return an error message for a broken multi-stage rate list, else ``None``.

    Stages are not sorted first: an out-of-order list fails the continuity check.
    """
    if not stages:
        return "請至少設定一個利率階段"
    if stages[0].year_start != 1:
        return "第一階段必須從第 1 年開始"
    for idx, stage in enumerate(stages):
        if stage.rate < 0:
            return f"第 {idx + 1} 階段利率不能為負"
        if stage.year_start > stage.year_end:
            return f"第 {idx + 1} 階段起始年不能大於結束年"
        if idx > 0 and stage.year_start != stages[idx - 1].year_end + 1:
            return f"第 {idx + 1} 階段必須接續第 {idx} 階段 (第 {stages[idx - 1].year_end + 1} 年開始)"
    return None


def _validate_rates(rates: RateConfig) -> Optional[str]:
    if isinstance(rates, list):
        return validate_rate_stages(rates)
    if rates < 0:
        return "利率不能為負"
    return None


def _validate_loan(errors: Dict[str, str], suffix: int, rates: RateConfig, years, grace) -> None:
    rate_error = _validate_rates(rates)
    if rate_error:
        errors[f"rates{suffix}"] = rate_error
    if not _is_positive_int(years):
        errors[f"years{suffix}"] = "請輸入有效年限"
    if grace < 0:
        errors[f"gracePeriod{suffix}"] = "寬限期不能為負"
    elif not isinstance(grace, int) or isinstance(grace, bool):
        errors[f"gracePeriod{suffix}"] = "寬限期必須為整數年"
    elif _is_positive_int(years) and grace >= years:
        errors[f"gracePeriod{suffix}"] = "寬限期必須小於貸款年限"


def validate(params: FinancialParameters) -> Dict[str, str]:
    """Check every field independently and map field ids to error messages."""
    errors: Dict[str, str] = {}
    p = params

    # 房產資金
    if p.house_price <= 0:
        errors["housePrice"] = "請輸入有效的房屋總價"
    if p.decoration < 0:
        errors["decoration"] = "金額不能為負數"
    if p.mortgage_loan < 0:
        errors["mortgageLoan"] = "金額不能為負數"
    elif p.mortgage_loan > p.house_price + p.decoration:
        errors["mortgageLoan"] = "抵押貸款不能超過房價加裝潢總額"

    # 貸款條件
    _validate_loan(errors, 1, p.rates1, p.years1, p.grace_period1)
    _validate_loan(errors, 2, p.rates2, p.years2, p.grace_period2)

    # 收入
    if p.annual_salary <= 0:
        errors["annualSalary"] = "請輸入有效的家庭年薪"
    if p.salary_growth < 0:
        errors["salaryGrowth"] = "成長率不能為負"
    if p.rent_income < 0:
        errors["rentIncome"] = "租金不能為負"
    if not _is_positive_int(p.baby_year):
        errors["babyYear"] = "請輸入有效的年份"

    # 支出
    for key, label in EXPENSE_LABELS.items():
        if getattr(p.expense, key) < 0:
            errors[f"expense.{key}"] = f"{label}不能為負數"

    return errors
