from __future__ import annotations

from dataclasses import dataclass

from .. import config as cfg


@dataclass(frozen=True)
class BurdenBand:
    key: str     # best | healthy | moderate | heavy
    label: str
    status: str  # safe | warn | danger


BEST = BurdenBand("best", "非常輕鬆 (優)", "safe")
HEALTHY = BurdenBand("healthy", "健康水位 (良)", "safe")
MODERATE = BurdenBand("moderate", "負擔適中 (可)", "warn")
HEAVY = BurdenBand("heavy", "負擔沈重 (危)", "danger")


def burden_ratio(max_monthly_payment: float, annual_salary: float) -> float:
    """Peak monthly loan payment as a percentage of monthly salary, one decimal."""
    monthly_salary = (annual_salary or 0.0) / 12
    if monthly_salary <= 0:
        return 0.0
    return round(max_monthly_payment / monthly_salary * 100, 1)


def classify_burden(ratio: float) -> BurdenBand:
    if ratio < cfg.BURDEN_BEST_BELOW_PCT:
        return BEST
    if ratio <= cfg.BURDEN_HEALTHY_MAX_PCT:
        return HEALTHY
    if ratio <= cfg.BURDEN_MODERATE_MAX_PCT:
        return MODERATE
    return HEAVY
