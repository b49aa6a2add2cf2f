from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class YearEntry:
    year: int
    rate: float
    monthly_payment: float
    is_grace_period: bool = False
    balance: float = 0.0  # outstanding principal at the end of the year

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "rate": self.rate,
            "monthlyPayment": self.monthly_payment,
            "isGracePeriod": self.is_grace_period,
            "balance": self.balance,
        }


@dataclass
class LoanSchedule:
    entries: List[YearEntry] = field(default_factory=list)
    current_payment: float = 0.0

    def entry_for(self, year: int) -> Optional[YearEntry]:
        if 1 <= year <= len(self.entries):
            return self.entries[year - 1]
        return None

    def payment_for(self, year: int) -> float:
        entry = self.entry_for(year)
        return entry.monthly_payment if entry else 0.0

    def is_grace_year(self, year: int) -> bool:
        entry = self.entry_for(year)
        return bool(entry and entry.is_grace_period)

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict:
        return {
            "currentPayment": self.current_payment,
            "schedule": [entry.to_dict() for entry in self.entries],
        }
