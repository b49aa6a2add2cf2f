from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import List, Literal

import pandas as pd

NoteKind = Literal["event", "growth", "flat"]

FRAME_COLUMNS = {
    "year": "Year",
    "note": "Note",
    "note_kind": "NoteKind",
    "income_total": "Income",
    "mortgage_annual": "Mortgage",
    "living_annual": "Living",
    "balance": "Balance",
    "cumulative_assets": "Assets",
    "is_grace_period": "GracePeriod",
}


@dataclass
class SimulationRow:
    year: int
    note: str
    note_kind: NoteKind
    income_total: float
    mortgage_annual: float
    living_annual: float
    balance: float
    cumulative_assets: float
    is_grace_period: bool = False


@dataclass
class SimulationResult:
    rows: List[SimulationRow] = field(default_factory=list)
    total_assets_year10: float = 0.0
    max_monthly_payment: float = 0.0

    def to_frame(self) -> pd.DataFrame:
        """Simulation table with display column names, one row per year."""
        if not self.rows:
            return pd.DataFrame(columns=list(FRAME_COLUMNS.values()))
        df = pd.DataFrame([asdict(row) for row in self.rows])
        return df.rename(columns=FRAME_COLUMNS)[list(FRAME_COLUMNS.values())]
