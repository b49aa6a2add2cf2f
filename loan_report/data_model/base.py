from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List


@dataclass
class ColumnDefinition:
    """Lightweight schema descriptor shared by form inputs and Dash tables."""

    field: str
    label: str
    kind: str = "number"  # text | number | select
    default: Any = 0.0
    options: List[str] | None = None
    min_value: float | None = None
    step: float | None = None
    format: str | None = None
    help: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "label": self.label,
            "kind": self.kind,
            "default": self.default,
            "options": self.options or [],
            "min": self.min_value,
            "step": self.step,
            "format": self.format,
            "help": self.help,
        }


@dataclass
class TableModel:
    """Container for a table schema plus default rows."""

    name: str
    columns: List[ColumnDefinition]
    default_rows: List[dict[str, Any]] = field(default_factory=list)

    def blank_row(self) -> dict[str, Any]:
        return {col.field: col.default for col in self.columns}
