from .base import ColumnDefinition, TableModel
from .form import (
    FORM_SECTIONS,
    RATE_STAGE_MODELS,
    RateStageTableModel,
    all_form_fields,
    dataframe_to_rate_stages,
    form_payload,
    stages_to_rows,
)
from .params import (
    EXPENSE_LABELS,
    ExpenseBreakdown,
    FinancialParameters,
    RateConfig,
    RateStage,
    default_parameters,
    parse_rate_config,
)
from .schedule import LoanSchedule, YearEntry
from .simulation import SimulationResult, SimulationRow

__all__ = [
    "EXPENSE_LABELS",
    "FORM_SECTIONS",
    "RATE_STAGE_MODELS",
    "ColumnDefinition",
    "ExpenseBreakdown",
    "FinancialParameters",
    "LoanSchedule",
    "RateConfig",
    "RateStage",
    "RateStageTableModel",
    "SimulationResult",
    "SimulationRow",
    "TableModel",
    "YearEntry",
    "all_form_fields",
    "dataframe_to_rate_stages",
    "default_parameters",
    "form_payload",
    "parse_rate_config",
    "stages_to_rows",
]
