# components/sidebar.py
from __future__ import annotations

from typing import Any

import dash_bootstrap_components as dbc
from dash import html, dcc, dash_table

from loan_report.data_model import (
    FORM_SECTIONS,
    RATE_STAGE_MODELS,
    FinancialParameters,
    RateStage,
    stages_to_rows,
)

SECTION_TITLES = {
    "property": "房產資金",
    "loans": "貸款條件",
    "income": "收入",
    "expense": "年度支出",
}

STAGED_OPTION = "staged"


def field_id(field: str) -> dict:
    return {"type": "param-input", "field": field}


def field_value(params: FinancialParameters, field: str) -> Any:
    """Current form value for ``field``; multi-stage rates show their first stage."""
    data = params.to_dict()
    if field.startswith("expense."):
        return data["expense"][field.split(".", 1)[1]]
    value = data[field]
    if isinstance(value, list):
        return value[0]["rate"] if value else 0.0
    return value


def _rate_stage_table(loan: int, stages: list[RateStage]):
    model = RATE_STAGE_MODELS[loan]
    columns = [{"name": col.label, "id": col.field, "type": "numeric"} for col in model.columns]
    rows = stages_to_rows(stages) or [model.blank_row()]
    table = dash_table.DataTable(
        id=f"rates{loan}-stages",
        data=rows,
        columns=columns,
        editable=True,
        row_deletable=True,
        style_header={"backgroundColor": "#222", "color": "#eee", "fontWeight": "bold"},
        style_data={"backgroundColor": "#111", "color": "#eee"},
        fill_width=True,
    )
    return html.Div(table, style={"maxHeight": "200px", "overflowY": "auto"})


def _rate_stage_block(loan: int, params: FinancialParameters):
    rates = params.rates1 if loan == 1 else params.rates2
    staged = isinstance(rates, list)
    return html.Div(
        [
            dcc.Checklist(
                id=f"rates{loan}-staged",
                options=[{"label": " 分段利率", "value": STAGED_OPTION}],
                value=[STAGED_OPTION] if staged else [],
                inline=True,
            ),
            _rate_stage_table(loan, rates if staged else []),
            dbc.Button("新增階段", id=f"rates{loan}-add-stage", color="secondary", size="sm", className="mt-2"),
        ],
        className="mb-2",
    )


def _field_input(col, params: FinancialParameters):
    children = [
        dbc.Label(col.label),
        dbc.Input(
            id=field_id(col.field),
            type="number",
            value=field_value(params, col.field),
            min=col.min_value,
            step=col.step,
            debounce=True,
        ),
    ]
    if col.help:
        children.append(html.Small(col.help, className="text-muted"))
    return html.Div(children, className="mb-2")


def build_sidebar(params: FinancialParameters):
    children = [html.H4("試算參數", className="card-title")]
    for section, columns in FORM_SECTIONS.items():
        children.append(html.Hr())
        children.append(html.H5(SECTION_TITLES[section]))
        for col in columns:
            children.append(_field_input(col, params))
            if col.field in ("rates1", "rates2"):
                children.append(_rate_stage_block(int(col.field[-1]), params))
    children.append(html.Hr())
    children.append(dbc.Button("恢復預設值", id="reset-params-btn", color="secondary", className="mt-2 w-100"))
    return dbc.Card(children, body=True)


__all__ = [
    "RATE_STAGE_MODELS",
    "STAGED_OPTION",
    "build_sidebar",
    "field_id",
    "field_value",
]
