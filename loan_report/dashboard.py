"""Dash front end: parameter sidebar, summary cards, charts and simulation table."""

from __future__ import annotations

import logging

import dash
import dash_bootstrap_components as dbc
from dash import ALL, Input, Output, State, dash_table, dcc, html
from dash.exceptions import PreventUpdate

from loan_report import config as cfg
from loan_report.components.charts import (
    NEGATIVE_COLOR,
    SIMULATION_COLUMNS,
    asset_figure,
    expense_figure,
    format_money,
    payment_figure,
    simulation_table_rows,
)
from loan_report.components.sidebar import (
    RATE_STAGE_MODELS,
    STAGED_OPTION,
    build_sidebar,
    field_value,
)
from loan_report.data_model import all_form_fields, form_payload
from loan_report.engine.aggregate import LoanReport
from loan_report.engine.state import CalculatorState, params_from_payload

logger = logging.getLogger(__name__)

FIELD_LABELS = {col.field: col.label for col in all_form_fields()}
STATUS_COLORS = {"safe": "success", "warn": "warning", "danger": "danger"}


def _summary_card(title: str, value: str, note: str | None = None, color: str = "light"):
    body = [html.H6(title, className="text-muted"), html.H3(value)]
    if note:
        body.append(html.Small(note))
    return dbc.Col(dbc.Card(dbc.CardBody(body), color=color, outline=True), md=3)


def summary_cards(report: LoanReport):
    return dbc.Row(
        [
            _summary_card("首年月付金 (萬)", format_money(report.monthly_payment_total)),
            _summary_card("最高月付金 (萬)", format_money(report.simulation.max_monthly_payment)),
            _summary_card(
                "房貸負擔比",
                f"{report.burden_ratio:.1f}%",
                report.band.label,
                STATUS_COLORS[report.band.status],
            ),
            _summary_card(
                "十年累積資產 (萬)",
                format_money(report.simulation.total_assets_year10),
                color="danger" if report.simulation.total_assets_year10 < 0 else "light",
            ),
        ],
        className="g-2",
    )


def error_list(errors: dict[str, str]):
    if not errors:
        return None
    return dbc.Alert(
        html.Ul([html.Li(f"{FIELD_LABELS.get(field, field)}: {message}") for field, message in errors.items()]),
        color="danger",
    )


def build_layout(state: CalculatorState):
    report = state.report
    return dbc.Container(
        [
            html.H2("購屋負擔試算", className="my-3"),
            dbc.Row(
                [
                    dbc.Col(build_sidebar(state.params), md=4),
                    dbc.Col(
                        [
                            html.Div(error_list(report.errors), id="error-list"),
                            html.Div(summary_cards(report), id="summary-cards"),
                            dbc.Row(
                                [
                                    dbc.Col(dcc.Graph(id="expense-chart", figure=expense_figure(report.expense_breakdown)), md=6),
                                    dbc.Col(dcc.Graph(id="asset-chart", figure=asset_figure(report.asset_series)), md=6),
                                ],
                                className="mt-3",
                            ),
                            dcc.Graph(id="payment-chart", figure=payment_figure(report.schedule1, report.schedule2)),
                            dash_table.DataTable(
                                id="simulation-table",
                                data=simulation_table_rows(report.simulation),
                                columns=SIMULATION_COLUMNS,
                                style_data_conditional=[
                                    {
                                        "if": {"filter_query": '{AssetSign} = "negative"', "column_id": "Assets"},
                                        "color": NEGATIVE_COLOR,
                                        "fontWeight": "bold",
                                    },
                                    {
                                        "if": {"filter_query": '{NoteKind} = "event"'},
                                        "backgroundColor": "#fce7f3",
                                    },
                                ],
                            ),
                        ],
                        md=8,
                    ),
                ]
            ),
        ],
        fluid=True,
    )


def register_callbacks(app: dash.Dash, state: CalculatorState) -> None:
    @app.callback(
        Output({"type": "param-input", "field": ALL}, "value"),
        Output("rates1-staged", "value"),
        Output("rates2-staged", "value"),
        Output("rates1-stages", "data"),
        Output("rates2-stages", "data"),
        Input("reset-params-btn", "n_clicks"),
        Input("rates1-add-stage", "n_clicks"),
        Input("rates2-add-stage", "n_clicks"),
        State({"type": "param-input", "field": ALL}, "id"),
        State("rates1-stages", "data"),
        State("rates2-stages", "data"),
        prevent_initial_call=True,
    )
    def edit_form(_reset, _add1, _add2, ids, rows1, rows2):
        triggered = dash.ctx.triggered_id
        if triggered == "reset-params-btn":
            state.reset()
            values = [field_value(state.params, item["field"]) for item in ids]
            blank = [RATE_STAGE_MODELS[1].blank_row()]
            return values, [], [], blank, [dict(row) for row in blank]
        if triggered == "rates1-add-stage":
            return dash.no_update, dash.no_update, dash.no_update, (rows1 or []) + [RATE_STAGE_MODELS[1].blank_row()], dash.no_update
        if triggered == "rates2-add-stage":
            return dash.no_update, dash.no_update, dash.no_update, dash.no_update, (rows2 or []) + [RATE_STAGE_MODELS[2].blank_row()]
        raise PreventUpdate

    @app.callback(
        Output("error-list", "children"),
        Output("summary-cards", "children"),
        Output("expense-chart", "figure"),
        Output("asset-chart", "figure"),
        Output("payment-chart", "figure"),
        Output("simulation-table", "data"),
        Input({"type": "param-input", "field": ALL}, "value"),
        Input("rates1-staged", "value"),
        Input("rates2-staged", "value"),
        Input("rates1-stages", "data"),
        Input("rates2-stages", "data"),
        State({"type": "param-input", "field": ALL}, "id"),
    )
    def recompute(values, staged1, staged2, rows1, rows2, ids):
        form_values = {item["field"]: value for item, value in zip(ids, values)}
        stage_tables = {}
        if STAGED_OPTION in (staged1 or []):
            stage_tables[1] = rows1 or []
        if STAGED_OPTION in (staged2 or []):
            stage_tables[2] = rows2 or []
        try:
            params = params_from_payload(form_payload(form_values, stage_tables))
        except (TypeError, ValueError) as exc:
            logger.warning("Ignoring unparseable form values: %s", exc)
            raise PreventUpdate
        report = state.replace(params)
        return (
            error_list(report.errors),
            summary_cards(report),
            expense_figure(report.expense_breakdown),
            asset_figure(report.asset_series),
            payment_figure(report.schedule1, report.schedule2),
            simulation_table_rows(report.simulation),
        )


def create_dashboard(storage_path: str = cfg.STORAGE_PATH, storage_key: str = cfg.STORAGE_KEY) -> dash.Dash:
    state = CalculatorState(storage_path, storage_key)
    app = dash.Dash(__name__, external_stylesheets=[dbc.themes.BOOTSTRAP])
    app.title = "購屋負擔試算"
    app.layout = build_layout(state)
    register_callbacks(app, state)
    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_dashboard().run(debug=False, port=8050)
