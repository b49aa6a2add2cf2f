# components/charts.py
from __future__ import annotations

from typing import Any, Dict, List

import plotly.graph_objects as go

from loan_report.data_model import LoanSchedule, SimulationResult

BUCKET_COLORS = ["#3b82f6", "#ec4899", "#f59e0b", "#10b981"]
POSITIVE_COLOR = "#10b981"
NEGATIVE_COLOR = "#ef4444"


def format_money(value: Any) -> str:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "0.0"
    if number != number:
        return "0.0"
    return f"{number:,.1f}"


def expense_figure(breakdown: List[Dict[str, Any]]) -> go.Figure:
    fig = go.Figure(
        go.Pie(
            labels=[bucket["label"] for bucket in breakdown],
            values=[bucket["amount"] for bucket in breakdown],
            hole=0.55,
            marker={"colors": BUCKET_COLORS[: len(breakdown)]},
            sort=False,
        )
    )
    fig.update_layout(margin={"t": 10, "b": 10, "l": 10, "r": 10}, legend={"orientation": "h"})
    return fig


def asset_figure(series: List[Dict[str, Any]]) -> go.Figure:
    fig = go.Figure(
        go.Bar(
            x=[point["label"] for point in series],
            y=[point["assets"] for point in series],
            marker_color=[NEGATIVE_COLOR if point["negative"] else POSITIVE_COLOR for point in series],
            name="累積現金資產 (萬元)",
        )
    )
    fig.update_layout(margin={"t": 10, "b": 10, "l": 10, "r": 10}, showlegend=False)
    return fig


def payment_figure(schedule1: LoanSchedule, schedule2: LoanSchedule) -> go.Figure:
    """Monthly payment per loan year, one step line per loan."""
    fig = go.Figure()
    for name, schedule in (("購屋貸款", schedule1), ("抵押貸款", schedule2)):
        if not schedule.entries:
            continue
        fig.add_trace(
            go.Scatter(
                x=[entry.year for entry in schedule.entries],
                y=[entry.monthly_payment for entry in schedule.entries],
                mode="lines+markers",
                line_shape="hv",
                name=name,
                customdata=[entry.rate for entry in schedule.entries],
                hovertemplate="Y%{x}: %{y:.2f} @ %{customdata:.2f}%<extra></extra>",
            )
        )
    fig.update_layout(margin={"t": 10, "b": 10, "l": 10, "r": 10}, xaxis_title="年", yaxis_title="月付金 (萬)")
    return fig


def simulation_table_rows(result: SimulationResult) -> List[Dict[str, Any]]:
    df = result.to_frame()
    records = []
    for row in df.to_dict("records"):
        records.append(
            {
                "Year": f"Y{row['Year']}",
                "Note": row["Note"] + (" (寬限期)" if row["GracePeriod"] else ""),
                "NoteKind": row["NoteKind"],
                "Income": format_money(row["Income"]),
                "Mortgage": format_money(row["Mortgage"]),
                "Living": format_money(row["Living"]),
                "Balance": format_money(row["Balance"]),
                "Assets": format_money(row["Assets"]),
                "AssetSign": "negative" if row["Assets"] < 0 else "positive",
            }
        )
    return records


SIMULATION_COLUMNS = [
    {"name": "年度", "id": "Year"},
    {"name": "事件", "id": "Note"},
    {"name": "總收入", "id": "Income"},
    {"name": "房貸支出", "id": "Mortgage"},
    {"name": "生活支出", "id": "Living"},
    {"name": "年度結餘", "id": "Balance"},
    {"name": "累積資產", "id": "Assets"},
]
