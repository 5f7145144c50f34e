# components/results.py
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html

from dcplanner.data_model import CalculationResult, ScenarioSummary
from dcplanner.engine.aggregate import aggregate_period, projections_frame

TABLE_COLUMNS = [
    ("year", "Year"),
    ("age", "Age"),
    ("salary", "Salary"),
    ("livingCost", "Living Cost"),
    ("investableSurplus", "Surplus"),
    ("dbValue", "DB"),
]


def _money(value: float) -> str:
    return f"{value:,.0f}"


def _depletion_text(summary: ScenarioSummary) -> str:
    if summary.depletion_age is None:
        return "Lasts past life expectancy"
    return f"Runs out at age {summary.depletion_age}"


def _scenario_card(summary: ScenarioSummary, is_best: bool):
    header = [summary.label or f"Scenario {summary.id}"]
    if is_best:
        header.append(dbc.Badge("Best", color="success", className="ms-2"))
    return dbc.Card(
        [
            dbc.CardHeader(header),
            dbc.CardBody(
                [
                    html.P(f"Switch in {summary.switch_year} ({summary.risk_level.value})", className="mb-1"),
                    html.P(f"Payout {_money(summary.final_amount)} / after tax {_money(summary.final_amount_after_tax)}", className="mb-1"),
                    html.P(f"Average net return {summary.avg_return_rate:.2f}%", className="mb-1"),
                    html.P(_depletion_text(summary), className="mb-0"),
                ]
            ),
        ],
        color="success" if is_best else None,
        outline=True,
        className="h-100",
    )


def build_summary_cards(result: CalculationResult):
    summary = result.summary
    overview = dbc.Alert(
        [
            html.Strong(f"Stay in DB: {_money(summary.final_db)} "),
            f"(after tax {_money(summary.final_db_after_tax)}) at the end of {summary.final_year}, "
            f"{summary.total_years_worked:.1f} years of service, "
            f"{summary.post_retirement_years} years in retirement.",
        ],
        color="info",
    )
    cards = dbc.Row(
        [
            dbc.Col(_scenario_card(s, s.id == summary.best_option_id), md=6, lg=3, className="mb-3")
            for s in summary.scenarios
        ]
    )
    return html.Div([overview, cards])


def build_balance_figure(result: CalculationResult) -> dict:
    years = [row.year for row in result.projections]
    traces = [
        {
            "type": "scatter",
            "mode": "lines",
            "name": "DB (stay)",
            "x": years,
            "y": [row.db_value for row in result.projections],
            "line": {"dash": "dash"},
        }
    ]
    for index, scenario in enumerate(result.summary.scenarios):
        traces.append(
            {
                "type": "scatter",
                "mode": "lines",
                "name": scenario.label or f"Scenario {scenario.id}",
                "x": years,
                "y": [row.scenario_value(index) for row in result.projections],
            }
        )
    return {
        "data": traces,
        "layout": {
            "template": "plotly_dark",
            "xaxis": {"title": "Year"},
            "yaxis": {"title": "Balance (10k KRW)"},
            "legend": {"orientation": "h"},
            "margin": {"l": 60, "r": 20, "t": 30, "b": 40},
        },
    }


def build_projection_table(result: CalculationResult, step: int = 5):
    df = aggregate_period(projections_frame(result), step=step)
    columns = [{"name": label, "id": field, "type": "numeric"} for field, label in TABLE_COLUMNS]
    for index, scenario in enumerate(result.summary.scenarios, start=1):
        columns.append({"name": scenario.label or f"Scenario {index}", "id": f"scenario{index}Value", "type": "numeric"})
    money_fields = [c["id"] for c in columns if c["id"] not in {"year", "age"}]
    df[money_fields] = df[money_fields].round(0)
    return dash_table.DataTable(
        data=df.to_dict("records"),
        columns=columns,
        style_table={"overflowX": "auto"},
        style_header={"backgroundColor": "#222", "color": "#eee", "fontWeight": "bold"},
        style_data={"backgroundColor": "#111", "color": "#eee"},
    )


def build_results(result: CalculationResult):
    return html.Div(
        [
            build_summary_cards(result),
            dcc.Graph(figure=build_balance_figure(result)),
            html.H5("Projection (every 5 years)", className="mt-3"),
            build_projection_table(result),
        ]
    )


__all__ = [
    "build_balance_figure",
    "build_projection_table",
    "build_results",
    "build_summary_cards",
]
