"""Dash front end: edit the profile and scenarios, see the projection update."""
from __future__ import annotations

import datetime
import logging

import dash
import dash_bootstrap_components as dbc
import pandas as pd
from dash import Input, Output, State, ctx, html

from components.input_form import apply_risk_preset, build_input_form, field_id, next_scenario_row
from components.results import build_results
from dcplanner.config import load_config
from dcplanner.data_model import dataframe_to_scenario_rows, profile_fields, user_input_from_payload
from dcplanner.engine import calculate_projections
from dcplanner.engine.share import encode_share
from dcplanner.errors import InvalidInputError
from dcplanner.logging_config import setup_logging

logger = logging.getLogger(__name__)

CURRENT_YEAR = datetime.date.today().year
PROFILE_FIELDS = profile_fields(CURRENT_YEAR)

app = dash.Dash(__name__, external_stylesheets=[dbc.themes.DARKLY])
app.title = "When should I switch to DC?"

app.layout = dbc.Container(
    [
        html.H2("When should I switch to DC?", className="my-3"),
        dbc.Row(
            [
                dbc.Col(build_input_form(CURRENT_YEAR), md=4),
                dbc.Col(
                    [
                        html.Div(id="results"),
                        html.Hr(),
                        dbc.Label("Share token"),
                        html.Pre(id="share-token", style={"whiteSpace": "pre-wrap", "wordBreak": "break-all"}),
                    ],
                    md=8,
                ),
            ]
        ),
    ],
    fluid=True,
)


def build_payload(field_values, table_rows) -> dict:
    payload = {definition.field: value for definition, value in zip(PROFILE_FIELDS, field_values)}
    payload["scenarios"] = dataframe_to_scenario_rows(pd.DataFrame(table_rows or []))
    return payload


@app.callback(
    Output("scenario-table", "data"),
    Input("add-scenario-row", "n_clicks"),
    Input("scenario-table", "data_timestamp"),
    State("scenario-table", "data"),
    State("scenario-table", "data_previous"),
    prevent_initial_call=True,
)
def update_scenario_rows(_clicks, _edited_at, rows, previous_rows):
    rows = list(rows or [])
    if ctx.triggered_id == "add-scenario-row":
        rows.append(next_scenario_row(rows, CURRENT_YEAR))
        return rows
    updated = apply_risk_preset(rows, previous_rows)
    if updated == rows:
        return dash.no_update
    return updated


@app.callback(
    Output("results", "children"),
    Output("share-token", "children"),
    *[Input(field_id(definition), "value") for definition in PROFILE_FIELDS],
    Input("scenario-table", "data"),
)
def recompute(*args):
    *field_values, table_rows = args
    payload = build_payload(field_values, table_rows)
    try:
        result = calculate_projections(user_input_from_payload(payload), CURRENT_YEAR)
    except InvalidInputError as exc:
        logger.info("Waiting for valid input: %s", exc)
        return dbc.Alert(f"Check '{exc.field}': {exc.message}", color="danger"), ""
    return build_results(result), encode_share(payload)


if __name__ == "__main__":
    cfg = load_config()
    setup_logging(cfg.log_level)
    app.run(debug=cfg.debug, port=cfg.port + 50)
