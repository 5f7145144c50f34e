# components/input_form.py
from __future__ import annotations

from typing import Any, Dict, List

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html

from dcplanner.data_model import RISK_PRESETS, FieldDefinition, RiskLevel, ScenarioTableModel, profile_fields
from dcplanner.data_model.schema import RATE_COLUMNS


def field_id(definition: FieldDefinition) -> str:
    return f"field-{definition.field}"


def _field_control(definition: FieldDefinition):
    control_id = field_id(definition)
    if definition.kind == "select":
        return dcc.Dropdown(
            id=control_id,
            options=[{"label": str(opt), "value": opt} for opt in definition.options or []],
            value=definition.default,
            clearable=False,
        )
    if definition.kind == "number":
        return dbc.Input(
            id=control_id,
            type="number",
            value=definition.default,
            min=definition.min_value,
            max=definition.max_value,
            step=definition.step,
        )
    if definition.kind == "date":
        return dbc.Input(id=control_id, type="date", value=definition.default)
    return dbc.Input(id=control_id, type="text", value=definition.default)


def _field_block(definition: FieldDefinition):
    children = [dbc.Label(definition.label, html_for=field_id(definition)), _field_control(definition)]
    if definition.help:
        children.append(dbc.FormText(definition.help))
    return html.Div(children, className="mb-2")


def _table_config(model: ScenarioTableModel):
    columns = []
    dropdowns = {}
    for col in model.columns:
        col_def = {"name": col.label, "id": col.field}
        if col.kind == "number":
            col_def["type"] = "numeric"
        if col.kind == "select" and col.options:
            col_def["presentation"] = "dropdown"
            dropdowns[col.field] = {"options": [{"label": opt, "value": opt} for opt in col.options]}
        columns.append(col_def)
    return columns, dropdowns


def scenario_table(model: ScenarioTableModel):
    columns, dropdowns = _table_config(model)
    table = dash_table.DataTable(
        id="scenario-table",
        data=model.create_default_df().to_dict("records"),
        columns=columns,
        editable=True,
        row_deletable=True,
        dropdown=dropdowns,
        style_table={"height": "auto", "overflowX": "auto"},
        style_header={"backgroundColor": "#222", "color": "#eee", "fontWeight": "bold"},
        style_data={"backgroundColor": "#111", "color": "#eee"},
    )
    return html.Div(table, style={"maxHeight": "260px", "overflowY": "auto"})


def build_input_form(current_year: int):
    fields = profile_fields(current_year)
    model = ScenarioTableModel(current_year)
    return dbc.Card(
        [
            html.H4("Your Profile", className="card-title"),
            *[_field_block(definition) for definition in fields],
            html.Hr(),
            html.H5("DC Switch Scenarios"),
            scenario_table(model),
            dbc.Button("Add Scenario", id="add-scenario-row", color="secondary", size="sm", className="mt-2"),
        ],
        body=True,
    )


def next_scenario_row(rows: List[Dict[str, Any]], current_year: int) -> Dict[str, Any]:
    """Blank scenario row with the next free id."""
    row = ScenarioTableModel(current_year).blank_row()
    ids = [key for key in map(_row_key, rows or []) if key is not None]
    row["Id"] = max(ids, default=0) + 1
    row["Label"] = f"Scenario {row['Id']}"
    return row


def _row_key(row: Dict[str, Any]):
    try:
        return int(float(row.get("Id")))
    except (TypeError, ValueError):
        return None


def apply_risk_preset(rows: List[Dict[str, Any]], previous_rows: List[Dict[str, Any]] | None) -> List[Dict[str, Any]]:
    """Pre-fill the return columns of rows whose risk level just changed to a preset level.

    Rows are matched to their previous version by id; a row with no previous
    version counts as changed. Custom rows keep whatever rates were typed.
    Without a previous snapshot nothing has changed yet.
    """
    if previous_rows is None:
        return [dict(row) for row in rows or []]
    previous_levels = {_row_key(row): row.get("Risk Level") for row in previous_rows or []}
    updated = []
    for row in rows or []:
        row = dict(row)
        level = row.get("Risk Level")
        key = _row_key(row)
        changed = key not in previous_levels or previous_levels[key] != level
        try:
            preset = RISK_PRESETS.get(RiskLevel(level))
        except ValueError:
            preset = None
        if changed and preset:
            for column, rate in zip(RATE_COLUMNS, preset):
                row[column] = rate
        updated.append(row)
    return updated


__all__ = [
    "apply_risk_preset",
    "build_input_form",
    "field_id",
    "next_scenario_row",
    "scenario_table",
]
