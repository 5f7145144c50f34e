from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from .base import FieldDefinition, TableModel
from .defaults import default_payload, default_scenario_rows
from .inputs import FAMILY_SIZES, Gender, RiskLevel

RISK_LEVEL_OPTIONS = [level.value for level in RiskLevel]
GENDER_OPTIONS = [gender.value for gender in Gender]

RATE_COLUMNS = ("Return 0-5y (%)", "Return 6-10y (%)", "Return 11y+ (%)")


def profile_fields(current_year: int) -> List[FieldDefinition]:
    """Form fields for the personal profile, keyed by payload name."""
    defaults = default_payload(current_year)
    return [
        FieldDefinition("nickname", "Nickname", default=defaults["nickname"]),
        FieldDefinition("gender", "Gender", kind="select", default=defaults["gender"], options=GENDER_OPTIONS),
        FieldDefinition(
            "birthYear",
            "Birth Year",
            kind="number",
            default=defaults["birthYear"],
            min_value=1900,
            max_value=current_year - 1,
            step=1,
        ),
        FieldDefinition("workStartDate", "Work Start Date", kind="date", default=defaults["workStartDate"]),
        FieldDefinition(
            "currentMonthlyIncome",
            "Monthly Income (10k KRW)",
            kind="number",
            default=defaults["currentMonthlyIncome"],
            min_value=0.0,
            step=10.0,
        ),
        FieldDefinition("retirementAge", "Retirement Age", kind="number", default=defaults["retirementAge"], min_value=1, step=1),
        FieldDefinition("lifeExpectancy", "Life Expectancy", kind="number", default=defaults["lifeExpectancy"], min_value=1, step=1),
        FieldDefinition(
            "expectedWageGrowthRate",
            "Wage Growth (%/yr)",
            kind="number",
            default=defaults["expectedWageGrowthRate"],
            min_value=0.0,
            step=0.1,
        ),
        FieldDefinition(
            "currentEstimatedSeverance",
            "Current DB Balance (10k KRW)",
            kind="number",
            default=defaults["currentEstimatedSeverance"],
            min_value=0.0,
            step=100.0,
            help="0 = estimate from service years",
        ),
        FieldDefinition("otherAssets", "Other Assets (10k KRW)", kind="number", default=defaults["otherAssets"], min_value=0.0, step=100.0),
        FieldDefinition("managementFee", "Management Fee (%)", kind="number", default=defaults["managementFee"], min_value=0.0, max_value=100.0, step=0.05),
        FieldDefinition("taxRate", "Payout Tax (%)", kind="number", default=defaults["taxRate"], min_value=0.0, max_value=100.0, step=0.1),
        FieldDefinition("inflationRate", "Inflation (%/yr)", kind="number", default=defaults["inflationRate"], min_value=0.0, step=0.1),
        FieldDefinition("familySize", "Household Size", kind="select", default=defaults["familySize"], options=list(FAMILY_SIZES)),
    ]


class ScenarioTableModel(TableModel):
    """Schema + defaults for the editable scenario table."""

    def __init__(self, current_year: int) -> None:
        columns = [
            FieldDefinition("Id", "Id", kind="number", default=0, min_value=1, step=1),
            FieldDefinition("Label", "Label"),
            FieldDefinition("Switch Year", "Switch Year", kind="number", default=current_year, min_value=current_year, step=1),
            FieldDefinition(RATE_COLUMNS[0], RATE_COLUMNS[0], kind="number", default=5.0, min_value=0.0, step=0.5),
            FieldDefinition(RATE_COLUMNS[1], RATE_COLUMNS[1], kind="number", default=5.0, min_value=0.0, step=0.5),
            FieldDefinition(RATE_COLUMNS[2], RATE_COLUMNS[2], kind="number", default=5.0, min_value=0.0, step=0.5),
            FieldDefinition(
                "Risk Level",
                "Risk Level",
                kind="select",
                default=RiskLevel.CUSTOM.value,
                options=RISK_LEVEL_OPTIONS,
                help="label only; does not change the math",
            ),
        ]
        super().__init__("scenarios", columns, scenario_rows_to_table(default_scenario_rows(current_year)))


def scenario_rows_to_table(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    table = []
    for row in rows:
        rates = list(row.get("returnRates") or [])
        table.append(
            {
                "Id": row.get("id"),
                "Label": row.get("label", ""),
                "Switch Year": row.get("switchYear"),
                **{col: (rates[i] if i < len(rates) else None) for i, col in enumerate(RATE_COLUMNS)},
                "Risk Level": row.get("riskLevel", RiskLevel.CUSTOM.value),
            }
        )
    return table


def dataframe_to_scenario_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Convert edited table rows back to payload scenario rows.

    Rows without an id are skipped; blank cells are passed through as
    ``None`` so validation can name the missing field.
    """
    rows: List[Dict[str, Any]] = []
    for record in df.to_dict("records"):
        raw_id = record.get("Id")
        if raw_id is None or pd.isna(raw_id) or str(raw_id).strip() == "":
            continue
        rates = []
        for col in RATE_COLUMNS:
            value = record.get(col)
            rates.append(None if value is None or pd.isna(value) else value)
        rows.append(
            {
                "id": raw_id,
                "label": str(record.get("Label") or "").strip(),
                "switchYear": record.get("Switch Year"),
                "returnRates": rates,
                "riskLevel": record.get("Risk Level") or RiskLevel.CUSTOM.value,
            }
        )
    return rows
