from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping

from .inputs import RISK_PRESETS, RiskLevel


def default_scenario_rows(current_year: int) -> List[Dict[str, Any]]:
    return [
        {
            "id": 1,
            "label": "Switch now",
            "switchYear": current_year,
            "returnRates": list(RISK_PRESETS[RiskLevel.CONSERVATIVE]),
            "riskLevel": RiskLevel.CONSERVATIVE.value,
        },
        {
            "id": 2,
            "label": "Switch in 5 years",
            "switchYear": current_year + 5,
            "returnRates": list(RISK_PRESETS[RiskLevel.CONSERVATIVE]),
            "riskLevel": RiskLevel.CONSERVATIVE.value,
        },
        {
            "id": 3,
            "label": "Switch in 10 years",
            "switchYear": current_year + 10,
            "returnRates": list(RISK_PRESETS[RiskLevel.MODERATE]),
            "riskLevel": RiskLevel.MODERATE.value,
        },
        {
            "id": 4,
            "label": "Switch in 15 years",
            "switchYear": current_year + 15,
            "returnRates": list(RISK_PRESETS[RiskLevel.MODERATE]),
            "riskLevel": RiskLevel.MODERATE.value,
        },
    ]


def default_payload(current_year: int) -> Dict[str, Any]:
    return {
        "nickname": "",
        "gender": "male",
        "birthYear": 1990,
        "workStartDate": "2018-01-01",
        "currentMonthlyIncome": 450.0,
        "retirementAge": 60,
        "lifeExpectancy": 100,
        "expectedWageGrowthRate": 3.5,
        "currentEstimatedSeverance": 0.0,
        "otherAssets": 0.0,
        "managementFee": 0.5,
        "taxRate": 3.3,
        "inflationRate": 2.5,
        "familySize": 3,
        "scenarios": default_scenario_rows(current_year),
    }


def merge_with_defaults(payload: Mapping[str, Any] | None, current_year: int) -> Dict[str, Any]:
    """Fill fields missing from an older saved or shared record.

    Top-level keys are merged shallowly; a ``scenarios`` list that is present
    replaces the default list, but each row inherits missing keys from the
    default row at the same position (or from the last default row).
    """
    merged = default_payload(current_year)
    if not payload:
        return merged
    defaults_rows = merged["scenarios"]
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = copy.deepcopy(value)
    rows = merged.get("scenarios")
    if isinstance(rows, list) and rows is not defaults_rows:
        filled = []
        for index, row in enumerate(rows):
            if not isinstance(row, Mapping):
                filled.append(row)
                continue
            base = dict(defaults_rows[min(index, len(defaults_rows) - 1)])
            base.update({k: v for k, v in row.items() if v is not None})
            filled.append(base)
        merged["scenarios"] = filled
    return merged
