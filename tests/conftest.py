import copy

import pytest

from dcplanner.data_model import user_input_from_payload

CURRENT_YEAR = 2024


def scenario_row(scenario_id, switch_year, rates, risk="custom", label=None):
    return {
        "id": scenario_id,
        "label": label or f"Scenario {scenario_id}",
        "switchYear": switch_year,
        "returnRates": list(rates),
        "riskLevel": risk,
    }


BASE_PAYLOAD = {
    "nickname": "tester",
    "gender": "female",
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
    "scenarios": [
        scenario_row(1, 2024, [5, 5, 5], "conservative"),
        scenario_row(2, 2029, [5, 5, 5], "conservative"),
        scenario_row(3, 2034, [7, 7, 7], "moderate"),
        scenario_row(4, 2039, [7, 7, 7], "moderate"),
    ],
}


@pytest.fixture
def payload():
    return copy.deepcopy(BASE_PAYLOAD)


@pytest.fixture
def make_input(payload):
    def _make(**overrides):
        data = copy.deepcopy(payload)
        data.update(overrides)
        return user_input_from_payload(data)

    return _make
