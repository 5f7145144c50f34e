import datetime

import pytest

from conftest import CURRENT_YEAR, scenario_row
from dcplanner.data_model import (
    Gender,
    RiskLevel,
    Scenario,
    default_payload,
    merge_with_defaults,
    user_input_from_payload,
    user_input_to_payload,
    validate_user_input,
)
from dcplanner.errors import InvalidInputError


def test_payload_parses_into_typed_input(payload):
    user_input = user_input_from_payload(payload)

    assert user_input.gender is Gender.FEMALE
    assert user_input.work_start_date == datetime.date(2018, 1, 1)
    assert user_input.scenarios[2].risk_level is RiskLevel.MODERATE
    assert user_input.scenarios[0].return_rates == (5.0, 5.0, 5.0)
    assert user_input.retirement_year == 2050
    assert user_input.final_working_year == 2049
    assert user_input.life_expectancy_year == 2090


def test_payload_accepts_original_korean_labels(payload):
    payload["gender"] = "남성"
    payload["scenarios"][0]["riskLevel"] = "공격형"

    user_input = user_input_from_payload(payload)

    assert user_input.gender is Gender.MALE
    assert user_input.scenarios[0].risk_level is RiskLevel.AGGRESSIVE


def test_payload_survives_conversion_back(payload):
    user_input = user_input_from_payload(payload)

    assert user_input_from_payload(user_input_to_payload(user_input)) == user_input


def test_missing_field_names_the_field(payload):
    del payload["inflationRate"]

    with pytest.raises(InvalidInputError) as excinfo:
        user_input_from_payload(payload)

    assert excinfo.value.field == "inflationRate"


def test_non_numeric_scenario_rate_names_the_scenario(payload):
    payload["scenarios"][1]["returnRates"] = [5, "lots", 5]

    with pytest.raises(InvalidInputError) as excinfo:
        user_input_from_payload(payload)

    assert excinfo.value.field == "scenarios[1].returnRates"


def test_rate_schedule_segments():
    scenario = Scenario(id=1, label="x", switch_year=2024, return_rates=(1.0, 2.0, 3.0))

    assert [scenario.rate_for_offset(k) for k in (0, 5, 6, 10, 11, 30)] == [1.0, 1.0, 2.0, 2.0, 3.0, 3.0]


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"familySize": 5}, "familySize"),
        ({"retirementAge": 100}, "retirementAge"),
        ({"retirementAge": 30}, "retirementAge"),
        ({"birthYear": CURRENT_YEAR}, "birthYear"),
        ({"currentMonthlyIncome": -1}, "currentMonthlyIncome"),
        ({"inflationRate": -0.5}, "inflationRate"),
        ({"taxRate": 120}, "taxRate"),
        ({"workStartDate": "2051-03-01"}, "workStartDate"),
        ({"scenarios": []}, "scenarios"),
        ({"scenarios": [scenario_row(1, 2023, [5, 5, 5])]}, "scenarios[0].switchYear"),
        ({"scenarios": [scenario_row(1, 2024, [5, 5])]}, "scenarios[0].returnRates"),
        ({"scenarios": [scenario_row(1, 2024, [5, -1, 5])]}, "scenarios[0].returnRates"),
        (
            {"scenarios": [scenario_row(1, 2024, [5, 5, 5]), scenario_row(1, 2025, [5, 5, 5])]},
            "scenarios[1].id",
        ),
    ],
)
def test_validation_rejects_with_offending_field(make_input, overrides, field):
    user_input = make_input(**overrides)

    with pytest.raises(InvalidInputError) as excinfo:
        validate_user_input(user_input, CURRENT_YEAR)

    assert excinfo.value.field == field


def test_zero_rates_and_single_scenario_are_valid(make_input):
    user_input = make_input(
        expectedWageGrowthRate=0,
        inflationRate=0,
        managementFee=0,
        scenarios=[scenario_row(7, 2030, [0, 0, 0])],
    )

    validate_user_input(user_input, CURRENT_YEAR)


def test_defaults_are_a_valid_input():
    user_input = user_input_from_payload(default_payload(CURRENT_YEAR))

    validate_user_input(user_input, CURRENT_YEAR)
    assert [s.switch_year for s in user_input.scenarios] == [2024, 2029, 2034, 2039]


def test_merge_fills_fields_missing_from_older_records():
    legacy = {
        "birthYear": 1985,
        "scenarios": [{"id": 1, "label": "Now", "switchYear": 2024, "returnRates": [6, 6, 6]}],
    }

    merged = merge_with_defaults(legacy, CURRENT_YEAR)

    assert merged["birthYear"] == 1985
    assert merged["inflationRate"] == 2.5
    assert merged["familySize"] == 3
    assert len(merged["scenarios"]) == 1
    assert merged["scenarios"][0]["returnRates"] == [6, 6, 6]
    assert merged["scenarios"][0]["riskLevel"] == "conservative"
    assert legacy["scenarios"][0].get("riskLevel") is None


def test_merge_without_payload_returns_defaults():
    assert merge_with_defaults(None, CURRENT_YEAR) == default_payload(CURRENT_YEAR)
