from __future__ import annotations

import math

from ..errors import InvalidInputError
from .inputs import FAMILY_SIZES, RETURN_SEGMENTS, Gender, RiskLevel, Scenario, UserInput

_NON_NEGATIVE_FIELDS = (
    ("currentMonthlyIncome", "current_monthly_income"),
    ("expectedWageGrowthRate", "expected_wage_growth_rate"),
    ("currentEstimatedSeverance", "current_estimated_severance"),
    ("otherAssets", "other_assets"),
    ("managementFee", "management_fee"),
    ("taxRate", "tax_rate"),
    ("inflationRate", "inflation_rate"),
)

_PERCENT_CAPPED_FIELDS = (
    ("managementFee", "management_fee"),
    ("taxRate", "tax_rate"),
)


def _check_finite(field: str, value: float) -> None:
    if not math.isfinite(value):
        raise InvalidInputError(field, f"must be a finite number, got {value!r}")


def _validate_scenario(scenario: Scenario, index: int, current_year: int) -> None:
    prefix = f"scenarios[{index}]."
    if len(scenario.return_rates) != RETURN_SEGMENTS:
        raise InvalidInputError(
            f"{prefix}returnRates",
            f"expected {RETURN_SEGMENTS} rates (years 0-5, 6-10, 11+), got {len(scenario.return_rates)}",
        )
    for rate in scenario.return_rates:
        _check_finite(f"{prefix}returnRates", rate)
        if rate < 0:
            raise InvalidInputError(f"{prefix}returnRates", f"rates must be non-negative, got {rate}")
    if scenario.switch_year < current_year:
        raise InvalidInputError(
            f"{prefix}switchYear",
            f"switch year {scenario.switch_year} is before the current year {current_year}",
        )
    if not isinstance(scenario.risk_level, RiskLevel):
        raise InvalidInputError(f"{prefix}riskLevel", f"unknown risk level {scenario.risk_level!r}")


def validate_user_input(user_input: UserInput, current_year: int) -> None:
    """Raise ``InvalidInputError`` for the first structural problem found."""
    if not isinstance(user_input.gender, Gender):
        raise InvalidInputError("gender", f"unknown gender {user_input.gender!r}")
    if user_input.birth_year >= current_year:
        raise InvalidInputError("birthYear", f"must be before {current_year}, got {user_input.birth_year}")

    for field, attr in _NON_NEGATIVE_FIELDS:
        value = getattr(user_input, attr)
        _check_finite(field, value)
        if value < 0:
            raise InvalidInputError(field, f"must be non-negative, got {value}")
    for field, attr in _PERCENT_CAPPED_FIELDS:
        value = getattr(user_input, attr)
        if value > 100:
            raise InvalidInputError(field, f"must not exceed 100%, got {value}")

    if user_input.family_size not in FAMILY_SIZES:
        raise InvalidInputError("familySize", f"must be one of {FAMILY_SIZES}, got {user_input.family_size}")
    if user_input.retirement_age <= 0:
        raise InvalidInputError("retirementAge", f"must be positive, got {user_input.retirement_age}")
    if user_input.retirement_age >= user_input.life_expectancy:
        raise InvalidInputError(
            "retirementAge",
            f"must be below life expectancy ({user_input.retirement_age} >= {user_input.life_expectancy})",
        )
    if user_input.retirement_year <= current_year:
        raise InvalidInputError(
            "retirementAge",
            f"retirement in {user_input.retirement_year} leaves no working years after {current_year}",
        )

    start_year = user_input.work_start_date.year
    if start_year < user_input.birth_year:
        raise InvalidInputError("workStartDate", "work cannot start before the birth year")
    if start_year >= user_input.retirement_year:
        raise InvalidInputError("workStartDate", f"work must start before retirement in {user_input.retirement_year}")

    if not user_input.scenarios:
        raise InvalidInputError("scenarios", "at least one scenario is required")
    seen_ids = set()
    for index, scenario in enumerate(user_input.scenarios):
        if scenario.id in seen_ids:
            raise InvalidInputError(f"scenarios[{index}].id", f"duplicate scenario id {scenario.id}")
        seen_ids.add(scenario.id)
        _validate_scenario(scenario, index, current_year)
