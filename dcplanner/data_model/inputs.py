from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Tuple

from ..errors import InvalidInputError

RETURN_SEGMENTS = 3
FAMILY_SIZES = (2, 3, 4)


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class RiskLevel(str, Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"
    CUSTOM = "custom"


# Labels used by the original Korean web form; shared links may still carry them.
_GENDER_ALIASES = {"남성": Gender.MALE, "여성": Gender.FEMALE}
_RISK_ALIASES = {
    "안정형": RiskLevel.CONSERVATIVE,
    "중립형": RiskLevel.MODERATE,
    "공격형": RiskLevel.AGGRESSIVE,
    "직접설정": RiskLevel.CUSTOM,
}

# Pre-filled return schedules (%/yr for years 0-5, 6-10, 11+ after the switch).
RISK_PRESETS: Dict[RiskLevel, Tuple[float, float, float]] = {
    RiskLevel.CONSERVATIVE: (5.0, 5.0, 5.0),
    RiskLevel.MODERATE: (7.0, 7.0, 7.0),
    RiskLevel.AGGRESSIVE: (10.0, 9.0, 8.0),
}


@dataclass(frozen=True)
class Scenario:
    id: int
    label: str
    switch_year: int
    return_rates: Tuple[float, ...]
    risk_level: RiskLevel = RiskLevel.CUSTOM

    def rate_for_offset(self, years_since_switch: int) -> float:
        """Annual gross return (%) for the given 0-based year since the switch."""
        if years_since_switch <= 5:
            return self.return_rates[0]
        if years_since_switch <= 10:
            return self.return_rates[1]
        return self.return_rates[2]


@dataclass(frozen=True)
class UserInput:
    nickname: str
    gender: Gender
    birth_year: int
    work_start_date: datetime.date
    current_monthly_income: float
    retirement_age: int
    life_expectancy: int
    expected_wage_growth_rate: float
    current_estimated_severance: float
    other_assets: float
    management_fee: float
    tax_rate: float
    inflation_rate: float
    family_size: int
    scenarios: Tuple[Scenario, ...] = field(default_factory=tuple)

    @property
    def retirement_year(self) -> int:
        return self.birth_year + self.retirement_age

    @property
    def final_working_year(self) -> int:
        return self.retirement_year - 1

    @property
    def life_expectancy_year(self) -> int:
        return self.birth_year + self.life_expectancy


def _require(payload: Mapping[str, Any], key: str, prefix: str = "") -> Any:
    value = payload.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidInputError(f"{prefix}{key}", "is required")
    return value


def _as_float(payload: Mapping[str, Any], key: str, prefix: str = "") -> float:
    raw = _require(payload, key, prefix)
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{prefix}{key}", f"expected a number, got {raw!r}") from None


def _as_int(payload: Mapping[str, Any], key: str, prefix: str = "") -> int:
    value = _as_float(payload, key, prefix)
    if not value.is_integer():
        raise InvalidInputError(f"{prefix}{key}", f"expected a whole number, got {value!r}")
    return int(value)


def _as_date(payload: Mapping[str, Any], key: str) -> datetime.date:
    raw = _require(payload, key)
    if isinstance(raw, datetime.date):
        return raw
    try:
        return datetime.date.fromisoformat(str(raw).strip()[:10])
    except ValueError:
        raise InvalidInputError(key, f"expected an ISO date (YYYY-MM-DD), got {raw!r}") from None


def parse_gender(raw: Any) -> Gender:
    if isinstance(raw, Gender):
        return raw
    text = str(raw).strip()
    if text in _GENDER_ALIASES:
        return _GENDER_ALIASES[text]
    try:
        return Gender(text.lower())
    except ValueError:
        raise InvalidInputError("gender", f"unknown gender {raw!r}") from None


def parse_risk_level(raw: Any, field_name: str = "riskLevel") -> RiskLevel:
    if isinstance(raw, RiskLevel):
        return raw
    text = str(raw).strip()
    if text in _RISK_ALIASES:
        return _RISK_ALIASES[text]
    try:
        return RiskLevel(text.lower())
    except ValueError:
        raise InvalidInputError(field_name, f"unknown risk level {raw!r}") from None


def scenario_from_payload(row: Mapping[str, Any], index: int) -> Scenario:
    prefix = f"scenarios[{index}]."
    if not isinstance(row, Mapping):
        raise InvalidInputError(f"scenarios[{index}]", "expected an object")
    rates_raw = _require(row, "returnRates", prefix)
    if isinstance(rates_raw, (str, bytes)) or not hasattr(rates_raw, "__iter__"):
        raise InvalidInputError(f"{prefix}returnRates", "expected a list of rates")
    rates: List[float] = []
    for rate in rates_raw:
        try:
            rates.append(float(rate))
        except (TypeError, ValueError):
            raise InvalidInputError(f"{prefix}returnRates", f"expected numbers, got {rate!r}") from None
    risk_raw = row.get("riskLevel") or RiskLevel.CUSTOM
    return Scenario(
        id=_as_int(row, "id", prefix),
        label=str(row.get("label") or "").strip(),
        switch_year=_as_int(row, "switchYear", prefix),
        return_rates=tuple(rates),
        risk_level=parse_risk_level(risk_raw, f"{prefix}riskLevel"),
    )


def user_input_from_payload(payload: Mapping[str, Any]) -> UserInput:
    """Build a ``UserInput`` from the camelCase record used by the web form.

    The payload is expected to be fully populated; call
    ``merge_with_defaults`` first for records restored from storage or a
    share link.
    """
    if not isinstance(payload, Mapping):
        raise InvalidInputError("payload", "expected an object")
    scenario_rows = _require(payload, "scenarios")
    if not isinstance(scenario_rows, (list, tuple)):
        raise InvalidInputError("scenarios", "expected a list")
    return UserInput(
        nickname=str(payload.get("nickname") or "").strip(),
        gender=parse_gender(_require(payload, "gender")),
        birth_year=_as_int(payload, "birthYear"),
        work_start_date=_as_date(payload, "workStartDate"),
        current_monthly_income=_as_float(payload, "currentMonthlyIncome"),
        retirement_age=_as_int(payload, "retirementAge"),
        life_expectancy=_as_int(payload, "lifeExpectancy"),
        expected_wage_growth_rate=_as_float(payload, "expectedWageGrowthRate"),
        current_estimated_severance=_as_float(payload, "currentEstimatedSeverance"),
        other_assets=_as_float(payload, "otherAssets"),
        management_fee=_as_float(payload, "managementFee"),
        tax_rate=_as_float(payload, "taxRate"),
        inflation_rate=_as_float(payload, "inflationRate"),
        family_size=_as_int(payload, "familySize"),
        scenarios=tuple(scenario_from_payload(row, i) for i, row in enumerate(scenario_rows)),
    )


def scenario_to_payload(scenario: Scenario) -> Dict[str, Any]:
    return {
        "id": scenario.id,
        "label": scenario.label,
        "switchYear": scenario.switch_year,
        "returnRates": list(scenario.return_rates),
        "riskLevel": scenario.risk_level.value,
    }


def user_input_to_payload(user_input: UserInput) -> Dict[str, Any]:
    return {
        "nickname": user_input.nickname,
        "gender": user_input.gender.value,
        "birthYear": user_input.birth_year,
        "workStartDate": user_input.work_start_date.isoformat(),
        "currentMonthlyIncome": user_input.current_monthly_income,
        "retirementAge": user_input.retirement_age,
        "lifeExpectancy": user_input.life_expectancy,
        "expectedWageGrowthRate": user_input.expected_wage_growth_rate,
        "currentEstimatedSeverance": user_input.current_estimated_severance,
        "otherAssets": user_input.other_assets,
        "managementFee": user_input.management_fee,
        "taxRate": user_input.tax_rate,
        "inflationRate": user_input.inflation_rate,
        "familySize": user_input.family_size,
        "scenarios": [scenario_to_payload(s) for s in user_input.scenarios],
    }
