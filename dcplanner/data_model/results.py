from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .inputs import RiskLevel

NEVER_DEPLETES_LABEL = "never"


@dataclass(frozen=True)
class YearlyProjection:
    year: int
    age: int
    salary: float
    monthly_living_cost: float
    living_cost: float
    investable_surplus: float
    db_value: float
    scenario_values: Tuple[float, ...]

    def scenario_value(self, index: int) -> float:
        return self.scenario_values[index]

    def to_dict(self) -> Dict[str, Any]:
        row = {
            "year": self.year,
            "age": self.age,
            "salary": self.salary,
            "monthlyLivingCost": self.monthly_living_cost,
            "livingCost": self.living_cost,
            "investableSurplus": self.investable_surplus,
            "dbValue": self.db_value,
        }
        for index, value in enumerate(self.scenario_values, start=1):
            row[f"scenario{index}Value"] = value
        return row


@dataclass(frozen=True)
class ScenarioSummary:
    id: int
    label: str
    final_amount: float
    final_amount_after_tax: float
    avg_return_rate: float
    switch_year: int
    risk_level: RiskLevel
    depletion_age: Optional[int]  # None: the fund outlives life expectancy

    @property
    def depletes(self) -> bool:
        return self.depletion_age is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "finalAmount": self.final_amount,
            "finalAmountAfterTax": self.final_amount_after_tax,
            "avgReturnRate": self.avg_return_rate,
            "switchYear": self.switch_year,
            "riskLevel": self.risk_level.value,
            "depletionAge": self.depletion_age if self.depletes else NEVER_DEPLETES_LABEL,
        }


@dataclass(frozen=True)
class ResultSummary:
    final_year: int
    total_years_worked: float
    final_salary: float
    final_db: float
    final_db_after_tax: float
    total_invested_surplus: float
    post_retirement_years: int
    scenarios: Tuple[ScenarioSummary, ...]
    best_option_id: int
    best_option: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "finalYear": self.final_year,
            "totalYearsWorked": self.total_years_worked,
            "finalSalary": self.final_salary,
            "finalDB": self.final_db,
            "finalDBAfterTax": self.final_db_after_tax,
            "totalInvestedSurplus": self.total_invested_surplus,
            "postRetirementYears": self.post_retirement_years,
            "scenarios": [s.to_dict() for s in self.scenarios],
            "bestOptionId": self.best_option_id,
            "bestOption": self.best_option,
        }


@dataclass(frozen=True)
class CalculationResult:
    projections: Tuple[YearlyProjection, ...]
    summary: ResultSummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projections": [row.to_dict() for row in self.projections],
            "summary": self.summary.to_dict(),
        }
