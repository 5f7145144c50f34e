from .base import FieldDefinition, TableModel
from .defaults import default_payload, default_scenario_rows, merge_with_defaults
from .inputs import (
    FAMILY_SIZES,
    RISK_PRESETS,
    Gender,
    RiskLevel,
    Scenario,
    UserInput,
    user_input_from_payload,
    user_input_to_payload,
)
from .results import CalculationResult, ResultSummary, ScenarioSummary, YearlyProjection
from .schema import ScenarioTableModel, dataframe_to_scenario_rows, profile_fields
from .validation import validate_user_input

__all__ = [
    "FAMILY_SIZES",
    "RISK_PRESETS",
    "CalculationResult",
    "FieldDefinition",
    "Gender",
    "ResultSummary",
    "RiskLevel",
    "Scenario",
    "ScenarioSummary",
    "ScenarioTableModel",
    "TableModel",
    "UserInput",
    "YearlyProjection",
    "dataframe_to_scenario_rows",
    "default_payload",
    "default_scenario_rows",
    "merge_with_defaults",
    "profile_fields",
    "user_input_from_payload",
    "user_input_to_payload",
    "validate_user_input",
]
