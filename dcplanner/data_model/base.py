from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

import pandas as pd


@dataclass
class FieldDefinition:
    """Lightweight schema descriptor shared by the REST schema and the dashboard form."""

    field: str
    label: str
    kind: str = "text"  # text | number | select | date
    default: Any = ""
    options: List[Any] | None = None
    min_value: float | None = None
    max_value: float | None = None
    step: float | None = None
    help: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "label": self.label,
            "kind": self.kind,
            "default": self.default,
            "options": self.options or [],
            "min": self.min_value,
            "max": self.max_value,
            "step": self.step,
            "help": self.help,
        }


@dataclass
class TableModel:
    """Container for a table schema plus default rows."""

    name: str
    columns: List[FieldDefinition]
    default_rows: List[dict[str, Any]] = field(default_factory=list)

    def create_default_df(self) -> pd.DataFrame:
        if self.default_rows:
            return pd.DataFrame(self.default_rows)
        seed = {col.field: col.default for col in self.columns}
        return pd.DataFrame([seed])

    def blank_row(self) -> dict[str, Any]:
        return {col.field: col.default for col in self.columns}
