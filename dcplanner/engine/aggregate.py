from __future__ import annotations

from typing import List, Sequence, Tuple

import pandas as pd

from ..data_model import CalculationResult, ScenarioSummary, YearlyProjection

REQUIRED_COLUMNS = {"year", "age", "dbValue"}


def build_projections(
    years: Sequence[int],
    birth_year: int,
    salaries: Sequence[float],
    living_costs: Sequence[Tuple[float, float]],
    surpluses: Sequence[float],
    db_values: Sequence[float],
    scenario_series: Sequence[Sequence[float]],
) -> Tuple[YearlyProjection, ...]:
    """Zip year-aligned series into projection rows."""
    rows: List[YearlyProjection] = []
    for index, year in enumerate(years):
        monthly_cost, annual_cost = living_costs[index]
        rows.append(
            YearlyProjection(
                year=year,
                age=year - birth_year,
                salary=salaries[index],
                monthly_living_cost=monthly_cost,
                living_cost=annual_cost,
                investable_surplus=surpluses[index],
                db_value=db_values[index],
                scenario_values=tuple(series[index] for series in scenario_series),
            )
        )
    return tuple(rows)


def _ranking_key(summary: ScenarioSummary):
    if summary.depletion_age is None:
        return (0, -summary.final_amount_after_tax, summary.id)
    return (1, -summary.depletion_age, summary.id)


def select_best_option(summaries: Sequence[ScenarioSummary]) -> ScenarioSummary:
    """Lasting funds beat depleting ones, then larger taxed payout or later depletion, then lower id."""
    if not summaries:
        raise ValueError("Cannot rank an empty scenario list.")
    return min(summaries, key=_ranking_key)


def projections_frame(result: CalculationResult) -> pd.DataFrame:
    return pd.DataFrame([row.to_dict() for row in result.projections])


def _prepare(df: pd.DataFrame) -> pd.DataFrame:
    missing = REQUIRED_COLUMNS.difference(df.columns)
    if missing:
        raise KeyError(f"Missing required columns: {', '.join(sorted(missing))}")
    return df.sort_values("year").reset_index(drop=True)


def aggregate_period(df: pd.DataFrame, step: int = 1) -> pd.DataFrame:
    """Sample the yearly projection every ``step`` years, always keeping the last row."""
    if df.empty:
        return df

    step = max(1, int(step or 1))
    df = _prepare(df)
    df["Period"] = df["year"].astype(str)
    if step == 1:
        return df

    keep = (df.index % step == 0) | (df.index == df.index[-1])
    return df.loc[keep].reset_index(drop=True)
