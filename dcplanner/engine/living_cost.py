from __future__ import annotations

from typing import List, Sequence, Tuple

from ..data_model import UserInput
from .policy import BASE_MONTHLY_LIVING_COST


def monthly_living_cost(user_input: UserInput, year: int, current_year: int) -> float:
    base = BASE_MONTHLY_LIVING_COST[user_input.family_size]
    return base * (1.0 + user_input.inflation_rate / 100.0) ** (year - current_year)


def annual_living_cost(user_input: UserInput, year: int, current_year: int) -> float:
    return monthly_living_cost(user_input, year, current_year) * 12.0


def living_cost_path(user_input: UserInput, years: Sequence[int], current_year: int) -> List[Tuple[float, float]]:
    """(monthly, annual) living cost per year; no retirement discount."""
    path = []
    for year in years:
        monthly = monthly_living_cost(user_input, year, current_year)
        path.append((monthly, monthly * 12.0))
    return path
