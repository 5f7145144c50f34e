from __future__ import annotations

from typing import List, Sequence

from ..data_model import UserInput


def is_working_year(user_input: UserInput, year: int) -> bool:
    return user_input.work_start_date.year <= year <= user_input.final_working_year


def monthly_salary(user_input: UserInput, year: int, current_year: int) -> float:
    """Nominal monthly pay compounded from the current-year income.

    Years before ``current_year`` are back-projected with the same growth
    rate, which the DB trailing average needs.
    """
    growth = 1.0 + user_input.expected_wage_growth_rate / 100.0
    return user_input.current_monthly_income * growth ** (year - current_year)


def annual_salary(user_input: UserInput, year: int, current_year: int) -> float:
    if not is_working_year(user_input, year):
        return 0.0
    return monthly_salary(user_input, year, current_year) * 12.0


def salary_path(user_input: UserInput, years: Sequence[int], current_year: int) -> List[float]:
    return [annual_salary(user_input, year, current_year) for year in years]
