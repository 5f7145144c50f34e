from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from ..data_model import UserInput
from .policy import DB_AVERAGE_WINDOW_YEARS
from .salary import is_working_year, monthly_salary


@dataclass(frozen=True)
class DBTrack:
    """Year-aligned DB severance balances plus the matching yearly accrual.

    ``opening_balance`` is the balance at the end of the year before the
    first projected year; ``contributions`` is what a DC account would be
    credited for the same year of service.
    """

    opening_balance: float
    values: Tuple[float, ...]
    contributions: Tuple[float, ...]


def service_years(user_input: UserInput, year: int) -> float:
    """Years of service completed by the end of ``year``; the start year counts by month."""
    start = user_input.work_start_date
    if year < start.year:
        return 0.0
    service_end = min(year, user_input.final_working_year)
    return (service_end - start.year) + (13 - start.month) / 12.0


def trailing_average_monthly_salary(user_input: UserInput, year: int, current_year: int) -> float:
    first = max(user_input.work_start_date.year, year - DB_AVERAGE_WINDOW_YEARS + 1)
    window = range(first, year + 1)
    if not window:
        return 0.0
    return sum(monthly_salary(user_input, y, current_year) for y in window) / len(window)


def accrued_severance(user_input: UserInput, year: int, current_year: int) -> float:
    if year < user_input.work_start_date.year:
        return 0.0
    return service_years(user_input, year) * trailing_average_monthly_salary(user_input, year, current_year)


def yearly_contribution(user_input: UserInput, year: int, current_year: int) -> float:
    if not is_working_year(user_input, year):
        return 0.0
    accrued_months = service_years(user_input, year) - service_years(user_input, year - 1)
    return monthly_salary(user_input, year, current_year) * accrued_months


def build_db_track(user_input: UserInput, years: Sequence[int], current_year: int) -> DBTrack:
    baseline = accrued_severance(user_input, current_year - 1, current_year)
    if user_input.current_estimated_severance > 0:
        opening = user_input.current_estimated_severance
    else:
        opening = baseline

    values = []
    contributions = []
    balance = opening
    for year in years:
        if year <= user_input.final_working_year:
            balance = opening + accrued_severance(user_input, year, current_year) - baseline
            contributions.append(yearly_contribution(user_input, year, current_year))
        else:
            contributions.append(0.0)
        values.append(balance)
    return DBTrack(opening_balance=opening, values=tuple(values), contributions=tuple(contributions))
