from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..data_model import UserInput
from .living_cost import annual_living_cost
from .policy import DRAWDOWN_RETURN_RATE


@dataclass(frozen=True)
class DepletionOutcome:
    final_amount_after_tax: float
    retirement_fund: float
    depletion_age: Optional[int]


def after_tax(amount: float, tax_rate: float) -> float:
    return amount * (1.0 - tax_rate / 100.0)


def analyze_depletion(
    user_input: UserInput,
    final_amount: float,
    current_year: int,
    drawdown_rate: float = DRAWDOWN_RETURN_RATE,
) -> DepletionOutcome:
    """Draw the inflated living cost from the taxed payout each retirement year.

    The payout is taxed once, other liquid assets are added, and each year
    from the retirement age up to (not including) the life expectancy the
    year's living cost is withdrawn before the remainder compounds at
    ``drawdown_rate``. The first age whose withdrawal overdraws the fund is
    the depletion age; ``None`` means the fund lasts.
    """
    taxed = after_tax(final_amount, user_input.tax_rate)
    balance = taxed + user_input.other_assets
    fund = balance
    for age in range(user_input.retirement_age, user_input.life_expectancy):
        year = user_input.birth_year + age
        balance -= annual_living_cost(user_input, year, current_year)
        if balance < 0:
            return DepletionOutcome(taxed, fund, age)
        balance *= 1.0 + drawdown_rate / 100.0
    return DepletionOutcome(taxed, fund, None)
