from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..data_model import Scenario
from .db_track import DBTrack


@dataclass(frozen=True)
class ScenarioTrack:
    scenario: Scenario
    values: Tuple[float, ...]
    final_amount: float
    avg_return_rate: float


class ScenarioSimulator:
    """Simulates one DC switch scenario against a shared DB track.

    Before ``switch_year`` the balance mirrors the DB track. From the switch
    year on, the previous balance (the DB balance at the rollover) compounds
    at the segment's return minus the management fee and receives the
    year's contribution. After the final working year the balance is held at
    its payout value.
    """

    def __init__(self, scenario: Scenario, management_fee: float) -> None:
        self.scenario = scenario
        self.management_fee = management_fee

    def net_rate(self, year: int) -> float:
        return self.scenario.rate_for_offset(year - self.scenario.switch_year) - self.management_fee

    def run(self, years: Sequence[int], db_track: DBTrack, final_working_year: int) -> ScenarioTrack:
        values: List[float] = []
        applied_rates: List[float] = []
        final_amount = db_track.opening_balance
        for index, year in enumerate(years):
            if year > final_working_year:
                values.append(final_amount)
                continue
            if year < self.scenario.switch_year:
                value = db_track.values[index]
            else:
                previous = values[index - 1] if index else db_track.opening_balance
                rate = self.net_rate(year)
                applied_rates.append(rate)
                value = previous * (1.0 + rate / 100.0) + db_track.contributions[index]
            values.append(value)
            final_amount = value

        avg_rate = sum(applied_rates) / len(applied_rates) if applied_rates else 0.0
        return ScenarioTrack(
            scenario=self.scenario,
            values=tuple(values),
            final_amount=final_amount,
            avg_return_rate=avg_rate,
        )
