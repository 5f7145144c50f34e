"""Projection engine: DB severance versus DC switch scenarios.

``calculate_projections`` is pure. It validates the input, projects salary,
living cost and the DB balance for every year from the current year through
the life-expectancy year, simulates each switch scenario, runs the retirement
drawdown and ranks the scenarios.
"""
from __future__ import annotations

import datetime
import logging
from typing import Optional

from ..data_model import CalculationResult, ResultSummary, ScenarioSummary, UserInput, validate_user_input
from .aggregate import build_projections, select_best_option
from .db_track import build_db_track, service_years
from .depletion import after_tax, analyze_depletion
from .living_cost import living_cost_path
from .salary import salary_path
from .scenario import ScenarioSimulator

logger = logging.getLogger(__name__)


def calculate_projections(user_input: UserInput, current_year: Optional[int] = None) -> CalculationResult:
    if current_year is None:
        current_year = datetime.date.today().year
    validate_user_input(user_input, current_year)

    years = list(range(current_year, user_input.life_expectancy_year + 1))
    final_year = user_input.final_working_year
    final_index = final_year - current_year

    salaries = salary_path(user_input, years, current_year)
    living_costs = living_cost_path(user_input, years, current_year)
    db_track = build_db_track(user_input, years, current_year)
    surpluses = [
        max(0.0, salaries[i] - living_costs[i][1] - db_track.contributions[i]) for i in range(len(years))
    ]

    tracks = [
        ScenarioSimulator(scenario, user_input.management_fee).run(years, db_track, final_year)
        for scenario in user_input.scenarios
    ]

    summaries = []
    for track in tracks:
        outcome = analyze_depletion(user_input, track.final_amount, current_year)
        summaries.append(
            ScenarioSummary(
                id=track.scenario.id,
                label=track.scenario.label,
                final_amount=track.final_amount,
                final_amount_after_tax=outcome.final_amount_after_tax,
                avg_return_rate=track.avg_return_rate,
                switch_year=track.scenario.switch_year,
                risk_level=track.scenario.risk_level,
                depletion_age=outcome.depletion_age,
            )
        )
    best = select_best_option(summaries)

    final_db = db_track.values[final_index]
    summary = ResultSummary(
        final_year=final_year,
        total_years_worked=service_years(user_input, final_year),
        final_salary=salaries[final_index],
        final_db=final_db,
        final_db_after_tax=after_tax(final_db, user_input.tax_rate),
        total_invested_surplus=sum(surpluses),
        post_retirement_years=user_input.life_expectancy - user_input.retirement_age,
        scenarios=tuple(summaries),
        best_option_id=best.id,
        best_option=best.label,
    )
    projections = build_projections(
        years,
        user_input.birth_year,
        salaries,
        living_costs,
        surpluses,
        db_track.values,
        [track.values for track in tracks],
    )
    logger.debug(
        "Projected %d years for %d scenarios; best option %s (id=%s)",
        len(years),
        len(tracks),
        best.label,
        best.id,
    )
    return CalculationResult(projections=projections, summary=summary)
