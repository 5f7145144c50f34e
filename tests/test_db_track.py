import pytest

from conftest import CURRENT_YEAR
from dcplanner.engine.db_track import accrued_severance, build_db_track, service_years

GROWTH = 1.035


def _formula(year):
    # Service from 2018-01 and the 3-year trailing mean of monthly pay.
    service = year - 2018 + 1
    window = range(max(2018, year - 2), year + 1)
    average = sum(450.0 * GROWTH ** (y - CURRENT_YEAR) for y in window) / len(window)
    return service * average


def test_db_track_grows_from_estimated_opening_balance(make_input):
    user_input = make_input()
    years = list(range(CURRENT_YEAR, 2091))

    track = build_db_track(user_input, years, CURRENT_YEAR)

    assert track.opening_balance == pytest.approx(_formula(2023))
    for year, value in zip(years, track.values):
        if year <= 2049:
            assert value == pytest.approx(_formula(year))
        else:
            assert value == track.values[2049 - CURRENT_YEAR]


def test_db_track_adds_accrual_to_reported_balance(make_input):
    user_input = make_input(currentEstimatedSeverance=5000.0)
    years = list(range(CURRENT_YEAR, 2050))

    track = build_db_track(user_input, years, CURRENT_YEAR)

    assert track.opening_balance == 5000.0
    for year, value in zip(years, track.values):
        assert value == pytest.approx(5000.0 + _formula(year) - _formula(2023))
    assert accrued_severance(user_input, 2030, CURRENT_YEAR) == pytest.approx(_formula(2030))


def test_contribution_is_one_month_of_pay_per_service_year(make_input):
    user_input = make_input(workStartDate="2024-07-15")
    years = list(range(CURRENT_YEAR, 2027))

    track = build_db_track(user_input, years, CURRENT_YEAR)

    assert service_years(user_input, 2024) == pytest.approx(0.5)
    assert track.contributions[0] == pytest.approx(450.0 * 0.5)
    assert track.contributions[1] == pytest.approx(450.0 * GROWTH)
    assert track.opening_balance == 0.0
