"""Policy parameters the projection engine relies on.

These are modelling choices rather than user inputs. All money values are in
the same unit as the user's income (10k KRW, "man-won").
"""
from __future__ import annotations

from typing import Dict

# Monthly household living cost in the current year, by household size.
BASE_MONTHLY_LIVING_COST: Dict[int, float] = {
    2: 250.0,
    3: 320.0,
    4: 390.0,
}

# DB severance pays service years x the average monthly wage over this many
# trailing working years.
DB_AVERAGE_WINDOW_YEARS = 3

# Annual return (%) on the balance left invested during retirement drawdown.
DRAWDOWN_RETURN_RATE = 2.0
