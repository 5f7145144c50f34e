"""Compare staying in a DB severance scheme with switching to a DC account."""

__version__ = "0.1.0"
