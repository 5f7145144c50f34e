from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when a user input record is structurally invalid.

    ``field`` names the offending input (camelCase payload key, with a
    ``scenarios[i].`` prefix for scenario fields) so API callers and the
    dashboard can point at it.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
