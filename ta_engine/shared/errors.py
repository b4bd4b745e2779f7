"""
Engine exception types.

Insufficient data is not an error: indicators return empty results and the
report marks the field absent. Only invalid input fails a call.
"""


class InvalidInputError(ValueError):
    """Raised for invalid prices, empty series or malformed parameters."""
