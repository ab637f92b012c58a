"""
Custom exceptions for the reporting engine.
Following SOLID principles - centralized error handling.

All of them are local precondition failures raised at the call that received
the bad input. Retrying with the same arguments cannot succeed, so callers
decide whether to show a message or fall back to a default.
"""


class ReportingError(ValueError):
    """Base class for invalid report requests and invalid money inputs."""

    pass


class InvalidRate(ReportingError):
    """Raised when a commission rate is present but outside [0, 100]."""

    def __init__(self, rate):
        self.rate = rate
        super().__init__(f"Commission rate must be between 0 and 100, got {rate}")


class InvalidAmount(ReportingError):
    """Raised for negative money amounts (revenue is never negative)."""

    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Amount cannot be negative, got {amount}")


class InvalidPeriod(ReportingError):
    """Raised for an unrecognized named period tag."""

    def __init__(self, period):
        self.period = period
        super().__init__(
            f"Unknown period '{period}', expected one of: today, week, month"
        )


class InvalidMonth(ReportingError):
    """Raised when a 0-based month index is outside [0, 11]."""

    def __init__(self, month_index):
        self.month_index = month_index
        super().__init__(f"Month index must be between 0 and 11, got {month_index}")
