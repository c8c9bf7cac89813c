"""Error hierarchy for the analytics engine.

The transforms themselves are total over well-formed input and raise nothing.
These errors come from the opt-in validators that callers run before handing
data to the engine:

    validate_sessions(sessions)      # ScheduleConfigurationError
    check_weight_total(tasks)        # WeightLimitExceededError
"""


class AnalyticsError(Exception):
    """Base exception for all analytics errors."""

    pass


class ScheduleConfigurationError(AnalyticsError):
    """Weekly sessions or date range are not usable for materialization.

    Examples: offset outside one day, end before start, unknown weekday.
    """

    pass


class WeightLimitExceededError(AnalyticsError):
    """The weights of a course's tasks add up to more than 100%."""

    def __init__(self, total: float) -> None:
        self.total = total
        super().__init__("Total weight exceeds 100%")
