"""
Elapsed-time values for timeline entries.

Durations are deliberately approximate: a year is 365 days and a month is
30 days with a 15-day rounding offset. Historical outputs depend on this.
"""

from dataclasses import dataclass
from datetime import date

from curriculum.contexts.timeline.logger import _log_warning

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30
MONTH_ROUNDING_OFFSET_DAYS = 15
MONTHS_PER_YEAR = 12

# Below this many months a sub-year duration is kept as months when rounding
ROUNDING_MONTH_THRESHOLD = 10


@dataclass(frozen=True)
class Duration:
    """
    Elapsed time as whole years plus remainder months.

    Attributes:
        years: Whole years
        months: Remainder months, in [0, 12) after any addition
    """

    years: int = 0
    months: int = 0

    @classmethod
    def from_days(cls, days: int) -> "Duration":
        """
        Convert a day count to years and months.

        Negative day counts (end before beginning) are clamped to zero.

        Example:
            >>> Duration.from_days(61)
            Duration(years=0, months=2)
        """
        if days < 0:
            _log_warning(f"Negative span of {days} days clamped to zero duration")
            return cls()
        years = days // DAYS_PER_YEAR
        months = (days % DAYS_PER_YEAR + MONTH_ROUNDING_OFFSET_DAYS) // DAYS_PER_MONTH
        return cls(years=years, months=months)

    def add(self, other: "Duration") -> "Duration":
        """
        Sum two durations, carrying months into years.

        Example:
            >>> Duration(1, 9).add(Duration(0, 8))
            Duration(years=2, months=5)
        """
        total_months = self.months + other.months
        return Duration(
            years=self.years + other.years + total_months // MONTHS_PER_YEAR,
            months=total_months % MONTHS_PER_YEAR,
        )

    def __add__(self, other: "Duration") -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return self.add(other)

    def round(self) -> "Duration":
        """
        Round to the nearest whole year, ties rounding up.

        Durations shorter than 11 months are returned unchanged.

        Example:
            >>> Duration(3, 6).round()
            Duration(years=4, months=0)
            >>> Duration(0, 10).round()
            Duration(years=0, months=10)
        """
        if self.years == 0 and self.months <= ROUNDING_MONTH_THRESHOLD:
            return self
        total_months = self.years * MONTHS_PER_YEAR + self.months
        return Duration(years=(total_months + MONTHS_PER_YEAR // 2) // MONTHS_PER_YEAR, months=0)

    def is_zero(self) -> bool:
        return self.years == 0 and self.months == 0

    def format(self) -> str:
        """
        Human-readable form, e.g. "1 year 11 months", "10 months", "2 years".
        """
        parts = []
        if self.years:
            parts.append(f"{self.years} year{'s' if self.years != 1 else ''}")
        if self.months or not self.years:
            parts.append(f"{self.months} month{'s' if self.months != 1 else ''}")
        return " ".join(parts)

    def __str__(self) -> str:
        return self.format()


def elapsed(begin: date, end: date) -> Duration:
    """
    Duration between two dates using the 365/30-day approximation.

    Args:
        begin: Start date
        end: End date (pass today's date for ongoing entries)

    Returns:
        Duration, zero when end precedes begin

    Example:
        >>> elapsed(date(2013, 10, 1), date(2023, 12, 1))
        Duration(years=10, months=2)
    """
    return Duration.from_days((end - begin).days)
