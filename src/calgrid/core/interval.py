"""Date and interval arithmetic - no I/O dependencies."""

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

YEAR_RE = re.compile(r"^(\d{4})$")
YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True)
class Interval:
    """An inclusive span of calendar dates."""

    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Interval start {self.start} is after end {self.end}")

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end

    def overlaps(self, other: "Interval") -> bool:
        """Check if the two intervals share at least one day."""
        return self.start <= other.end and other.start <= self.end

    def is_before(self, other: "Interval") -> bool:
        """Check if this interval ends before the other begins."""
        return self.end < other.start

    def is_after(self, other: "Interval") -> bool:
        return self.start > other.end

    def days(self) -> int:
        return (self.end - self.start).days + 1


def add_months(d: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    total = d.year * 12 + (d.month - 1) + months
    year, month = divmod(total, 12)
    month += 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def add_years(d: date, years: int) -> date:
    return add_months(d, years * 12)


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def end_of_month(d: date) -> date:
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def weekday_index(d: date) -> int:
    """Day of the week with Sunday as 0 and Saturday as 6."""
    return d.isoweekday() % 7


def start_of_week(d: date, week_offset: int = 0) -> date:
    """First day of the week containing d, for weeks starting on week_offset."""
    return d - timedelta(days=(weekday_index(d) - week_offset) % 7)


def parse_date(value) -> date:
    """
    Coerce a caller-supplied value into a calendar date.

    Accepts date and datetime objects (datetimes are truncated), and ISO
    strings in the forms YYYY, YYYY-MM, YYYY-MM-DD or a full ISO datetime.

    Raises:
        TypeError: If value is not a date or string.
        ValueError: If a string cannot be parsed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise TypeError(f"Cannot interpret {type(value).__name__} as a date")

    text = value.strip()
    if match := YEAR_RE.match(text):
        return date(int(match.group(1)), 1, 1)
    if match := YEAR_MONTH_RE.match(text):
        return date(int(match.group(1)), int(match.group(2)), 1)
    if len(text) == 10:
        return date.fromisoformat(text)

    # datetime.fromisoformat only learned about "Z" in 3.11
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text).date()
