"""Start/end bounds on navigation."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date

from .errors import ConfigurationError
from .interval import Interval, parse_date
from .views import ViewAdapter


@dataclass(frozen=True)
class Constraints:
    """Optional inclusive bounds. Either side may be open."""

    start: date | None = None
    end: date | None = None

    def __post_init__(self):
        if self.start and self.end and self.start > self.end:
            raise ConfigurationError(f"Constraint start {self.start} is after end {self.end}")

    @classmethod
    def from_value(cls, value) -> "Constraints":
        """Build from None, a Constraints, or a {start, end} mapping of dates or ISO strings."""
        if value is None:
            return cls()
        if isinstance(value, Constraints):
            return value
        if not isinstance(value, Mapping):
            raise ConfigurationError(f"Invalid constraints: {value!r}")
        try:
            start = parse_date(value["start"]) if value.get("start") else None
            end = parse_date(value["end"]) if value.get("end") else None
        except (ValueError, TypeError) as e:
            raise ConfigurationError(f"Invalid constraint date: {e}") from e
        return cls(start=start, end=end)

    def excludes(self, interval: Interval) -> bool:
        """True when the interval lies entirely outside the bounds."""
        if self.start and interval.end < self.start:
            return True
        if self.end and interval.start > self.end:
            return True
        return False


def clamp_interval(adapter: ViewAdapter, constraints: Constraints, interval: Interval) -> Interval:
    """Slide an interval back inside the bounds if it lies wholly outside them."""
    if constraints.start:
        interval = adapter.clamp_to_start_constraint(constraints.start, interval)
    if constraints.end:
        interval = adapter.clamp_to_end_constraint(constraints.end, interval)
    return interval
