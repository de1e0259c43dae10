"""View rules and the interval adapter shared by every granularity."""

import calendar
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum

from .errors import ConfigurationError
from .events import CalendarEvent, events_overlapping
from .interval import (
    Interval,
    add_days,
    add_months,
    add_years,
    end_of_month,
    start_of_week,
    weekday_index,
)

GRID_CELLS = 42


class View(Enum):
    """Calendar granularity, coarsest first."""

    DECADE = "decade"
    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"

    @property
    def finer(self) -> "View | None":
        """The view a click drills down into, if any."""
        return {View.DECADE: View.YEAR, View.YEAR: View.MONTH}.get(self)


class Adjacent(Enum):
    """Position of an item relative to the page it is shown on."""

    BEFORE = "before"
    AFTER = "after"
    NONE = "none"


@dataclass(frozen=True)
class Pagination:
    """How many units a page spans and how many units one step moves."""

    size: int = 1
    step: int | None = None

    def __post_init__(self):
        if not isinstance(self.size, int) or self.size < 1:
            raise ConfigurationError(f"Pagination size must be a positive integer, got {self.size!r}")
        if self.step is not None and (not isinstance(self.step, int) or self.step < 1):
            raise ConfigurationError(f"Pagination step must be a positive integer, got {self.step!r}")

    @property
    def page_step(self) -> int:
        return self.size if self.step is None else self.step

    @classmethod
    def from_value(cls, value) -> "Pagination":
        """Build from None, an int size, a {size, step} mapping or a Pagination."""
        if value is None:
            return cls()
        if isinstance(value, Pagination):
            return value
        if isinstance(value, int):
            return cls(size=value)
        if isinstance(value, Mapping):
            return cls(size=value.get("size", 1), step=value.get("step"))
        raise ConfigurationError(f"Invalid pagination: {value!r}")


@dataclass
class PageItems:
    """Dates shown on one page: filler before, the page's own items, filler after."""

    leading: list[date] = field(default_factory=list)
    core: list[date] = field(default_factory=list)
    trailing: list[date] = field(default_factory=list)

    def dates(self) -> list[date]:
        return self.leading + self.core + self.trailing


@dataclass(frozen=True)
class ViewRules:
    """Alignment, stepping and identity rules for one view."""

    view: View
    # page boundary containing a date, given the week offset
    align: Callable[[date, int], date]
    shift: Callable[[date, int], date]
    item_align: Callable[[date], date]
    item_shift: Callable[[date, int], date]
    identity_prefix: str
    identity_format: str
    identity_pattern: re.Pattern
    columns: int
    splits_pages: bool


_DAY_ID = re.compile(r"calendar-day-(\d{4})-(\d{2})-(\d{2})")
_MONTH_ID = re.compile(r"calendar-month-(\d{4})-(\d{2})")
_YEAR_ID = re.compile(r"calendar-year-(\d{4})")


def _day_rules(view: View, align, shift) -> ViewRules:
    return ViewRules(
        view=view,
        align=align,
        shift=shift,
        item_align=lambda d: d,
        item_shift=add_days,
        identity_prefix="calendar-day-",
        identity_format="%Y-%m-%d",
        identity_pattern=_DAY_ID,
        columns=7,
        splits_pages=view is View.MONTH,
    )


VIEW_RULES: dict[View, ViewRules] = {
    View.DECADE: ViewRules(
        view=View.DECADE,
        align=lambda d, _offset: date(d.year - d.year % 10, 1, 1),
        shift=lambda d, n: add_years(d, 10 * n),
        item_align=lambda d: date(d.year, 1, 1),
        item_shift=add_years,
        identity_prefix="calendar-year-",
        identity_format="%Y",
        identity_pattern=_YEAR_ID,
        columns=5,
        splits_pages=True,
    ),
    View.YEAR: ViewRules(
        view=View.YEAR,
        align=lambda d, _offset: date(d.year, 1, 1),
        shift=add_years,
        item_align=lambda d: d.replace(day=1),
        item_shift=add_months,
        identity_prefix="calendar-month-",
        identity_format="%Y-%m",
        identity_pattern=_MONTH_ID,
        columns=3,
        splits_pages=True,
    ),
    View.MONTH: _day_rules(View.MONTH, lambda d, _offset: d.replace(day=1), add_months),
    View.WEEK: _day_rules(View.WEEK, start_of_week, lambda d, n: add_days(d, 7 * n)),
    View.DAY: _day_rules(View.DAY, lambda d, _offset: d, add_days),
}


def _shifted(shift: Callable[[date, int], date], d: date, count: int) -> date | None:
    """Apply shift, or None when the result falls outside the date range."""
    try:
        return shift(d, count)
    except (ValueError, OverflowError):
        return None


def _day_before(boundary: date | None) -> date:
    return date.max if boundary is None else boundary - timedelta(days=1)


class ViewAdapter:
    """
    Interval arithmetic for one view.

    Stateless apart from its configuration: every method takes the interval
    it works on and returns a new one.
    """

    def __init__(
        self,
        view: View | str,
        pagination: Pagination | Mapping | int | None = None,
        week_offset: int = 0,
        show_adjacent: bool = True,
        force_six_rows: bool = False,
    ):
        self.view = View(view)
        self.rules = VIEW_RULES[self.view]
        self.pagination = Pagination.from_value(pagination)
        self.week_offset = week_offset
        self.show_adjacent = show_adjacent
        self.force_six_rows = force_six_rows

    def __repr__(self) -> str:
        return f"ViewAdapter({self.view.value!r}, size={self.pagination.size}, step={self.pagination.page_step})"

    def _span(self, start: date) -> Interval:
        """Full page interval starting at an aligned boundary, cut off at date.max."""
        return Interval(start, _day_before(_shifted(self.rules.shift, start, self.pagination.size)))

    def init_interval(self, reference: date) -> Interval:
        """The page containing reference."""
        return self._span(self.rules.align(reference, self.week_offset))

    def page_intervals(self, interval: Interval) -> list[Interval]:
        """Split an interval into the pages rendered separately."""
        if not self.rules.splits_pages:
            return [interval]
        pages = []
        start = interval.start
        while start <= interval.end:
            following = _shifted(self.rules.shift, start, 1)
            pages.append(Interval(start, min(_day_before(following), interval.end)))
            if following is None:
                break
            start = following
        return pages

    def clamp_to_start_constraint(self, start: date, interval: Interval) -> Interval:
        if interval.end >= start:
            return interval
        return self.init_interval(start)

    def clamp_to_end_constraint(self, end: date, interval: Interval) -> Interval:
        """Slide an interval lying after end so its last unit contains end."""
        if interval.start <= end:
            return interval
        last = self.rules.align(end, self.week_offset)
        return self._span(self.rules.shift(last, -(self.pagination.size - 1)))

    def _each_item(self, interval: Interval):
        current = self.rules.item_align(interval.start)
        while current <= interval.end:
            yield current
            current = _shifted(self.rules.item_shift, current, 1)
            if current is None:
                return

    def page_items(self, page: Interval) -> PageItems:
        core = list(self._each_item(page))
        if self.view is not View.MONTH:
            return PageItems(core=core)

        lead = min((weekday_index(page.start) - self.week_offset) % 7, (page.start - date.min).days)
        leading = [page.start - timedelta(days=n) for n in range(lead, 0, -1)]
        count = lead + len(core)
        trail = GRID_CELLS - count if self.force_six_rows else -count % 7
        trail = min(trail, (date.max - page.end).days)
        trailing = [page.end + timedelta(days=n) for n in range(1, trail + 1)]
        return PageItems(leading=leading, core=core, trailing=trailing)

    def adjacent_event_split(
        self, interval: Interval, events: list[CalendarEvent]
    ) -> tuple[list[CalendarEvent], list[CalendarEvent]]:
        """Events in the month before and the month after a month page."""
        if self.view is not View.MONTH or not self.show_adjacent:
            return [], []
        previous_start = _shifted(add_months, interval.start, -1)
        following_start = _shifted(add_days, interval.end, 1)
        previous = [] if previous_start is None else events_overlapping(
            events, Interval(previous_start, interval.start - timedelta(days=1))
        )
        following = [] if following_start is None else events_overlapping(
            events, Interval(following_start, end_of_month(following_start))
        )
        return previous, following

    def is_adjacent(self, item: Interval, page: Interval) -> Adjacent:
        if self.view is not View.MONTH:
            return Adjacent.NONE
        if item.end < page.start:
            return Adjacent.BEFORE
        if item.start > page.end:
            return Adjacent.AFTER
        return Adjacent.NONE

    def item_interval(self, d: date) -> Interval:
        """The span covered by the item containing d."""
        start = self.rules.item_align(d)
        return Interval(start, _day_before(_shifted(self.rules.item_shift, start, 1)))

    def is_current(self, d: date, today: date) -> bool:
        return self.item_interval(d).contains(today)

    def item_identity(self, d: date) -> str:
        return f"{self.rules.identity_prefix}{d.strftime(self.rules.identity_format)}"

    def date_from_identity(self, text: str | None) -> date | None:
        """Find this view's identity marker in a class string and decode it."""
        if not text:
            return None
        match = self.rules.identity_pattern.search(text)
        if not match:
            return None
        parts = [int(group) for group in match.groups()]
        parts += [1] * (3 - len(parts))
        try:
            return date(*parts)
        except ValueError:
            return None

    def jump_to_date(self, d: date) -> Interval:
        return self.init_interval(d)

    def jump_to_month(self, month_index: int, interval: Interval) -> Interval:
        """Re-anchor on a zero-based month within the interval's year."""
        if not 0 <= month_index <= 11:
            raise ValueError(f"Month index must be between 0 and 11, got {month_index}")
        anchor = interval.start
        month = month_index + 1
        day = min(anchor.day, calendar.monthrange(anchor.year, month)[1])
        return self.init_interval(date(anchor.year, month, day))

    def jump_to_year(self, year: int, interval: Interval) -> Interval:
        anchor = interval.start
        day = min(anchor.day, calendar.monthrange(year, anchor.month)[1])
        return self.init_interval(date(year, anchor.month, day))

    def step(self, interval: Interval, count: int) -> Interval:
        """Move by count units, keeping the page size."""
        start = self.rules.align(self.rules.shift(interval.start, count), self.week_offset)
        return self._span(start)

    def year_step(self, interval: Interval, direction: int) -> Interval:
        """
        Move a year in direction (-1 or 1).

        Decade pages move by one whole page.
        """
        if self.view is View.DECADE:
            return self.step(interval, direction * self.pagination.size)
        return self.init_interval(add_years(interval.start, direction))

    def forward(self, interval: Interval, count: int | None = None) -> Interval:
        return self.step(interval, self.pagination.page_step if count is None else count)

    def back(self, interval: Interval, count: int | None = None) -> Interval:
        return self.step(interval, -(self.pagination.page_step if count is None else count))
