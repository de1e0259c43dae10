"""Navigation flags and change descriptions."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Any

from .constraints import Constraints
from .interval import Interval
from .views import ViewAdapter


@dataclass(frozen=True)
class NavigationFlags:
    """Which directions are open from the current interval."""

    can_go_back: bool = True
    can_go_forward: bool = True
    can_go_previous_year: bool = True
    can_go_next_year: bool = True
    can_go_today: bool = True


@dataclass(frozen=True)
class NavigationDescription:
    """Passed to the navigate callback after the interval changes."""

    interval: Interval
    is_before: bool
    is_after: bool
    month_changed: bool
    year_changed: bool
    element: Any = None


def _allows(constraints: Constraints, move: Callable[[], Interval]) -> bool:
    """Whether a move stays inside the constraints and the supported date range."""
    try:
        return not constraints.excludes(move())
    except (ValueError, OverflowError):
        return False


def compute_navigation_flags(
    adapter: ViewAdapter, constraints: Constraints, interval: Interval, today: date
) -> NavigationFlags:
    return NavigationFlags(
        can_go_back=_allows(constraints, lambda: adapter.back(interval)),
        can_go_forward=_allows(constraints, lambda: adapter.forward(interval)),
        can_go_previous_year=_allows(constraints, lambda: adapter.year_step(interval, -1)),
        can_go_next_year=_allows(constraints, lambda: adapter.year_step(interval, 1)),
        can_go_today=_allows(constraints, lambda: adapter.init_interval(today)),
    )


def describe_navigation(old: Interval, new: Interval, element: Any = None) -> NavigationDescription:
    """Compare two intervals by their start dates."""
    year_changed = old.start.year != new.start.year
    return NavigationDescription(
        interval=new,
        is_before=new.start < old.start,
        is_after=new.start > old.start,
        month_changed=year_changed or old.start.month != new.start.month,
        year_changed=year_changed,
        element=element,
    )
