"""Functional core - pure calendar logic with no I/O."""

from .errors import ConfigurationError
from .interval import Interval, add_months, add_years, parse_date, start_of_week, weekday_index
from .views import View, Adjacent, Pagination, PageItems, ViewAdapter, VIEW_RULES
from .events import (
    CalendarEvent,
    DateParameter,
    normalize_event,
    normalize_events,
    events_overlapping,
    sort_events_by_start,
)
from .constraints import Constraints, clamp_interval
from .navigation import NavigationFlags, NavigationDescription, compute_navigation_flags, describe_navigation
from .grid import CalendarItem, ItemStatus, build_item, build_page_items, weekday_labels

__all__ = [
    # Errors
    "ConfigurationError",
    # Intervals
    "Interval",
    "add_months",
    "add_years",
    "parse_date",
    "start_of_week",
    "weekday_index",
    # Views
    "View",
    "Adjacent",
    "Pagination",
    "PageItems",
    "ViewAdapter",
    "VIEW_RULES",
    # Events
    "CalendarEvent",
    "DateParameter",
    "normalize_event",
    "normalize_events",
    "events_overlapping",
    "sort_events_by_start",
    # Constraints
    "Constraints",
    "clamp_interval",
    # Navigation
    "NavigationFlags",
    "NavigationDescription",
    "compute_navigation_flags",
    "describe_navigation",
    # Grid
    "CalendarItem",
    "ItemStatus",
    "build_item",
    "build_page_items",
    "weekday_labels",
]
