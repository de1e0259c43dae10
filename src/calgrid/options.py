"""Calendar options and their validation."""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .core import ConfigurationError, Constraints, DateParameter, Pagination, View

logger = logging.getLogger(__name__)


@dataclass
class Callbacks:
    """Hooks fired by the calendar. All optional."""

    click: Callable | None = None
    navigate: Callable | None = None
    switch_view: Callable | None = None
    before_render: Callable | None = None
    after_render: Callable | None = None
    ready: Callable | None = None


@dataclass
class CalendarOptions:
    """Everything a Calendar is configured with."""

    # A single callable renders every view; a mapping limits which views exist
    render: Callable | Mapping | None = None
    default_view: View | str = View.MONTH
    pagination: Mapping = field(default_factory=dict)
    constraints: Constraints | Mapping | None = None
    date_parameter: DateParameter | str | Mapping | None = None
    events: list = field(default_factory=list)
    selected_date: date | str | None = None
    start_on: date | str | None = None
    week_offset: int = 0
    show_adjacent: bool = True
    adjacent_items_change_page: bool = False
    force_six_rows: bool = False
    track_selected_date: bool = False
    ignore_inactive_in_selection: bool = False
    days_of_the_week: Sequence[str] | None = None
    format_weekday_header: Callable[[date], str] | None = None
    extras: Any = None
    callbacks: Callbacks | Mapping | None = None
    today: Callable[[], date] = date.today


def resolve_view(value) -> View:
    try:
        return View(value)
    except ValueError as e:
        raise ConfigurationError(f"Unknown view: {value!r}") from e


def resolve_renderers(render) -> dict[View, Callable]:
    """Map each available view to its render function."""
    if render is None:
        raise ConfigurationError("No render function provided")
    if callable(render):
        return {view: render for view in View}
    if isinstance(render, Mapping):
        renderers = {}
        for key, fn in render.items():
            if not callable(fn):
                raise ConfigurationError(f"Render function for {key!r} is not callable")
            renderers[resolve_view(key)] = fn
        if not renderers:
            raise ConfigurationError("No render function provided")
        return renderers
    raise ConfigurationError(f"Invalid render option: {render!r}")


def resolve_pagination(value: Mapping | None) -> dict[View, Pagination]:
    pagination = {view: Pagination() for view in View}
    for key, entry in (value or {}).items():
        pagination[resolve_view(key)] = Pagination.from_value(entry)
    return pagination


def resolve_week_offset(value) -> int:
    """Validate the first day of the week, falling back to Sunday."""
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 6:
        return value
    logger.warning(f"Week offset {value!r} is not between 0 and 6, using 0")
    return 0


def resolve_callbacks(value) -> Callbacks:
    if value is None:
        return Callbacks()
    if isinstance(value, Callbacks):
        return value
    if isinstance(value, Mapping):
        try:
            return Callbacks(**value)
        except TypeError as e:
            raise ConfigurationError(f"Unknown callback: {e}") from e
    raise ConfigurationError(f"Invalid callbacks: {value!r}")
