"""Calendar engine - owns navigation state, selection and events."""

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any

from .core import (
    Adjacent,
    CalendarEvent,
    CalendarItem,
    ConfigurationError,
    Constraints,
    DateParameter,
    Interval,
    ItemStatus,
    NavigationFlags,
    View,
    ViewAdapter,
    build_item,
    build_page_items,
    clamp_interval,
    compute_navigation_flags,
    describe_navigation,
    events_overlapping,
    normalize_events,
    parse_date,
    sort_events_by_start,
    weekday_labels,
)
from .options import (
    CalendarOptions,
    resolve_callbacks,
    resolve_pagination,
    resolve_renderers,
    resolve_view,
    resolve_week_offset,
)

logger = logging.getLogger(__name__)

_STATUS_TAGS = {status.value: status for status in ItemStatus}


def format_date(d: date, fmt: str) -> str:
    return d.strftime(fmt)


@dataclass(frozen=True)
class PageEvents:
    """Original event records for the page and the pages around it."""

    current_page: list
    previous_page: list
    next_page: list


@dataclass(frozen=True)
class TemplateData:
    """
    Everything the render function receives.

    items and events.current_page are flat lists for a single page and
    lists of lists when the view shows several pages.
    """

    view: View
    interval: Interval
    date: date
    items: list
    pages: list[Interval]
    events: PageEvents
    days_of_the_week: list[str]
    number_of_rows: int
    extras: Any
    selected_date: date | None
    flags: NavigationFlags
    date_formatter: Callable[[date, str], str]
    columns: int


@dataclass(frozen=True)
class ClickTarget:
    """Passed to the click callback."""

    date: date | None
    view: View
    events: list
    selected_date_changed: bool
    is_now: bool
    element: Any = None


@dataclass
class NavigationState:
    view: View
    interval: Interval
    selected_date: date | None
    flags: NavigationFlags


class Control(Enum):
    """UI controls that map onto navigation operations."""

    PREVIOUS = "previous"
    NEXT = "next"
    TODAY = "today"
    PREVIOUS_YEAR = "previous-year"
    NEXT_YEAR = "next-year"
    SWITCH_DECADE = "switch-decade"
    SWITCH_YEAR = "switch-year"
    SWITCH_MONTH = "switch-month"
    SWITCH_WEEK = "switch-week"
    SWITCH_DAY = "switch-day"


def _optional_date(value, name: str) -> date | None:
    if value is None:
        return None
    try:
        return parse_date(value)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"Invalid {name}: {e}") from e


class Calendar:
    """
    A navigable calendar grid.

    The calendar renders on construction and after every change, storing the
    render function's return value in `markup`. Navigation methods accept
    with_callbacks to fire the navigate and switch_view hooks, and an element
    that is passed back to them untouched.
    """

    def __init__(self, options: CalendarOptions | None = None, **overrides):
        options = options or CalendarOptions()
        if overrides:
            options = replace(options, **overrides)
        self.options = options
        self._today = options.today

        self._renderers = resolve_renderers(options.render)
        view = resolve_view(options.default_view)
        if view not in self._renderers:
            raise ConfigurationError(f"No render function for default view {view.value!r}")

        self.week_offset = resolve_week_offset(options.week_offset)
        pagination = resolve_pagination(options.pagination)
        self._adapters = {
            v: ViewAdapter(
                v,
                pagination[v],
                week_offset=self.week_offset,
                show_adjacent=options.show_adjacent,
                force_six_rows=options.force_six_rows,
            )
            for v in View
        }
        self.constraints = Constraints.from_value(options.constraints)
        self._date_parameter = DateParameter.from_value(options.date_parameter)
        self._callbacks = resolve_callbacks(options.callbacks)
        self._days_of_the_week = weekday_labels(
            self.week_offset, options.days_of_the_week, options.format_weekday_header
        )
        self._events: list[CalendarEvent] = normalize_events(options.events, self._date_parameter)
        self._extras = options.extras
        self._focus_date: date | None = None
        self.markup = None

        selected = _optional_date(options.selected_date, "selected date")
        start_on = _optional_date(options.start_on, "start date") or self._today()
        adapter = self._adapters[view]
        interval = clamp_interval(adapter, self.constraints, adapter.init_interval(start_on))
        self._state: NavigationState | None = NavigationState(
            view=view,
            interval=interval,
            selected_date=selected,
            flags=compute_navigation_flags(adapter, self.constraints, interval, self._today()),
        )

        self.render()
        if self._callbacks.ready:
            self._callbacks.ready(self)

    # ============== State ==============

    def _require_state(self) -> NavigationState:
        if self._state is None:
            raise RuntimeError("Calendar has been destroyed")
        return self._state

    @property
    def adapter(self) -> ViewAdapter:
        return self._adapters[self._require_state().view]

    @property
    def flags(self) -> NavigationFlags:
        return self._require_state().flags

    @property
    def events(self) -> list:
        return [event.original for event in self._events]

    @property
    def calendar_events(self) -> list[CalendarEvent]:
        """Normalized events with their resolved spans, earliest first."""
        return sort_events_by_start(self._events)

    def get_view(self) -> View:
        return self._require_state().view

    def get_interval(self) -> Interval:
        return self._require_state().interval

    def get_selected_date(self) -> date | None:
        return self._require_state().selected_date

    def _apply_interval(self, candidate: Interval) -> Interval:
        """Clamp a candidate interval, store it and refresh the flags."""
        state = self._require_state()
        adapter = self._adapters[state.view]
        interval = clamp_interval(adapter, self.constraints, candidate)
        state.interval = interval
        state.flags = compute_navigation_flags(adapter, self.constraints, interval, self._today())
        if self._focus_date and not interval.contains(self._focus_date):
            self._focus_date = None
        return interval

    def _navigate(self, candidate: Interval, with_callbacks: bool, element: Any, force: bool = False) -> None:
        old = self._require_state().interval
        new = self._apply_interval(candidate)
        changed = new != old
        if changed or force:
            self.render()
            if with_callbacks:
                self._emit_navigate(old, new, element)

    def _emit_navigate(self, old: Interval, new: Interval, element: Any) -> None:
        if self._callbacks.navigate:
            self._callbacks.navigate(describe_navigation(old, new, element))

    # ============== Navigation ==============

    def back(self, step: int | None = None, *, with_callbacks: bool = False, element: Any = None) -> None:
        """Step back one page, or step units, unless the start constraint forbids it."""
        state = self._require_state()
        if not state.flags.can_go_back:
            logger.debug(f"Back blocked at {state.interval.start}")
            return
        self._navigate(self.adapter.back(state.interval, step), with_callbacks, element)

    def forward(self, step: int | None = None, *, with_callbacks: bool = False, element: Any = None) -> None:
        state = self._require_state()
        if not state.flags.can_go_forward:
            logger.debug(f"Forward blocked at {state.interval.end}")
            return
        self._navigate(self.adapter.forward(state.interval, step), with_callbacks, element)

    previous = back
    next = forward

    def previous_year(self, *, with_callbacks: bool = False, element: Any = None) -> None:
        state = self._require_state()
        if not state.flags.can_go_previous_year:
            logger.debug(f"Previous year blocked at {state.interval.start}")
            return
        candidate = self.adapter.year_step(state.interval, -1)
        self._navigate(candidate, with_callbacks, element)

    def next_year(self, *, with_callbacks: bool = False, element: Any = None) -> None:
        state = self._require_state()
        if not state.flags.can_go_next_year:
            logger.debug(f"Next year blocked at {state.interval.start}")
            return
        candidate = self.adapter.year_step(state.interval, 1)
        self._navigate(candidate, with_callbacks, element)

    def today(self, *, with_callbacks: bool = False, element: Any = None) -> None:
        """Jump to the page containing today. Nothing happens if already there."""
        state = self._require_state()
        if not state.flags.can_go_today:
            logger.debug("Today is outside the constraints")
            return
        self._navigate(self.adapter.init_interval(self._today()), with_callbacks, element)

    def set_month(self, month_index: int, *, with_callbacks: bool = False, element: Any = None) -> None:
        """Jump to a zero-based month of the current year."""
        state = self._require_state()
        candidate = self.adapter.jump_to_month(month_index, state.interval)
        self._navigate(candidate, with_callbacks, element, force=True)

    def set_year(self, year: int, *, with_callbacks: bool = False, element: Any = None) -> None:
        state = self._require_state()
        candidate = self.adapter.jump_to_year(year, state.interval)
        self._navigate(candidate, with_callbacks, element, force=True)

    def set_interval_start(self, value: date | str, *, with_callbacks: bool = False, element: Any = None) -> None:
        self._require_state()
        candidate = self.adapter.jump_to_date(parse_date(value))
        self._navigate(candidate, with_callbacks, element, force=True)

    def switch_view(
        self,
        view: View | str,
        target_date: date | str | None = None,
        *,
        with_callbacks: bool = False,
        element: Any = None,
    ) -> None:
        """
        Change granularity, landing on the page that contains the focus date.

        The focus date is target_date if given, else the last clicked date
        while it is still visible, else the start of the current interval.
        """
        state = self._require_state()
        view = resolve_view(view)
        if view not in self._renderers:
            logger.warning(f"No render function for {view.value} view, not switching")
            return
        if view is state.view and target_date is None:
            return

        if target_date is not None:
            focus = parse_date(target_date)
        else:
            focus = self._focus_date or state.interval.start

        old = state.interval
        state.view = view
        new = self._apply_interval(self._adapters[view].jump_to_date(focus))
        self.render()

        if with_callbacks:
            if self._callbacks.switch_view:
                self._callbacks.switch_view(view)
            if new != old:
                self._emit_navigate(old, new, element)

    def activate(self, control: Control | str, element: Any = None) -> None:
        """Run the operation behind a UI control, with callbacks."""
        match Control(control):
            case Control.PREVIOUS:
                self.back(with_callbacks=True, element=element)
            case Control.NEXT:
                self.forward(with_callbacks=True, element=element)
            case Control.TODAY:
                self.today(with_callbacks=True, element=element)
            case Control.PREVIOUS_YEAR:
                self.previous_year(with_callbacks=True, element=element)
            case Control.NEXT_YEAR:
                self.next_year(with_callbacks=True, element=element)
            case switch:
                view = View(switch.value.removeprefix("switch-"))
                self.switch_view(view, with_callbacks=True, element=element)

    # ============== Clicks ==============

    def _item_from_classes(self, text: str) -> CalendarItem | None:
        """Rebuild an item from its class string, recomputing statuses if none are given."""
        state = self._require_state()
        adapter = self.adapter
        d = adapter.date_from_identity(text)
        tags = {_STATUS_TAGS[token] for token in text.split() if token in _STATUS_TAGS}

        if tags:
            if ItemStatus.PREVIOUS in tags:
                adjacent = Adjacent.BEFORE
            elif ItemStatus.NEXT in tags:
                adjacent = Adjacent.AFTER
            else:
                adjacent = Adjacent.NONE
            return CalendarItem(
                date=d,
                interval=adapter.item_interval(d) if d else None,
                statuses=frozenset(tags),
                identity=adapter.item_identity(d) if d else None,
                adjacent=adjacent,
            )

        if d is None:
            return None
        pages = adapter.page_intervals(state.interval)
        page = next((p for p in pages if p.contains(d)), state.interval)
        return build_item(
            adapter, d, page, self._events, self._today(), state.selected_date, self.constraints
        )

    def click(self, target: CalendarItem | str | None = None, element: Any = None) -> ClickTarget:
        """
        Handle a click on an item.

        In decade and year views a click on an active item drills down into
        the next finer view when it has a render function. Otherwise the click
        may page to an adjacent period and update the selection.
        """
        state = self._require_state()
        view = state.view
        adapter = self.adapter

        if isinstance(target, CalendarItem):
            item = target
        elif isinstance(target, str):
            item = self._item_from_classes(target)
        else:
            item = None

        d = item.date if item else None
        if d is None:
            logger.debug(f"No date found for click target {target!r}")

        inactive = bool(item and item.has(ItemStatus.INACTIVE))
        selected_changed = False
        finer = view.finer

        if d and finer and finer in self._renderers and not inactive:
            self._focus_date = d
            self.switch_view(finer, d, with_callbacks=True, element=element)
        else:
            if item and item.adjacent is not Adjacent.NONE and self.options.adjacent_items_change_page:
                if item.adjacent is Adjacent.BEFORE:
                    self.back(with_callbacks=True, element=element)
                else:
                    self.forward(with_callbacks=True, element=element)

            if d and self.options.track_selected_date and not (
                self.options.ignore_inactive_in_selection and inactive
            ):
                selected_changed = d != state.selected_date
                state.selected_date = d
            if d and state.interval.contains(d):
                self._focus_date = d
            if selected_changed:
                self.render()

        if d:
            item_interval = adapter.item_interval(d)
            events = [event.original for event in events_overlapping(self._events, item_interval)]
            is_now = adapter.is_current(d, self._today())
        else:
            events = []
            is_now = False

        click_target = ClickTarget(
            date=d,
            view=view,
            events=events,
            selected_date_changed=selected_changed,
            is_now=is_now,
            element=element,
        )
        if self._callbacks.click:
            self._callbacks.click(click_target)
        return click_target

    # ============== Events ==============

    def set_events(self, records: Iterable, rerender: bool = True) -> None:
        """Replace all events."""
        self._require_state()
        self._events = normalize_events(records, self._date_parameter)
        if rerender:
            self.render()

    def add_events(self, records: Iterable, rerender: bool = True) -> None:
        self._require_state()
        self._events.extend(normalize_events(records, self._date_parameter))
        if rerender:
            self.render()

    def remove_events(self, predicate: Callable[[Any], bool], rerender: bool = True) -> None:
        """Remove every event whose original record matches predicate."""
        self._require_state()
        self._events = [event for event in self._events if not predicate(event.original)]
        if rerender:
            self.render()

    def set_extras(self, extras: Any, rerender: bool = True) -> None:
        self._require_state()
        self._extras = extras
        if rerender:
            self.render()

    # ============== Rendering ==============

    def template_data(self) -> TemplateData:
        """Build the data handed to the render function for the current state."""
        state = self._require_state()
        adapter = self.adapter
        today = self._today()

        pages = adapter.page_intervals(state.interval)
        page_items = [
            build_page_items(adapter, page, self._events, today, state.selected_date, self.constraints)
            for page in pages
        ]
        page_events = [
            [event.original for event in events_overlapping(self._events, page)] for page in pages
        ]
        previous_events, next_events = adapter.adjacent_event_split(state.interval, self._events)
        columns = adapter.rules.columns
        number_of_rows = sum(math.ceil(len(items) / columns) for items in page_items)
        multi_page = len(pages) > 1

        return TemplateData(
            view=state.view,
            interval=state.interval,
            date=state.interval.start,
            items=page_items if multi_page else page_items[0],
            pages=pages,
            events=PageEvents(
                current_page=page_events if multi_page else page_events[0],
                previous_page=[event.original for event in previous_events],
                next_page=[event.original for event in next_events],
            ),
            days_of_the_week=list(self._days_of_the_week),
            number_of_rows=number_of_rows,
            extras=self._extras,
            selected_date=state.selected_date,
            flags=state.flags,
            date_formatter=format_date,
            columns=columns,
        )

    def render(self):
        """Rebuild template data and run the current view's render function."""
        state = self._require_state()
        data = self.template_data()
        if self._callbacks.before_render:
            self._callbacks.before_render(data)
        self.markup = self._renderers[state.view](data)
        if self._callbacks.after_render:
            self._callbacks.after_render(self.markup)
        return self.markup

    def destroy(self) -> None:
        """Drop all state. The calendar cannot be used afterwards."""
        self.markup = None
        self._events = []
        self._focus_date = None
        self._state = None
