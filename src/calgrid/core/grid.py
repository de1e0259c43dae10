"""Item grid builder - tags every cell on a page with its statuses."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Any

from .constraints import Constraints
from .errors import ConfigurationError
from .events import CalendarEvent, events_overlapping
from .interval import Interval
from .views import Adjacent, ViewAdapter

DEFAULT_WEEKDAY_LABELS = ("S", "M", "T", "W", "T", "F", "S")
# Any known Sunday works as the base for formatting weekday headers
_A_SUNDAY = date(2023, 1, 1)


class ItemStatus(Enum):
    """Status tags, in the order they appear in an item's classes."""

    ITEM = "item"
    EMPTY = "empty"
    NOW = "now"
    PAST = "past"
    EVENT = "event"
    INACTIVE = "inactive"
    SELECTED = "selected"
    ADJACENT = "adjacent"
    PREVIOUS = "previous"
    NEXT = "next"


@dataclass(frozen=True)
class CalendarItem:
    """One cell on a page. Placeholders have no date."""

    date: date | None
    interval: Interval | None
    statuses: frozenset[ItemStatus] = field(default_factory=frozenset)
    events: tuple[Any, ...] = ()
    identity: str | None = None
    adjacent: Adjacent = Adjacent.NONE

    def has(self, status: ItemStatus) -> bool:
        return status in self.statuses

    @property
    def classes(self) -> list[str]:
        tags = [status.value for status in ItemStatus if status in self.statuses]
        if self.identity:
            tags.append(self.identity)
        return tags

    @property
    def class_string(self) -> str:
        return " ".join(self.classes)


def _adjacent_tags(adjacent: Adjacent) -> set[ItemStatus]:
    if adjacent is Adjacent.BEFORE:
        return {ItemStatus.PREVIOUS}
    if adjacent is Adjacent.AFTER:
        return {ItemStatus.NEXT}
    return set()


def build_item(
    adapter: ViewAdapter,
    d: date,
    page: Interval,
    events: list[CalendarEvent],
    today: date,
    selected_date: date | None = None,
    constraints: Constraints | None = None,
) -> CalendarItem:
    item_interval = adapter.item_interval(d)
    adjacent = adapter.is_adjacent(item_interval, page)
    item_events = events_overlapping(events, item_interval)

    if adjacent is not Adjacent.NONE and not adapter.show_adjacent:
        return CalendarItem(
            date=None,
            interval=None,
            statuses=frozenset({ItemStatus.EMPTY} | _adjacent_tags(adjacent)),
            adjacent=adjacent,
        )

    statuses = {ItemStatus.ITEM}
    if adjacent is not Adjacent.NONE:
        statuses |= {ItemStatus.ADJACENT} | _adjacent_tags(adjacent)
    if adapter.is_current(d, today):
        statuses.add(ItemStatus.NOW)
    if item_interval.end < today:
        statuses.add(ItemStatus.PAST)
    if item_events:
        statuses.add(ItemStatus.EVENT)
    if constraints and constraints.excludes(item_interval):
        statuses.add(ItemStatus.INACTIVE)
    if selected_date and item_interval.contains(selected_date):
        statuses.add(ItemStatus.SELECTED)

    return CalendarItem(
        date=item_interval.start,
        interval=item_interval,
        statuses=frozenset(statuses),
        events=tuple(event.original for event in item_events),
        identity=adapter.item_identity(item_interval.start),
        adjacent=adjacent,
    )


def build_page_items(
    adapter: ViewAdapter,
    page: Interval,
    events: list[CalendarEvent],
    today: date,
    selected_date: date | None = None,
    constraints: Constraints | None = None,
) -> list[CalendarItem]:
    """Ordered items for one page, filler included."""
    return [
        build_item(adapter, d, page, events, today, selected_date, constraints)
        for d in adapter.page_items(page).dates()
    ]


def weekday_labels(
    week_offset: int = 0,
    labels: Sequence[str] | None = None,
    formatter: Callable[[date], str] | None = None,
) -> list[str]:
    """Column headers for day-based grids, starting on week_offset."""
    if labels is not None:
        if len(labels) != 7:
            raise ConfigurationError(f"Expected 7 weekday labels, got {len(labels)}")
        labels = list(labels)
        return labels[week_offset:] + labels[:week_offset]
    if formatter is not None:
        return [formatter(_A_SUNDAY + timedelta(days=week_offset + i)) for i in range(7)]
    labels = list(DEFAULT_WEEKDAY_LABELS)
    return labels[week_offset:] + labels[:week_offset]
