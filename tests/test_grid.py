"""Tests for the item grid builder."""

from datetime import date

import pytest

from calgrid.core.constraints import Constraints
from calgrid.core.errors import ConfigurationError
from calgrid.core.events import normalize_events
from calgrid.core.grid import ItemStatus, build_page_items, weekday_labels
from calgrid.core.interval import Interval
from calgrid.core.views import Adjacent, View, ViewAdapter


@pytest.fixture
def today():
    return date(2024, 1, 18)


@pytest.fixture
def january():
    return Interval(date(2024, 1, 1), date(2024, 1, 31))


def by_date(items):
    return {item.date: item for item in items if item.date}


class TestMonthItems:
    def test_statuses(self, today, january):
        events = normalize_events([{"title": "Trip", "start": "2024-01-12", "end": "2024-01-17"}])
        items = by_date(build_page_items(ViewAdapter(View.MONTH), january, events, today))

        assert items[date(2024, 1, 18)].has(ItemStatus.NOW)
        assert items[date(2024, 1, 17)].has(ItemStatus.PAST)
        assert not items[date(2024, 1, 19)].has(ItemStatus.PAST)
        for day in range(12, 18):
            assert items[date(2024, 1, day)].has(ItemStatus.EVENT)
        assert not items[date(2024, 1, 11)].has(ItemStatus.EVENT)
        assert not items[date(2024, 1, 18)].has(ItemStatus.EVENT)

    def test_item_events_are_originals(self, today, january):
        record = {"title": "Trip", "start": "2024-01-12", "end": "2024-01-17"}
        items = by_date(build_page_items(ViewAdapter(View.MONTH), january, normalize_events([record]), today))
        assert items[date(2024, 1, 12)].events == (record,)

    def test_adjacent_items(self, today, january):
        items = build_page_items(ViewAdapter(View.MONTH), january, [], today)
        first, last = items[0], items[-1]

        assert first.date == date(2023, 12, 31)
        assert first.has(ItemStatus.ADJACENT) and first.has(ItemStatus.PREVIOUS)
        assert first.adjacent is Adjacent.BEFORE
        assert last.date == date(2024, 2, 3)
        assert last.has(ItemStatus.NEXT)

    def test_placeholders_when_adjacent_hidden(self, today, january):
        items = build_page_items(ViewAdapter(View.MONTH, show_adjacent=False), january, [], today)
        first = items[0]

        assert len(items) == 35
        assert first.date is None
        assert first.adjacent is Adjacent.BEFORE
        assert first.classes == ["empty", "previous"]

    def test_classes_order(self, today, january):
        items = by_date(build_page_items(ViewAdapter(View.MONTH), january, [], today))
        assert items[date(2024, 1, 18)].classes == ["item", "now", "calendar-day-2024-01-18"]
        assert items[date(2024, 1, 2)].class_string == "item past calendar-day-2024-01-02"

    def test_inactive_outside_constraints(self, today, january):
        constraints = Constraints(start=date(2024, 1, 10))
        items = by_date(build_page_items(ViewAdapter(View.MONTH), january, [], today, constraints=constraints))
        assert items[date(2024, 1, 9)].has(ItemStatus.INACTIVE)
        assert not items[date(2024, 1, 10)].has(ItemStatus.INACTIVE)

    def test_selected_day(self, today, january):
        items = by_date(build_page_items(ViewAdapter(View.MONTH), january, [], today, date(2024, 1, 20)))
        assert items[date(2024, 1, 20)].has(ItemStatus.SELECTED)
        assert not items[date(2024, 1, 21)].has(ItemStatus.SELECTED)


class TestCoarseItems:
    def test_year_selects_containing_month(self, today):
        year = Interval(date(2024, 1, 1), date(2024, 12, 31))
        items = build_page_items(ViewAdapter(View.YEAR), year, [], today, date(2024, 1, 20))

        assert items[0].has(ItemStatus.SELECTED)
        assert items[0].has(ItemStatus.NOW)
        assert items[0].interval == Interval(date(2024, 1, 1), date(2024, 1, 31))
        assert items[0].identity == "calendar-month-2024-01"
        assert not items[1].has(ItemStatus.SELECTED)

    def test_decade_past_years(self, today):
        decade = Interval(date(2020, 1, 1), date(2029, 12, 31))
        items = build_page_items(ViewAdapter(View.DECADE), decade, [], today)

        assert len(items) == 10
        assert items[3].has(ItemStatus.PAST)
        assert items[4].has(ItemStatus.NOW)
        assert not items[4].has(ItemStatus.PAST)


class TestWeekdayLabels:
    def test_default(self):
        assert weekday_labels() == ["S", "M", "T", "W", "T", "F", "S"]

    def test_rotated(self):
        assert weekday_labels(1) == ["M", "T", "W", "T", "F", "S", "S"]

    def test_custom_labels(self):
        labels = ["Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"]
        assert weekday_labels(6, labels)[0] == "Sa"

    def test_wrong_length(self):
        with pytest.raises(ConfigurationError):
            weekday_labels(0, ["a", "b"])

    def test_formatter(self):
        labels = weekday_labels(1, formatter=lambda d: d.strftime("%a"))
        assert labels[0] == "Mon"
        assert labels[-1] == "Sun"
