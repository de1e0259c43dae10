"""Tests for constraints, navigation flags and navigation descriptions."""

from datetime import date

import pytest

from calgrid.core.constraints import Constraints, clamp_interval
from calgrid.core.errors import ConfigurationError
from calgrid.core.interval import Interval
from calgrid.core.navigation import NavigationFlags, compute_navigation_flags, describe_navigation
from calgrid.core.views import View, ViewAdapter


@pytest.fixture
def today():
    return date(2024, 1, 18)


def span(start: str, end: str) -> Interval:
    return Interval(date.fromisoformat(start), date.fromisoformat(end))


class TestConstraints:
    def test_from_mapping_of_strings(self):
        constraints = Constraints.from_value({"start": "1992-10-15"})
        assert constraints.start == date(1992, 10, 15)
        assert constraints.end is None

    def test_reversed_bounds_rejected(self):
        with pytest.raises(ConfigurationError):
            Constraints(start=date(2024, 2, 1), end=date(2024, 1, 1))

    def test_invalid_date_rejected(self):
        with pytest.raises(ConfigurationError):
            Constraints.from_value({"start": "whenever"})

    def test_invalid_type_rejected(self):
        with pytest.raises(ConfigurationError):
            Constraints.from_value("1992-10-15")

    def test_excludes_only_when_entirely_outside(self):
        constraints = Constraints(start=date(1992, 10, 15), end=date(1992, 12, 31))
        assert constraints.excludes(span("1992-09-01", "1992-09-30"))
        assert not constraints.excludes(span("1992-10-01", "1992-10-31"))
        assert constraints.excludes(span("1993-01-01", "1993-01-31"))

    def test_open_constraints_exclude_nothing(self):
        assert not Constraints().excludes(span("1900-01-01", "1900-01-31"))


class TestClampInterval:
    def test_slides_into_start(self):
        adapter = ViewAdapter(View.MONTH)
        constraints = Constraints(start=date(1992, 10, 15))
        assert clamp_interval(adapter, constraints, span("1992-09-01", "1992-09-30")) == span(
            "1992-10-01", "1992-10-31"
        )

    def test_slides_into_end(self):
        adapter = ViewAdapter(View.DAY)
        constraints = Constraints(end=date(1992, 10, 15))
        assert clamp_interval(adapter, constraints, span("1992-11-01", "1992-11-01")) == span(
            "1992-10-15", "1992-10-15"
        )

    def test_open_constraints_leave_interval(self):
        interval = span("1992-09-01", "1992-09-30")
        assert clamp_interval(ViewAdapter(View.MONTH), Constraints(), interval) == interval


class TestNavigationFlags:
    def test_unconstrained(self, today):
        adapter = ViewAdapter(View.MONTH)
        flags = compute_navigation_flags(adapter, Constraints(), span("2024-01-01", "2024-01-31"), today)
        assert flags == NavigationFlags()

    def test_back_blocked_at_start(self, today):
        adapter = ViewAdapter(View.MONTH)
        constraints = Constraints(start=date(1992, 10, 15))
        flags = compute_navigation_flags(adapter, constraints, span("1992-10-01", "1992-10-31"), today)
        assert not flags.can_go_back
        assert flags.can_go_forward
        assert flags.can_go_today

    def test_back_open_one_page_before_start(self, today):
        adapter = ViewAdapter(View.MONTH)
        constraints = Constraints(start=date(1992, 9, 1))
        flags = compute_navigation_flags(adapter, constraints, span("1992-10-01", "1992-10-31"), today)
        assert flags.can_go_back

    def test_today_blocked_outside_end(self, today):
        adapter = ViewAdapter(View.MONTH)
        constraints = Constraints(end=date(1992, 12, 31))
        flags = compute_navigation_flags(adapter, constraints, span("1992-10-01", "1992-10-31"), today)
        assert not flags.can_go_today

    def test_year_flags(self, today):
        adapter = ViewAdapter(View.MONTH)
        constraints = Constraints(start=date(2023, 1, 1), end=date(2025, 12, 31))

        flags = compute_navigation_flags(adapter, constraints, span("2025-01-01", "2025-01-31"), today)
        assert not flags.can_go_next_year
        assert flags.can_go_previous_year

        flags = compute_navigation_flags(adapter, constraints, span("2023-01-01", "2023-01-31"), today)
        assert not flags.can_go_previous_year
        assert flags.can_go_next_year

        flags = compute_navigation_flags(adapter, constraints, span("2024-01-01", "2024-01-31"), today)
        assert flags.can_go_previous_year and flags.can_go_next_year

    def test_decade_year_flags_follow_pages(self, today):
        adapter = ViewAdapter(View.DECADE)
        constraints = Constraints(end=date(2029, 12, 31))
        flags = compute_navigation_flags(adapter, constraints, span("2020-01-01", "2029-12-31"), today)
        assert not flags.can_go_next_year
        assert not flags.can_go_forward
        assert flags.can_go_previous_year

    def test_edge_of_date_range_blocks_without_constraints(self, today):
        adapter = ViewAdapter(View.DECADE)
        flags = compute_navigation_flags(adapter, Constraints(), span("9990-01-01", "9999-12-31"), today)
        assert flags == NavigationFlags(can_go_forward=False, can_go_next_year=False)


class TestDescribeNavigation:
    def test_year_change_implies_month_change(self):
        description = describe_navigation(span("1992-01-01", "1992-12-31"), span("1993-01-01", "1993-12-31"))
        assert description.is_after and not description.is_before
        assert description.year_changed
        assert description.month_changed

    def test_month_change_within_year(self):
        description = describe_navigation(span("2024-02-01", "2024-02-29"), span("2024-01-01", "2024-01-31"))
        assert description.is_before
        assert description.month_changed
        assert not description.year_changed

    def test_week_within_month(self):
        description = describe_navigation(
            span("2024-01-14", "2024-01-20"), span("2024-01-21", "2024-01-27"), element="next-button"
        )
        assert not description.month_changed
        assert description.element == "next-button"
        assert description.interval == span("2024-01-21", "2024-01-27")

    def test_unchanged(self):
        interval = span("2024-01-01", "2024-01-31")
        description = describe_navigation(interval, interval)
        assert not (description.is_before or description.is_after or description.month_changed)
