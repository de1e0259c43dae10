"""Tests for the shared workflow layer."""

import json
from datetime import date
from unittest.mock import patch

from calgrid.adapters.http_feed import HttpEventSource
from calgrid.adapters.json_file import JsonFileEventSource
from calgrid.config import Config
from calgrid.core.views import View
from calgrid.workflows import build_calendar, build_options, get_event_sources, load_events


def today():
    return date(2024, 1, 18)


class TestEventSources:
    def test_none_configured(self):
        assert get_event_sources(Config()) == []

    def test_from_config(self):
        config = Config(events_file="~/events.json", events_url="https://example.com/feed", events_timeout=7)
        sources = get_event_sources(config)

        assert isinstance(sources[0], JsonFileEventSource)
        assert isinstance(sources[1], HttpEventSource)
        assert sources[1].timeout == 7

    def test_arguments_override_config(self, tmp_path):
        config = Config(events_file="~/events.json")
        sources = get_event_sources(config, events_file=str(tmp_path / "other.json"))
        assert sources[0].path == tmp_path / "other.json"

    def test_load_events(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text(json.dumps([{"date": "2024-01-18"}]))
        assert load_events(Config(events_file=str(path))) == [{"date": "2024-01-18"}]


class TestBuildCalendar:
    def test_options_follow_config(self):
        config = Config(
            default_view="week",
            week_offset=1,
            pagination={"week": {"size": 2}},
            constraint_start="1992-10-15",
            start_field="from",
        )
        options = build_options(config, render=str)

        assert options.default_view == "week"
        assert options.week_offset == 1
        assert options.pagination == {"week": {"size": 2}}
        assert options.constraints == {"start": "1992-10-15", "end": None}
        assert options.date_parameter["start"] == "from"

    def test_overrides_win(self):
        options = build_options(Config(default_view="week"), render=str, default_view="year")
        assert options.default_view == "year"

    def test_build_with_events(self):
        cal = build_calendar(
            lambda data: data,
            config=Config(default_view="week"),
            events=[{"date": "2024-01-18"}],
            today=today,
        )
        assert cal.get_view() is View.WEEK
        assert cal.events == [{"date": "2024-01-18"}]

    def test_build_loads_config_and_events(self, tmp_path):
        events_file = tmp_path / "events.json"
        events_file.write_text(json.dumps([{"date": "2024-01-18"}]))
        config_file = tmp_path / "calgrid.conf"
        config_file.write_text(f"DEFAULT_VIEW=day\nEVENTS_FILE={events_file}\n")

        with patch("calgrid.config.CONFIG_FILE", config_file):
            cal = build_calendar(lambda data: data, today=today)

        assert cal.get_view() is View.DAY
        assert cal.events == [{"date": "2024-01-18"}]
