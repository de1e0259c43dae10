"""Shared workflow layer between the CLI and library callers.

Resolves event sources from configuration and builds calendars with the
configured defaults.
"""

from dataclasses import replace

from .adapters.composite_source import CompositeEventSource
from .adapters.http_feed import HttpEventSource
from .adapters.json_file import JsonFileEventSource
from .calendar import Calendar
from .config import Config, load_config
from .options import CalendarOptions
from .ports import EventSource, Renderer


def get_event_sources(
    config: Config,
    events_file: str | None = None,
    events_url: str | None = None,
) -> list[EventSource]:
    """Resolve event sources, letting explicit arguments override the config."""
    sources: list[EventSource] = []
    path = events_file or config.events_file
    url = events_url or config.events_url
    if path:
        sources.append(JsonFileEventSource(path))
    if url:
        sources.append(HttpEventSource(url, timeout=config.events_timeout))
    return sources


def load_events(
    config: Config,
    events_file: str | None = None,
    events_url: str | None = None,
) -> list:
    """Fetch raw event records from every configured source."""
    return CompositeEventSource(get_event_sources(config, events_file, events_url)).fetch_events()


def build_options(config: Config, render: Renderer, **overrides) -> CalendarOptions:
    """Calendar options from config, with keyword overrides applied on top."""
    return replace(
        CalendarOptions(
            render=render,
            default_view=config.default_view,
            pagination=dict(config.pagination),
            constraints=config.constraints(),
            date_parameter=config.date_parameter(),
            week_offset=config.week_offset,
            show_adjacent=config.show_adjacent,
            adjacent_items_change_page=config.adjacent_items_change_page,
            force_six_rows=config.force_six_rows,
            track_selected_date=config.track_selected_date,
            ignore_inactive_in_selection=config.ignore_inactive_in_selection,
        ),
        **overrides,
    )


def build_calendar(
    render: Renderer,
    config: Config | None = None,
    events: list | None = None,
    **overrides,
) -> Calendar:
    """Build a calendar, loading events from the configured sources unless given."""
    config = config or load_config()
    if events is None:
        events = load_events(config)
    return Calendar(build_options(config, render, events=events, **overrides))
